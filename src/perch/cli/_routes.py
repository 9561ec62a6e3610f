"""``perch routes`` — list registered routes.

Prints every route in registration order, which is also match order.
"""

import argparse
import sys

from perch.cli._resolve import resolve_app


def _handler_names(handlers: tuple[object, ...]) -> str:
    return " -> ".join(getattr(h, "__name__", type(h).__name__) for h in handlers)


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a perch app.

    Resolves ``args.app`` to an App instance and prints a table of
    METHOD, PATH, and handler chain.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [(route.method, route.path, _handler_names(route.handlers)) for route in routes]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLERS"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handlers in rows:
        print(fmt.format(method, path, handlers))

    if app.middleware:
        print(f"\nGlobal handlers: {_handler_names(app.middleware)}")
