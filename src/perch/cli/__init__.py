"""Perch CLI — route listing and local invocation.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a small request router for serverless HTTP functions.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- perch invoke -----------------------------------------------------
    invoke_parser = subparsers.add_parser(
        "invoke",
        help="Send one synthetic event through an app and print the response",
    )
    invoke_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    invoke_parser.add_argument("method", help="HTTP method (e.g. GET)")
    invoke_parser.add_argument("path", help="Request path, may include a query string")
    invoke_parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Request header (repeatable)",
    )
    invoke_parser.add_argument("-d", "--data", default=None, help="Request body")
    invoke_parser.add_argument(
        "--debug",
        action="store_true",
        help="Turn on debug mode before invoking",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "invoke":
        from perch.cli._invoke import run_invoke

        run_invoke(args)
