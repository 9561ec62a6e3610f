"""``perch invoke`` — run one synthetic event through an app.

Useful for trying routes locally without deploying::

    perch invoke myapp:app POST /users -H content-type:application/json -d '{"name": "a"}'
"""

import argparse
import json
import sys

import anyio

from perch.cli._resolve import resolve_app
from perch.testing import make_event


def parse_header(raw: str) -> tuple[str, str]:
    """Split ``"Name: value"`` into a header pair."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        msg = f"Invalid header {raw!r}, expected NAME:VALUE"
        raise ValueError(msg)
    return name.strip(), value.strip()


def run_invoke(args: argparse.Namespace) -> None:
    """Invoke ``args.app`` with one event and print the response as JSON."""
    try:
        app = resolve_app(args.app)
        headers = dict(parse_header(h) for h in args.header)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.debug:
        app.debug()

    event = make_event(args.method, args.path, headers=headers, body=args.data)
    response = anyio.run(app.handle, event)
    print(json.dumps(response, indent=2))
