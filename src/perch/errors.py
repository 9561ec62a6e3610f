"""Perch exception hierarchy.

Shared across the route table, chain runner, and request handler so every
module raises and catches the same types. A missing route is not an
exception: the route table returns ``None`` and the handler answers 404.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a route pattern or app setting is invalid.

    Surfaces at registration time, before any request is served.
    """


class ChainError(PerchError):
    """A handler chain was driven incorrectly.

    These are programming errors in handler code. The request handler
    catches them like any other failure and answers 500.
    """


class NextCalledTwice(ChainError):  # noqa: N818
    """``ctx.next()`` was called more than once by the same handler."""

    def __init__(self, index: int) -> None:
        super().__init__(f"next() called multiple times (chain position {index})")
        self.index = index


class HandlerNotCallable(ChainError):  # noqa: N818
    """A chain entry is not callable."""

    def __init__(self, index: int, handler: object) -> None:
        super().__init__(
            f"Handler at chain position {index} is not callable: {handler!r}"
        )
        self.index = index
        self.handler = handler


class ChainExhausted(ChainError):  # noqa: N818
    """``ctx.next()`` was called with no handler left to run.

    Also raised for a chain with no handlers at all.
    """

    def __init__(self, index: int) -> None:
        super().__init__(f"next() called past the end of the chain (position {index})")
        self.index = index
