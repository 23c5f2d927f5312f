"""Errors raised by Tiller CLI operations.

Every failure that ends a command derives from ``TillerError``; commands
print the message to stderr and exit with status 1.
"""


class TillerError(Exception):
    """Base class for command failures."""

    def with_context(self, context: str) -> "TillerError":
        """Return a copy of this error with ``context`` prefixed to its message."""
        error = self.__class__.__new__(self.__class__)
        error.__dict__.update(self.__dict__)
        error.args = (f"{context}: {self}",)
        return error


class SelectorError(TillerError):
    """The positional argument and filter flag do not form a valid selector."""


class ConflictingSelectorsError(SelectorError):
    def __init__(self) -> None:
        super().__init__("evaluation ID or filter flag required")


class MissingSelectorError(SelectorError):
    def __init__(self) -> None:
        super().__init__("evaluation ID or filter flag required")


class TooManyArgumentsError(SelectorError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} argument, got {actual}")


class TransportError(TillerError):
    """The control plane could not be reached or rejected our credentials."""


class BrokerNotPausedError(TillerError):
    def __init__(self) -> None:
        super().__init__("Eval broker is not paused")


class NotFoundError(TillerError):
    """The store has no matching record."""


class StoreError(TillerError):
    """The store rejected or failed the request."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        self.status_code = status_code
        super().__init__(message)
