"""Exception types raised by the debouncer library."""

from typing import Any


class DebounceError(Exception):
    """Base class for errors raised by the library itself.

    Errors raised by a wrapped producer are never translated into this
    hierarchy; they reach callers unchanged.
    """


class InvalidArgumentError(DebounceError, TypeError):
    """Raised at wrap time when an option is not acceptable."""


class AbortError(DebounceError):
    """Raised to waiting callers when their abort signal fires.

    Attributes:
        reason: The reason the signal was aborted with.
    """

    def __init__(self, reason: Any = None) -> None:
        super().__init__("This operation was aborted" if reason is None else str(reason))
        self.reason = reason
