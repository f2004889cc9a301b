"""Configuration types for the debouncer library."""

import math
from dataclasses import dataclass
from enum import StrEnum
from numbers import Real

from pdebounce.errors import InvalidArgumentError
from pdebounce.signal import AbortSignal


class Mode(StrEnum):
    """Available coalescing modes.

    WINDOW:  Time-window debounce. Calls made within ``wait`` seconds of
             each other collapse into one producer invocation.
    PROMISE: In-flight coalescing. Calls made while an invocation is still
             running share its result, or queue one follow-up run.
    """

    WINDOW = "window"
    PROMISE = "promise"


def validate_wait(wait: object) -> None:
    """Raise :class:`InvalidArgumentError` unless *wait* is a finite number."""
    if isinstance(wait, bool) or not isinstance(wait, Real) or not math.isfinite(wait):
        raise InvalidArgumentError(f"wait must be a finite number, got {wait!r}")


@dataclass(frozen=True, slots=True)
class DebounceConfig:
    """Configuration for a Debouncer instance.

    Attributes:
        mode: The coalescing mode to use.
        wait: Quiet-period delay in seconds (window mode). Zero or negative
              values fire on the next loop iteration.
        before: Window mode only. Invoke the producer immediately on the
                first call of a burst instead of after the quiet period.
        signal: Window mode only. Abort signal that rejects waiting callers.
        after: Promise mode only. Queue one follow-up run with the latest
               arguments for calls made while an invocation is outstanding.
    """

    mode: Mode = Mode.WINDOW
    wait: float | None = None
    before: bool = False
    signal: AbortSignal | None = None
    after: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", Mode(self.mode))

        if self.mode == Mode.WINDOW:
            validate_wait(self.wait)
            if self.after:
                raise InvalidArgumentError("after only applies to promise mode")
            return

        if self.wait is not None or self.before or self.signal is not None:
            raise InvalidArgumentError("wait, before and signal only apply to window mode")
