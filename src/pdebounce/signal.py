"""Abort signal primitives used to cancel waiting debounced calls.

An :class:`AbortController` owns the signal and is the only party that can
abort it. The :class:`AbortSignal` it exposes is a read-only view that can be
shared with any number of debounced callables. Listeners fire at most once.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from typing import Any

from pdebounce.errors import AbortError

Listener = Callable[[], None]


class AbortSignal:
    """Read-only abort flag with one-shot listeners."""

    __slots__ = ("_aborted", "_listeners", "_reason")

    def __init__(self) -> None:
        self._aborted = False
        self._reason: Any = None
        self._listeners: list[Listener] = []

    @classmethod
    def abort(cls, reason: Any = None) -> AbortSignal:
        """Return a signal that is already aborted."""
        signal = cls()
        signal._fire(reason)
        return signal

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> Any:
        """The abort reason, or ``None`` while the signal is not aborted."""
        return self._reason

    def add_listener(self, listener: Listener) -> None:
        """Subscribe *listener* to the abort event (fires at most once)."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unsubscribe *listener*; unknown listeners are ignored."""
        with contextlib.suppress(ValueError):
            self._listeners.remove(listener)

    def as_error(self) -> AbortError:
        """Build the error that waiting callers are rejected with."""
        if isinstance(self._reason, AbortError):
            return self._reason
        error = AbortError(self._reason)
        if isinstance(self._reason, BaseException):
            error.__cause__ = self._reason
        return error

    def throw_if_aborted(self) -> None:
        if self._aborted:
            raise self.as_error()

    def _fire(self, reason: Any) -> None:
        if self._aborted:
            return
        self._aborted = True
        self._reason = AbortError() if reason is None else reason
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener()

    def __repr__(self) -> str:
        return f"AbortSignal(aborted={self._aborted}, reason={self._reason!r})"


class AbortController:
    """Owner of an :class:`AbortSignal`.

    Example::

        controller = AbortController()
        debounced = debounce(fetch, 0.2, signal=controller.signal)

        pending = debounced("query")
        controller.abort()  # pending fails with AbortError
    """

    __slots__ = ("_signal",)

    def __init__(self) -> None:
        self._signal = AbortSignal()

    @property
    def signal(self) -> AbortSignal:
        return self._signal

    def abort(self, reason: Any = None) -> None:
        """Abort the signal and notify its listeners (idempotent)."""
        self._signal._fire(reason)
