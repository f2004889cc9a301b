"""Time-window debounce strategy with optional leading edge and abort signal."""

import logging
from asyncio import Future, TimerHandle
from collections.abc import Callable
from functools import partial
from typing import Any

from pdebounce.config import validate_wait
from pdebounce.signal import AbortSignal
from pdebounce.strategies.base import BaseStrategy, Call, chain

logger = logging.getLogger(__name__)


def _share_leading(leading: Future[Any], waiters: list[Future[Any]]) -> None:
    # A failed leading call hands its followers None, not its exception.
    value = None
    if not leading.cancelled() and leading.exception() is None:
        value = leading.result()
    for waiter in waiters:
        if not waiter.done():
            waiter.set_result(value)


class WindowedDebouncer(BaseStrategy):
    """Trailing-edge debounce over a sliding quiet period.

    How it works:
        - Every call resets the timer. The calls made while the timer is
          running form one burst.
        - When the timer expires, the producer runs once with the arguments
          of the last call, and every caller of the burst gets that outcome.
        - With ``before=True`` the first call of a burst runs the producer
          immediately; the rest of the burst receive its result when the
          timer expires.
        - With a ``signal``, aborting rejects every waiting caller with
          :class:`~pdebounce.errors.AbortError` and drops the timer.

    Example::

        wait=0.1s

        t=0.00s call(1)  -> open burst, start timer (0.1s)
        t=0.05s call(2)  -> reset timer (0.1s)
        t=0.15s expires  -> producer(2), both callers get its result

    Args:
        producer: The wrapped operation.
        wait: Quiet-period delay in seconds. Must be a finite number.
        before: Run the producer on the leading edge of the burst.
        signal: Optional abort signal shared with the caller.
    """

    __slots__ = (
        "_leading",
        "_timer_handle",
        "_waiters",
        "before",
        "signal",
        "wait",
    )

    def __init__(
        self,
        producer: Callable[..., Any],
        wait: float,
        *,
        before: bool = False,
        signal: AbortSignal | None = None,
    ) -> None:
        super().__init__(producer)
        validate_wait(wait)
        self.wait = wait
        self.before = before
        self.signal = signal
        self._timer_handle: TimerHandle | None = None
        self._waiters: list[Future[Any]] = []
        self._leading: Future[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._timer_handle is not None

    def submit(self, call: Call) -> Future[Any]:
        """Register *call* with the current burst, opening one if needed."""
        loop = self._get_loop()
        future: Future[Any] = loop.create_future()

        if self.signal is not None and self.signal.aborted:
            future.set_exception(self.signal.as_error())
            return future

        run_now = self.before and self._timer_handle is None

        if self._timer_handle is not None:
            self._timer_handle.cancel()
        else:
            logger.debug("Opening burst for %r", self)

        self._timer_handle = loop.call_later(self.wait, self._fire, call)

        if run_now:
            self._leading = self._invoke(call)
            self._leading.add_done_callback(partial(chain, target=future))
            return future

        self._waiters.append(future)
        if self.signal is not None and len(self._waiters) == 1:
            self.signal.add_listener(self._on_abort)
        return future

    def _fire(self, call: Call) -> None:
        self._timer_handle = None
        waiters, self._waiters = self._waiters, []
        leading, self._leading = self._leading, None

        if self.signal is not None:
            self.signal.remove_listener(self._on_abort)

        logger.debug("Flushing burst of %r to %d waiter(s)", self, len(waiters))

        if self.before:
            if leading is not None and waiters:
                leading.add_done_callback(partial(_share_leading, waiters=waiters))
            return

        source = self._invoke(call)
        for waiter in waiters:
            source.add_done_callback(partial(chain, target=waiter))

    def _on_abort(self) -> None:
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None

        waiters, self._waiters = self._waiters, []
        self._leading = None

        error = self.signal.as_error()  # type: ignore[union-attr]
        logger.debug("Aborting burst of %r, rejecting %d waiter(s)", self, len(waiters))
        for waiter in waiters:
            if not waiter.done():
                waiter.set_exception(error)
