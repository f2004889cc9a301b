"""In-flight coalescing strategy ("promise" mode)."""

import logging
from asyncio import Future
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from pdebounce.strategies.base import BaseStrategy, Call, chain

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _FollowUp:
    call: Call
    waiters: list[Future[Any]] = field(default_factory=list)


class InFlightCoalescer(BaseStrategy):
    """Run the producer at most once at a time.

    Calls made while an invocation is outstanding either share that
    invocation's outcome, or, with ``after=True``, queue a single follow-up
    run that uses the newest arguments and settles every call that queued
    for it. The follow-up starts as soon as the current run settles,
    whether it succeeded or failed.

    Example::

        after=True, producer takes 0.1s

        t=0.00s call("first")   -> run producer("first")
        t=0.06s call("second")  -> queue follow-up("second")
        t=0.06s call("third")   -> follow-up now uses "third"
        t=0.10s first settles   -> run producer("third") for both waiters

    Args:
        producer: The wrapped operation.
        after: Queue a follow-up run instead of sharing the current one.
    """

    __slots__ = ("_current", "_follow_up", "after")

    def __init__(self, producer: Callable[..., Any], *, after: bool = False) -> None:
        super().__init__(producer)
        self.after = after
        self._current: Future[Any] | None = None
        self._follow_up: _FollowUp | None = None

    @property
    def pending(self) -> bool:
        return self._current is not None

    def submit(self, call: Call) -> Future[Any]:
        """Start, join or queue behind the outstanding invocation."""
        future: Future[Any] = self._get_loop().create_future()

        if self._current is None:
            self._start(call, [future])
        elif not self.after:
            self._current.add_done_callback(partial(chain, target=future))
        elif self._follow_up is None:
            self._follow_up = _FollowUp(call, [future])
        else:
            self._follow_up.call = call
            self._follow_up.waiters.append(future)

        return future

    def _start(self, call: Call, waiters: list[Future[Any]]) -> None:
        self._current = self._invoke(call)
        self._current.add_done_callback(self._on_settled)
        for waiter in waiters:
            self._current.add_done_callback(partial(chain, target=waiter))

    def _on_settled(self, _: Future[Any]) -> None:
        follow_up, self._follow_up = self._follow_up, None
        if follow_up is None:
            self._current = None
            return

        logger.debug("Running follow-up of %r for %d waiter(s)", self, len(follow_up.waiters))
        self._start(follow_up.call, follow_up.waiters)
