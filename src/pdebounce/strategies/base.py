"""Abstract base class that all coalescing strategies must implement."""

import asyncio
import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, NamedTuple

# Marks a call made on the plain callable rather than through an instance.
UNBOUND: Any = object()


class Call(NamedTuple):
    """One call to a debounced callable."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    context: Any = UNBOUND


def chain(source: asyncio.Future[Any], target: asyncio.Future[Any]) -> None:
    """Copy the outcome of a settled *source* into *target*.

    Used as a done callback. Every target fed from one source receives the
    same result or the same exception object. Targets the caller already
    cancelled are left alone.
    """
    if target.done():
        return
    if source.cancelled():
        target.cancel()
        return
    exc = source.exception()
    if exc is not None:
        target.set_exception(exc)
    else:
        target.set_result(source.result())


class BaseStrategy(ABC):
    """Base class for all coalescing strategies.

    A strategy owns the coalescing slot of one wrapped producer. Each
    :meth:`submit` returns a fresh future for that caller; the strategy
    decides when the producer runs and which callers share its outcome.

    Args:
        producer: The wrapped operation. May return a value or an awaitable,
                  and may raise synchronously.
    """

    __slots__ = ("_loop", "producer")

    def __init__(self, producer: Callable[..., Any]) -> None:
        if not callable(producer):
            raise TypeError(f"producer must be callable, got {producer!r}")

        self.producer = producer
        self._loop: asyncio.AbstractEventLoop | None = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _invoke(self, call: Call) -> asyncio.Future[Any]:
        """Run the producer for *call* and return a future of its outcome.

        Plain return values, awaitables and synchronous exceptions all come
        back through the same future.
        """
        loop = self._get_loop()
        try:
            if call.context is UNBOUND:
                result = self.producer(*call.args, **call.kwargs)
            else:
                result = self.producer(call.context, *call.args, **call.kwargs)
        except Exception as exc:
            future = loop.create_future()
            future.set_exception(exc)
            return future

        if inspect.isawaitable(result):
            return asyncio.ensure_future(result, loop=loop)

        future = loop.create_future()
        future.set_result(result)
        return future

    @abstractmethod
    def submit(self, call: Call) -> asyncio.Future[Any]:
        """Register *call* and return the future its caller awaits."""

    @property
    @abstractmethod
    def pending(self) -> bool:
        """Whether a burst or invocation is currently open."""

    def __repr__(self) -> str:
        name = getattr(self.producer, "__qualname__", repr(self.producer))
        return f"{type(self).__name__}(producer={name}, pending={self.pending})"
