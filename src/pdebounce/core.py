"""Core Debouncer class — main entry point for the library."""

from __future__ import annotations

from functools import partial, update_wrapper
from typing import TYPE_CHECKING, Any

from pdebounce.strategies.base import Call
from pdebounce.strategies.registry import build_strategy

if TYPE_CHECKING:
    from asyncio import Future
    from collections.abc import Callable

    from pdebounce.strategies.base import BaseStrategy

from pdebounce.config import DebounceConfig


class Debouncer:
    """A debounced stand-in for *producer*.

    Calling it returns an ``asyncio.Future`` that settles according to the
    configured mode. Outcomes arrive from timer or settlement callbacks, so
    the future is still pending when the call returns, unless the abort
    signal had already fired. Must be called inside a running event loop.

    Stored on a class, it behaves like a method: the instance it is
    accessed through is passed to the producer as its first argument.
    All instances share the one coalescing slot.
    """

    def __init__(self, producer: Callable[..., Any], *, config: DebounceConfig) -> None:
        update_wrapper(self, producer)
        self._config = config
        self._strategy: BaseStrategy = build_strategy(producer, config)

    @property
    def config(self) -> DebounceConfig:
        return self._config

    @property
    def strategy(self) -> BaseStrategy:
        return self._strategy

    @property
    def pending(self) -> bool:
        return self._strategy.pending

    def __call__(self, *args: Any, **kwargs: Any) -> Future[Any]:
        return self._strategy.submit(Call(args, kwargs))

    def call_with_context(self, context: Any, *args: Any, **kwargs: Any) -> Future[Any]:
        """Call with an explicit receiver passed ahead of *args*."""
        return self._strategy.submit(Call(args, kwargs, context))

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return partial(self.call_with_context, instance)

    def __repr__(self) -> str:
        return f"Debouncer({self._strategy!r}, mode={self._config.mode.value})"
