"""Shared fixtures for pdebounce tests."""

import asyncio
from typing import Any

import pytest

from pdebounce.config import DebounceConfig, Mode


class Recorder:
    """Async producer that records its calls and echoes the first argument."""

    def __init__(self, delay: float = 0.0, error: Exception | None = None) -> None:
        self.delay = delay
        self.error = error
        self.calls: list[tuple[tuple[Any, ...], dict[str, Any]]] = []

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def args(self) -> list[Any]:
        return [args[0] if args else None for args, _ in self.calls]

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append((args, kwargs))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return args[0] if args else None


@pytest.fixture
def make_producer():
    return Recorder


@pytest.fixture
def window_config():
    return DebounceConfig(mode=Mode.WINDOW, wait=0.05)


@pytest.fixture
def promise_config():
    return DebounceConfig(mode=Mode.PROMISE)


@pytest.fixture
def fixture():
    return object()
