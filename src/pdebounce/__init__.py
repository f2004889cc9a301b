"""pdebounce — Debounce and coalesce promise-returning calls in asyncio.

Wraps a function so that bursts of calls collapse into a single run, and
every caller awaits the outcome of that run.

Basic usage:

    from pdebounce import debounce

    search = debounce(fetch_results, 0.2)

    first = search("he")
    second = search("hello")
    await first  # fetch_results("hello"), once

In-flight coalescing:

    from pdebounce import debounce_promise

    @debounce_promise(after=True)
    async def save(document):
        await store.write(document)
"""

from pdebounce.config import DebounceConfig, Mode
from pdebounce.core import Debouncer
from pdebounce.decorator import debounce, debounce_promise
from pdebounce.errors import AbortError, DebounceError, InvalidArgumentError
from pdebounce.signal import AbortController, AbortSignal
from pdebounce.strategies.base import BaseStrategy
from pdebounce.strategies.inflight import InFlightCoalescer
from pdebounce.strategies.window import WindowedDebouncer

__all__ = [
    "AbortController",
    "AbortError",
    "AbortSignal",
    "BaseStrategy",
    "DebounceConfig",
    "DebounceError",
    "Debouncer",
    "InFlightCoalescer",
    "InvalidArgumentError",
    "Mode",
    "WindowedDebouncer",
    "debounce",
    "debounce_promise",
]

__version__ = "0.1.0"
