from pdebounce.strategies.base import BaseStrategy, Call
from pdebounce.strategies.inflight import InFlightCoalescer
from pdebounce.strategies.registry import build_strategy
from pdebounce.strategies.window import WindowedDebouncer

__all__ = [
    "BaseStrategy",
    "Call",
    "InFlightCoalescer",
    "WindowedDebouncer",
    "build_strategy",
]
