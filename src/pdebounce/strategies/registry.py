"""Maps each ``Mode`` enum member to a callable that builds a ``BaseStrategy``.

When you add a new mode:

1. Add a variant to the ``Mode`` enum in ``config.py``.
2. Add an entry to ``REGISTRY`` pointing to a factory function or lambda
   that constructs the concrete strategy from a producer and a
   :class:`DebounceConfig`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pdebounce.config import DebounceConfig, Mode
from pdebounce.strategies.base import BaseStrategy
from pdebounce.strategies.inflight import InFlightCoalescer
from pdebounce.strategies.window import WindowedDebouncer

StrategyFactory = Callable[[Callable[..., Any], DebounceConfig], BaseStrategy]

REGISTRY: dict[Mode, StrategyFactory] = {
    Mode.WINDOW: lambda producer, cfg: WindowedDebouncer(
        producer,
        cfg.wait,  # type: ignore[arg-type]
        before=cfg.before,
        signal=cfg.signal,
    ),
    Mode.PROMISE: lambda producer, cfg: InFlightCoalescer(producer, after=cfg.after),
}


def build_strategy(producer: Callable[..., Any], config: DebounceConfig) -> BaseStrategy:
    """Resolve *config.mode* to a concrete ``BaseStrategy`` wrapping *producer*."""
    factory = REGISTRY.get(config.mode)
    if not factory:
        raise ValueError(
            f"Unknown mode: {config.mode!r}. Registered: {', '.join(m.value for m in REGISTRY)}"
        )
    return factory(producer, config)
