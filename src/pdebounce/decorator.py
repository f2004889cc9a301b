"""Decorator API for applying debounce behavior to functions."""

from collections.abc import Callable
from typing import Any, TypeVar, overload

from pdebounce.config import DebounceConfig, Mode
from pdebounce.core import Debouncer
from pdebounce.signal import AbortSignal

F = TypeVar("F", bound=Callable[..., Any])


@overload
def debounce(
    func: F,
    /,
    wait: float,
    *,
    before: bool = False,
    signal: AbortSignal | None = None,
) -> Debouncer: ...


@overload
def debounce(
    *,
    wait: float,
    before: bool = False,
    signal: AbortSignal | None = None,
) -> Callable[[F], Debouncer]: ...


def debounce(
    func: F | None = None,
    /,
    wait: float | None = None,
    *,
    before: bool = False,
    signal: AbortSignal | None = None,
) -> Debouncer | Callable[[F], Debouncer]:
    """Debounce calls to *func* over a quiet period of *wait* seconds.

    Every call returns a future. Calls made less than *wait* seconds apart
    form one burst; when the burst goes quiet, *func* runs once with the
    arguments of the last call and all callers receive that result.

    *func* may be a coroutine function or a plain function. Exceptions it
    raises, synchronously or not, reach every caller of the burst.

    Args:
        func: The function to wrap (when not used as a decorator factory).
        wait: Quiet-period delay in seconds. Must be a finite number.
        before: Run *func* on the first call of each burst instead of the
            last; later callers in the burst receive that first result.
        signal: Abort signal that rejects waiting callers with
            :class:`~pdebounce.errors.AbortError`.

    Raises:
        InvalidArgumentError: If *wait* is missing or not a finite number.

    Examples:
    ```python
        # Direct wrapping
        search = debounce(fetch_results, 0.2)
        results = await asyncio.gather(search("a"), search("ab"))

        # As a decorator
        @debounce(wait=0.2, before=True)
        async def refresh() -> Snapshot:
            return await api.snapshot()
    ```
    """
    config = DebounceConfig(mode=Mode.WINDOW, wait=wait, before=before, signal=signal)

    def decorator(fn: F) -> Debouncer:
        return Debouncer(fn, config=config)

    if func is not None:
        return decorator(func)

    return decorator


@overload
def debounce_promise(func: F, /, *, after: bool = False) -> Debouncer: ...


@overload
def debounce_promise(*, after: bool = False) -> Callable[[F], Debouncer]: ...


def debounce_promise(
    func: F | None = None,
    /,
    *,
    after: bool = False,
) -> Debouncer | Callable[[F], Debouncer]:
    """Coalesce calls to *func* made while a previous call is still running.

    Without *after*, concurrent callers share the running call's result.
    With *after*, they queue one more run that starts once the current one
    settles, using the arguments of the newest queued call.

    Examples:
    ```python
        @debounce_promise
        async def reload() -> Config:
            return await read_config()

        @debounce_promise(after=True)
        async def save(document: Document) -> None:
            await store.write(document)
    ```
    """
    config = DebounceConfig(mode=Mode.PROMISE, after=after)

    def decorator(fn: F) -> Debouncer:
        return Debouncer(fn, config=config)

    if func is not None:
        return decorator(func)

    return decorator
