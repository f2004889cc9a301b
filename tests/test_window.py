"""Tests for WindowedDebouncer strategy."""

import asyncio
import math

import pytest

from pdebounce.errors import AbortError, InvalidArgumentError
from pdebounce.signal import AbortController, AbortSignal
from pdebounce.strategies.base import Call
from pdebounce.strategies.window import WindowedDebouncer


def submit(strategy, *args, **kwargs):
    return strategy.submit(Call(args, kwargs))


class TestWindowedDebouncerCreation:
    @pytest.mark.parametrize("wait", [math.inf, math.nan, None, "0.1"])
    def test_non_finite_wait_raises(self, make_producer, wait):
        with pytest.raises(InvalidArgumentError):
            WindowedDebouncer(make_producer(), wait)

    def test_not_pending_initially(self, make_producer):
        assert WindowedDebouncer(make_producer(), 0.1).pending is False


class TestWindowedDebouncerTrailing:
    async def test_single_call(self, make_producer, fixture):
        wd = WindowedDebouncer(make_producer(), 0.05)
        assert await submit(wd, fixture) is fixture

    async def test_multiple_calls_coalesced(self, make_producer):
        producer = make_producer(delay=0.05)
        wd = WindowedDebouncer(producer, 0.1)
        loop = asyncio.get_running_loop()
        start = loop.time()

        results = await asyncio.gather(*(submit(wd, v) for v in [1, 2, 3, 4, 5]))

        assert results == [5, 5, 5, 5, 5]
        assert producer.count == 1
        assert 0.13 <= loop.time() - start < 0.5

        await asyncio.sleep(0.2)
        assert await submit(wd, 6) == 6
        assert producer.count == 2

    async def test_timer_resets_on_call(self, make_producer):
        producer = make_producer()
        wd = WindowedDebouncer(producer, 0.1)
        first = submit(wd, "first")
        await asyncio.sleep(0.06)
        second = submit(wd, "second")

        assert await asyncio.gather(first, second) == ["second", "second"]
        assert producer.args == ["second"]

    async def test_spaced_calls_are_not_coalesced(self, make_producer):
        producer = make_producer()
        wd = WindowedDebouncer(producer, 0.02)
        assert await submit(wd, 1) == 1
        await asyncio.sleep(0.05)
        assert await submit(wd, 2) == 2
        assert producer.args == [1, 2]

    async def test_producer_slower_than_wait_starts_new_burst(self, make_producer):
        producer = make_producer(delay=0.2)
        wd = WindowedDebouncer(producer, 0.1)

        set_one = [submit(wd, v) for v in [1, 2, 3]]
        await asyncio.sleep(0.11)
        set_two = [submit(wd, v) for v in [4, 5, 6]]

        assert await asyncio.gather(*set_one, *set_two) == [3, 3, 3, 6, 6, 6]
        assert producer.count == 2

    async def test_pending_tracks_burst(self, make_producer):
        wd = WindowedDebouncer(make_producer(), 0.05)
        future = submit(wd, 1)
        assert wd.pending is True
        await future
        assert wd.pending is False

    async def test_kwargs_and_identity_preserved(self, make_producer, fixture):
        producer = make_producer()
        wd = WindowedDebouncer(producer, 0.01)
        await submit(wd, fixture, key=fixture)
        args, kwargs = producer.calls[0]
        assert args[0] is fixture
        assert kwargs["key"] is fixture


class TestWindowedDebouncerSettlement:
    @pytest.mark.parametrize("wait", [0, -1])
    async def test_non_positive_wait_is_still_async(self, make_producer, wait):
        wd = WindowedDebouncer(make_producer(), wait)
        future = submit(wd, "x")
        assert not future.done()
        assert await future == "x"

    async def test_sync_producer(self):
        wd = WindowedDebouncer(lambda value: value * 2, 0.01)
        future = submit(wd, 21)
        assert not future.done()
        assert await future == 42

    async def test_sync_raise_rejects_burst(self):
        error = ValueError("sync")

        def boom(_):
            raise error

        wd = WindowedDebouncer(boom, 0.01)
        futures = [submit(wd, v) for v in range(3)]
        await asyncio.gather(*futures, return_exceptions=True)
        assert all(f.exception() is error for f in futures)

    async def test_failure_shared_by_burst(self, make_producer):
        error = RuntimeError("boom")
        producer = make_producer(error=error)
        wd = WindowedDebouncer(producer, 0.01)

        results = await asyncio.gather(*(submit(wd, v) for v in range(3)), return_exceptions=True)

        assert all(r is error for r in results)
        assert producer.count == 1

    async def test_failure_does_not_leak_into_next_burst(self):
        attempts = []

        async def flaky(value):
            attempts.append(value)
            if len(attempts) == 1:
                raise RuntimeError("first")
            return value

        wd = WindowedDebouncer(flaky, 0.01)
        with pytest.raises(RuntimeError):
            await submit(wd, 1)
        assert await submit(wd, 2) == 2

    async def test_cancelled_caller_does_not_disturb_others(self, make_producer):
        wd = WindowedDebouncer(make_producer(), 0.02)
        first = submit(wd, 1)
        second = submit(wd, 2)
        first.cancel()
        assert await second == 2


class TestWindowedDebouncerBefore:
    async def test_first_result_shared(self, make_producer):
        producer = make_producer(delay=0.05)
        wd = WindowedDebouncer(producer, 0.1, before=True)

        results = await asyncio.gather(*(submit(wd, v) for v in [1, 2, 3, 4]))

        assert results == [1, 1, 1, 1]
        assert producer.count == 1

        await asyncio.sleep(0.2)
        assert await submit(wd, 5) == 5
        assert await submit(wd, 6) == 5
        assert producer.count == 2

    async def test_no_trailing_call(self, make_producer):
        producer = make_producer()
        wd = WindowedDebouncer(producer, 0.05, before=True)
        await submit(wd)
        await asyncio.sleep(0.1)
        assert producer.count == 1

    async def test_leading_call_resolves_before_window(self, make_producer):
        wd = WindowedDebouncer(make_producer(), 10.0, before=True)
        assert await asyncio.wait_for(submit(wd, "now"), timeout=1.0) == "now"
        assert wd.pending is True

    async def test_followers_wait_for_slow_leading_call(self, make_producer):
        producer = make_producer(delay=0.1)
        wd = WindowedDebouncer(producer, 0.02, before=True)
        results = await asyncio.gather(submit(wd, "a"), submit(wd, "b"))
        assert results == ["a", "a"]
        assert producer.count == 1

    async def test_leading_failure_gives_followers_none(self, make_producer):
        error = RuntimeError("leading")
        wd = WindowedDebouncer(make_producer(error=error), 0.02, before=True)

        leading = submit(wd, 1)
        follower = submit(wd, 2)

        with pytest.raises(RuntimeError, match="leading"):
            await leading
        assert await follower is None


class TestWindowedDebouncerAbort:
    async def test_already_aborted_fails_immediately(self, make_producer):
        producer = make_producer()
        wd = WindowedDebouncer(producer, 0.01, signal=AbortSignal.abort("stop"))

        future = submit(wd, 1)

        assert future.done()
        with pytest.raises(AbortError, match="stop"):
            await future
        assert wd.pending is False
        await asyncio.sleep(0.03)
        assert producer.count == 0

    async def test_abort_rejects_waiters_and_skips_producer(self, make_producer):
        producer = make_producer()
        controller = AbortController()
        wd = WindowedDebouncer(producer, 0.05, signal=controller.signal)

        futures = [submit(wd, v) for v in range(3)]
        controller.abort()

        results = await asyncio.gather(*futures, return_exceptions=True)
        assert all(isinstance(r, AbortError) for r in results)
        assert results[0] is results[1] is results[2]
        assert wd.pending is False

        await asyncio.sleep(0.1)
        assert producer.count == 0

    async def test_abort_reason_is_chained(self, make_producer):
        controller = AbortController()
        wd = WindowedDebouncer(make_producer(), 0.05, signal=controller.signal)
        future = submit(wd, 1)
        cause = ConnectionError("gone")
        controller.abort(cause)

        with pytest.raises(AbortError) as excinfo:
            await future
        assert excinfo.value.reason is cause
        assert excinfo.value.__cause__ is cause

    async def test_abort_does_not_cancel_leading_call(self, make_producer):
        producer = make_producer(delay=0.03)
        controller = AbortController()
        wd = WindowedDebouncer(producer, 0.05, before=True, signal=controller.signal)

        leading = submit(wd, "lead")
        follower = submit(wd, "follow")
        controller.abort()

        assert await leading == "lead"
        with pytest.raises(AbortError):
            await follower

    async def test_calls_after_abort_fail(self, make_producer):
        controller = AbortController()
        wd = WindowedDebouncer(make_producer(), 0.01, signal=controller.signal)
        controller.abort()
        with pytest.raises(AbortError):
            await submit(wd, 1)

    async def test_listener_detached_after_flush(self, make_producer):
        controller = AbortController()
        wd = WindowedDebouncer(make_producer(), 0.01, signal=controller.signal)

        assert await asyncio.gather(submit(wd, 1), submit(wd, 2)) == [2, 2]

        assert controller.signal._listeners == []
        controller.abort()
