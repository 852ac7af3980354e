"""Testes do executor de retry."""

from __future__ import annotations

import pytest

from app.services import retry as retry_module
from app.services.retry import RetryPolicy, retry_always, retry_transient, with_retry
from utils.errors import BroadcastTargetError


class _Flaky:
    def __init__(self, failures: int, error: Exception | None = None) -> None:
        self.failures = failures
        self.error = error or ConnectionError("flaky")
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    recorded: list[float] = []

    async def _fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr(retry_module.asyncio, "sleep", _fake_sleep)
    return recorded


@pytest.mark.asyncio
async def test_first_success_makes_one_call(sleeps: list[float]) -> None:
    operation = _Flaky(0)

    assert await with_retry(operation, RetryPolicy()) == "ok"
    assert operation.calls == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_retries_until_success_with_backoff(sleeps: list[float]) -> None:
    operation = _Flaky(2)

    result = await with_retry(operation, RetryPolicy(max_attempts=3, initial_delay=0.1))

    assert result == "ok"
    assert operation.calls == 3
    assert sleeps == pytest.approx([0.1, 0.2])


@pytest.mark.asyncio
async def test_reraises_last_error_after_exhaustion(
    sleeps: list[float], caplog: pytest.LogCaptureFixture
) -> None:
    operation = _Flaky(5)

    with caplog.at_level("WARNING"), pytest.raises(ConnectionError):
        await with_retry(operation, RetryPolicy(max_attempts=3), operation_name="send")

    assert operation.calls == 3
    assert len(sleeps) == 2
    assert caplog.text.count("retry_attempt_failed") == 3


@pytest.mark.asyncio
async def test_predicate_stops_early(sleeps: list[float]) -> None:
    operation = _Flaky(5)
    seen: list[int] = []

    def _stop_after_first(exc: Exception, attempt_index: int) -> bool:
        seen.append(attempt_index)
        return False

    with pytest.raises(ConnectionError):
        await with_retry(operation, RetryPolicy(max_attempts=5, should_continue=_stop_after_first))

    assert operation.calls == 1
    assert seen == [0]
    assert sleeps == []


@pytest.mark.asyncio
async def test_single_attempt_policy(sleeps: list[float]) -> None:
    operation = _Flaky(1)

    with pytest.raises(ConnectionError):
        await with_retry(operation, RetryPolicy(max_attempts=1))

    assert operation.calls == 1


def test_policy_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(initial_delay=-1)


def test_delay_for_is_exponential() -> None:
    policy = RetryPolicy(initial_delay=0.5, backoff_factor=3.0)

    assert policy.delay_for(0) == 0.5
    assert policy.delay_for(2) == pytest.approx(4.5)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (BroadcastTargetError("x", status_code=404), False),
        (BroadcastTargetError("x", status_code=400), False),
        (BroadcastTargetError("x", status_code=408), True),
        (BroadcastTargetError("x", status_code=429), True),
        (BroadcastTargetError("x", status_code=502), True),
        (BroadcastTargetError("x"), True),
        (TimeoutError(), True),
    ],
)
def test_retry_transient(error: Exception, expected: bool) -> None:
    assert retry_transient(error, 0) is expected
    assert retry_always(error, 0) is True
