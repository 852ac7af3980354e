"""Testes das métricas via logs estruturados."""

from __future__ import annotations

import pytest

from app.observability import WebhookOutcomeTimer, record_webhook_outcome
from app.observability.correlation import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from utils.errors import DBTimeoutError, RedisConnectionError


def _outcomes(caplog: pytest.LogCaptureFixture) -> list:
    return [r for r in caplog.records if r.getMessage() == "metric_webhook_outcome"]


def test_record_webhook_outcome_success(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO"):
        record_webhook_outcome("github", "k1", "success", 12.3456)

    (record,) = _outcomes(caplog)
    assert record.levelname == "INFO"
    assert record.platform == "github"
    assert record.routing_key == "k1"
    assert record.latency_ms == 12.35
    assert record.error_kind is None


def test_timer_classifies_gateway_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO"), pytest.raises(DBTimeoutError):
        with WebhookOutcomeTimer("qqbot", "k1"):
            raise DBTimeoutError()

    (record,) = _outcomes(caplog)
    assert record.levelname == "WARNING"
    assert record.result == "error"
    assert record.error_kind == "DBTimeout"


def test_timer_classifies_infrastructure_error(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO"), pytest.raises(RedisConnectionError):
        with WebhookOutcomeTimer("qqbot", "k1"):
            raise RedisConnectionError("down")

    assert _outcomes(caplog)[0].error_kind == "Infrastructure"


def test_timer_records_manual_failure(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO"):
        with WebhookOutcomeTimer("github", "k1") as timer:
            timer.fail("SignatureInvalid")

    assert _outcomes(caplog)[0].error_kind == "SignatureInvalid"


def test_timer_success(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO"):
        with WebhookOutcomeTimer("github", "k1"):
            pass

    (record,) = _outcomes(caplog)
    assert record.result == "success"
    assert record.latency_ms >= 0


def test_correlation_id_generated_when_missing() -> None:
    token = set_correlation_id(None)
    try:
        generated = get_correlation_id()
        assert len(generated) == 32
    finally:
        reset_correlation_id(token)
    assert get_correlation_id() == ""
