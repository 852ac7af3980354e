"""Testes dos adapters HMAC/token (GitHub, GitLab, Telegram, Stripe, ...)."""

from __future__ import annotations

import time

import pytest

from api.connectors.generic import GenericAdapter
from api.connectors.github import GitHubAdapter
from api.connectors.gitlab import GitLabAdapter
from api.connectors.jenkins import JenkinsAdapter
from api.connectors.jira import JiraAdapter
from api.connectors.registry import ADAPTER_REGISTRY
from api.connectors.sentry import SentryAdapter
from api.connectors.signatures.hmac_sha256 import compute_hmac_hex
from api.connectors.stripe import StripeAdapter
from api.connectors.telegram import TelegramAdapter
from app.protocols.adapter import MessageKind
from config.settings import GatewaySettings
from tests.fakes.routing import make_record
from utils.errors import ServerConfigurationError, SignatureInvalidError

SECRET = "s3cret"


def _record(platform: str, **overrides: object):
    return make_record(platform=platform, credential=SECRET, **overrides)


class TestGitHub:
    body = b'{"action":"opened","repository":{"full_name":"o/r"},"sender":{"login":"u"}}'

    def _headers(self, signature: str) -> dict[str, str]:
        return {
            "X-Hub-Signature-256": signature,
            "X-GitHub-Event": "pull_request",
            "X-GitHub-Delivery": "d-1",
        }

    def test_valid_signature_is_event(self) -> None:
        headers = self._headers("sha256=" + compute_hmac_hex(SECRET, self.body))

        outcome = GitHubAdapter(_record("github")).handle(self.body, headers)

        assert outcome.kind is MessageKind.EVENT
        assert outcome.body == {"status": "received"}

    def test_invalid_signature_raises(self) -> None:
        headers = self._headers("sha256=" + compute_hmac_hex("nope", self.body))

        with pytest.raises(SignatureInvalidError):
            GitHubAdapter(_record("github")).handle(self.body, headers)

    def test_transform(self) -> None:
        headers = {"x-github-event": "pull_request", "x-github-delivery": "d-1"}
        payload = {"action": "opened", "repository": {"full_name": "o/r"}, "sender": {"login": "u"}}

        event = GitHubAdapter(_record("github")).transform(payload, headers)

        assert event.id == "d-1"
        assert event.type == "pull_request.opened"
        assert event.headers == {"x-github-event": "pull_request", "x-github-delivery": "d-1"}
        assert event.data["repository"] == "o/r"
        assert event.data["sender"] == "u"


class TestGitLab:
    def test_token_header(self) -> None:
        adapter = GitLabAdapter(_record("gitlab"))

        ok = adapter.handle(b'{"object_kind":"push"}', {"X-Gitlab-Token": SECRET})

        assert ok.kind is MessageKind.EVENT
        with pytest.raises(SignatureInvalidError):
            adapter.handle(b'{"object_kind":"push"}', {"X-Gitlab-Token": "bad"})

    def test_transform_uses_object_kind(self) -> None:
        event = GitLabAdapter(_record("gitlab")).transform(
            {"object_kind": "merge_request", "object_attributes": {"action": "open"}},
            {"x-gitlab-event-uuid": "u-1"},
        )

        assert event.id == "u-1"
        assert event.type == "merge_request"
        assert event.data["action"] == "open"


class TestTelegram:
    def test_secret_token_header(self) -> None:
        adapter = TelegramAdapter(_record("telegram"))
        headers = {"X-Telegram-Bot-Api-Secret-Token": SECRET}

        assert adapter.handle(b'{"update_id":1}', headers).kind is MessageKind.EVENT

    def test_transform_detects_update_kind(self) -> None:
        payload = {
            "update_id": 10,
            "message": {"chat": {"id": 99}, "from": {"id": 7}, "text": "hi"},
        }

        event = TelegramAdapter(_record("telegram")).transform(payload, {})

        assert event.id == "telegram_10"
        assert event.type == "message"
        assert event.data["chat_id"] == "99"
        assert event.data["text"] == "hi"


class TestStripe:
    def test_valid_signature_within_tolerance(self) -> None:
        body = b'{"id":"evt_1","type":"charge.succeeded"}'
        timestamp = str(int(time.time()))
        signature = compute_hmac_hex(SECRET, f"{timestamp}.".encode() + body)
        headers = {"Stripe-Signature": f"t={timestamp},v1={signature}"}
        adapter = StripeAdapter(_record("stripe"), GatewaySettings(stripe_tolerance_seconds=60))

        outcome = adapter.handle(body, headers)

        assert outcome.kind is MessageKind.EVENT

    def test_transform(self) -> None:
        payload = {
            "id": "evt_1",
            "type": "charge.succeeded",
            "livemode": False,
            "created": 1700000000,
            "data": {"object": {"object": "charge", "id": "ch_1"}},
        }

        event = StripeAdapter(_record("stripe")).transform(payload, {})

        assert event.id == "evt_1"
        assert event.type == "charge.succeeded"
        assert event.data["object_id"] == "ch_1"
        assert event.data["created"] == 1700000000


class TestJenkins:
    def test_transform_build_phase(self) -> None:
        payload = {"name": "deploy", "build": {"number": 12, "phase": "COMPLETED"}}

        event = JenkinsAdapter(_record("jenkins")).transform(payload, {})

        assert event.id == "jenkins_deploy_12_completed"
        assert event.type == "build.completed"

    def test_token_header(self) -> None:
        outcome = JenkinsAdapter(_record("jenkins")).handle(b"{}", {"X-Jenkins-Token": SECRET})

        assert outcome.kind is MessageKind.EVENT


class TestJiraAndSentry:
    def test_jira_hmac_with_prefix(self) -> None:
        body = b'{"webhookEvent":"jira:issue_created"}'
        headers = {"X-Hub-Signature": "sha256=" + compute_hmac_hex(SECRET, body)}

        outcome = JiraAdapter(_record("jira")).handle(body, headers)

        assert outcome.kind is MessageKind.EVENT

    def test_jira_transform(self) -> None:
        event = JiraAdapter(_record("jira")).transform(
            {"webhookEvent": "jira:issue_created", "issue": {"key": "P-1"}}, {}
        )

        assert event.type == "jira:issue_created"
        assert event.data["issue_key"] == "P-1"

    def test_sentry_bare_hex(self) -> None:
        body = b'{"action":"created"}'
        headers = {
            "Sentry-Hook-Signature": compute_hmac_hex(SECRET, body),
            "Sentry-Hook-Resource": "issue",
        }

        outcome = SentryAdapter(_record("sentry")).handle(body, headers)

        assert outcome.kind is MessageKind.EVENT

    def test_sentry_transform_type(self) -> None:
        event = SentryAdapter(_record("sentry")).transform(
            {"action": "created"}, {"sentry-hook-resource": "issue"}
        )

        assert event.type == "issue.created"


class TestGeneric:
    def test_prefix_is_optional_and_timestamp_signed(self) -> None:
        body = b'{"type":"order.paid"}'
        signature = compute_hmac_hex(SECRET, b"1700000000" + body)
        adapter = GenericAdapter(_record("generic"))

        for value in (signature, "sha256=" + signature):
            headers = {"X-Webhook-Signature": value, "X-Webhook-Timestamp": "1700000000"}
            assert adapter.handle(body, headers).kind is MessageKind.EVENT

    def test_transform_defaults_type(self) -> None:
        event = GenericAdapter(_record("generic")).transform({"foo": 1}, {})

        assert event.type == "webhook"
        assert event.data == {"foo": 1}


class TestCommonBehavior:
    @pytest.mark.parametrize("platform", sorted(ADAPTER_REGISTRY))
    def test_missing_credential_is_server_configuration_error(self, platform: str) -> None:
        adapter = ADAPTER_REGISTRY[platform](make_record(platform=platform, credential=""))
        body = b'{"op":0}' if platform == "qqbot" else b"{}"

        with pytest.raises(ServerConfigurationError):
            adapter.handle(body, {})

    @pytest.mark.parametrize("platform", sorted(ADAPTER_REGISTRY))
    @pytest.mark.parametrize("payload", [None, [], "x", 1.5, {"unexpected": {"deep": [1]}}])
    def test_transform_is_total(self, platform: str, payload: object) -> None:
        adapter = ADAPTER_REGISTRY[platform](make_record(platform=platform))

        event = adapter.transform(payload, {})

        assert event.platform == platform
        assert event.id
        assert event.type
