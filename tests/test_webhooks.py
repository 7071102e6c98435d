"""Tests for webhook event emission and signing."""

import hashlib
import hmac
import json

import httpx
import pytest

from factory_pulse.events.webhook_config import (
    WebhookRegistry,
    WebhookSubscription,
    register_from_settings,
    webhook_registry,
)
from factory_pulse.events.webhook_emitter import _sign_payload, build_envelope, emit_event
from factory_pulse.events.workflow_events import PROJECT_STAGE_CHANGED, stage_changed_payload


def test_build_envelope():
    """Envelope has all required fields."""
    envelope = build_envelope("project.stage_changed", {"project_id": "proj_test"}, project_id="proj_test")
    assert envelope.event_type == "project.stage_changed"
    assert envelope.source_system == "factory-pulse"
    assert envelope.schema_version == "1.0"
    assert envelope.event_id.startswith("evt_")
    assert envelope.project_id == "proj_test"
    assert envelope.signature is None  # Unsigned until delivery


def test_sign_payload():
    """HMAC-SHA256 signature is correct."""
    body = b'{"test":"data"}'
    secret = "my-secret"
    sig = _sign_payload(body, secret)
    expected = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    assert sig == expected


def test_webhook_registry():
    """Registry filters subscribers by event type."""
    registry = WebhookRegistry()
    registry.register(WebhookSubscription(url="http://a.com/hook", secret="s1"))
    registry.register(
        WebhookSubscription(url="http://b.com/hook", secret="s2", event_types=["project.created"])
    )
    registry.register(WebhookSubscription(url="http://c.com/hook", secret="s3", active=False))

    assert len(registry.get_subscribers("project.created")) == 2
    subs = registry.get_subscribers("project.stage_changed")
    assert [s.url for s in subs] == ["http://a.com/hook"]


def test_register_replaces_same_url():
    registry = WebhookRegistry()
    registry.register(WebhookSubscription(url="http://a.com/hook", secret="old"))
    registry.register(WebhookSubscription(url="http://a.com/hook", secret="new"))
    assert [s.secret for s in registry.list_all()] == ["new"]


def test_register_from_settings():
    count = register_from_settings(["http://erp.local/hook", "http://mes.local/hook"], "shared")
    assert count == 2
    assert {s.url for s in webhook_registry.list_all()} == {"http://erp.local/hook", "http://mes.local/hook"}


def test_stage_changed_payload():
    payload = stage_changed_payload(
        "proj_x", "quoted", "order_confirmed", "usr_boss", manager_override=True, history_id="stghist_1"
    )
    assert payload["from_stage_name"] == "Quoted"
    assert payload["to_stage_name"] == "Order Confirmed"
    assert payload["manager_override"] is True
    assert payload["auto_advanced"] is False


@pytest.mark.asyncio
async def test_emit_event_without_subscribers():
    assert await emit_event(PROJECT_STAGE_CHANGED, {"project_id": "proj_x"}) == []


@pytest.mark.asyncio
async def test_emit_event_signs_body():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(204)

    webhook_registry.register(WebhookSubscription(url="http://erp.local/hook", secret="s3cret"))
    results = await emit_event(
        PROJECT_STAGE_CHANGED, {"project_id": "proj_x"}, project_id="proj_x",
        transport=httpx.MockTransport(handler),
    )
    assert results == [{"url": "http://erp.local/hook", "status": 204, "error": None}]

    request = received[0]
    assert request.headers["X-Factory-Pulse-Event"] == PROJECT_STAGE_CHANGED
    expected = hmac.new(b"s3cret", request.content, hashlib.sha256).hexdigest()
    assert request.headers["X-Factory-Pulse-Signature"] == expected
    assert json.loads(request.content)["payload"] == {"project_id": "proj_x"}


@pytest.mark.asyncio
async def test_emit_event_retries_server_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503 if len(calls) < 3 else 200)

    webhook_registry.register(WebhookSubscription(url="http://erp.local/hook", secret="s"))
    results = await emit_event(PROJECT_STAGE_CHANGED, {}, transport=httpx.MockTransport(handler))
    assert len(calls) == 3
    assert results[0]["status"] == 200


@pytest.mark.asyncio
async def test_emit_event_reports_client_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400)

    webhook_registry.register(WebhookSubscription(url="http://erp.local/hook", secret="s"))
    results = await emit_event(PROJECT_STAGE_CHANGED, {}, transport=httpx.MockTransport(handler))
    assert results == [{"url": "http://erp.local/hook", "status": 400, "error": "HTTP 400"}]
