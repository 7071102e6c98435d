"""Webhook event emission with HMAC-SHA256 signing."""

import hashlib
import hmac
import json
import logging
from datetime import datetime, timezone

import httpx

from factory_pulse.events.webhook_config import WebhookSubscription, webhook_registry
from factory_pulse.models.webhook import WebhookEnvelope
from factory_pulse.services.id_generator import generate_id

logger = logging.getLogger(__name__)

MAX_DELIVERY_ATTEMPTS = 3


def _sign_payload(body: bytes, secret: str) -> str:
    """Compute HMAC-SHA256 signature over the raw JSON body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def build_envelope(
    event_type: str,
    payload: dict,
    project_id: str | None = None,
    source_system: str = "factory-pulse",
) -> WebhookEnvelope:
    """Build a webhook envelope (unsigned). Signature is added per-subscriber."""
    return WebhookEnvelope(
        schema_version="1.0",
        event_type=event_type,
        event_id=generate_id("evt_"),
        occurred_at=datetime.now(timezone.utc),
        source_system=source_system,
        project_id=project_id,
        payload=payload,
    )


async def emit_event(
    event_type: str,
    payload: dict,
    project_id: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict]:
    """Emit a webhook event to all matching subscribers.

    Returns a list of delivery results (url, status, error). Delivery
    failures are reported in the results, never raised.
    """
    subscribers = webhook_registry.get_subscribers(event_type)
    if not subscribers:
        return []

    envelope = build_envelope(event_type, payload, project_id=project_id)
    results = []

    async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
        for sub in subscribers:
            results.append(await _deliver(client, envelope, sub))

    return results


async def _deliver(client: httpx.AsyncClient, envelope: WebhookEnvelope, sub: WebhookSubscription) -> dict:
    """Deliver a signed webhook to a single subscriber with retry on 5xx/transport errors."""
    body_bytes = json.dumps(envelope.model_dump(mode="json"), separators=(",", ":")).encode("utf-8")
    signature = _sign_payload(body_bytes, sub.secret)

    headers = {
        "Content-Type": "application/json",
        "X-Factory-Pulse-Signature": signature,
        "X-Factory-Pulse-Event": envelope.event_type,
    }

    for attempt in range(MAX_DELIVERY_ATTEMPTS):
        try:
            resp = await client.post(sub.url, content=body_bytes, headers=headers)
        except httpx.HTTPError as exc:
            if attempt < MAX_DELIVERY_ATTEMPTS - 1:
                continue
            logger.warning("Webhook delivery failed to %s: %s", sub.url, exc)
            return {"url": sub.url, "status": None, "error": str(exc)}

        if resp.status_code < 300:
            return {"url": sub.url, "status": resp.status_code, "error": None}
        if resp.status_code >= 500 and attempt < MAX_DELIVERY_ATTEMPTS - 1:
            continue
        logger.warning("Webhook %s rejected %s: HTTP %d", sub.url, envelope.event_type, resp.status_code)
        return {"url": sub.url, "status": resp.status_code, "error": f"HTTP {resp.status_code}"}

    return {"url": sub.url, "status": None, "error": "max retries exceeded"}
