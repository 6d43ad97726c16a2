"""Shared test fixtures for deliverect-connector."""

from __future__ import annotations

import hashlib
import hmac
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from deliverect_connector.models import DeliverectCredentials
from deliverect_connector.webhook.models import WebhookEnvelope

WEBHOOK_SECRET = "test-secret-key"


@pytest.fixture
def credentials() -> DeliverectCredentials:
    return DeliverectCredentials(
        client_id="client-123",
        client_secret=SecretStr("client-secret-456"),
        domain="api.staging.deliverect.com",
        webhook_secret=SecretStr(WEBHOOK_SECRET),
    )


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]:
    """Build an httpx.Client whose requests are answered by ``handler``."""

    def _create(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _create


# --- Factory functions for test data ---


def sign(body: bytes | str, secret: str = WEBHOOK_SECRET) -> str:
    if isinstance(body, str):
        body = body.encode()
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def make_envelope(
    body: dict[str, Any] | None,
    headers: dict[str, str] | None = None,
    raw_body: bytes | str | None = None,
) -> WebhookEnvelope:
    """Factory for WebhookEnvelope; pass ``raw_body=b""`` to drop the raw bytes."""
    if raw_body is None and body is not None:
        raw_body = json.dumps(body).encode()
    return WebhookEnvelope(
        headers=headers or {},
        raw_body=raw_body or None,
        parsed_body=body,
    )


def make_signed_envelope(
    body: dict[str, Any],
    secret: str = WEBHOOK_SECRET,
    header: str = "x-deliverect-signature",
) -> WebhookEnvelope:
    raw = json.dumps(body).encode()
    return make_envelope(body, headers={header: sign(raw, secret)}, raw_body=raw)


def make_page(
    items: list[dict[str, Any]],
    *,
    page: int | None = None,
    cursor: str | None = None,
    total: int | None = None,
    max_results: int | None = None,
) -> list[dict[str, Any]]:
    """Factory for a meta-wrapped page as returned by list endpoints."""
    meta: dict[str, Any] = {}
    if page is not None:
        meta["page"] = page
    if cursor is not None:
        meta["cursor"] = cursor
    if total is not None:
        meta["total"] = total
    if max_results is not None:
        meta["max_results"] = max_results
    return [{"_items": items, "_meta": meta}]


def make_products(count: int, start: int = 0) -> list[dict[str, Any]]:
    return [{"_id": f"p{i}", "plu": f"PLU-{i}"} for i in range(start, start + count)]
