"""Deliverect order webhook verification and classification.

Deliverect signs every delivery with HMAC-SHA256 over the raw request body,
keyed with the webhook secret from the credentials, and sends the hex digest
in ``x-deliverect-signature``. Three payload shapes are delivered to the same
endpoint:

1. New order: full order object with ``_id`` and ``items``
2. Status update: ``orderId``, ``status`` and ``timeStamp``
3. Courier update: ``orderId`` and a ``courier`` object
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import math
import re
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from deliverect_connector.errors import (
    InvalidJsonPayload,
    InvalidSignatureError,
    MissingSecretConfigError,
    MissingSignatureError,
    NoDataError,
    RawBodyUnavailableError,
    WebhookVerificationError,
)
from deliverect_connector.models import EventType
from deliverect_connector.webhook.models import WebhookEnvelope

logger = logging.getLogger(__name__)

SecretProvider = Callable[[], str | None]

_TRUE_FLAGS = frozenset({"true", "1", "yes", "on"})

_HEX_DIGEST = re.compile(r"[0-9a-fA-F]{64}")


def coerce_flag(value: object) -> bool:
    """Interpret a host-supplied on/off setting that may arrive as a string."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_FLAGS
    return bool(value)


def compute_signature(secret: str, raw_body: bytes | str) -> str:
    if isinstance(raw_body, str):
        raw_body = raw_body.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_signature(envelope: WebhookEnvelope, secret: str | None) -> None:
    """Authenticate ``envelope`` against ``secret`` or raise."""
    if not secret:
        raise MissingSecretConfigError()

    signature = envelope.signature
    if not signature:
        raise MissingSignatureError()

    if not envelope.raw_body:
        raise RawBodyUnavailableError()

    supplied = signature.strip()
    if not _HEX_DIGEST.fullmatch(supplied):
        raise InvalidSignatureError()
    expected = compute_signature(secret, envelope.raw_body)
    if not hmac.compare_digest(bytes.fromhex(supplied), bytes.fromhex(expected)):
        raise InvalidSignatureError()


def _present(value: Any) -> bool:
    # JSON truthiness: empty arrays and objects still count as present
    if value is None or value is False or value == "":
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, int | float) and not isinstance(value, bool):
        return value != 0
    return True


def classify(body: dict[str, Any]) -> EventType:
    """Classify a payload by shape; the first matching rule wins."""
    if _present(body.get("_id")) and _present(body.get("items")):
        return EventType.NEW_ORDER
    if _present(body.get("orderId")) and "status" in body and _present(body.get("timeStamp")):
        return EventType.STATUS_UPDATE
    if _present(body.get("orderId")) and _present(body.get("courier")):
        return EventType.COURIER_UPDATE
    return EventType.UNKNOWN


def received_at() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def parse_body(raw_body: bytes | str) -> dict[str, Any] | None:
    """Decode a delivery body as a strict JSON object.

    Blank bodies decode to ``None``. ``NaN``, ``Infinity`` and numbers that
    overflow to infinity raise ``InvalidJsonPayload``; a JSON value that is
    not an object raises ``NoDataError``.
    """
    if not raw_body.strip():
        return None
    try:
        parsed = json.loads(
            raw_body, parse_constant=_reject_constant, parse_float=_finite_float,
        )
    except ValueError as exc:
        raise InvalidJsonPayload("webhook", str(exc)) from exc
    if not isinstance(parsed, dict):
        raise NoDataError("Webhook payload must be a JSON object")
    return parsed


def handle(
    envelope: WebhookEnvelope,
    secret_provider: SecretProvider,
    *,
    verify: bool | str = True,
) -> dict[str, Any]:
    """Verify and classify one delivery.

    Returns the payload merged with ``_eventType`` and ``_receivedAt``.
    Raises a ``WebhookVerificationError`` subclass on every rejection path;
    classification only runs once authentication has passed.
    """
    try:
        body = envelope.parsed_body
        if not body:
            raise NoDataError()
        if coerce_flag(verify):
            verify_signature(envelope, secret_provider())
    except WebhookVerificationError as exc:
        logger.warning("Rejected Deliverect webhook: %s", exc.kind)
        raise

    event_type = classify(body)
    logger.info("Accepted Deliverect webhook: %s", event_type.value)
    return {
        **body,
        "_eventType": event_type.value,
        "_receivedAt": received_at(),
    }
