"""FastAPI receiver for Deliverect order webhooks."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from deliverect_connector.errors import (
    InvalidJsonPayload,
    InvalidSignatureError,
    MissingSecretConfigError,
    MissingSignatureError,
    NoDataError,
    RawBodyUnavailableError,
    WebhookVerificationError,
)
from deliverect_connector.models import DeliverectCredentials
from deliverect_connector.webhook.models import WebhookEnvelope
from deliverect_connector.webhook.verifier import coerce_flag, handle, parse_body

logger = logging.getLogger(__name__)

DEFAULT_WEBHOOK_PATH = "deliverect-order"

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    NoDataError: 400,
    RawBodyUnavailableError: 400,
    InvalidJsonPayload: 400,
    MissingSignatureError: 401,
    InvalidSignatureError: 401,
    MissingSecretConfigError: 500,
}


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    credentials = DeliverectCredentials.from_env()
    path = os.environ.get("DELIVERECT_WEBHOOK_PATH", DEFAULT_WEBHOOK_PATH)
    verify = coerce_flag(os.environ.get("DELIVERECT_VERIFY_SIGNATURE", "true"))
    return create_app(credentials, path=path, verify_signature=verify)


def create_app(
    credentials: DeliverectCredentials,
    path: str = DEFAULT_WEBHOOK_PATH,
    verify_signature: bool = True,
) -> FastAPI:
    """Create the webhook receiver app listening on ``POST /{path}``."""
    app = FastAPI(docs_url=None, redoc_url=None)
    route = "/" + path.strip("/")

    def _secret() -> str:
        return credentials.webhook_secret.get_secret_value()

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(route)
    async def receive(request: Request) -> JSONResponse:
        source_ip = request.client.host if request.client else None
        raw_body = await request.body()

        try:
            parsed = parse_body(raw_body)
            envelope = WebhookEnvelope(
                headers=request.headers,
                raw_body=raw_body,
                parsed_body=parsed,
            )
            event = handle(envelope, _secret, verify=verify_signature)
        except (WebhookVerificationError, InvalidJsonPayload) as exc:
            status_code = _STATUS_BY_ERROR.get(type(exc), 400)
            logger.warning(
                "Rejected POST %s from %s: %s (%d)", route, source_ip, exc.kind, status_code,
            )
            return JSONResponse(
                {"error": exc.kind, "message": str(exc)},
                status_code=status_code,
            )

        logger.info("Accepted POST %s from %s: %s", route, source_ip, event["_eventType"])
        return JSONResponse(event)

    return app

