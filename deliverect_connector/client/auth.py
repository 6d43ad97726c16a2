"""OAuth2 client-credentials exchange for Deliverect machine-to-machine access."""

from __future__ import annotations

import logging

import httpx

from deliverect_connector.errors import CredentialsError, UpstreamRequestFailed
from deliverect_connector.models import DeliverectCredentials

logger = logging.getLogger(__name__)


class TokenProvider:
    """Fetches and caches a bearer token for one set of credentials."""

    def __init__(self, credentials: DeliverectCredentials, http_client: httpx.Client) -> None:
        self._credentials = credentials
        self._http = http_client
        self._token: str | None = None

    def get_token(self) -> str:
        if self._token is None:
            self._token = self._exchange()
        return self._token

    def invalidate(self) -> None:
        self._token = None

    def _exchange(self) -> str:
        creds = self._credentials
        client_secret = creds.client_secret.get_secret_value()
        if not creds.client_id or not client_secret:
            raise CredentialsError("Client ID and Client Secret are required to obtain a token")

        try:
            resp = self._http.post(
                creds.token_url,
                json={
                    "client_id": creds.client_id,
                    "client_secret": client_secret,
                    "audience": creds.audience,
                    "grant_type": "client_credentials",
                },
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise UpstreamRequestFailed(f"Token request failed: {exc}") from exc

        if resp.status_code >= 400:
            raise UpstreamRequestFailed(
                f"Token request rejected with status {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            token = resp.json().get("access_token")
        except ValueError:
            token = None
        if not token:
            raise UpstreamRequestFailed(
                "Token response did not contain an access_token",
                status_code=resp.status_code,
            )
        logger.info("Obtained Deliverect access token for %s", creds.domain)
        return str(token)
