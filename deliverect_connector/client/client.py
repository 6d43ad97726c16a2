"""Synchronous REST client for the Deliverect API."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx

from deliverect_connector.catalog.operations import get_operation
from deliverect_connector.catalog.render import render_request
from deliverect_connector.client.auth import TokenProvider
from deliverect_connector.errors import UpstreamRequestFailed
from deliverect_connector.models import DeliverectCredentials
from deliverect_connector.pagination.aggregator import PageRequestTemplate, aggregate

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30.0

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def _timeout_from_env() -> float:
    return float(os.environ.get("DELIVERECT_HTTP_TIMEOUT", str(_DEFAULT_TIMEOUT)))


class DeliverectClient:
    """Executes catalog operations against ``https://{domain}``.

    Every call to ``request`` is exactly one HTTP round trip; paginated
    operations hand ``request`` to ``aggregate`` as the page fetch.
    """

    def __init__(
        self,
        credentials: DeliverectCredentials,
        http_client: httpx.Client | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self._credentials = credentials
        self._owns_http = http_client is None
        self._http = http_client or httpx.Client(timeout=_timeout_from_env())
        self._tokens = token_provider or TokenProvider(credentials, self._http)

    def __enter__(self) -> DeliverectClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def request(self, template: PageRequestTemplate) -> list[dict[str, Any]]:
        """Send one request and return its JSON payload as a list of records."""
        url = f"{self._credentials.base_url}{template.url}"
        headers = {
            **_DEFAULT_HEADERS,
            **template.headers,
            "Authorization": f"Bearer {self._tokens.get_token()}",
        }
        try:
            resp = self._http.request(
                template.method,
                url,
                params=_query_params(template.query),
                json=template.body,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise UpstreamRequestFailed(
                f"{template.method} {template.url} failed: {exc}",
            ) from exc

        if resp.status_code >= 400:
            raise UpstreamRequestFailed(
                f"{template.method} {template.url} returned status {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )
        return _records(resp)

    def execute(
        self, resource: str, operation: str, params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        spec = get_operation(resource, operation)
        template = render_request(spec, params or {})
        logger.info("Executing %s.%s", resource, operation)
        if spec.paginated:
            return aggregate(template, self.request)
        return self.request(template)

    def test_credentials(self) -> list[dict[str, Any]]:
        return self.request(PageRequestTemplate(method="GET", url="/accounts"))


def _query_params(query: Mapping[str, Any]) -> dict[str, str]:
    # httpx renders bools as "True"/"False"; the API expects JSON literals
    params: dict[str, str] = {}
    for key, value in query.items():
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def _records(resp: httpx.Response) -> list[dict[str, Any]]:
    if not resp.content.strip():
        return []
    try:
        payload = resp.json()
    except ValueError as exc:
        raise UpstreamRequestFailed(
            "Response body is not valid JSON",
            status_code=resp.status_code,
            body=resp.text,
        ) from exc
    if isinstance(payload, list):
        return payload
    if payload is None:
        return []
    return [payload]
