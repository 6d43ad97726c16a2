"""Data models for the webhook ingestion pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

SIGNATURE_HEADER = "x-deliverect-signature"
CANONICAL_SIGNATURE_HEADER = "X-Deliverect-Signature"


@dataclass(frozen=True)
class WebhookEnvelope:
    """One inbound delivery as handed over by the transport."""

    headers: Mapping[str, str] = field(default_factory=dict)
    raw_body: bytes | str | None = None
    parsed_body: dict[str, Any] | None = None

    def header(self, name: str) -> str | None:
        """Look up a header without regard to case."""
        value = self.headers.get(name)
        if value is not None:
            return value
        wanted = name.lower()
        for key, candidate in self.headers.items():
            if key.lower() == wanted:
                return candidate
        return None

    @property
    def signature(self) -> str | None:
        return (
            self.headers.get(SIGNATURE_HEADER)
            or self.headers.get(CANONICAL_SIGNATURE_HEADER)
            or self.header(SIGNATURE_HEADER)
        )
