"""Shared Pydantic data models for deliverect-connector."""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

# --- Enums ---


class EventType(str, Enum):
    NEW_ORDER = "newOrder"
    STATUS_UPDATE = "statusUpdate"
    COURIER_UPDATE = "courierUpdate"
    UNKNOWN = "unknown"


# --- Credential Models ---

DEFAULT_DOMAIN = "api.deliverect.com"

KNOWN_DOMAINS: dict[str, str] = {
    "api.deliverect.com": "Resto Production",
    "api.staging.deliverect.com": "Resto Staging",
    "api.deliverect.io": "Retail Production",
    "api.staging.deliverect.io": "Retail Staging",
}


class DeliverectCredentials(BaseModel):
    """Machine-to-machine credentials plus the shared webhook secret.

    ``client_secret`` and ``webhook_secret`` are ``SecretStr`` so they never
    show up in reprs, logs or serialized dumps.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    domain: str = DEFAULT_DOMAIN
    webhook_secret: SecretStr = SecretStr("")

    @field_validator("domain")
    @classmethod
    def _known_domain(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in KNOWN_DOMAINS:
            raise ValueError(
                f"Unknown Deliverect domain '{value}'; expected one of {sorted(KNOWN_DOMAINS)}"
            )
        return value

    @classmethod
    def from_env(cls) -> DeliverectCredentials:
        """Build credentials from DELIVERECT_* environment variables."""
        return cls(
            client_id=os.environ.get("DELIVERECT_CLIENT_ID", ""),
            client_secret=SecretStr(os.environ.get("DELIVERECT_CLIENT_SECRET", "")),
            domain=os.environ.get("DELIVERECT_DOMAIN", DEFAULT_DOMAIN),
            webhook_secret=SecretStr(os.environ.get("DELIVERECT_WEBHOOK_SECRET", "")),
        )

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"

    @property
    def token_url(self) -> str:
        return f"https://{self.domain}/oauth/token"

    @property
    def audience(self) -> str:
        return f"https://{self.domain}/api/v2/"

