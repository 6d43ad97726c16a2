"""Error taxonomy for the Deliverect connector.

Every failure surfaces as a subclass of ``DeliverectError`` carrying a stable
``kind`` string so hosts can branch on it without parsing messages.
"""

from __future__ import annotations


class DeliverectError(Exception):
    """Base class for all connector errors."""

    kind = "DeliverectError"


class WebhookVerificationError(DeliverectError):
    """Raised when an inbound webhook delivery is rejected."""

    kind = "WebhookRejected"


class NoDataError(WebhookVerificationError):
    kind = "NoData"

    def __init__(self, message: str = "No data received in webhook request") -> None:
        super().__init__(message)


class MissingSecretConfigError(WebhookVerificationError):
    kind = "MissingSecretConfig"

    def __init__(self) -> None:
        super().__init__(
            "Webhook secret is required for HMAC verification. "
            "Configure it in the Deliverect API credentials."
        )


class MissingSignatureError(WebhookVerificationError):
    kind = "MissingSignature"

    def __init__(self) -> None:
        super().__init__("Missing HMAC signature in webhook request")


class RawBodyUnavailableError(WebhookVerificationError):
    kind = "RawBodyUnavailable"

    def __init__(self) -> None:
        super().__init__(
            "Raw request body not available for HMAC verification. "
            "The transport must preserve the exact request bytes."
        )


class InvalidSignatureError(WebhookVerificationError):
    kind = "InvalidSignature"

    def __init__(self) -> None:
        super().__init__("Invalid HMAC signature - webhook may not be from Deliverect")


class InvalidJsonPayload(DeliverectError):
    """Raised when a user-supplied payload field is not valid JSON (or the wrong shape)."""

    kind = "InvalidJsonPayload"

    def __init__(self, field: str, detail: str, message: str | None = None) -> None:
        self.field = field
        self.detail = detail
        super().__init__(message or f"Invalid JSON provided for {field} payload: {detail}")


class UpstreamRequestFailed(DeliverectError):
    """Raised when the HTTP primitive fails or Deliverect answers with an error status."""

    kind = "UpstreamRequestFailed"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class MissingParameterError(DeliverectError):
    kind = "MissingParameter"

    def __init__(self, operation: str, parameter: str) -> None:
        self.operation = operation
        self.parameter = parameter
        super().__init__(f"Operation '{operation}' requires parameter '{parameter}'")


class UnknownOperationError(DeliverectError):
    kind = "UnknownOperation"

    def __init__(self, resource: str, operation: str) -> None:
        self.resource = resource
        self.operation = operation
        super().__init__(f"Unknown operation: {resource}.{operation}")


class CredentialsError(DeliverectError):
    kind = "CredentialsError"
