from deliverect_connector.webhook.models import SIGNATURE_HEADER, WebhookEnvelope
from deliverect_connector.webhook.verifier import (
    classify,
    coerce_flag,
    compute_signature,
    handle,
    parse_body,
    verify_signature,
)

__all__ = [
    "SIGNATURE_HEADER",
    "WebhookEnvelope",
    "classify",
    "coerce_flag",
    "compute_signature",
    "handle",
    "parse_body",
    "verify_signature",
]
