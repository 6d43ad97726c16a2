"""Deliverect API integration: catalog, REST client, pagination and webhook receiver."""

from deliverect_connector.client.client import DeliverectClient
from deliverect_connector.models import DeliverectCredentials, EventType
from deliverect_connector.pagination.aggregator import PageRequestTemplate, aggregate
from deliverect_connector.webhook.models import WebhookEnvelope
from deliverect_connector.webhook.verifier import handle

__all__ = [
    "DeliverectClient",
    "DeliverectCredentials",
    "EventType",
    "PageRequestTemplate",
    "WebhookEnvelope",
    "aggregate",
    "handle",
]
