from deliverect_connector.client.auth import TokenProvider
from deliverect_connector.client.client import DeliverectClient

__all__ = ["DeliverectClient", "TokenProvider"]
