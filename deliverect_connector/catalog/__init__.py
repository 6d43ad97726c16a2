from deliverect_connector.catalog.models import OperationSpec, PayloadField, QueryFlag
from deliverect_connector.catalog.operations import (
    CATALOG,
    RESOURCES,
    get_operation,
    list_operations,
)
from deliverect_connector.catalog.render import parse_json_param, render_request

__all__ = [
    "CATALOG",
    "RESOURCES",
    "OperationSpec",
    "PayloadField",
    "QueryFlag",
    "get_operation",
    "list_operations",
    "parse_json_param",
    "render_request",
]
