"""Tests for the operation catalog and request rendering."""

from __future__ import annotations

import json

import pytest

from deliverect_connector.catalog.models import INTERNAL_DESCRIPTION_NOTE
from deliverect_connector.catalog.operations import (
    CATALOG,
    RESOURCES,
    get_operation,
    list_operations,
)
from deliverect_connector.catalog.render import parse_json_param, render_request
from deliverect_connector.errors import (
    InvalidJsonPayload,
    MissingParameterError,
    UnknownOperationError,
)


class TestCatalog:
    def test_operations_are_unique_per_resource(self) -> None:
        keys = [(s.resource, s.value) for s in CATALOG]
        assert len(keys) == len(set(keys))

    def test_every_operation_belongs_to_known_resource(self) -> None:
        assert {s.resource for s in CATALOG} <= set(RESOURCES)

    def test_only_product_listing_is_paginated(self) -> None:
        paginated = [(s.resource, s.value) for s in CATALOG if s.paginated]
        assert paginated == [("storeAPI", "getProductsForAccount")]

    def test_unknown_operation_raises(self) -> None:
        with pytest.raises(UnknownOperationError, match="storeAPI.nope"):
            get_operation("storeAPI", "nope")

    def test_list_operations_filters_by_resource(self) -> None:
        specs = list_operations("commerceAPI")
        assert specs
        assert all(s.resource == "commerceAPI" for s in specs)

    def test_internal_operation_is_labelled(self) -> None:
        spec = get_operation("commerceAPI", "createBasket")
        assert spec.display_name == "Create Basket (Internal)"
        assert spec.display_action == "Create basket (Internal)"
        assert spec.display_description.endswith(INTERNAL_DESCRIPTION_NOTE)

    def test_public_operation_keeps_labels(self) -> None:
        spec = get_operation("commerceAPI", "getBasket")
        assert spec.display_name == "Get Basket"
        assert INTERNAL_DESCRIPTION_NOTE not in spec.display_description

    def test_summary_is_json_serializable(self) -> None:
        summary = get_operation("storeAPI", "getStores").summary()
        assert json.loads(json.dumps(summary))["method"] == "GET"


class TestRenderQuery:
    def test_where_filter_and_projection(self) -> None:
        request = render_request(get_operation("storeAPI", "getStores"), {"account": "acc1"})
        assert request.method == "GET"
        assert request.url == "/locations"
        assert request.query["where"] == '{"account":"acc1"}'
        assert json.loads(request.query["projection"])["posLocationId"] == 1
        assert request.body is None

    def test_fetch_full_payload_drops_projection(self) -> None:
        request = render_request(
            get_operation("storeAPI", "getStores"),
            {"account": "acc1", "fetchFullPayload": True},
        )
        assert "projection" not in request.query

    def test_optional_where_key_omitted_when_blank(self) -> None:
        spec = get_operation("storeAPI", "getProductsForAccount")
        request = render_request(spec, {"account": "acc1", "locationId": ""})
        assert json.loads(request.query["where"]) == {"account": "acc1"}

    def test_optional_where_key_included_when_set(self) -> None:
        spec = get_operation("storeAPI", "getProductsForAccount")
        request = render_request(spec, {"account": "acc1", "locationId": "loc9"})
        assert json.loads(request.query["where"]) == {"account": "acc1", "location": "loc9"}

    def test_preview_and_force_update_flags(self) -> None:
        spec = get_operation("posAPI", "insertUpdateProducts")
        payload = {"accountId": "a", "locationId": "l", "products": []}
        request = render_request(
            spec, {"productsPayload": payload, "previewSync": True, "forceUpdate": False},
        )
        assert request.query == {"previewSync": True, "forceUpdate": False}

    def test_flags_omitted_by_default(self) -> None:
        spec = get_operation("posAPI", "insertUpdateProducts")
        payload = {"accountId": "a", "locationId": "l", "products": []}
        request = render_request(spec, {"productsPayload": payload, "forceUpdate": True})
        assert request.query == {}

    def test_menu_depth_only_when_set(self) -> None:
        spec = get_operation("commerceAPI", "getStoreMenus")
        assert render_request(spec, {"storeId": "s1", "menuDepth": 0}).query == {}
        assert render_request(spec, {"storeId": "s1", "menuDepth": 2}).query == {"depth": 2}


class TestRenderPath:
    def test_path_placeholder_substituted(self) -> None:
        request = render_request(get_operation("storeAPI", "getStoreHolidays"), {"location": "L1"})
        assert request.url == "/location/L1/holidays"

    def test_path_values_are_quoted(self) -> None:
        request = render_request(get_operation("commerceAPI", "getBasket"), {"basketId": "a/b c"})
        assert request.url == "/commerce/baskets/a%2Fb%20c"

    def test_missing_required_parameter(self) -> None:
        with pytest.raises(MissingParameterError, match="location"):
            render_request(get_operation("storeAPI", "getStoreHolidays"), {})

    def test_blank_required_parameter(self) -> None:
        with pytest.raises(MissingParameterError):
            render_request(get_operation("storeAPI", "getStores"), {"account": "  "})


class TestRenderBody:
    def test_out_of_stock_body_parses_plu_array(self) -> None:
        request = render_request(
            get_operation("storeAPI", "setOutOfStock"),
            {
                "account": "acc1",
                "location": "loc1",
                "products": '["PLU123", "PLU456"]',
                "snoozeStart": "2025-01-01T00:00:00Z",
                "snoozeEnd": "2025-01-02T00:00:00Z",
            },
        )
        assert request.url == "/products/snoozeByPlus"
        assert request.body == {
            "account": "acc1",
            "location": "loc1",
            "plus": ["PLU123", "PLU456"],
            "snoozeStart": "2025-01-01T00:00:00Z",
            "snoozeEnd": "2025-01-02T00:00:00Z",
        }

    def test_malformed_json_names_field(self) -> None:
        with pytest.raises(InvalidJsonPayload) as exc_info:
            render_request(
                get_operation("storeAPI", "setOutOfStock"),
                {
                    "account": "a", "location": "l", "products": "[PLU123",
                    "snoozeStart": "s", "snoozeEnd": "e",
                },
            )
        assert exc_info.value.field == "Product PLUs"
        assert str(exc_info.value).startswith("Invalid JSON provided for Product PLUs payload:")

    def test_non_array_plus_rejected(self) -> None:
        with pytest.raises(InvalidJsonPayload, match="Product PLUs payload must be an array"):
            render_request(
                get_operation("storeAPI", "setOutOfStock"),
                {
                    "account": "a", "location": "l", "products": '{"plu": "x"}',
                    "snoozeStart": "s", "snoozeEnd": "e",
                },
            )

    def test_store_status_drops_empty_optionals(self) -> None:
        request = render_request(
            get_operation("storeAPI", "setStoreStatus"),
            {"location": "loc1", "isActive": False, "channelLinks": "[]", "disableAt": ""},
        )
        assert request.url == "/updateStoreStatus/loc1"
        assert request.body == {"isActive": False}

    def test_store_status_keeps_channel_links_and_prep_time(self) -> None:
        request = render_request(
            get_operation("storeAPI", "setStoreStatus"),
            {
                "location": "loc1", "isActive": True, "channelLinks": '["c1"]',
                "prepTime": 0, "disableAt": "2025-01-01T10:00:00Z",
            },
        )
        assert request.body == {
            "isActive": True,
            "channelLinks": ["c1"],
            "prepTime": 0,
            "disableAt": "2025-01-01T10:00:00Z",
        }

    def test_whole_body_payload(self) -> None:
        holidays = {"locations": [{"id": "L1", "holidays": []}]}
        request = render_request(
            get_operation("storeAPI", "setStoreHolidays"), {"holidays": json.dumps(holidays)},
        )
        assert request.body == holidays

    def test_products_payload_requires_ids(self) -> None:
        with pytest.raises(InvalidJsonPayload, match="must include accountId and locationId"):
            render_request(
                get_operation("posAPI", "insertUpdateProducts"),
                {"productsPayload": {"accountId": "a", "products": []}},
            )

    def test_products_payload_must_be_object(self) -> None:
        with pytest.raises(InvalidJsonPayload, match="must be a JSON object containing"):
            render_request(get_operation("posAPI", "insertUpdateProducts"), {"productsPayload": "[]"})

    def test_optional_body_omitted(self) -> None:
        request = render_request(get_operation("commerceAPI", "createBasket"), {})
        assert request.method == "POST"
        assert request.body is None

    def test_create_order_body(self) -> None:
        order = {"posLocationId": "12345", "items": [{"plu": "1001", "quantity": 2, "price": 999}]}
        request = render_request(
            get_operation("channelAPI", "createOrder"),
            {"channelLink": "cl1", "orderData": json.dumps(order)},
        )
        assert request.url == "/deliverect/order/cl1"
        assert request.body == order


def test_parse_json_param_passes_decoded_values() -> None:
    value = {"a": 1}
    assert parse_json_param(value, "X") is value
    assert parse_json_param("[1, 2]", "X") == [1, 2]
