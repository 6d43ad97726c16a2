"""Operation catalog for the Deliverect Store, POS, Channel, Commerce, Account and User APIs."""

from __future__ import annotations

from deliverect_connector.catalog.models import OperationSpec, PayloadField, QueryFlag
from deliverect_connector.errors import UnknownOperationError

RESOURCES: dict[str, str] = {
    "accountAPI": "Account API",
    "channelAPI": "Channel API",
    "commerceAPI": "Commerce API",
    "posAPI": "POS API",
    "storeAPI": "Store API",
    "userAPI": "User API",
}

_STORE = [
    OperationSpec(
        resource="storeAPI",
        value="getOutOfStock",
        name="Get Out-Of-Stock Products",
        action="Get out of stock products",
        description="Get out-of-stock products for a location",
        method="GET",
        path="/channelDisabledProducts",
        required=("location",),
        where={"location": "location"},
        projection={
            "_id": 1, "location": 1, "channelLink": 1, "plus": 1,
            "channel": 1, "disabledUntil": 1, "createdAt": 1, "updatedAt": 1,
        },
    ),
    OperationSpec(
        resource="storeAPI",
        value="getProductsForAccount",
        name="Get Products for Account",
        action="Get products for account",
        description="Retrieve products for an entire account or a single location",
        method="GET",
        path="/products",
        required=("account",),
        where={"account": "account", "location": "locationId"},
        projection={
            "_id": 1, "account": 1, "location": 1, "name": 1,
            "plu": 1, "channelLinks": 1, "tags": 1, "updatedAt": 1,
        },
        paginated=True,
    ),
    OperationSpec(
        resource="storeAPI",
        value="getStoreHolidays",
        name="Get Store Holidays",
        action="Get store holidays",
        method="GET",
        path="/location/{location}/holidays",
        required=("location",),
    ),
    OperationSpec(
        resource="storeAPI",
        value="getStoreOpeningHours",
        name="Get Store Opening Hours",
        action="Get store opening hours",
        method="GET",
        path="/account/{account}/openingHours",
        required=("account",),
        projection={"account": 1, "location": 1, "timezone": 1, "days": 1, "openingHours": 1},
    ),
    OperationSpec(
        resource="storeAPI",
        value="getStores",
        name="Get Stores",
        action="Get stores",
        description="Get stores for an account",
        method="GET",
        path="/locations",
        required=("account",),
        where={"account": "account"},
        projection={
            "_id": 1, "account": 1, "name": 1, "posLocationId": 1,
            "channelLinks": 1, "timezone": 1, "isActive": 1, "updatedAt": 1,
        },
    ),
    OperationSpec(
        resource="storeAPI",
        value="setOutOfStock",
        name="Set Out-Of-Stock Products",
        action="Set out of stock products",
        description="Set out-of-stock products for a location",
        method="POST",
        path="/products/snoozeByPlus",
        required=("account", "location", "products", "snoozeStart", "snoozeEnd"),
        body=(
            PayloadField(key="account", param="account"),
            PayloadField(key="location", param="location"),
            PayloadField(key="plus", param="products", label="Product PLUs", shape="array"),
            PayloadField(key="snoozeStart", param="snoozeStart"),
            PayloadField(key="snoozeEnd", param="snoozeEnd"),
        ),
    ),
    OperationSpec(
        resource="storeAPI",
        value="setStoreHolidays",
        name="Set Store Holidays",
        action="Set store holidays",
        method="POST",
        path="/locations/holidays",
        required=("holidays",),
        body=(PayloadField(param="holidays", label="Holidays"),),
    ),
    OperationSpec(
        resource="storeAPI",
        value="setStoreOpeningHours",
        name="Set Store Opening Hours",
        action="Set store opening hours",
        method="POST",
        path="/locations/openingHours",
        required=("openingHours",),
        body=(PayloadField(param="openingHours", label="Opening Hours"),),
    ),
    OperationSpec(
        resource="storeAPI",
        value="setStoreStatus",
        name="Set Store Status",
        action="Set store status",
        description="Set store status for a location",
        method="POST",
        path="/updateStoreStatus/{location}",
        required=("location", "isActive"),
        body=(
            PayloadField(key="isActive", param="isActive"),
            PayloadField(
                key="channelLinks", param="channelLinks", label="Channel Links",
                shape="array", optional=True,
            ),
            PayloadField(key="prepTime", param="prepTime", optional=True),
            PayloadField(key="disableAt", param="disableAt", optional=True),
        ),
    ),
]

_POS = [
    OperationSpec(
        resource="posAPI",
        value="getAllAllergens",
        name="Get All Allergens",
        action="Get all allergens",
        description="Retrieve all allergens from POSAPI",
        method="GET",
        path="/allAllergens",
        projection={"_id": 1, "name": 1, "tags": 1, "updatedAt": 1},
    ),
    OperationSpec(
        resource="posAPI",
        value="getProductCategories",
        name="Get Product Categories",
        action="Get product categories",
        description="Retrieve product categories for a specific account from POSAPI",
        method="GET",
        path="/productCategories",
        required=("account",),
        where={"account": "account"},
        projection={
            "_id": 1, "name": 1, "parent": 1, "account": 1,
            "products": {"_id": 1, "name": 1},
        },
    ),
    OperationSpec(
        resource="posAPI",
        value="insertUpdateProducts",
        name="Insert/Update Products",
        action="Insert update products",
        description=(
            "Create, update, or delete products and categories for a location. Products not "
            "included in the payload will be deleted unless forceUpdate is disabled."
        ),
        method="POST",
        path="/productAndCategories",
        required=("productsPayload",),
        query_flags=(
            QueryFlag(key="previewSync", param="previewSync", mode="true_if_set"),
            QueryFlag(key="forceUpdate", param="forceUpdate", mode="false_if_false"),
        ),
        body=(
            PayloadField(
                param="productsPayload", label="Products", shape="object",
                required_keys=("accountId", "locationId"),
            ),
        ),
    ),
    OperationSpec(
        resource="posAPI",
        value="productSync",
        name="Request Product Sync",
        action="Request product sync",
        description="Trigger Deliverect to sync products for a POS on a specific location",
        method="POST",
        path="/v2/locations/{location}/syncProducts",
        required=("location",),
    ),
]

_CHANNEL = [
    OperationSpec(
        resource="channelAPI",
        value="createOrder",
        name="Create Order",
        action="Create order",
        description="Create an order to a store",
        method="POST",
        path="/deliverect/order/{channelLink}",
        required=("channelLink", "orderData"),
        body=(PayloadField(param="orderData", label="Order Data", shape="object"),),
    ),
]

_COMMERCE = [
    OperationSpec(
        resource="commerceAPI",
        value="checkoutBasket",
        name="Checkout Basket",
        action="Checkout basket",
        description="Perform checkout for a basket",
        method="POST",
        path="/commerce/baskets/{basketId}/checkout",
        required=("basketId",),
        body=(PayloadField(param="checkoutPayload", label="Checkout", optional=True),),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="createBasket",
        name="Create Basket",
        action="Create basket",
        description="Create a new commerce basket",
        method="POST",
        path="/commerce/baskets",
        body=(PayloadField(param="basketPayload", label="Basket", optional=True),),
        internal=True,
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getBasket",
        name="Get Basket",
        action="Get basket",
        description="Retrieve an existing basket",
        method="GET",
        path="/commerce/baskets/{basketId}",
        required=("basketId",),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getCheckout",
        name="Get Checkout",
        action="Get checkout",
        description="Retrieve an existing checkout by ID",
        method="GET",
        path="/commerce/checkouts/{checkoutId}",
        required=("checkoutId",),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getCommerceStore",
        name="Get Commerce Store",
        action="Get commerce store",
        description="Retrieve a single commerce store by ID",
        method="GET",
        path="/commerce/stores/{storeId}",
        required=("storeId",),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getCommerceStores",
        name="Get Commerce Stores",
        action="Get commerce stores",
        description="List stores available through the Commerce API",
        method="GET",
        path="/commerce/stores",
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getRootMenus",
        name="Get Root Menus",
        action="Get root menus",
        description="List root menus for a commerce store",
        method="GET",
        path="/commerce/stores/{storeId}/rootMenus",
        required=("storeId",),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="getStoreMenus",
        name="Get Store Menus",
        action="Get store menus",
        description="List store menus (including nested menus) for a commerce store",
        method="GET",
        path="/commerce/stores/{storeId}/menus",
        required=("storeId",),
        query_flags=(QueryFlag(key="depth", param="menuDepth", mode="value_if_set"),),
    ),
    OperationSpec(
        resource="commerceAPI",
        value="patchBasket",
        name="Patch Basket",
        action="Patch basket",
        description="Update an existing basket",
        method="PATCH",
        path="/commerce/baskets/{basketId}",
        required=("basketId",),
        body=(PayloadField(param="basketPatchPayload", label="Basket Patch", optional=True),),
    ),
]

_ACCOUNT = [
    OperationSpec(
        resource="accountAPI",
        value="getAccount",
        name="Get Account",
        action="Get account",
        description="Retrieve a single account by ID",
        method="GET",
        path="/accounts/{account}",
        required=("account",),
    ),
]

_USER = [
    OperationSpec(
        resource="userAPI",
        value="getOwnAccount",
        name="Get My Account",
        action="Get my account",
        description="Retrieve the account associated with the authenticated API user",
        method="GET",
        path="/users/validate",
    ),
]

CATALOG: tuple[OperationSpec, ...] = (
    *_STORE, *_POS, *_CHANNEL, *_COMMERCE, *_ACCOUNT, *_USER,
)

_INDEX: dict[tuple[str, str], OperationSpec] = {
    (spec.resource, spec.value): spec for spec in CATALOG
}


def get_operation(resource: str, operation: str) -> OperationSpec:
    try:
        return _INDEX[(resource, operation)]
    except KeyError:
        raise UnknownOperationError(resource, operation) from None


def list_operations(resource: str | None = None) -> list[OperationSpec]:
    """Catalog entries sorted by resource then operation name."""
    specs = [s for s in CATALOG if resource is None or s.resource == resource]
    return sorted(specs, key=lambda s: (s.resource, s.name))
