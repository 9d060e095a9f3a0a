"""Route tests for the admin panel using FastAPI's TestClient."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from product_admin.domain.errors import TransportFault
from product_admin.domain.product import (
    PriceUpdateResult,
    ProductCreateResult,
    ProductListItem,
    UserError,
)
from product_admin.entrypoints.app import create_app, get_gateway
from product_admin.entrypoints.settings import Config
from product_admin.infrastructure.product_gateway import ShopifyProductGateway
from product_admin.infrastructure.shopify_client import ShopifyGraphQLClient


def _config(**overrides) -> Config:
    values = dict(SHOPIFY_SHOP_NAME="test-shop", SHOPIFY_ACCESS_TOKEN="shpat_test")
    values.update(overrides)
    return Config(_env_file=None, **values)


def _gateway() -> MagicMock:
    gateway = MagicMock(spec=ShopifyProductGateway)
    gateway.create_product = AsyncMock(
        return_value=ProductCreateResult(
            product_id="gid://1", variant_ids=["gid://1/v1"], inventory_item_id="gid://1/i1"
        )
    )
    gateway.update_price = AsyncMock(return_value=PriceUpdateResult(variant_ids=["gid://1/v1"]))
    gateway.list_products = AsyncMock(
        return_value=[
            ProductListItem(
                id="gid://1",
                title="Boot",
                handle="boot",
                description="A sturdy waterproof leather boot",
                price_amount=Decimal("19.5"),
                currency_code="USD",
                status="ACTIVE",
                total_inventory=3,
            )
        ]
    )
    gateway.set_inventory = AsyncMock(return_value=[])
    gateway.flag_for_review = AsyncMock(return_value=[])
    return gateway


@pytest.fixture
def gateway() -> MagicMock:
    return _gateway()


@pytest.fixture
def client(gateway: MagicMock) -> TestClient:
    app = create_app(_config())
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


def test_index_redirects_to_products(client: TestClient) -> None:
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/app/products"


def test_products_page_renders_table(client: TestClient, gateway: MagicMock) -> None:
    response = client.get("/app/products")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Boot" in response.text
    assert "$19.50" in response.text
    assert "A sturdy waterproof " in response.text
    gateway.list_products.assert_awaited_once_with(50)


def test_products_page_shows_error_on_fault(client: TestClient, gateway: MagicMock) -> None:
    gateway.list_products.side_effect = TransportFault("down")

    response = client.get("/app/products")

    assert response.status_code == 200
    assert "Failed to fetch products" in response.text


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


def test_new_product_form_renders(client: TestClient) -> None:
    response = client.get("/app/products/new")

    assert response.status_code == 200
    assert 'name="title"' in response.text
    assert '<option value="DRAFT" selected>' in response.text


def test_create_success_redirects(client: TestClient, gateway: MagicMock) -> None:
    response = client.post(
        "/app/products/new",
        data={"title": "Boot", "price": "49.99", "status": "ACTIVE"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/app/products"
    request = gateway.update_price.call_args[0][0]
    assert request.product_id == "gid://1"
    assert request.variant_id == "gid://1/v1"
    assert request.price == Decimal("49.99")


def test_create_validation_failure_rerenders_form(client: TestClient, gateway: MagicMock) -> None:
    response = client.post(
        "/app/products/new",
        data={"title": "", "price": "10", "vendor": "Acme"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "title: Title is required" in response.text
    assert 'value="Acme"' in response.text
    gateway.create_product.assert_not_awaited()


def test_create_user_errors_rerender_with_values(client: TestClient, gateway: MagicMock) -> None:
    gateway.create_product.return_value = ProductCreateResult(
        user_errors=[UserError(field="handle", message="Handle has already been taken")]
    )

    response = client.post(
        "/app/products/new",
        data={"title": "Boot", "price": "49.99"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "handle: Handle has already been taken" in response.text
    assert 'value="Boot"' in response.text
    gateway.update_price.assert_not_awaited()


def test_create_fault_shows_generic_message(client: TestClient, gateway: MagicMock) -> None:
    gateway.create_product.side_effect = TransportFault("connection reset")

    response = client.post(
        "/app/products/new",
        data={"title": "Boot", "price": "49.99"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "Failed to create product" in response.text
    assert "connection reset" not in response.text


def test_create_with_malformed_response_shows_generic_message() -> None:
    client = MagicMock(spec=ShopifyGraphQLClient)
    client.execute = AsyncMock(
        return_value={
            "data": {
                "productCreate": {
                    "userErrors": [],
                    "product": {"id": "gid://1", "variants": {"nodes": [None]}},
                }
            }
        }
    )
    app = create_app(_config())
    app.dependency_overrides[get_gateway] = lambda: ShopifyProductGateway(client)

    response = TestClient(app).post(
        "/app/products/new", data={"title": "Boot", "price": "49.99"}, follow_redirects=False
    )

    assert response.status_code == 200
    assert "Failed to create product" in response.text
    assert client.execute.await_count == 1


def test_create_sets_inventory_at_configured_location(gateway: MagicMock) -> None:
    app = create_app(_config(SHOPIFY_LOCATION_ID="gid://shopify/Location/1"))
    app.dependency_overrides[get_gateway] = lambda: gateway

    response = TestClient(app).post(
        "/app/products/new",
        data={"title": "Boot", "price": "1e2", "inventory": "12"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    request = gateway.set_inventory.call_args[0][0]
    assert request.location_id == "gid://shopify/Location/1"
    assert request.quantity == 12


def test_create_with_inventory_but_no_location_rerenders(
    client: TestClient, gateway: MagicMock
) -> None:
    response = client.post(
        "/app/products/new",
        data={"title": "Boot", "price": "49.99", "inventory": "12"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "no stock location is configured" in response.text
    assert 'value="12"' in response.text
    gateway.create_product.assert_not_awaited()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def test_missing_access_token_is_denied() -> None:
    app = create_app(_config(SHOPIFY_ACCESS_TOKEN=""))
    client = TestClient(app)

    response = client.get("/app/products")

    assert response.status_code == 403
    assert "Access denied" in response.text


def test_admin_key_is_required_when_configured() -> None:
    app = create_app(_config(ADMIN_API_KEY="s3cret"))
    client = TestClient(app)

    assert client.get("/app/products/new").status_code == 403
    assert client.get("/app/products/new", headers={"X-Admin-Api-Key": "wrong"}).status_code == 403
    assert client.get("/app/products/new", headers={"X-Admin-Api-Key": "s3cret"}).status_code == 200
