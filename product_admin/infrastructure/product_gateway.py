from decimal import Decimal

from loguru import logger

from product_admin.domain.errors import IntegrityError
from product_admin.domain.product import (
    InventorySetRequest,
    PriceUpdateRequest,
    PriceUpdateResult,
    ProductCreateResult,
    ProductListItem,
    UserError,
)
from product_admin.infrastructure.shopify_client import ShopifyGraphQLClient

PRODUCT_CREATE_MUTATION = """
  mutation CreateProductWithOptions($product: ProductCreateInput!) {
    productCreate(product: $product) {
      userErrors {
        field
        message
      }
      product {
        id
        options {
          id
          name
          position
          optionValues {
            id
            name
            hasVariants
          }
        }
        variants(first: 5) {
          nodes {
            id
            title
            inventoryItem {
              id
            }
            selectedOptions {
              name
              value
            }
          }
        }
      }
    }
  }
"""

VARIANTS_BULK_UPDATE_MUTATION = """
  mutation UpdateVariantPrice($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
    productVariantsBulkUpdate(productId: $productId, variants: $variants) {
      productVariants {
        id
        price
        compareAtPrice
      }
      userErrors {
        field
        message
      }
    }
  }
"""

PRODUCTS_QUERY = """
  query Products($first: Int!) {
    products(first: $first) {
      edges {
        node {
          id
          title
          handle
          description
          priceRangeV2 {
            minVariantPrice {
              amount
              currencyCode
            }
          }
          images(first: 1) {
            edges {
              node {
                url
                altText
              }
            }
          }
          status
          totalInventory
        }
      }
    }
  }
"""

INVENTORY_SET_MUTATION = """
  mutation SetInventory($input: InventorySetQuantitiesInput!) {
    inventorySetQuantities(input: $input) {
      inventoryAdjustmentGroup {
        reason
        changes {
          name
          delta
        }
      }
      userErrors {
        field
        message
      }
    }
  }
"""

TAGS_ADD_MUTATION = """
  mutation FlagProduct($id: ID!, $tags: [String!]!) {
    tagsAdd(id: $id, tags: $tags) {
      node {
        id
      }
      userErrors {
        field
        message
      }
    }
  }
"""


UNKNOWN_USER_ERROR = "Unknown error"


def _user_errors(raw: list[dict] | None) -> list[UserError]:
    """Normalise Shopify ``userErrors``; ``field`` arrives as a path list."""
    errors: list[UserError] = []
    for err in raw if isinstance(raw, list) else []:
        if not isinstance(err, dict):
            continue
        field = err.get("field")
        if isinstance(field, list):
            field = ".".join(str(part) for part in field) or None
        elif field is not None:
            field = str(field)
        errors.append(
            UserError(field=field, message=str(err.get("message") or UNKNOWN_USER_ERROR))
        )
    return errors


def _nodes(connection: dict | None) -> list[dict]:
    """The object entries of a ``{nodes: [...]}`` connection; anything else is dropped."""
    if not isinstance(connection, dict):
        return []
    nodes = connection.get("nodes")
    return [node for node in nodes if isinstance(node, dict)] if isinstance(nodes, list) else []


def _gid(node: dict | None) -> str | None:
    value = node.get("id") if isinstance(node, dict) else None
    return value if isinstance(value, str) and value else None


def _money(amount: Decimal) -> str:
    """Plain decimal notation; ``str()`` would give ``1E+2`` for ``Decimal("1e2")``."""
    return format(amount, "f")


class ShopifyProductGateway:
    """Reads and writes products through the Shopify Admin GraphQL API."""

    def __init__(self, client: ShopifyGraphQLClient) -> None:
        self._client = client

    async def create_product(self, product_input: dict) -> ProductCreateResult:
        """Issue ``productCreate`` and return the new product and variant ids.

        ``userErrors`` are returned, not raised: they are a user-facing
        condition. A success without a product or without any variant raises
        ``IntegrityError``, as does any other response shape that cannot be
        read.
        """
        body = await self._client.execute(
            PRODUCT_CREATE_MUTATION, {"product": product_input}
        )
        self._log_cost(body)

        data = body.get("data")
        payload = data.get("productCreate") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise IntegrityError("productCreate payload missing from response")

        if user_errors := _user_errors(payload.get("userErrors")):
            logger.info(f"productCreate rejected: {user_errors}")
            return ProductCreateResult(user_errors=user_errors)

        product = payload.get("product")
        product_id = _gid(product)
        if product_id is None:
            raise IntegrityError("productCreate returned no product")

        variants = [node for node in _nodes(product.get("variants")) if _gid(node)]
        if not variants:
            raise IntegrityError(f"expected at least one variant for product {product_id}")

        logger.info(f"Product {product_id} created with {len(variants)} variant(s)")
        return ProductCreateResult(
            product_id=product_id,
            variant_ids=[_gid(node) for node in variants],
            inventory_item_id=_gid(variants[0].get("inventoryItem")),
        )

    async def update_price(self, request: PriceUpdateRequest) -> PriceUpdateResult:
        """Set price (and compare-at price, when given) on a single variant.

        With ``track_inventory`` the variant's inventory item is switched to
        tracked so a later quantity update is shown in the admin.
        """
        variant: dict = {"id": request.variant_id, "price": _money(request.price)}
        if request.compare_at_price is not None:
            variant["compareAtPrice"] = _money(request.compare_at_price)
        if request.track_inventory:
            variant["inventoryItem"] = {"tracked": True}

        body = await self._client.execute(
            VARIANTS_BULK_UPDATE_MUTATION,
            {"productId": request.product_id, "variants": [variant]},
        )
        self._log_cost(body)

        data = body.get("data")
        payload = data.get("productVariantsBulkUpdate") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise IntegrityError("productVariantsBulkUpdate payload missing from response")

        variants = payload.get("productVariants")
        return PriceUpdateResult(
            variant_ids=[
                gid for gid in map(_gid, variants if isinstance(variants, list) else []) if gid
            ],
            user_errors=_user_errors(payload.get("userErrors")),
        )

    async def set_inventory(self, request: InventorySetRequest) -> list[UserError]:
        """Set the ``available`` quantity of one item at one location."""
        body = await self._client.execute(
            INVENTORY_SET_MUTATION,
            {
                "input": {
                    "name": "available",
                    "reason": "correction",
                    "ignoreCompareQuantity": True,
                    "quantities": [
                        {
                            "inventoryItemId": request.inventory_item_id,
                            "locationId": request.location_id,
                            "quantity": request.quantity,
                        }
                    ],
                }
            },
        )
        self._log_cost(body)

        data = body.get("data")
        payload = data.get("inventorySetQuantities") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise IntegrityError("inventorySetQuantities payload missing from response")

        return _user_errors(payload.get("userErrors"))

    async def list_products(self, first: int) -> list[ProductListItem]:
        """Return up to ``first`` products in the store's default order."""
        body = await self._client.execute(PRODUCTS_QUERY, {"first": first})
        self._log_cost(body)

        edges = body["data"]["products"]["edges"]
        return [self._map(edge["node"]) for edge in edges]

    async def flag_for_review(self, product_id: str, tag: str) -> list[UserError]:
        body = await self._client.execute(
            TAGS_ADD_MUTATION, {"id": product_id, "tags": [tag]}
        )
        data = body.get("data")
        payload = data.get("tagsAdd") if isinstance(data, dict) else None
        if not isinstance(payload, dict):
            raise IntegrityError("tagsAdd payload missing from response")
        return _user_errors(payload.get("userErrors"))

    @staticmethod
    def _log_cost(body: dict) -> None:
        cost = body.get("extensions", {}).get("cost", {})
        if not cost:
            return
        throttle = cost.get("throttleStatus", {})
        logger.debug(
            f"Query cost: {cost.get('actualQueryCost', 0)} | "
            f"Available: {throttle.get('currentlyAvailable')} / {throttle.get('maximumAvailable')}"
        )

    @staticmethod
    def _map(node: dict) -> ProductListItem:
        """Map a raw GraphQL product node to a ``ProductListItem``."""
        money = node["priceRangeV2"]["minVariantPrice"]

        image_url: str | None = None
        image_alt: str | None = None
        if images := node.get("images", {}).get("edges"):
            image_url = images[0]["node"].get("url")
            image_alt = images[0]["node"].get("altText")

        return ProductListItem(
            id=node["id"],
            title=node["title"],
            handle=node["handle"],
            description=node.get("description") or "",
            price_amount=Decimal(str(money["amount"])),
            currency_code=money["currencyCode"],
            image_url=image_url,
            image_alt=image_alt,
            status=node["status"],
            total_inventory=node.get("totalInventory"),
        )
