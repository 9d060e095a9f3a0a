from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ProductStatus(StrEnum):
    ACTIVE = "ACTIVE"
    DRAFT = "DRAFT"


class ProductOption(BaseModel):
    """An option declaration, e.g. ``Size`` with values ``S``, ``M``, ``L``."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[str] = Field(default_factory=list)


class ProductDraft(BaseModel):
    """Validated, not-yet-created product built from the submitted form."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    description_html: str = ""
    vendor: str = ""
    product_type: str = ""
    price: Decimal = Field(..., ge=0)
    inventory_quantity: int = Field(default=0, ge=0)
    status: ProductStatus = ProductStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    options: list[ProductOption] = Field(default_factory=list)


class UserError(BaseModel):
    """A business-rule violation reported by Shopify or by form decoding."""

    field: str | None = None  # e.g. "product.title"
    message: str


class ProductCreateResult(BaseModel):
    """Parsed ``productCreate`` response.

    The ids are only meaningful when ``user_errors`` is empty.
    """

    product_id: str | None = None  # Shopify GID, e.g. "gid://shopify/Product/1"
    variant_ids: list[str] = Field(default_factory=list)
    inventory_item_id: str | None = None  # of the first variant
    user_errors: list[UserError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.user_errors


class PriceUpdateRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    variant_id: str
    price: Decimal = Field(..., ge=0)
    compare_at_price: Decimal | None = None
    track_inventory: bool = False


class PriceUpdateResult(BaseModel):
    variant_ids: list[str] = Field(default_factory=list)
    user_errors: list[UserError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.user_errors


class ProductListItem(BaseModel):
    """Read-only product summary as returned by the ``products`` query."""

    id: str
    title: str
    handle: str
    description: str = ""
    price_amount: Decimal
    currency_code: str  # ISO 4217, e.g. "USD"
    image_url: str | None = None
    image_alt: str | None = None
    status: str  # ACTIVE, DRAFT or ARCHIVED
    total_inventory: int | None = None


class InventorySetRequest(BaseModel):
    """Absolute ``available`` quantity for one inventory item at one location."""

    model_config = ConfigDict(frozen=True)

    inventory_item_id: str
    location_id: str
    quantity: int = Field(..., ge=0)
