"""Data handed from the request handlers to the page renderers."""

from pydantic import BaseModel, Field

from .product import ProductListItem, UserError


class RenderState(BaseModel):
    """Everything needed to redraw the create form after a failure."""

    errors: list[UserError] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)


class Redirect(BaseModel):
    location: str


class ProductRow(BaseModel):
    """One display row of the product table."""

    item: ProductListItem
    formatted_price: str  # e.g. "$19.50"
    summary: str


class ProductListing(BaseModel):
    rows: list[ProductRow] = Field(default_factory=list)
    error: str | None = None
