from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from product_admin.domain.product import ProductDraft


class SampleMetafield(BaseModel):
    model_config = ConfigDict(frozen=True)

    namespace: str
    key: str
    type: str = "single_line_text_field"
    value: str


class CatalogDefaults(BaseModel):
    """Fixed data attached to every product created from the admin panel."""

    model_config = ConfigDict(frozen=True)

    tags: list[str] = Field(default_factory=list)
    metafields: list[SampleMetafield] = Field(default_factory=list)
    compare_at_price: Decimal | None = None
    seo_title_template: str = "SEO: {title}"
    seo_description_template: str = "SEO Description for {title}"


def _merge_tags(defaults: list[str], extra: list[str]) -> list[str]:
    merged: list[str] = []
    for tag in [*defaults, *extra]:
        if tag not in merged:
            merged.append(tag)
    return merged


def build_product_create_input(draft: ProductDraft, defaults: CatalogDefaults) -> dict:
    """Map a ``ProductDraft`` to a Shopify ``ProductCreateInput``.

    ``productOptions`` is only present when the draft declares options.
    """
    product_input: dict = {
        "title": draft.title,
        "descriptionHtml": draft.description_html,
        "vendor": draft.vendor,
        "productType": draft.product_type,
        "status": draft.status.value,
        "seo": {
            "title": defaults.seo_title_template.format(title=draft.title),
            "description": defaults.seo_description_template.format(title=draft.title),
        },
        "tags": _merge_tags(defaults.tags, draft.tags),
        "metafields": [m.model_dump() for m in defaults.metafields],
    }

    if draft.options:
        product_input["productOptions"] = [
            {"name": option.name, "values": [{"name": v} for v in option.values]}
            for option in draft.options
        ]

    return product_input
