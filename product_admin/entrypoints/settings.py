from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from product_admin.application.product_input_builder import (
    CatalogDefaults,
    SampleMetafield,
)


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    SHOPIFY_SHOP_NAME: str
    SHOPIFY_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2025-01"
    SHOPIFY_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0)
    # Location (gid://shopify/Location/...) that receives the submitted inventory quantity
    SHOPIFY_LOCATION_ID: str | None = None

    # When set, every request must carry it in the X-Admin-Api-Key header
    ADMIN_API_KEY: str | None = None

    PRODUCT_PAGE_SIZE: int = Field(default=50, ge=1, le=250)
    DESCRIPTION_SUMMARY_LENGTH: int = Field(default=20, ge=1)
    DISPLAY_LOCALE: str = "en_US"

    # Complex values are read from the environment as JSON
    DEFAULT_PRODUCT_TAGS: list[str] = Field(default_factory=lambda: ["admin-panel"])
    SAMPLE_METAFIELDS: list[SampleMetafield] = Field(
        default_factory=lambda: [
            SampleMetafield(
                namespace="my_field",
                key="liner_material",
                type="single_line_text_field",
                value="Synthetic Leather",
            )
        ]
    )
    COMPARE_AT_PRICE: Decimal | None = None
    SEO_TITLE_TEMPLATE: str = "SEO: {title}"
    SEO_DESCRIPTION_TEMPLATE: str = "SEO Description for {title}"
    REVIEW_TAG: str = "needs-review"

    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    @field_validator("SEO_TITLE_TEMPLATE", "SEO_DESCRIPTION_TEMPLATE")
    @classmethod
    def check_seo_template(cls, template: str) -> str:
        try:
            template.format(title="")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"template may only use the {{title}} placeholder: {exc!r}"
            ) from exc
        return template

    def catalog_defaults(self) -> CatalogDefaults:
        return CatalogDefaults(
            tags=self.DEFAULT_PRODUCT_TAGS,
            metafields=self.SAMPLE_METAFIELDS,
            compare_at_price=self.COMPARE_AT_PRICE,
            seo_title_template=self.SEO_TITLE_TEMPLATE,
            seo_description_template=self.SEO_DESCRIPTION_TEMPLATE,
        )


@lru_cache
def get_config() -> Config:
    return Config()  # type: ignore[call-arg]
