from decimal import Decimal

from babel.numbers import format_currency
from loguru import logger

from product_admin.domain.interfaces import IProductGateway
from product_admin.domain.page_state import ProductListing, ProductRow
from product_admin.domain.product import ProductListItem

LOAD_FAILURE = "Failed to fetch products"
NO_DESCRIPTION = "No description available"


def format_price(amount: Decimal, currency_code: str, locale: str = "en_US") -> str:
    """Format ``amount`` in its own currency, e.g. ``19.5 USD`` -> ``$19.50``."""
    return format_currency(amount, currency_code, locale=locale)


def summarize(description: str, length: int = 20) -> str:
    return (description or NO_DESCRIPTION)[:length]


class ProductListingService:
    """Loads the product table for the listing page."""

    def __init__(
        self,
        gateway: IProductGateway,
        locale: str = "en_US",
        summary_length: int = 20,
    ) -> None:
        self._gateway = gateway
        self._locale = locale
        self._summary_length = summary_length

    async def load(self, page_size: int = 50) -> ProductListing:
        """Return display rows, or no rows and an error message on any fault."""
        try:
            items = await self._gateway.list_products(page_size)
            rows = [self._row(item) for item in items]
        except Exception as exc:
            logger.error(f"Error fetching products: {type(exc).__name__}: {exc}")
            return ProductListing(error=LOAD_FAILURE)

        logger.info(f"Loaded {len(rows)} product(s)")
        return ProductListing(rows=rows)

    def _row(self, item: ProductListItem) -> ProductRow:
        return ProductRow(
            item=item,
            formatted_price=format_price(
                item.price_amount, item.currency_code, self._locale
            ),
            summary=summarize(item.description, self._summary_length),
        )
