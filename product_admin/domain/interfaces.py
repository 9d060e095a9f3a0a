from collections.abc import Awaitable, Callable
from typing import Protocol

from .product import (
    InventorySetRequest,
    PriceUpdateRequest,
    PriceUpdateResult,
    ProductCreateResult,
    ProductListItem,
    UserError,
)

# Returns True once the inbound request has been aborted by the client.
CancellationCheck = Callable[[], Awaitable[bool]]


class IProductGateway(Protocol):
    async def create_product(self, product_input: dict) -> ProductCreateResult: ...

    async def update_price(self, request: PriceUpdateRequest) -> PriceUpdateResult: ...

    async def set_inventory(self, request: InventorySetRequest) -> list[UserError]: ...

    async def list_products(self, first: int) -> list[ProductListItem]: ...

    async def flag_for_review(self, product_id: str, tag: str) -> list[UserError]:
        """Tag ``product_id`` for manual follow-up and return any user errors."""
        ...
