import asyncio

from loguru import logger

from product_admin.application.product_input_builder import (
    CatalogDefaults,
    build_product_create_input,
)
from product_admin.domain.errors import ProductAdminError
from product_admin.domain.interfaces import CancellationCheck, IProductGateway
from product_admin.domain.product import (
    InventorySetRequest,
    PriceUpdateRequest,
    ProductCreateResult,
    ProductDraft,
    UserError,
)
from product_admin.domain.workflow import CreationOutcome, WorkflowState

NO_LOCATION = "Inventory cannot be set: no stock location is configured"


async def never_cancelled() -> bool:
    return False


class ProductService:
    """Creates a product, prices its first variant and stocks it.

    The gateway calls form a saga without an atomic commit: once the
    product exists, a failed later step is not rolled back. Instead the
    product is tagged with ``review_tag`` so someone can finish it by hand.

    The stock step only runs for a positive inventory quantity, and needs
    ``location_id``; without one such a draft is rejected before anything
    is created.
    """

    def __init__(
        self,
        gateway: IProductGateway,
        defaults: CatalogDefaults,
        review_tag: str = "needs-review",
        location_id: str | None = None,
    ) -> None:
        self._gateway = gateway
        self._defaults = defaults
        self._review_tag = review_tag
        self._location_id = location_id

    async def create_product(
        self,
        draft: ProductDraft,
        values: dict[str, str] | None = None,
        is_cancelled: CancellationCheck = never_cancelled,
    ) -> CreationOutcome:
        """Run create, price update, then stock; never issue a call unless the previous one succeeded."""
        values = dict(values or {})
        stock = draft.inventory_quantity > 0
        if stock and not self._location_id:
            logger.info(f"[{WorkflowState.VALIDATION_FAILED}] {NO_LOCATION}")
            return CreationOutcome(
                state=WorkflowState.VALIDATION_FAILED,
                values=values,
                errors=[UserError(field="inventory", message=NO_LOCATION)],
            )

        product_input = build_product_create_input(draft, self._defaults)
        logger.debug(f"[{WorkflowState.BUILT}] {product_input}")

        logger.info(f"[{WorkflowState.CREATING}] {draft.title!r}")
        try:
            created = await self._gateway.create_product(product_input)
        except ProductAdminError as exc:
            logger.error(f"[{WorkflowState.CREATE_FAULTED}] {type(exc).__name__}: {exc}")
            return CreationOutcome(state=WorkflowState.CREATE_FAULTED, values=values)

        if not created.ok:
            return CreationOutcome(
                state=WorkflowState.CREATE_REJECTED,
                values=values,
                errors=created.user_errors,
                create_result=created,
            )

        product_id = created.product_id
        logger.info(f"[{WorkflowState.CREATED}] {product_id}")

        if await is_cancelled():
            return await self._cancelled(created, values, "before pricing")

        request = PriceUpdateRequest(
            product_id=product_id,
            variant_id=created.variant_ids[0],
            price=draft.price,
            compare_at_price=self._defaults.compare_at_price,
            track_inventory=stock,
        )
        logger.info(f"[{WorkflowState.PRICING_UPDATE}] {request.variant_id} -> {request.price}")
        try:
            priced = await self._gateway.update_price(request)
        except asyncio.CancelledError:
            logger.warning(
                f"Price update for {product_id} cancelled; product exists without its price"
            )
            await self._recover(product_id, "price update cancelled")
            raise
        except ProductAdminError as exc:
            logger.error(f"[{WorkflowState.PRICING_FAULTED}] {type(exc).__name__}: {exc}")
            flagged = await self._recover(product_id, str(exc))
            return CreationOutcome(
                state=WorkflowState.PRICING_FAULTED,
                values=values,
                create_result=created,
                flagged_for_review=flagged,
            )

        if not priced.ok:
            logger.error(f"[{WorkflowState.PRICING_FAULTED}] {priced.user_errors}")
            flagged = await self._recover(product_id, str(priced.user_errors))
            return CreationOutcome(
                state=WorkflowState.PRICING_FAULTED,
                values=values,
                errors=priced.user_errors,
                create_result=created,
                price_result=priced,
                flagged_for_review=flagged,
            )

        if stock:
            outcome = await self._set_stock(draft, created, values, is_cancelled)
            if outcome is not None:
                outcome.price_result = priced
                return outcome

        logger.info(f"[{WorkflowState.DONE}] {product_id}")
        return CreationOutcome(
            state=WorkflowState.DONE,
            values=values,
            create_result=created,
            price_result=priced,
        )

    async def _set_stock(
        self,
        draft: ProductDraft,
        created: ProductCreateResult,
        values: dict[str, str],
        is_cancelled: CancellationCheck,
    ) -> CreationOutcome | None:
        """Set the available quantity; returns an outcome only when the step did not succeed."""
        product_id = created.product_id
        if await is_cancelled():
            return await self._cancelled(created, values, "before stocking")

        if created.inventory_item_id is None:
            return await self._stock_failed(
                created, values, f"no inventory item returned for {product_id}"
            )

        request = InventorySetRequest(
            inventory_item_id=created.inventory_item_id,
            location_id=self._location_id,
            quantity=draft.inventory_quantity,
        )
        logger.info(
            f"[{WorkflowState.INVENTORY_UPDATE}] {request.inventory_item_id} "
            f"@ {request.location_id} -> {request.quantity}"
        )
        try:
            user_errors = await self._gateway.set_inventory(request)
        except asyncio.CancelledError:
            logger.warning(f"Inventory update for {product_id} cancelled; product is unstocked")
            await self._recover(product_id, "inventory update cancelled")
            raise
        except ProductAdminError as exc:
            return await self._stock_failed(created, values, f"{type(exc).__name__}: {exc}")

        if user_errors:
            return await self._stock_failed(created, values, str(user_errors), user_errors)
        return None

    async def _stock_failed(
        self,
        created: ProductCreateResult,
        values: dict[str, str],
        reason: str,
        errors: list[UserError] | None = None,
    ) -> CreationOutcome:
        logger.error(f"[{WorkflowState.INVENTORY_FAULTED}] {reason}")
        flagged = await self._recover(created.product_id, reason)
        return CreationOutcome(
            state=WorkflowState.INVENTORY_FAULTED,
            values=values,
            errors=errors or [],
            create_result=created,
            flagged_for_review=flagged,
        )

    async def _cancelled(
        self, created: ProductCreateResult, values: dict[str, str], stage: str
    ) -> CreationOutcome:
        logger.warning(
            f"[{WorkflowState.CANCELLED}] request aborted after creating "
            f"{created.product_id}; stopped {stage}"
        )
        flagged = await self._recover(created.product_id, f"request cancelled {stage}")
        return CreationOutcome(
            state=WorkflowState.CANCELLED,
            values=values,
            create_result=created,
            flagged_for_review=flagged,
        )

    async def _recover(self, product_id: str, reason: str) -> bool:
        """Tag a partially created product for manual review.

        Returns True when the tag was applied. Failures are logged with the
        product id so the product can still be found.
        """
        try:
            user_errors = await asyncio.shield(
                self._gateway.flag_for_review(product_id, self._review_tag)
            )
        except ProductAdminError as exc:
            logger.error(
                f"Could not flag {product_id} for review ({reason}): "
                f"{type(exc).__name__}: {exc}"
            )
            return False

        if user_errors:
            logger.error(f"Could not flag {product_id} for review ({reason}): {user_errors}")
            return False

        logger.warning(f"Product {product_id} tagged {self._review_tag!r}: {reason}")
        return True
