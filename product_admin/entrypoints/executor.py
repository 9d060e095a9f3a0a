from collections.abc import Mapping

from loguru import logger

from product_admin.application.form_decoder import decode_product_form
from product_admin.application.product_service import ProductService, never_cancelled
from product_admin.domain.errors import ValidationError
from product_admin.domain.interfaces import CancellationCheck
from product_admin.domain.workflow import CreationOutcome, WorkflowState


class Executor:
    """Runs one submitted add-product form through the create workflow."""

    def __init__(self, product_service: ProductService) -> None:
        self._product_service = product_service

    async def run(
        self,
        form: Mapping[str, str],
        is_cancelled: CancellationCheck = never_cancelled,
    ) -> CreationOutcome:
        values = {key: str(value) for key, value in form.items()}
        logger.info(f"[{WorkflowState.SUBMITTED}] fields: {sorted(values)}")

        try:
            draft = decode_product_form(values)
        except ValidationError as exc:
            logger.info(f"[{WorkflowState.VALIDATION_FAILED}] {exc}")
            return CreationOutcome(
                state=WorkflowState.VALIDATION_FAILED,
                values=values,
                errors=exc.errors,
            )
        logger.debug(f"[{WorkflowState.DECODED}] {draft!r}")

        outcome = await self._product_service.create_product(
            draft, values=values, is_cancelled=is_cancelled
        )
        logger.info(f"Create workflow finished in state {outcome.state}")
        return outcome
