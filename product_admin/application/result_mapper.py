from product_admin.domain.page_state import Redirect, RenderState
from product_admin.domain.product import UserError
from product_admin.domain.workflow import CreationOutcome, WorkflowState

PRODUCTS_PATH = "/app/products"

GENERIC_FAILURE = "Failed to create product"
PARTIAL_FAILURE = (
    "The product was created but its price could not be set. "
    "It has been flagged for review; please check it before submitting again."
)
PARTIAL_FAILURE_UNFLAGGED = (
    "The product was created but its price could not be set. "
    "Please check it in the product list before submitting again."
)
STOCK_FAILURE = (
    "The product was created and priced but its inventory could not be set. "
    "It has been flagged for review; please check its stock before submitting again."
)
STOCK_FAILURE_UNFLAGGED = (
    "The product was created and priced but its inventory could not be set. "
    "Please check its stock in the product list before submitting again."
)


def map_outcome(outcome: CreationOutcome) -> RenderState | Redirect:
    """Convert a finished workflow into a redirect or a form to redraw."""
    if outcome.state == WorkflowState.DONE:
        return Redirect(location=PRODUCTS_PATH)

    if outcome.state in (WorkflowState.VALIDATION_FAILED, WorkflowState.CREATE_REJECTED):
        return RenderState(errors=list(outcome.errors), values=dict(outcome.values))

    if outcome.state == WorkflowState.PRICING_FAULTED:
        message = PARTIAL_FAILURE if outcome.flagged_for_review else PARTIAL_FAILURE_UNFLAGGED
        return RenderState(errors=[UserError(message=message)], values=dict(outcome.values))

    if outcome.state == WorkflowState.INVENTORY_FAULTED:
        message = STOCK_FAILURE if outcome.flagged_for_review else STOCK_FAILURE_UNFLAGGED
        return RenderState(errors=[UserError(message=message)], values=dict(outcome.values))

    # CREATE_FAULTED, CANCELLED
    return map_fault(outcome.values)


def map_fault(values: dict[str, str]) -> RenderState:
    """RenderState for a fault raised outside the workflow."""
    return RenderState(errors=[UserError(message=GENERIC_FAILURE)], values=dict(values))
