from enum import StrEnum

from pydantic import BaseModel, Field

from .product import PriceUpdateResult, ProductCreateResult, UserError


class WorkflowState(StrEnum):
    """States of a single pass through the create-product workflow."""

    SUBMITTED = "submitted"
    DECODED = "decoded"
    VALIDATION_FAILED = "validation_failed"  # terminal
    BUILT = "built"
    CREATING = "creating"
    CREATE_REJECTED = "create_rejected"  # terminal
    CREATE_FAULTED = "create_faulted"  # terminal
    CREATED = "created"
    PRICING_UPDATE = "pricing_update"
    PRICING_FAULTED = "pricing_faulted"  # terminal, product exists
    INVENTORY_UPDATE = "inventory_update"
    INVENTORY_FAULTED = "inventory_faulted"  # terminal, product exists and is priced
    CANCELLED = "cancelled"  # terminal
    DONE = "done"  # terminal

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = frozenset(
    {
        WorkflowState.VALIDATION_FAILED,
        WorkflowState.CREATE_REJECTED,
        WorkflowState.CREATE_FAULTED,
        WorkflowState.PRICING_FAULTED,
        WorkflowState.INVENTORY_FAULTED,
        WorkflowState.CANCELLED,
        WorkflowState.DONE,
    }
)


class CreationOutcome(BaseModel):
    """Where a create request ended up, plus what is needed to report it."""

    state: WorkflowState
    values: dict[str, str] = Field(default_factory=dict)
    errors: list[UserError] = Field(default_factory=list)
    create_result: ProductCreateResult | None = None
    price_result: PriceUpdateResult | None = None
    flagged_for_review: bool = False

    @property
    def product_id(self) -> str | None:
        return self.create_result.product_id if self.create_result else None
