from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from product_admin.domain.errors import ValidationError
from product_admin.domain.product import (
    ProductDraft,
    ProductOption,
    ProductStatus,
    UserError,
)


def _split(raw: str) -> list[str]:
    """Split a comma-separated field, dropping blanks and keeping order."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_price(raw: str, errors: list[UserError]) -> Decimal | None:
    if not raw:
        errors.append(UserError(field="price", message="Price is required"))
        return None
    try:
        price = Decimal(raw)
    except InvalidOperation:
        errors.append(UserError(field="price", message="Price must be a number"))
        return None
    if not price.is_finite():
        errors.append(UserError(field="price", message="Price must be a number"))
        return None
    if price < 0:
        errors.append(UserError(field="price", message="Price must be zero or greater"))
        return None
    return price


def _parse_inventory(raw: str, errors: list[UserError]) -> int:
    if not raw:
        return 0
    try:
        quantity = int(raw)
    except ValueError:
        errors.append(
            UserError(field="inventory", message="Inventory must be a whole number")
        )
        return 0
    if quantity < 0:
        errors.append(
            UserError(field="inventory", message="Inventory must be zero or greater")
        )
    return quantity


def _parse_status(raw: str, errors: list[UserError]) -> ProductStatus:
    if not raw:
        return ProductStatus.DRAFT
    try:
        return ProductStatus(raw.upper())
    except ValueError:
        errors.append(
            UserError(field="status", message="Status must be ACTIVE or DRAFT")
        )
        return ProductStatus.DRAFT


def _parse_options(form: Mapping[str, str], errors: list[UserError]) -> list[ProductOption]:
    name = (form.get("optionName") or "").strip()
    values = _split(form.get("optionValues") or "")
    if not name and not values:
        return []
    if not name:
        errors.append(
            UserError(field="optionName", message="Option name is required when values are given")
        )
        return []
    if not values:
        errors.append(
            UserError(field="optionValues", message=f"Option {name!r} needs at least one value")
        )
        return []
    return [ProductOption(name=name, values=values)]


def decode_product_form(form: Mapping[str, str]) -> ProductDraft:
    """Turn submitted form fields into a ``ProductDraft``.

    Every problem is collected before raising so the form can show all of
    them at once.

    Raises:
        ValidationError: when ``title`` is blank, ``price`` is missing, not a
            finite number or negative, or an optional field is malformed.
    """
    errors: list[UserError] = []

    title = (form.get("title") or "").strip()
    if not title:
        errors.append(UserError(field="title", message="Title is required"))

    price = _parse_price((form.get("price") or "").strip(), errors)
    inventory = _parse_inventory((form.get("inventory") or "").strip(), errors)
    status = _parse_status((form.get("status") or "").strip(), errors)
    options = _parse_options(form, errors)

    if errors:
        raise ValidationError(errors)

    return ProductDraft(
        title=title,
        description_html=form.get("description") or "",
        vendor=(form.get("vendor") or "").strip(),
        product_type=(form.get("productType") or "").strip(),
        price=price,
        inventory_quantity=inventory,
        status=status,
        tags=_split(form.get("tags") or ""),
        options=options,
    )
