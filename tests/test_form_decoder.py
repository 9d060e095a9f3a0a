"""Tests for decode_product_form."""

from decimal import Decimal

import pytest

from product_admin.application.form_decoder import decode_product_form
from product_admin.domain.errors import ValidationError
from product_admin.domain.product import ProductOption, ProductStatus


def _form(**overrides: str) -> dict[str, str]:
    """Helper: a complete, valid submission."""
    form = {
        "title": "Boot",
        "description": "<p>Waterproof leather boot</p>",
        "vendor": "Acme",
        "productType": "Footwear",
        "price": "49.99",
        "inventory": "12",
        "status": "ACTIVE",
    }
    form.update(overrides)
    return form


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


def test_decode_full_submission() -> None:
    draft = decode_product_form(_form())

    assert draft.title == "Boot"
    assert draft.description_html == "<p>Waterproof leather boot</p>"
    assert draft.vendor == "Acme"
    assert draft.product_type == "Footwear"
    assert draft.price == Decimal("49.99")
    assert draft.inventory_quantity == 12
    assert draft.status is ProductStatus.ACTIVE
    assert draft.tags == []
    assert draft.options == []


def test_decode_minimal_submission_uses_defaults() -> None:
    """Only title and price are required; everything else falls back."""
    draft = decode_product_form({"title": "Boot", "price": "10"})

    assert draft.description_html == ""
    assert draft.vendor == ""
    assert draft.product_type == ""
    assert draft.inventory_quantity == 0
    assert draft.status is ProductStatus.DRAFT


def test_decode_accepts_zero_price() -> None:
    draft = decode_product_form({"title": "Freebie", "price": "0"})
    assert draft.price == Decimal("0")


def test_decode_blank_inventory_defaults_to_zero() -> None:
    draft = decode_product_form(_form(inventory=""))
    assert draft.inventory_quantity == 0


def test_decode_status_is_case_insensitive() -> None:
    draft = decode_product_form(_form(status="active"))
    assert draft.status is ProductStatus.ACTIVE


def test_decode_tags_and_options() -> None:
    draft = decode_product_form(
        _form(tags="winter, leather,,", optionName="Size", optionValues="S, M ,L")
    )

    assert draft.tags == ["winter", "leather"]
    assert draft.options == [ProductOption(name="Size", values=["S", "M", "L"])]


def test_decode_strips_title_whitespace() -> None:
    draft = decode_product_form(_form(title="  Boot  "))
    assert draft.title == "Boot"


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


def test_decode_rejects_empty_title() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode_product_form(_form(title="   "))

    assert exc_info.value.fields == ["title"]


def test_decode_rejects_missing_title() -> None:
    form = _form()
    del form["title"]

    with pytest.raises(ValidationError) as exc_info:
        decode_product_form(form)

    assert exc_info.value.fields == ["title"]


@pytest.mark.parametrize("price", ["abc", "", "NaN", "Infinity", "-1"])
def test_decode_rejects_bad_price(price: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode_product_form(_form(price=price))

    assert exc_info.value.fields == ["price"]


def test_decode_rejects_bad_inventory_and_status() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode_product_form(_form(inventory="1.5", status="ARCHIVED"))

    assert exc_info.value.fields == ["inventory", "status"]


def test_decode_collects_every_field_error() -> None:
    """Title and price problems are reported together."""
    with pytest.raises(ValidationError) as exc_info:
        decode_product_form({"title": "", "price": "ten"})

    errors = exc_info.value.errors
    assert [e.field for e in errors] == ["title", "price"]
    assert errors[0].message == "Title is required"
    assert errors[1].message == "Price must be a number"


def test_decode_rejects_option_values_without_name() -> None:
    with pytest.raises(ValidationError) as exc_info:
        decode_product_form(_form(optionValues="S,M"))

    assert exc_info.value.fields == ["optionName"]
