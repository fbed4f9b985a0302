from decimal import Decimal

import pytest

from storefront.cart import Cart, CartItem, Category, beat_item, merch_item
from storefront.payments import (
    to_minor_units,
    cart_item_to_line_item,
    cart_to_line_items,
)


@pytest.mark.parametrize("amount,expected", [
    (Decimal("29.99"), 2999),
    (Decimal("0"), 0),
    (Decimal("44.99"), 4499),
    (Decimal("19.995"), 2000),
    (Decimal("0.005"), 1),
    (Decimal("100"), 10000),
])
def test_to_minor_units(amount, expected):
    assert to_minor_units(amount) == expected


def test_line_item_shape_for_beat():
    li = cart_item_to_line_item(beat_item("blood-money", "BLOOD MONEY", "29.99"))
    assert li == {
        "price_data": {
            "currency": "usd",
            "unit_amount": 2999,
            "product_data": {
                "name": "BLOOD MONEY",
                "metadata": {"type": "Beat", "internal_id": "beat-blood-money"},
            },
        },
        "quantity": 1,
    }


def test_line_item_carries_size_description():
    li = cart_item_to_line_item(merch_item("m-002", "DEALER TEE", "44.99", "M"))
    product = li["price_data"]["product_data"]
    assert product["description"] == "Size: M"
    assert product["metadata"] == {"type": "Merch", "internal_id": "m-002-M"}


def test_line_item_uses_existing_stripe_price():
    item = CartItem(id="m-003-OS", name="HIGH ROLLER CAP", price="54.99", type=Category.MERCH,
                    quantity=2, stripe_price_id="price_123")
    assert cart_item_to_line_item(item) == {"price": "price_123", "quantity": 2}


def test_free_item_has_zero_amount():
    li = cart_item_to_line_item(beat_item("free", "FREE TAPE", "0"))
    assert li["price_data"]["unit_amount"] == 0


def test_scenario_minor_unit_total(minor_total):
    cart = (
        Cart()
        .add(beat_item("blood-money", "BLOOD MONEY", "29.99"))
        .add(merch_item("m-002", "DEALER TEE", "44.99", "M"))
        .update_quantity("m-002-M", 2)
    )
    line_items = cart_to_line_items(cart)
    assert [li["quantity"] for li in line_items] == [1, 2]
    assert minor_total(line_items) == 11997
