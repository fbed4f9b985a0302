"""
Helpers panier: construction des lignes selon les conventions du catalogue
et calcul des totaux affichés dans le tiroir panier.
"""
from decimal import Decimal
from typing import NamedTuple, Optional, Union

from .models import Cart, CartItem, Category

Price = Union[Decimal, str, int]

# module storefront.cart.service
class CartTotals(NamedTuple):
    subtotal: Decimal
    item_count: int
    formatted_subtotal: str


def cart_totals(cart: Cart) -> CartTotals:
    """
    Totaux pour l'affichage.
    - subtotal: somme des price × quantity
    - item_count: nombre d'unités (pas de lignes)
    - formatted_subtotal: "$119.97"
    """
    subtotal = sum((i.line_total for i in cart.items), Decimal("0"))
    return CartTotals(
        subtotal=subtotal,
        item_count=cart.item_count,
        formatted_subtotal=f"${subtotal.quantize(Decimal('0.01'))}",
    )


def beat_item(beat_id: str, title: str, price: Price) -> CartItem:
    return CartItem(id=f"beat-{beat_id}", name=title, price=price, type=Category.BEAT)


def drumkit_item(kit_id: str, title: str, price: Price) -> CartItem:
    return CartItem(id=kit_id, name=title, price=price, type=Category.DRUMKIT)


def merch_item(merch_id: str, title: str, price: Price, size: str, stripe_price_id: Optional[str] = None) -> CartItem:
    """Une ligne par variante: l'id et le nom embarquent la taille choisie."""
    return CartItem(
        id=f"{merch_id}-{size}",
        name=f"{title} — {size}",
        price=price,
        type=Category.MERCH,
        size=size,
        stripe_price_id=stripe_price_id,
    )
