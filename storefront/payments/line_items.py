"""
Adaptateur panier -> line_items Stripe (pas de Stripe, pas d'I/O).
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

from storefront.cart import Cart, CartItem
from storefront.config import CURRENCY

# module storefront.payments.line_items
def to_minor_units(amount: Decimal) -> int:
    """
    Convertit un montant en dollars vers des centimes Stripe.
    - Arrondi half-up (29.995 -> 3000), 29.99 -> 2999, 0 -> 0.
    """
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cart_item_to_line_item(item: CartItem) -> Dict[str, Any]:
    """
    Construit la ligne Stripe d'un article du panier.
    - Si 'stripe_price_id' est présent, utilise {"price": "<price_id>"}.
    - Sinon, construit 'price_data' (usd, unit_amount en centimes) et product_data
      avec metadata {type, internal_id} pour retrouver le produit au webhook.
    - Ne valide rien: l'invariant quantité >= 1 est garanti par le Cart.
    """
    if item.stripe_price_id:
        return {"price": item.stripe_price_id, "quantity": item.quantity}

    product_data: Dict[str, Any] = {
        "name": item.name,
        "metadata": {
            "type": item.type.value,
            "internal_id": item.id,
        },
    }
    if item.size:
        product_data["description"] = f"Size: {item.size}"
    return {
        "price_data": {
            "currency": CURRENCY,
            "unit_amount": to_minor_units(item.price),
            "product_data": product_data,
        },
        "quantity": item.quantity,
    }


def cart_to_line_items(cart: Cart) -> List[Dict[str, Any]]:
    return [cart_item_to_line_item(i) for i in cart.items]

