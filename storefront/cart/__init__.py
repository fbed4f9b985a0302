"""
Module 'cart': point d'entrée public du modèle panier.
"""

from .models import Cart, CartItem, Category
from .service import CartTotals, cart_totals, beat_item, drumkit_item, merch_item

__all__ = [
    "Cart",
    "CartItem",
    "Category",
    "CartTotals",
    "cart_totals",
    "beat_item",
    "drumkit_item",
    "merch_item",
]
