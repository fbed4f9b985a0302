"""
Modèle panier: lignes achetables (beat, drum-kit, merch) et état du panier.
Logique pure (pas de Stripe, pas d'I/O): chaque opération retourne un nouveau Cart.
"""
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# module storefront.cart.models
class Category(str, Enum):
    BEAT = "Beat"
    DRUMKIT = "Drumkit"
    MERCH = "Merch"


class CartItem(BaseModel):
    """
    Ligne du panier.
    - price: prix unitaire en USD (ex: Decimal("29.99"))
    - size: taille choisie (merch uniquement)
    - stripe_price_id: prix Stripe pré-créé, si le produit en possède un
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    type: Category
    quantity: int = Field(default=1, ge=1)
    size: Optional[str] = None
    stripe_price_id: Optional[str] = Field(default=None, alias="stripePriceId")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart(BaseModel):
    """
    Vue unique et sérialisable du panier en cours.
    Invariant: aucune ligne à quantité 0 (update_quantity(<=0) supprime la ligne).
    """
    model_config = ConfigDict(frozen=True)

    items: Tuple[CartItem, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, item_id: object) -> bool:
        return any(i.id == item_id for i in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    def get(self, item_id: str) -> Optional[CartItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def contains(self, category: Category) -> bool:
        return any(i.type == category for i in self.items)

    def add(self, item: CartItem) -> "Cart":
        """
        Ajoute un produit.
        - Déjà présent (même id): quantité +1, la ligne garde sa position.
        - Sinon: ajouté en fin de panier tel quel.
        """
        if item.id in self:
            return Cart(items=tuple(
                i.model_copy(update={"quantity": i.quantity + 1}) if i.id == item.id else i
                for i in self.items
            ))
        return Cart(items=self.items + (item,))

    def remove(self, item_id: str) -> "Cart":
        return Cart(items=tuple(i for i in self.items if i.id != item_id))

    def update_quantity(self, item_id: str, quantity: int) -> "Cart":
        if quantity <= 0:
            return self.remove(item_id)
        return Cart(items=tuple(
            i.model_copy(update={"quantity": quantity}) if i.id == item_id else i
            for i in self.items
        ))

    def clear(self) -> "Cart":
        return Cart()
