"""
Client du endpoint /api/checkout: construit la requête depuis le panier,
appelle l'API (httpx) et renvoie l'URL de la page de paiement hébergée.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from storefront.cart import Cart, Category
from storefront.config import (
    ALLOWED_SHIPPING_COUNTRIES,
    BASE_URL,
    CHECKOUT_CANCEL_PATH,
    CHECKOUT_SUCCESS_PATH,
)
from .line_items import cart_to_line_items

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Création de session refusée (message brut de l'API ou du fournisseur)."""


# module storefront.payments.checkout_client
def _flag(value: bool) -> str:
    return "true" if value else "false"

def build_checkout_request(cart: Cart, origin: Optional[str] = None) -> Dict[str, Any]:
    """
    Corps JSON attendu par POST /api/checkout.
    - success_url garde le placeholder {CHECKOUT_SESSION_ID} substitué par Stripe
    - shipping_address_collection seulement si le panier contient du merch
    - metadata: contains_beats / contains_drumkits / contains_merch ("true"/"false")
    """
    base = (origin or BASE_URL).rstrip("/")
    body: Dict[str, Any] = {
        "line_items": cart_to_line_items(cart),
        "mode": "payment",
        "success_url": f"{base}{CHECKOUT_SUCCESS_PATH}",
        "cancel_url": f"{base}{CHECKOUT_CANCEL_PATH}",
        "metadata": {
            "contains_beats": _flag(cart.contains(Category.BEAT)),
            "contains_drumkits": _flag(cart.contains(Category.DRUMKIT)),
            "contains_merch": _flag(cart.contains(Category.MERCH)),
        },
    }
    if cart.contains(Category.MERCH):
        body["shipping_address_collection"] = {"allowed_countries": list(ALLOWED_SHIPPING_COUNTRIES)}
    return body


class CheckoutClient:
    def __init__(self, api_base_url: str, http_client: Optional[httpx.Client] = None):
        self.api_base_url = api_base_url.rstrip("/")
        self._owns_http = http_client is None
        self.http = http_client or httpx.Client(timeout=10)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "CheckoutClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def start_checkout(self, cart: Cart, origin: Optional[str] = None) -> Optional[str]:
        """
        Crée la session et retourne l'URL de redirection.
        - Panier vide: avertissement, aucun appel, None
        - Réponse non-2xx: CheckoutError(message de l'API ou "HTTP <status>")
        - Réponse sans url: CheckoutError
        - Erreur réseau (httpx): CheckoutError
        """
        if cart.is_empty:
            logger.warning("checkout: cart is empty, aborting")
            return None

        try:
            resp = self.http.post(
                f"{self.api_base_url}/api/checkout",
                json=build_checkout_request(cart, origin),
            )
        except httpx.HTTPError as e:
            logger.warning("checkout: request failed: %s", e)
            raise CheckoutError(str(e) or e.__class__.__name__) from e
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not resp.is_success:
            raise CheckoutError((data or {}).get("message") or f"HTTP {resp.status_code}")

        url = (data or {}).get("url")
        if not url:
            raise CheckoutError("No checkout URL returned from API.")
        return url
