"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import stripe
from typing import Any, Dict, List, Optional

from storefront.config import STRIPE_SECRET_KEY, STRIPE_API_VERSION, STRIPE_WEBHOOK_SECRET


class WebhookVerificationError(Exception):
    """Signature, secret ou payload du webhook invalide."""


# module storefront.payments.stripe_client
def require_stripe() -> stripe:
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY si disponible.
    - En absence de clé, les appels Stripe échoueront côté SDK (ex: No API key provided).
    """
    if STRIPE_SECRET_KEY:
        stripe.api_key = STRIPE_SECRET_KEY
    if STRIPE_API_VERSION:
        stripe.api_version = STRIPE_API_VERSION
    return stripe

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    mode: str,
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, Any],
    shipping_address_collection: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout (hébergée).
    - line_items: lignes Stripe (price/quantity ou price_data)
    - mode: "payment" par défaut côté appelant
    - shipping_address_collection: transmis seulement s'il est fourni (merch)
    - metadata: ex {"contains_beats": "true", ...}
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://..."})
    Non idempotent: chaque appel crée une nouvelle session.
    """
    require_stripe()
    params: Dict[str, Any] = dict(
        line_items=line_items,
        mode=mode,
        success_url=success_url,
        cancel_url=cancel_url,
        metadata=metadata,
        payment_method_types=["card"],
        automatic_tax={"enabled": False},
    )
    if shipping_address_collection:
        params["shipping_address_collection"] = shipping_address_collection
    session = stripe.checkout.Session.create(**params)
    # stripe retourne un objet; on le traite comme dict-compatible
    return dict(session)

def list_line_items(session_id: str) -> List[Dict[str, Any]]:
    """
    Liste les lignes achetées d'une session, produit développé
    (price.product.metadata.internal_id disponible pour la résolution).
    """
    require_stripe()
    page = stripe.checkout.Session.list_line_items(session_id, expand=["data.price.product"])
    return [_to_dict(item) for item in page.auto_paging_iter()]

def parse_event(payload: bytes, sig_header: Optional[str]) -> Dict[str, Any]:
    """
    Parse et valide un événement Stripe signé (webhook).
    - Valide la signature via Webhook.construct_event (STRIPE_WEBHOOK_SECRET)
    - Échec fermé: secret absent, en-tête absent ou signature invalide -> WebhookVerificationError
    Retour: l'événement sous forme de dict.
    """
    if not STRIPE_WEBHOOK_SECRET:
        raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET manquant")
    if not sig_header:
        raise WebhookVerificationError("En-tête Stripe-Signature manquant")
    try:
        event = stripe.Webhook.construct_event(payload, sig_header, STRIPE_WEBHOOK_SECRET)
    except (stripe.SignatureVerificationError, ValueError) as e:
        raise WebhookVerificationError(str(e)) from e
    return _to_dict(event)

def _to_dict(obj: Any) -> Dict[str, Any]:
    if hasattr(obj, "to_dict_recursive"):
        return obj.to_dict_recursive()
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)
