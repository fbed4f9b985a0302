"""
Cas d'usage 'payments': orchestre stripe_client, registre de téléchargements et emails.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from starlette.concurrency import run_in_threadpool

from storefront.config import DOWNLOAD_EMAIL_SUBJECT
from storefront.downloads import DownloadLinkRegistry, get_registry
from storefront import emails
from . import stripe_client
from .idempotency import ProcessedEventStore

logger = logging.getLogger(__name__)

COMPLETED_EVENT = "checkout.session.completed"

# module storefront.payments.service
def create_checkout_session(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Crée la session Stripe Checkout à partir du corps reçu par /api/checkout.
    - line_items, success_url, cancel_url transmis tels quels (Stripe valide)
    - mode: "payment" par défaut; metadata: {} par défaut
    - Toute erreur Stripe remonte à la vue (pas de retry)
    """
    return stripe_client.create_session(
        line_items=body.get("line_items"),
        mode=body.get("mode") or "payment",
        success_url=body.get("success_url"),
        cancel_url=body.get("cancel_url"),
        metadata=body.get("metadata") or {},
        shipping_address_collection=body.get("shipping_address_collection"),
    )

def _product_internal_id(item: Dict[str, Any]) -> Optional[str]:
    product = (item.get("price") or {}).get("product")
    if not isinstance(product, dict):
        return None
    return (product.get("metadata") or {}).get("internal_id")

def resolve_download_links(
    line_items: List[Dict[str, Any]],
    registry: DownloadLinkRegistry,
) -> List[Tuple[str, str]]:
    """
    Associe chaque ligne achetée à son lien de téléchargement.
    - Id produit stable (price.product.metadata.internal_id) en priorité
    - Repli sur la description normalisée (MAJUSCULES)
    - Lignes sans lien (merch) ignorées
    """
    links: List[Tuple[str, str]] = []
    for item in line_items or []:
        name = item.get("description") or ""
        url = registry.resolve(_product_internal_id(item), name)
        if url:
            links.append((name, url))
    return links

def fulfil_completed_session(session: Dict[str, Any], registry: Optional[DownloadLinkRegistry] = None) -> int:
    """
    Livraison d'une session payée: un seul email regroupant tous les liens.
    Retour: nombre de liens envoyés (0 si pas d'email payeur ou aucun produit numérique).
    """
    email = (session.get("customer_details") or {}).get("email")
    session_id = session.get("id") or ""
    if not email:
        logger.info("payments.fulfil no customer email session_id=%s", session_id)
        return 0

    line_items = stripe_client.list_line_items(session_id)
    links = resolve_download_links(line_items, registry or get_registry())
    if not links:
        logger.info("payments.fulfil no downloadable items session_id=%s items=%s", session_id, len(line_items))
        return 0

    emails.send_email(
        to=email,
        subject=DOWNLOAD_EMAIL_SUBJECT,
        html=emails.render_download_email(links),
    )
    logger.info("payments.fulfil emailed links=%s session_id=%s", len(links), session_id)
    return len(links)

async def handle_event(
    event: Dict[str, Any],
    store: Optional[ProcessedEventStore] = None,
    registry: Optional[DownloadLinkRegistry] = None,
) -> Dict[str, Any]:
    """
    Traite un événement déjà vérifié.
    - Types autres que checkout.session.completed: acquittés sans action
    - Événement déjà traité (store): acquitté sans effet de bord
    - Livraison réussie: réservation passée à "done" (relivraisons acquittées)
    - Livraison interrompue (exception, SystemExit, annulation): réservation libérée
      puis erreur propagée (500, Stripe relivre)
    """
    if (event or {}).get("type") != COMPLETED_EVENT:
        return {"received": True}

    event_id = event.get("id") or ""
    if store is not None and event_id:
        if not await store.claim(event_id):
            return {"received": True}

    session = ((event.get("data") or {}).get("object")) or {}
    delivered = False
    try:
        await run_in_threadpool(fulfil_completed_session, session, registry=registry)
        delivered = True
    finally:
        if store is not None and event_id:
            if delivered:
                await store.mark_done(event_id)
            else:
                await store.release(event_id)
    return {"received": True}
