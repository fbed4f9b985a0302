import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.utils.rate_limit import optional_rate_limit
from storefront.payments import stripe_client
from storefront.payments import service as payments_service
from storefront.payments.idempotency import get_event_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])

def _error_message(e: Exception) -> str:
    # StripeError.__str__ préfixe "Request req_...: "; user_message est le message brut du fournisseur
    return getattr(e, "user_message", None) or str(e) or "Stripe error"

# module storefront.payments.views
@router.post("/checkout", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout_session(request: Request):
    """
    Crée une session Checkout Stripe et renvoie l'URL de redirection.
    - Entrée JSON: { line_items, mode?, success_url, cancel_url, shipping_address_collection?, metadata? }
    - Succès: {"url": "<checkout.stripe.com/...>"}
    - Erreurs: toute erreur (Stripe, réseau, clé, JSON) -> 500 {"message": "..."}; pas de retry
    - Non idempotent: deux requêtes identiques créent deux sessions
    """
    try:
        body = await request.json()
        session = await run_in_threadpool(payments_service.create_checkout_session, body or {})
        return JSONResponse({"url": session.get("url")})
    except Exception as e:
        logger.exception("Erreur create_checkout_session")
        return JSONResponse({"message": _error_message(e)}, status_code=500)

@router.post("/webhooks/stripe", include_in_schema=False)
async def webhook_stripe(request: Request):
    """
    Webhook Stripe: livre les liens de téléchargement sur checkout.session.completed.
    - Signature: stripe_client.parse_event (Stripe-Signature + STRIPE_WEBHOOK_SECRET), échec fermé -> 400
    - Autres types, doublons, email absent, aucun lien: {"received": true}
    - Échec de livraison (Stripe/Resend): 500 pour que Stripe relivre l'événement
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    try:
        event = stripe_client.parse_event(payload, sig_header)
    except stripe_client.WebhookVerificationError as e:
        logger.warning("payments.webhook verification failed: %s", e)
        return JSONResponse({"error": "Webhook verification failed"}, status_code=400)

    try:
        result = await payments_service.handle_event(event, store=get_event_store(request.app.state))
    except Exception:
        logger.exception("Erreur webhook_stripe event_id=%s", event.get("id"))
        return JSONResponse({"error": "Fulfilment failed"}, status_code=500)
    return JSONResponse(result)
