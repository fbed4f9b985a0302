"""
Envoi d'emails transactionnels via l'API REST Resend (httpx).
"""
import logging
from typing import Any, Dict

import httpx

from storefront.config import RESEND_API_KEY, RESEND_API_URL, EMAIL_FROM

logger = logging.getLogger(__name__)


class EmailSendError(Exception):
    """Échec d'envoi côté fournisseur email (clé absente, HTTP non-2xx, réseau)."""


# module storefront.emails.resend_client
def send_email(*, to: str, subject: str, html: str) -> Dict[str, Any]:
    """
    POST /emails sur Resend.
    - Authorization: Bearer RESEND_API_KEY; timeout de 10s
    - Retour: corps JSON Resend (ex: {"id": "..."})
    - Erreurs: EmailSendError (non interceptée par le webhook -> 500 -> Stripe relivre)
    """
    if not RESEND_API_KEY:
        raise EmailSendError("RESEND_API_KEY manquant")
    headers = {
        "Authorization": f"Bearer {RESEND_API_KEY}",
        "Content-Type": "application/json",
    }
    payload = {"from": EMAIL_FROM, "to": [to], "subject": subject, "html": html}
    try:
        resp = httpx.post(RESEND_API_URL, json=payload, headers=headers, timeout=10)
    except httpx.HTTPError as e:
        raise EmailSendError(f"Resend injoignable: {e}") from e
    if resp.status_code >= 300:
        raise EmailSendError(f"Resend HTTP {resp.status_code}: {resp.text}")
    logger.info("emails.resend sent to=%s status=%s", to, resp.status_code)
    return resp.json() if resp.content else {}
