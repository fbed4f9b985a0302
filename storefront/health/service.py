from typing import Any, Dict

from fastapi import Request

from storefront import config
from storefront.downloads import get_registry
from storefront.utils.rate_limit import rate_limit_health_info

def payments_health_info(request: Request) -> Dict[str, Any]:
    """État de configuration (booléens uniquement, jamais les secrets)."""
    return {
        "stripe_secret_key": bool(config.STRIPE_SECRET_KEY),
        "stripe_webhook_secret": bool(config.STRIPE_WEBHOOK_SECRET),
        "resend_api_key": bool(config.RESEND_API_KEY),
        "download_links": len(get_registry()),
        "webhook_idempotency": getattr(request.app.state, "event_store", None) is not None,
        "rate_limit": rate_limit_health_info(request),
    }
