"""
Module 'payments' (feature-first): point d'entrée public.
Réunit l'adaptateur line_items, le client Stripe, l'idempotence webhook et les services.
"""

from .line_items import to_minor_units, cart_item_to_line_item, cart_to_line_items
from .stripe_client import WebhookVerificationError, require_stripe, create_session, list_line_items, parse_event
from .idempotency import ProcessedEventStore, get_event_store
from .service import create_checkout_session, resolve_download_links, fulfil_completed_session, handle_event
from .checkout_client import CheckoutClient, CheckoutError, build_checkout_request

__all__ = [
    # line items
    "to_minor_units",
    "cart_item_to_line_item",
    "cart_to_line_items",
    # stripe
    "WebhookVerificationError",
    "require_stripe",
    "create_session",
    "list_line_items",
    "parse_event",
    # idempotence
    "ProcessedEventStore",
    "get_event_store",
    # services
    "create_checkout_session",
    "resolve_download_links",
    "fulfil_completed_session",
    "handle_event",
    # client
    "CheckoutClient",
    "CheckoutError",
    "build_checkout_request",
]
