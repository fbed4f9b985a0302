"""
Évènements webhook déjà traités (Redis), en deux phases.
- claim(event_id): SET NX EX court, état "processing" -> True si cet appel devient propriétaire.
- mark_done(event_id): état "done", conservé PROCESSED_EVENT_TTL_SECONDS (relivraisons acquittées).
- release(event_id): libère la réservation quand la livraison n'a pas abouti (Stripe relivrera).
Un worker tué pendant la livraison laisse au pire une réservation "processing" qui expire seule.
"""
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

KEY_PREFIX = "stripe:event:"
PROCESSING = "processing"
DONE = "done"

# module storefront.payments.idempotency
class ProcessedEventStore:
    def __init__(self, redis_client: Any, ttl_seconds: int, processing_ttl_seconds: int = 60):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.processing_ttl_seconds = processing_ttl_seconds

    def _key(self, event_id: str) -> str:
        return f"{KEY_PREFIX}{event_id}"

    async def claim(self, event_id: str) -> bool:
        created = await self.redis.set(self._key(event_id), PROCESSING, nx=True, ex=self.processing_ttl_seconds)
        if not created:
            logger.info("payments.idempotency duplicate event_id=%s", event_id)
        return bool(created)

    async def mark_done(self, event_id: str) -> None:
        await self.redis.set(self._key(event_id), DONE, ex=self.ttl_seconds)

    async def release(self, event_id: str) -> None:
        await self.redis.delete(self._key(event_id))

    async def status(self, event_id: str) -> Optional[str]:
        return await self.redis.get(self._key(event_id))

    async def seen(self, event_id: str) -> bool:
        return bool(await self.redis.exists(self._key(event_id)))


def get_event_store(app_state: Any) -> Optional[ProcessedEventStore]:
    """Store initialisé par le lifespan; None si Redis indisponible (idempotence désactivée)."""
    return getattr(app_state, "event_store", None)
