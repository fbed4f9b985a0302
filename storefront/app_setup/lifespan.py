"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Ouvre le client Redis (ou fakeredis en tests) partagé par le rate limiting
  et le store des évènements webhook déjà traités.
- Variables d'environnement supportées:
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: n'initialise pas FastAPILimiter (tests)
"""
import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter
from redis import asyncio as aioredis

from storefront.config import REDIS_URL, PROCESSED_EVENT_TTL_SECONDS, PROCESSED_EVENT_PROCESSING_TTL_SECONDS
from storefront.payments.idempotency import ProcessedEventStore

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

def _make_redis():
    if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
        if not FakeRedis:
            raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 mais fakeredis n'est pas installé.")
        return FakeRedis(decode_responses=True)
    return aioredis.from_url(REDIS_URL, encoding="utf-8", decode_responses=True)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure Redis, le rate limiting et l'idempotence du webhook.
    - Redis injoignable: rate limiting et idempotence désactivés proprement (warning).
    - Les logs indiquent l'état effectif (enabled/disabled) pour observabilité.
    """
    logger = logging.getLogger("uvicorn.error")
    app.state.rate_limit_enabled = False
    app.state.event_store = None
    r = None
    try:
        r = _make_redis()
        await r.ping()
        app.state.redis = r
        app.state.event_store = ProcessedEventStore(r, PROCESSED_EVENT_TTL_SECONDS, PROCESSED_EVENT_PROCESSING_TTL_SECONDS)
        logger.info("Webhook idempotency enabled")
    except Exception as e:
        logger.warning(f"Redis unavailable, webhook idempotency disabled: {e}")
        r = None

    if r is not None and os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") != "1":
        try:
            await FastAPILimiter.init(r)
            app.state.rate_limit_enabled = True
            logger.info("Rate limiting enabled")
        except Exception as e:
            logger.warning(f"Rate limiting disabled due to init error: {e}")
    else:
        logger.info("Rate limiting disabled")

    try:
        yield
    finally:
        if r is not None:
            await r.aclose()
