import os

# Avant l'import de l'app: Redis simulé, pas de FastAPILimiter (scripts Lua)
os.environ.setdefault("USE_FAKE_REDIS_FOR_TESTS", "1")
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
# Hôte utilisé par TestClient
os.environ.setdefault("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

import hashlib
import hmac
import json
import time

import pytest
from typing import Any, Callable, Dict, Generator, Iterable, List, Tuple
from fastapi.testclient import TestClient
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from storefront.asgi import app as fastapi_app
from storefront.downloads import DownloadLinkRegistry
from storefront.payments.idempotency import ProcessedEventStore

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/"):
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def event_store(app, client) -> ProcessedEventStore:
    """Store isolé par test (serveur fakeredis dédié), installé sur app.state."""
    store = ProcessedEventStore(FakeRedis(server=FakeServer(), decode_responses=True), ttl_seconds=3600, processing_ttl_seconds=60)
    app.state.event_store = store
    return store

@pytest.fixture()
def registry() -> DownloadLinkRegistry:
    return DownloadLinkRegistry([
        {"id": "beat-blood-money", "name": "BLOOD MONEY", "url": "https://dl.test/blood-money.zip"},
        {"id": "dk-001", "name": "INFERNO 808 KIT", "url": "https://dl.test/inferno.zip"},
    ])

@pytest.fixture()
def sent_emails(monkeypatch) -> List[Dict[str, Any]]:
    """Remplace l'envoi Resend: chaque appel est enregistré, aucun réseau."""
    calls: List[Dict[str, Any]] = []
    def _fake_send_email(**kwargs):
        calls.append(kwargs)
        return {"id": f"email-{len(calls)}"}
    monkeypatch.setattr("storefront.emails.send_email", _fake_send_email)
    return calls

@pytest.fixture()
def use_registry(monkeypatch, registry):
    monkeypatch.setattr("storefront.payments.service.get_registry", lambda: registry)
    return registry

TEST_WEBHOOK_SECRET = "whsec_test_secret"

def _signed_payload(event: Dict[str, Any], secret: str = TEST_WEBHOOK_SECRET) -> Tuple[bytes, str]:
    """Signe un événement comme Stripe: en-tête t=<ts>,v1=<hmac_sha256("<ts>.<payload>")>."""
    payload = json.dumps(event)
    timestamp = int(time.time())
    signature = hmac.new(
        secret.encode("utf-8"),
        f"{timestamp}.{payload}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return payload.encode("utf-8"), f"t={timestamp},v1={signature}"

@pytest.fixture()
def webhook_secret(monkeypatch) -> str:
    monkeypatch.setattr("storefront.payments.stripe_client.STRIPE_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    return TEST_WEBHOOK_SECRET

@pytest.fixture()
def sign_event() -> Callable[..., Tuple[bytes, str]]:
    return _signed_payload

def _minor_total(line_items: Iterable[Dict[str, Any]]) -> int:
    """Total en centimes des lignes 'price_data' (les lignes 'price' n'ont pas de montant local)."""
    total = 0
    for li in line_items:
        price_data = li.get("price_data") or {}
        total += int(price_data.get("unit_amount") or 0) * int(li.get("quantity") or 0)
    return total

@pytest.fixture()
def minor_total() -> Callable[[Iterable[Dict[str, Any]]], int]:
    return _minor_total
