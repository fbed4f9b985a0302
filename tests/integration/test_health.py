def test_health_root(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_health_payments_reports_booleans_only(client, monkeypatch):
    monkeypatch.setattr("storefront.config.STRIPE_SECRET_KEY", "sk_test_secret")
    data = client.get("/health/payments").json()
    assert data["stripe_secret_key"] is True
    assert "sk_test_secret" not in str(data)
    assert data["download_links"] > 0
    assert data["webhook_idempotency"] is True
    assert data["rate_limit"]["enabled"] is False


def test_security_headers(client):
    res = client.get("/health")
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"
