import pytest

from storefront.emails import EmailSendError

WEBHOOK_URL = "/api/webhooks/stripe"


def _completed_event(event_id="evt_1", email="fan@example.com"):
    details = {"email": email} if email else {"email": None}
    return {
        "id": event_id,
        "object": "event",
        "type": "checkout.session.completed",
        "data": {"object": {"id": "cs_test_1", "object": "checkout.session", "customer_details": details}},
    }


@pytest.fixture(autouse=True)
def _webhook_env(webhook_secret, use_registry, event_store):
    return webhook_secret


@pytest.fixture
def post_event(client, webhook_secret, sign_event):
    def _post(event, secret=webhook_secret):
        payload, header = sign_event(event, secret=secret)
        return client.post(
            WEBHOOK_URL,
            content=payload,
            headers={"stripe-signature": header, "content-type": "application/json"},
        )
    return _post


@pytest.fixture
def purchased(monkeypatch):
    items = []
    monkeypatch.setattr("storefront.payments.service.stripe_client.list_line_items", lambda sid: list(items))
    return items


def test_invalid_signature_rejected_without_email(sent_emails, purchased, post_event):
    purchased.append({"description": "BLOOD MONEY"})
    res = post_event(_completed_event(), secret="whsec_wrong")
    assert res.status_code == 400
    assert res.json() == {"error": "Webhook verification failed"}
    assert sent_emails == []


def test_missing_signature_header_rejected(client, sent_emails):
    res = client.post(WEBHOOK_URL, json=_completed_event())
    assert res.status_code == 400
    assert sent_emails == []


def test_matching_item_sends_one_email(sent_emails, purchased, post_event):
    purchased.extend([{"description": "blood money"}, {"description": "DEALER TEE — M"}])
    res = post_event(_completed_event())
    assert res.status_code == 200
    assert res.json() == {"received": True}
    assert len(sent_emails) == 1
    assert sent_emails[0]["to"] == "fan@example.com"
    assert "https://dl.test/blood-money.zip" in sent_emails[0]["html"]


def test_stable_id_resolves_renamed_product(sent_emails, purchased, post_event):
    purchased.append({
        "description": "Inferno Kit (2026 edition)",
        "price": {"product": {"id": "prod_1", "metadata": {"internal_id": "dk-001", "type": "Drumkit"}}},
    })
    assert post_event(_completed_event()).status_code == 200
    assert len(sent_emails) == 1
    assert "https://dl.test/inferno.zip" in sent_emails[0]["html"]


def test_no_match_sends_nothing(sent_emails, purchased, post_event):
    purchased.append({"description": "HIGH ROLLER CAP"})
    res = post_event(_completed_event())
    assert res.status_code == 200
    assert res.json() == {"received": True}
    assert sent_emails == []


def test_missing_email_acknowledged(sent_emails, purchased, post_event):
    purchased.append({"description": "BLOOD MONEY"})
    res = post_event(_completed_event(email=None))
    assert res.status_code == 200
    assert sent_emails == []


def test_other_event_types_ignored(sent_emails, purchased, post_event):
    purchased.append({"description": "BLOOD MONEY"})
    event = _completed_event()
    event["type"] = "payment_intent.succeeded"
    res = post_event(event)
    assert res.status_code == 200
    assert res.json() == {"received": True}
    assert sent_emails == []


def test_redelivered_event_is_noop(sent_emails, purchased, post_event):
    purchased.append({"description": "BLOOD MONEY"})
    assert post_event(_completed_event("evt_dup")).status_code == 200
    assert post_event(_completed_event("evt_dup")).status_code == 200
    assert len(sent_emails) == 1


def test_email_failure_returns_500_and_allows_redelivery(monkeypatch, purchased, post_event):
    purchased.append({"description": "BLOOD MONEY"})
    attempts = []
    def _flaky_send(**kwargs):
        attempts.append(kwargs)
        if len(attempts) == 1:
            raise EmailSendError("Resend HTTP 503")
        return {"id": "email_ok"}
    monkeypatch.setattr("storefront.emails.send_email", _flaky_send)

    assert post_event(_completed_event("evt_retry")).status_code == 500
    assert post_event(_completed_event("evt_retry")).status_code == 200
    assert len(attempts) == 2
