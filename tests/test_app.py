import time

import pytest
from fastapi.testclient import TestClient

from bandquote.config_store import ConfigStore, get_store
from bandquote.main import app

from conftest import make_item, make_request


@pytest.fixture
def client(store):
	app.dependency_overrides[get_store] = lambda: store
	yield TestClient(app)
	app.dependency_overrides.clear()


def test_quote(client):
	resp = client.post("/quote", json=make_request())
	assert resp.status_code == 200
	data = resp.json()
	assert data["currency"] == "JPY"
	assert data["needsReview"] is False
	assert data["errors"] == []
	assert data["etaDays"] == [6, 9]
	assert data["subtotal"] == 3200.0
	assert data["total"] == 6148.0


def test_quote_in_usd(client):
	resp = client.post("/quote", json=make_request(currency="USD"))
	assert resp.status_code == 200
	data = resp.json()
	assert data["currency"] == "USD"
	assert data["total"] == 39.35


def test_quote_needs_review(client):
	resp = client.post("/quote", json=make_request(make_item(messageText="Shitty Band")))
	assert resp.status_code == 200
	assert resp.json()["needsReview"] is True


def test_empty_items_is_bad_request(client):
	resp = client.post("/quote", json={"items": [], "shipTo": {"country": "US"}})
	assert resp.status_code == 400
	data = resp.json()
	assert data["message"] == "No item provided"
	assert data["needsReview"] is False
	assert data["errors"][0]["field"] == "items"


def test_malformed_json_is_bad_request(client):
	resp = client.post("/quote", content=b"{not json", headers={"content-type": "application/json"})
	assert resp.status_code == 400
	data = resp.json()
	assert set(data) == {"message", "errors", "needsReview"}
	assert data["needsReview"] is False
	assert data["errors"][0]["field"].startswith("body")


def test_missing_body_is_bad_request(client):
	resp = client.post("/quote")
	assert resp.status_code == 400
	assert resp.json()["needsReview"] is False


def test_lowercase_currency_accepted(client):
	resp = client.post("/quote", json=make_request(currency="usd"))
	assert resp.status_code == 200
	assert resp.json()["currency"] == "USD"


def test_field_issues_in_response(client):
	resp = client.post("/quote", json=make_request(make_item(qty=0)))
	assert resp.status_code == 400
	assert resp.json()["errors"][0]["field"] == "items.0.qty"


def test_config_failure_is_internal_error(data_dir):
	(data_dir / "pricing.yaml").unlink()
	app.dependency_overrides[get_store] = lambda: ConfigStore(data_dir)
	try:
		client = TestClient(app, raise_server_exceptions=False)
		resp = client.post("/quote", json=make_request())
	finally:
		app.dependency_overrides.clear()
	assert resp.status_code == 500
	assert resp.json() == {"message": "Internal Server Error", "needsReview": False}


def test_get_pricing(client):
	resp = client.get("/pricing", params={"currency": "usd"})
	assert resp.status_code == 200
	data = resp.json()
	assert data["currency"] == "USD"
	assert "JPY" in data["currencies"]
	assert data["tiers"][0] == {"min": 1, "max": 9, "unit": 2.56}
	assert data["options"]["keyring"] == 0.51


def test_get_pricing_unknown_currency(client):
	resp = client.get("/pricing", params={"currency": "CHF"})
	assert resp.status_code == 400
	data = resp.json()
	assert data["needsReview"] is False
	assert data["errors"][0]["field"] == "currency"


@pytest.mark.parametrize("locale, currency", [("en-US", "USD"), ("ja", "JPY"), ("fr", "JPY")])
def test_get_pricing_by_locale(client, locale, currency):
	resp = client.get("/pricing", params={"locale": locale})
	assert resp.status_code == 200
	assert resp.json()["currency"] == currency


def test_get_pricing_currency_wins_over_locale(client):
	resp = client.get("/pricing", params={"locale": "ja", "currency": "eur"})
	assert resp.json()["currency"] == "EUR"


def test_get_colors(client):
	resp = client.get("/colors")
	assert resp.status_code == 200
	data = resp.json()
	assert {c["id"] for c in data["body"]} >= {"black", "white", "navy"}
	assert {"body": "white", "text": "white"} in data["rules"]["incompat"]


def test_get_eta(client):
	resp = client.get("/eta/us")
	assert resp.status_code == 200
	assert resp.json() == {"country": "US", "etaDays": [6, 9]}
	assert client.get("/eta/ZZ").json()["etaDays"] == [8, 13]


def test_latency_under_200ms(client):
	client.post("/quote", json=make_request())
	start = time.perf_counter()
	resp = client.post("/quote", json=make_request())
	elapsed_ms = (time.perf_counter() - start) * 1000
	assert resp.status_code == 200
	assert elapsed_ms < 200
