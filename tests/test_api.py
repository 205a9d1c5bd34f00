import pytest
from fastapi.testclient import TestClient

from app.main import create_app


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


def test_health(client):
    body = client.get("/health").json()
    assert body == {"ok": True, "mids": 4, "active": 3}


def test_route_best_match(client):
    res = client.post("/card/routes", json={"business_id": "biz_retail_us", "country": "US", "currency": "USD"})
    assert res.status_code == 200
    body = res.json()
    assert body["mid"]["id"] == "mid-us-adyen-01"
    assert body["mode"] == "SIMPLE"
    assert {r["mid_id"] for r in body["rejected"]} == {"mid-us-stripe-legacy", "mid-sg-dbs-01"}


def test_route_split_mode(client):
    res = client.post("/card/routes", json={"business_id": "biz_retail_us", "country": "US", "currency": "USD", "mode": "SPLIT"})
    assert res.status_code == 200
    assert res.json()["mid"]["id"] in {"mid-us-adyen-01", "mid-us-worldpay-01"}


def test_route_unknown_merchant(client):
    res = client.post("/card/routes", json={"business_id": "biz_x", "country": "US", "currency": "USD"})
    assert res.status_code == 404


def test_route_no_eligible_mid(client):
    res = client.post("/card/routes", json={"business_id": "biz_cafe_sg", "country": "SG", "currency": "SGD"})
    assert res.status_code == 404
    assert res.json()["detail"] == "No active routes found matching the criteria"


def test_route_blank_country(client):
    res = client.post("/card/routes", json={"business_id": "biz_retail_us", "country": "", "currency": "USD"})
    assert res.status_code == 400


def test_idempotent_replay(client):
    payload = {"business_id": "biz_retail_us", "country": "US", "currency": "USD", "mode": "SPLIT", "idempotency_key": "k1"}
    first = client.post("/card/routes", json=payload).json()
    for _ in range(5):
        assert client.post("/card/routes", json=payload).json() == first


def test_toggle_status(client):
    res = client.patch("/admin/mid-settings", json={"mid_id": "mid-us-adyen-01", "status": "INACTIVE"})
    assert res.status_code == 200
    assert res.json()["status"] == "INACTIVE"

    res = client.post("/card/routes", json={"business_id": "biz_retail_us", "country": "US", "currency": "USD"})
    assert res.json()["mid"]["id"] == "mid-us-worldpay-01"


def test_toggle_status_errors(client):
    assert client.patch("/admin/mid-settings", json={"mid_id": "mid-us-adyen-01"}).status_code == 400
    assert client.patch("/admin/mid-settings", json={"mid_id": "mid-us-adyen-01", "status": "Active"}).status_code == 400
    assert client.patch("/admin/mid-settings", json={"mid_id": "ghost", "status": "ACTIVE"}).status_code == 404


def test_reload_picks_up_file_changes(client, settings):
    path = settings.routing_weights_path
    path.write_text(path.read_text().replace('"weight": 70', '"weight": 10'))
    assert client.post("/admin/reload").status_code == 200

    res = client.post("/card/routes", json={"business_id": "biz_retail_us", "country": "US", "currency": "USD"})
    assert res.json()["mid"]["id"] == "mid-us-worldpay-01"


def test_list_mids(client):
    mids = client.get("/admin/mids").json()["mids"]
    assert [m["id"] for m in mids] == ["mid-us-adyen-01", "mid-us-worldpay-01", "mid-us-stripe-legacy", "mid-sg-dbs-01"]
    assert mids[2]["status"] == "INACTIVE"


def test_reused_key_for_other_payment(client):
    us = {"business_id": "biz_retail_us", "country": "US", "currency": "USD", "idempotency_key": "k"}
    sg = {"business_id": "biz_cafe_sg", "country": "SG", "currency": "SGD", "idempotency_key": "k"}
    assert client.post("/card/routes", json=us).status_code == 200

    res = client.post("/card/routes", json=sg)
    assert res.status_code == 422

    res = client.post("/card/routes", json={**sg, "idempotency_key": "k2"})
    assert res.status_code == 404


def test_same_key_other_mode_conflicts(client):
    payload = {"business_id": "biz_retail_us", "country": "US", "currency": "USD", "idempotency_key": "k"}
    assert client.post("/card/routes", json=payload).status_code == 200
    assert client.post("/card/routes", json={**payload, "mode": "SPLIT"}).status_code == 422
    assert client.post("/card/routes", json={**payload, "mode": "SIMPLE"}).status_code == 200
