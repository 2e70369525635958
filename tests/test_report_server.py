import pytest

from brewery_insights.core.config import Settings
from brewery_insights.jobs import report_server

RECORDS = [
    {"brewery_type": "micro", "country": "US", "state_province": "Oregon", "website_url": "https://a.example"},
    {"brewery_type": "micro", "country": "US", "state_province": "Oregon", "website_url": "https://b.example"},
    {"brewery_type": "nano", "country": "US", "state_province": "Colorado", "website_url": "https://c.example"},
    {"brewery_type": "planning", "country": "Canada", "state_province": "Ontario"},
]


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    monkeypatch.setattr(report_server, "get_settings", lambda: Settings())


@pytest.fixture
def client():
    return report_server.app.test_client()


def test_health_endpoint(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["digital_threshold"] == 0.70


def test_root(client):
    assert client.get("/").status_code == 200


def test_analysis_validates_payload(client):
    assert client.post("/analysis", json={}).status_code == 400
    assert client.post("/analysis", json={"records": "all"}).status_code == 400
    assert client.post("/analysis", json={"records": ["micro"]}).status_code == 400
    assert client.post("/analysis", data="not json", content_type="text/plain").status_code == 400


def test_analysis_returns_report(client):
    response = client.post("/analysis", json={"records": RECORDS})

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["total"] == 4
    assert data["business_models"][0]["key"] == "micro"
    assert data["digital_presence"]["website_percentage"] == 75.0


def test_empty_records_return_no_data(client):
    for path in ("/analysis", "/visualization", "/suggestions"):
        response = client.post(path, json={"records": []})
        assert response.status_code == 200
        assert response.get_json()["data"] == {"status": "no_data"}


def test_visualization_mode(client):
    response = client.post("/visualization", json={"records": RECORDS, "mode": "geographic"})

    assert response.status_code == 200
    display = response.get_json()["data"]["display"]
    assert display["mode"] == "geographic"
    assert display["visibility"] == {
        "business_model": False,
        "geographic": True,
        "digital_presence": False,
        "global_reach": True,
    }


def test_visualization_rejects_unknown_mode(client):
    response = client.post("/visualization", json={"records": RECORDS, "mode": "sales"})
    assert response.status_code == 400
    assert "unknown view mode" in response.get_json()["error"]


def test_suggestions_endpoint(client):
    records = RECORDS + [{"brewery_type": "nano"}, {"brewery_type": "nano"}]

    response = client.post("/suggestions", json={"records": records})

    data = response.get_json()["data"]
    assert [s["filter_key"] for s in data] == ["brewery_type", "state", "website"]
    assert data[2]["description"].startswith("Only 50.0% have websites")
