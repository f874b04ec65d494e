import pytest
from fastapi.testclient import TestClient

from riskmap.api import main
from riskmap.storage import LocalAssessmentStorage

client = TestClient(main.app)


@pytest.fixture
def vault(tmp_path, monkeypatch):
    storage = LocalAssessmentStorage(tmp_path)
    monkeypatch.setattr(main, "storage", storage)
    return storage


def test_health_check():
    """Verify the API is alive."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_reference_listings():
    countries = client.get("/api/countries").json()
    industries = client.get("/api/industries").json()

    assert len(countries) == 22
    assert countries[0]["country"] == "Australia"
    assert {"industry": "Textiles", "risk_multiplier": 1.6}.items() <= industries[-1].items()


def test_country_and_industry_detail():
    assert client.get("/api/country/DE").json()["country"] == "Germany"
    assert client.get("/api/industry/mining").json()["risk_multiplier"] == 1.5
    assert client.get("/api/country/Atlantis").status_code == 404
    assert client.get("/api/industry/Piracy").status_code == 404


def test_calculate_risk_simple_mode(vault):
    """Hyphenated strategy keys from the form are accepted."""
    payload = {
        "industry": "Manufacturing",
        "countries": ["Germany", "China"],
        "hrdd_strategies": {"continuous-monitoring": 100},
    }

    response = client.post("/api/calculate-risk", json=payload)
    assert response.status_code == 200

    data = response.json()
    # 15 x 1.2 x 0.65 -> 12, 65 x 1.2 x 0.65 -> 51, mean 31.5 -> 32
    assert [cr["risk"] for cr in data["country_risks"]] == [12, 51]
    assert data["overall_risk"] == 32
    assert data["risk_level"] == "Low"
    assert data["mode"] == "simple"
    assert data["hrdd_data"]["dominant_strategy"] == "continuous_monitoring"
    assert data["assessment_id"]


def test_calculate_risk_activity_weighted(vault):
    payload = {
        "industry": "Textiles",
        "countries": ["Bangladesh", "Vietnam"],
        "activity_volumes": {"Bangladesh": 75, "Vietnam": 25},
    }

    data = client.post("/api/calculate-risk", json=payload).json()

    # 82 x 1.6 -> 100 (clamped), 55 x 1.6 = 88
    assert data["mode"] == "activity_weighted"
    assert data["total_activity"] == 100
    assert data["overall_risk"] == 97
    assert data["country_risks"][0]["weight"] == 75


def test_unknown_countries_rejected():
    payload = {"industry": "Manufacturing", "countries": ["Germany", "Atlantis"]}

    response = client.post("/api/calculate-risk", json=payload)
    assert response.status_code == 400
    assert response.json()["reason"] == "missing_countries"
    assert response.json()["missing"] == ["Atlantis"]


def test_coverage_must_total_100():
    payload = {
        "industry": "Manufacturing",
        "countries": ["Germany"],
        "hrdd_strategies": {"continuous_monitoring": 50, "self_assessment": 45},
    }

    response = client.post("/api/calculate-risk", json=payload)
    assert response.status_code == 400
    assert response.json()["reason"] == "coverage_not_100"


def test_unknown_strategy_rejected():
    payload = {
        "industry": "Manufacturing",
        "countries": ["Germany"],
        "hrdd_strategies": {"bribery": 100},
    }

    response = client.post("/api/calculate-risk", json=payload)
    assert response.status_code == 400
    assert response.json()["reason"] == "unknown_strategy"


def test_infinite_activity_volume_rejected():
    body = (
        '{"industry": "Manufacturing", "countries": ["Germany"], '
        '"activity_volumes": {"Germany": Infinity}}'
    )

    response = client.post(
        "/api/calculate-risk",
        content=body,
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["reason"] == "invalid_activity"


def test_unknown_effectiveness_key_rejected():
    payload = {
        "industry": "Manufacturing",
        "countries": ["Germany"],
        "hrdd_strategies": {"continuous-monitoring": 100},
        "hrdd_effectiveness": {"bogus": 50},
    }

    response = client.post("/api/calculate-risk", json=payload)
    assert response.status_code == 400
    assert response.json()["reason"] == "unknown_strategy"


def test_empty_request_rejected():
    response = client.post("/api/calculate-risk", json={})
    assert response.status_code == 400
    assert response.json()["reason"] == "empty_country_list"


def test_stored_assessment_can_be_fetched(vault):
    created = client.post(
        "/api/calculate-risk",
        json={
            "industry": "Agriculture",
            "countries": ["India"],
            "activity_volumes": {"India": 40},
        },
    ).json()

    record = client.get(f"/api/assessment/{created['assessment_id']}").json()
    assert record["overall_risk_score"] == created["overall_risk"]
    assert record["activity_data"] == {"India": 40}

    recent = client.get("/api/assessments/recent?limit=5").json()
    assert recent[0]["assessment_id"] == created["assessment_id"]
    assert "activity_data" not in recent[0]


def test_missing_assessment(vault):
    assert client.get("/api/assessment/does-not-exist").status_code == 404


def test_storage_failure_still_returns_score(monkeypatch):
    class BrokenStorage:
        def commit_record(self, record):
            raise OSError("disk full")

    monkeypatch.setattr(main, "storage", BrokenStorage())

    response = client.post(
        "/api/calculate-risk",
        json={"industry": "Finance", "countries": ["Japan"]},
    )
    assert response.status_code == 200
    assert response.json()["overall_risk"] == 14
    assert response.json()["assessment_id"] is None
