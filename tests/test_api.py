"""
Tests for FastAPI surface — lookup, classification, profiles and scoring routes.
"""

import pytest
from fastapi.testclient import TestClient

from prism.api.dependencies import get_audit_logger, get_profile_store
from prism.audit.logger import AuditLogger
from prism.main import app
from prism.profiles.store import ProfileStore

client = TestClient(app)


@pytest.fixture(autouse=True)
def isolated_store(profiles_dir, tmp_path):
    """Point every route at the temporary profiles directory."""
    audit = AuditLogger(log_path=str(tmp_path / "audit.jsonl"), enabled=True)
    app.dependency_overrides[get_profile_store] = lambda: ProfileStore(profiles_dir)
    app.dependency_overrides[get_audit_logger] = lambda: audit
    yield audit
    app.dependency_overrides.clear()


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["reference_factors"] > 0


def test_lookup_single_factor():
    data = client.get("/risk-factors", params={"id": "pep"}).json()
    assert data["success"] is True
    assert data["data"]["name"] == "Politically Exposed Person"


def test_lookup_unknown_factor_is_null():
    assert client.get("/risk-factors", params={"id": "nope"}).json()["data"] is None


def test_lookup_many_factors():
    data = client.get("/risk-factors", params={"ids": "pep, sanctioned,nope"}).json()["data"]
    assert set(data) == {"pep", "sanctioned"}


def test_search_factors():
    data = client.get("/risk-factors", params={"q": "uflpa"}).json()["data"]
    assert "forced_labor_xinjiang_uflpa" in data
    assert "pep" not in data


def test_classify_endpoint():
    response = client.post("/risk-factors/classify", json={"ids": ["ofac_sdn_adjacent", "totally_unknown_xyz_123"]})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["ofac_sdn_adjacent"]["category"] == "sanctions"
    assert data["ofac_sdn_adjacent"]["level"] == "Elevated"
    assert data["totally_unknown_xyz_123"]["category"] == "relevant"
    assert data["totally_unknown_xyz_123"]["label"] == "Totally Unknown Xyz 123"


def test_group_endpoint():
    data = client.post("/risk-factors/group", json={"ids": ["pep", "sanctioned"]}).json()
    assert [g["category"] for g in data["categories"]] == ["sanctions", "political_exposure"]
    assert data["level_counts"] == {"high": 1, "critical": 1}
    assert data["has_risk"] is True


def test_list_profiles():
    data = client.get("/risk-profiles").json()
    assert [p["id"] for p in data] == ["standard", "custom"]


def test_get_default_profile():
    data = client.get("/risk-profiles/default").json()
    assert data["profile"]["id"] == "standard"


def test_multiple_defaults_is_conflict(write_profile):
    write_profile("other", {"name": "Other", "is_default": True})
    assert client.get("/risk-profiles/default").status_code == 409
    assert client.post("/score", json={"factor_ids": ["pep"]}).status_code == 409


def test_validate_profiles():
    data = client.get("/risk-profiles/validate").json()
    assert data["validation"]["is_valid"] is True


def test_set_default_profile():
    response = client.post("/risk-profiles/set-default", json={"profile_id": "custom"})
    assert response.status_code == 200
    assert response.json()["profileId"] == "custom"
    assert client.get("/risk-profiles/default").json()["profile"]["id"] == "custom"


def test_set_default_missing_profile():
    response = client.post("/risk-profiles/set-default", json={"profile_id": "missing"})
    assert response.status_code == 404


def test_set_default_requires_profile_id():
    assert client.post("/risk-profiles/set-default", json={}).status_code == 422


def test_get_and_download_profile():
    assert client.get("/risk-profiles/custom").json()["name"] == "Custom"
    response = client.get("/risk-profiles/standard/download")
    assert response.status_code == 200
    assert "name: Standard" in response.text
    assert client.get("/risk-profiles/missing/download").status_code == 404


def test_score_against_default_profile(isolated_store):
    response = client.post("/score", json={"factor_ids": ["ofac_sdn_sanctioned", "pep", "cpi_score"]})
    assert response.status_code == 200
    data = response.json()
    assert data["profile_id"] == "standard"
    assert data["score"]["total_score"] == 13
    assert data["score"]["meets_threshold"] is True
    assert data["risk_level"] == "critical"

    entry = isolated_store.read_recent(1)[0]
    assert entry["profile_id"] == "standard"
    assert entry["factors_evaluated"] == 3
    assert entry["factors_scored"] == 2


def test_score_with_scoring_disabled_profile():
    data = client.post("/score", json={"factor_ids": ["pep"], "profile_id": "custom"}).json()
    assert data["score"] == {
        "total_score": 0,
        "triggered_risk_factors": [],
        "meets_threshold": False,
        "threshold": 0,
    }
    assert data["risk_level"] == "low"


def test_score_unknown_profile():
    assert client.post("/score", json={"factor_ids": ["pep"], "profile_id": "missing"}).status_code == 404


def test_assess_entity():
    response = client.post("/assess", json={
        "risk_factors": [{"id": "sanctioned_adjacent"}, {"id": "cpi_score"}],
        "matches": [{"id": "m1", "risk_factors": [{"id": "pep"}]}],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["factor_ids"] == ["sanctioned_adjacent", "pep"]
    assert data["score"]["total_score"] == 5
    assert data["risk_level"] == "high"
    assert [g["category"] for g in data["categories"]] == ["sanctions", "political_exposure"]


def test_set_default_unreadable_profile_is_conflict(profiles_dir):
    (profiles_dir / "custom.yaml").write_text("name: [unclosed")
    response = client.post("/risk-profiles/set-default", json={"profile_id": "custom"})
    assert response.status_code == 409
    assert client.get("/risk-profiles/default").json()["profile"]["id"] == "standard"


def test_create_profile(profiles_dir):
    body = "name: Analyst View\nenabled_factors:\n- pep\nrisk_scores:\n  pep: 2\n"
    response = client.post("/risk-profiles", json={"id": "Analyst View", "yaml": body})
    assert response.status_code == 200
    assert response.json() == {"success": True, "id": "Analyst-View"}

    profile = client.get("/risk-profiles/Analyst-View").json()
    assert profile["name"] == "Analyst View"
    assert profile["created_by"] == "user"
    assert (profiles_dir / "Analyst-View.yaml").exists()


def test_create_profile_rejects_bad_input():
    assert client.post("/risk-profiles", json={"id": "!!!", "yaml": "name: X\n"}).status_code == 400
    assert client.post("/risk-profiles", json={"id": "x", "yaml": "name: [unclosed"}).status_code == 400
    assert client.post("/risk-profiles", json={"id": "x", "yaml": "- a\n- b\n"}).status_code == 400
    assert client.post("/risk-profiles", json={"id": "x", "yaml": "enabled_factors: 5\n"}).status_code == 400
    assert client.post("/risk-profiles", json={"id": "x"}).status_code == 422


def test_create_second_default_is_conflict():
    response = client.post("/risk-profiles", json={"id": "rival", "yaml": "name: Rival\nis_default: true\n"})
    assert response.status_code == 409
    assert client.get("/risk-profiles/rival").status_code == 404


def test_delete_user_profile(profiles_dir):
    response = client.delete("/risk-profiles", params={"id": "custom"})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert not (profiles_dir / "custom.yaml").exists()


def test_delete_profile_errors():
    assert client.delete("/risk-profiles", params={"id": "standard"}).status_code == 403
    assert client.delete("/risk-profiles", params={"id": "missing"}).status_code == 404
    assert client.delete("/risk-profiles", params={"id": "!!!"}).status_code == 400
    assert client.delete("/risk-profiles").status_code == 400


def test_assess_audits_factors_before_filtering(isolated_store):
    client.post("/assess", json={
        "risk_factors": [{"id": "pep"}, {"id": "cpi_score"}],
        "matches": [{"id": "m1", "risk_factors": [{"id": "pep"}, {"id": "basel_aml"}]}],
    })
    client.post("/score", json={"factor_ids": ["pep", "cpi_score", "pep", "basel_aml"]})

    assess_entry, score_entry = isolated_store.read_recent(2)
    assert assess_entry["factors_evaluated"] == 3
    assert score_entry["factors_evaluated"] == 3
    assert assess_entry["factors_scored"] == score_entry["factors_scored"] == 1
