"""
Test fixtures shared across all Prism tests.
"""

import pytest
import yaml

from prism.core.classifier import FactorClassifier
from prism.models.profile_models import RiskProfile
from prism.profiles.store import ProfileStore


@pytest.fixture
def scoring_profile():
    """Profile with scoring on, threshold 5, two weighted factors."""
    return RiskProfile(
        id="scoring",
        name="Scoring",
        is_default=True,
        enabled_factors=["ofac_sdn_sanctioned", "pep", "unlisted_factor"],
        risk_scoring_enabled=True,
        risk_threshold=5,
        risk_scores={"ofac_sdn_sanctioned": 10, "pep": 3},
    )


@pytest.fixture
def classifier():
    """Classifier over the packaged tables, without a cache."""
    return FactorClassifier()


def _write_profile(directory, profile_id, data):
    path = directory / f"{profile_id}.yaml"
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


@pytest.fixture
def write_profile(tmp_path):
    """Write a raw profile mapping into the temporary profiles directory."""
    def _write(profile_id, data):
        return _write_profile(tmp_path, profile_id, data)
    return _write


@pytest.fixture
def profiles_dir(tmp_path):
    """A profiles directory with one default and one secondary profile."""
    _write_profile(tmp_path, "standard", {
        "name": "Standard",
        "description": "Baseline profile",
        "created_by": "system",
        "is_default": True,
        "risk_scoring_enabled": True,
        "risk_threshold": 5,
        "enabled_factors": ["ofac_sdn_sanctioned", "pep", "sanctioned_adjacent"],
        "risk_scores": {"ofac_sdn_sanctioned": 10, "pep": 3, "sanctioned_adjacent": 2},
    })
    _write_profile(tmp_path, "custom", {
        "name": "Custom",
        "description": "User profile",
        "created_by": "analyst",
        "is_default": False,
        "risk_scoring_enabled": False,
        "enabled_factors": ["pep"],
        "risk_scores": {"pep": 4},
    })
    return tmp_path


@pytest.fixture
def store(profiles_dir):
    return ProfileStore(profiles_dir)
