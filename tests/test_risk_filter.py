"""
Tests for Risk Filter — flat enabled-factor membership and id extraction.
"""

from prism.core.risk_filter import extract_factor_ids, filter_by_profile
from prism.models.profile_models import RiskProfile


def _profile(enabled, **kwargs):
    return RiskProfile(id="p", enabled_factors=enabled, **kwargs)


def test_keeps_only_enabled_factors():
    assert filter_by_profile([{"id": "a"}, {"id": "b"}], _profile(["a"])) == [{"id": "a"}]


def test_no_profile_passes_everything_through():
    factors = [{"id": "a"}, {"id": "b"}, {"id": "a"}]
    assert filter_by_profile(factors, None) == factors


def test_filter_is_idempotent():
    profile = _profile(["a", "c"])
    once = filter_by_profile([{"id": "a"}, {"id": "b"}, {"id": "c"}, {"id": "a"}], profile)
    assert once == [{"id": "a"}, {"id": "c"}]
    assert filter_by_profile(once, profile) == once


def test_category_flags_are_not_consulted():
    profile = _profile(
        ["ofac_sdn_sanctioned"],
        categories={"sanctions": {"name": "Sanctions", "enabled": False}},
    )
    assert filter_by_profile([{"id": "ofac_sdn_sanctioned"}], profile) == [{"id": "ofac_sdn_sanctioned"}]


def test_empty_enabled_set_drops_everything():
    assert filter_by_profile([{"id": "a"}], _profile([])) == []


def test_objects_with_id_attribute_are_supported():
    class Hit:
        def __init__(self, id):
            self.id = id

    hits = [Hit("a"), Hit("b")]
    assert filter_by_profile(hits, _profile(["b"])) == [hits[1]]


def test_extract_factor_ids_dedupes_entity_first():
    ids = extract_factor_ids(
        [{"id": "pep"}, {"id": "sanctioned"}],
        [
            {"id": "m1", "risk_factors": [{"id": "sanctioned"}, {"id": "regulatory_action"}]},
            {"id": "m2"},
        ],
    )
    assert ids == ["pep", "sanctioned", "regulatory_action"]


def test_extract_factor_ids_handles_missing_inputs():
    assert extract_factor_ids(None, None) == []
