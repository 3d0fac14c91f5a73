"""
Tests for Heuristic Inference — rule order, labels and severities.
"""

import pytest

from prism.core.heuristics import (
    FALLBACK_RULE,
    HEURISTIC_RULES,
    humanize_factor_id,
    infer_descriptor,
    match_rule,
    severity_for_category,
)
from prism.models.factor_models import Category, FactorType, Level, Severity


@pytest.mark.parametrize("factor_id, rule_id", [
    ("psa_sanctioned_adjacent", "network_adjacent"),
    ("psa_something", "psa_prefix"),
    ("seed_watchlist", "seed_prefix"),
    ("eu_sanctioned_list", "sanction_keyword"),
    ("pep_family_member", "pep_keyword"),
    ("adverse_media_fraud", "adverse_media_keyword"),
    ("regulatory_fine", "regulatory_keyword"),
    ("environmental_violation", "environmental_keyword"),
    ("forced_labor_report", "forced_labor_keyword"),
    ("totally_unknown_xyz_123", "fallback"),
])
def test_first_matching_rule_wins(factor_id, rule_id):
    assert match_rule(factor_id).rule_id == rule_id


def test_fallback_rule_is_last():
    assert HEURISTIC_RULES[-1] is FALLBACK_RULE


def test_adjacent_is_pinned_to_elevated():
    d = infer_descriptor("pep_adjacent_x")
    assert d.category == Category.SANCTIONS
    assert d.type == FactorType.NETWORK
    assert d.severity == Severity.ELEVATED
    assert d.level == Level.ELEVATED


def test_psa_prefix_is_critical_sanctions():
    d = infer_descriptor("psa_unknown_list")
    assert d.category == Category.SANCTIONS
    assert d.type == FactorType.PSA
    assert d.severity == Severity.CRITICAL
    assert d.level is None


def test_seed_prefix_is_regulatory():
    d = infer_descriptor("seed_watchlist")
    assert d.category == Category.REGULATORY_ACTION
    assert d.type == FactorType.SEED
    assert d.severity == Severity.OTHER


def test_pep_keyword_is_high():
    assert infer_descriptor("foreign_pep").severity == Severity.HIGH


def test_severity_for_category():
    assert severity_for_category(Category.SANCTIONS) == Severity.CRITICAL
    assert severity_for_category("export_controls") == Severity.CRITICAL
    assert severity_for_category(Category.FORCED_LABOR) == Severity.CRITICAL
    assert severity_for_category(Category.POLITICAL_EXPOSURE) == Severity.HIGH
    assert severity_for_category(Category.ADVERSE_MEDIA) == Severity.OTHER


def test_humanize_factor_id():
    assert humanize_factor_id("ofac_sdn_adjacent") == "Ofac Sdn Adjacent"
    assert humanize_factor_id("totally_unknown_xyz_123") == "Totally Unknown Xyz 123"
    assert humanize_factor_id("___") == "Unknown Risk Factor"
    assert humanize_factor_id("") == "Unknown Risk Factor"
