"""
Tests for Category Consolidation — synonyms and the relevant fallback.
"""

from prism.core.categories import category_sort_key, to_category
from prism.models.factor_models import Category


def test_known_categories_resolve_to_themselves():
    for category in Category:
        assert to_category(category.value) is category


def test_sanctions_synonyms_are_merged():
    assert to_category("export_controls") is Category.SANCTIONS
    assert to_category(" Sanctions_And_Export_Control_Lists ") is Category.SANCTIONS


def test_unrecognised_categories_fall_back_to_relevant():
    assert to_category("state_ownership") is Category.RELEVANT
    assert to_category("") is Category.RELEVANT
    assert to_category(None) is Category.RELEVANT


def test_category_sort_key():
    assert category_sort_key(Category.SANCTIONS) == 0
    assert category_sort_key("export_controls") == 0
    assert category_sort_key("relevant") == 6
    assert category_sort_key("made_up") == 999


def test_non_string_categories_are_tolerated():
    assert to_category(7) is Category.RELEVANT
    assert to_category(["sanctions"]) is Category.RELEVANT
    assert category_sort_key(7) == 999
