"""
Category Consolidation — Maps arbitrary category strings onto the closed Category set.

Synonyms of sanctions are merged into it; anything unrecognised lands in
``relevant``. Every consumer goes through ``to_category`` so grouping and
counting agree on the same keys.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from prism.models.factor_models import Category, Severity


class CategoryInfo(NamedTuple):
    name: str
    description: str
    severity: Severity


CATEGORY_SYNONYMS: dict[str, Category] = {
    "export_controls": Category.SANCTIONS,
    "sanctions_and_export_control_lists": Category.SANCTIONS,
}

CATEGORY_INFO: dict[Category, CategoryInfo] = {
    Category.SANCTIONS: CategoryInfo(
        "Sanctions & Export Controls",
        "Government sanctions, export controls and trade restrictions",
        Severity.CRITICAL,
    ),
    Category.POLITICAL_EXPOSURE: CategoryInfo(
        "Political Exposure",
        "Political figures and their associates",
        Severity.HIGH,
    ),
    Category.REGULATORY_ACTION: CategoryInfo(
        "Regulatory Action",
        "Regulatory enforcement actions and violations",
        Severity.ELEVATED,
    ),
    Category.FORCED_LABOR: CategoryInfo(
        "Forced Labor & Human Rights",
        "Forced labor and human rights violations",
        Severity.ELEVATED,
    ),
    Category.ENVIRONMENTAL_RISK: CategoryInfo(
        "Environmental Risk",
        "Environmental violations and sustainability risks",
        Severity.ELEVATED,
    ),
    Category.ADVERSE_MEDIA: CategoryInfo(
        "Adverse Media",
        "Adverse media coverage and reports",
        Severity.ELEVATED,
    ),
    Category.RELEVANT: CategoryInfo(
        "Relevant",
        "Additional relevant risk indicators",
        Severity.ELEVATED,
    ),
}

# Display priority; lower sorts first
CATEGORY_ORDER: dict[Category, int] = {
    Category.SANCTIONS: 0,
    Category.POLITICAL_EXPOSURE: 1,
    Category.REGULATORY_ACTION: 2,
    Category.FORCED_LABOR: 3,
    Category.ENVIRONMENTAL_RISK: 4,
    Category.ADVERSE_MEDIA: 5,
    Category.RELEVANT: 6,
}
UNKNOWN_CATEGORY_ORDER = 999

_BY_VALUE: dict[str, Category] = {c.value: c for c in Category}


def to_category(raw: Any) -> Category:
    """Resolve any category value to a member of the closed set."""
    if isinstance(raw, Category):
        return raw
    if not isinstance(raw, str) or not raw:
        return Category.RELEVANT
    key = raw.strip().lower()
    if key in CATEGORY_SYNONYMS:
        return CATEGORY_SYNONYMS[key]
    return _BY_VALUE.get(key, Category.RELEVANT)


def category_sort_key(category: Any) -> int:
    """Priority of a category key; unrecognised keys sort last."""
    if isinstance(category, Category):
        return CATEGORY_ORDER[category]
    if not isinstance(category, str):
        return UNKNOWN_CATEGORY_ORDER
    member = _BY_VALUE.get(category)
    if member is None:
        synonym = CATEGORY_SYNONYMS.get(category)
        return CATEGORY_ORDER[synonym] if synonym else UNKNOWN_CATEGORY_ORDER
    return CATEGORY_ORDER[member]
