"""
Factor Grouper — Buckets classified factors by category and orders them for display.

``group_factors`` keeps input order inside each bucket. ``prepare_display``
applies presentation ordering: categories by fixed priority, members by level
(Critical first) then by provenance type (seed, network, psa, other).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from prism.core.categories import CATEGORY_INFO, category_sort_key, to_category
from prism.core.classifier import FactorClassifier, get_classifier
from prism.models.factor_models import (
    Category,
    CategoryGroup,
    FactorDescriptor,
    FactorType,
    GroupedFactor,
    Level,
    Severity,
)

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.ELEVATED: 2,
    Severity.OTHER: 1,
}

LEVEL_RANK: dict[Level, int] = {
    Level.CRITICAL: 4,
    Level.HIGH: 3,
    Level.ELEVATED: 2,
    Level.STANDARD: 1,
}

_RANK_TO_SEVERITY: dict[int, Severity] = {rank: sev for sev, rank in SEVERITY_RANK.items()}

TYPE_ORDER: dict[FactorType, int] = {
    FactorType.SEED: 0,
    FactorType.NETWORK: 1,
    FactorType.PSA: 2,
}
OTHER_TYPE_ORDER = 3


def severity_rank(descriptor: FactorDescriptor) -> int:
    """Rank 1-4, preferring the finer-grained level when present."""
    if descriptor.level is not None:
        return LEVEL_RANK[descriptor.level]
    return SEVERITY_RANK[descriptor.severity]


def effective_severity(descriptor: FactorDescriptor) -> Severity:
    return _RANK_TO_SEVERITY[severity_rank(descriptor)]


def highest_severity(members: Iterable[GroupedFactor]) -> Severity:
    """Most severe member of a bucket; an empty bucket is ``other``."""
    best = max((severity_rank(m.descriptor) for m in members), default=SEVERITY_RANK[Severity.OTHER])
    return _RANK_TO_SEVERITY[best]


def member_sort_key(member: GroupedFactor) -> tuple[int, int]:
    descriptor = member.descriptor
    # Critical sorts first
    return (4 - severity_rank(descriptor), TYPE_ORDER.get(descriptor.type, OTHER_TYPE_ORDER))


def group_factors(
    factor_ids: Sequence[str],
    classifier: FactorClassifier | None = None,
) -> dict[Category, list[GroupedFactor]]:
    """
    Classify and bucket factor ids by consolidated category.

    Keys are always members of the closed Category set; input order is
    preserved within each bucket. Empty input yields an empty mapping.
    """
    classifier = classifier or get_classifier()
    grouped: dict[Category, list[GroupedFactor]] = {}

    for factor_id in factor_ids:
        descriptor = classifier.classify(factor_id)
        category = to_category(descriptor.category)
        grouped.setdefault(category, []).append(GroupedFactor(id=factor_id, descriptor=descriptor))

    return grouped


def sort_categories(categories: Iterable[str | Category]) -> list[str | Category]:
    return sorted(categories, key=category_sort_key)


def prepare_display(grouped: Mapping[Category, Sequence[GroupedFactor]]) -> list[CategoryGroup]:
    """Order buckets and their members for presentation."""
    groups: list[CategoryGroup] = []
    for category in sort_categories(grouped):
        members = grouped[category]
        info = CATEGORY_INFO[to_category(category)]
        groups.append(
            CategoryGroup(
                category=to_category(category),
                name=info.name,
                description=info.description,
                highest_severity=highest_severity(members),
                factors=sorted(members, key=member_sort_key),
            )
        )
    return groups


def level_counts(
    factor_ids: Iterable[str],
    classifier: FactorClassifier | None = None,
) -> dict[str, int]:
    """Count factors per effective severity, for summary badges."""
    classifier = classifier or get_classifier()
    counts: dict[str, int] = {}
    for factor_id in factor_ids:
        severity = effective_severity(classifier.classify(factor_id)).value
        counts[severity] = counts.get(severity, 0) + 1
    return counts
