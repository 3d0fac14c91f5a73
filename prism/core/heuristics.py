"""
Heuristic Inference — Last-resort classification from factor id naming conventions.

Rules are evaluated in order and the first match wins. The final rule always
matches, so inference never fails. Network adjacency is checked first and is
pinned one notch below a direct hit (Elevated).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from prism.models.factor_models import (
    Category,
    DescriptorSource,
    FactorDescriptor,
    FactorType,
    Level,
    Severity,
)

UNKNOWN_LABEL = "Unknown Risk Factor"

# Categories whose heuristic hits are treated as critical
CRITICAL_CATEGORIES = frozenset({"sanctions", "export_controls", "forced_labor"})

_WORD_START = re.compile(r"\b\w")


@dataclass(frozen=True)
class HeuristicRule:
    """An id predicate and the descriptor fields it implies."""

    rule_id: str
    matches: Callable[[str], bool]
    category: Category
    type: FactorType | None = None
    adjacent: bool = False

    def produce(self, factor_id: str) -> FactorDescriptor:
        if self.adjacent:
            severity, level = Severity.ELEVATED, Level.ELEVATED
        else:
            severity, level = severity_for_category(self.category), None
        return FactorDescriptor(
            label=humanize_factor_id(factor_id),
            category=self.category,
            severity=severity,
            level=level,
            type=self.type,
            source=DescriptorSource.HEURISTIC,
        )


def _contains(fragment: str) -> Callable[[str], bool]:
    return lambda factor_id: fragment in factor_id


def _starts_with(prefix: str) -> Callable[[str], bool]:
    return lambda factor_id: factor_id.startswith(prefix)


FALLBACK_RULE = HeuristicRule("fallback", lambda factor_id: True, Category.RELEVANT)

HEURISTIC_RULES: tuple[HeuristicRule, ...] = (
    HeuristicRule("network_adjacent", _contains("_adjacent"), Category.SANCTIONS, FactorType.NETWORK, adjacent=True),
    HeuristicRule("psa_prefix", _starts_with("psa_"), Category.SANCTIONS, FactorType.PSA),
    HeuristicRule("seed_prefix", _starts_with("seed_"), Category.REGULATORY_ACTION, FactorType.SEED),
    HeuristicRule("sanction_keyword", _contains("sanction"), Category.SANCTIONS),
    HeuristicRule("pep_keyword", _contains("pep"), Category.POLITICAL_EXPOSURE),
    HeuristicRule("adverse_media_keyword", _contains("adverse_media"), Category.ADVERSE_MEDIA),
    HeuristicRule("regulatory_keyword", _contains("regulatory"), Category.REGULATORY_ACTION),
    HeuristicRule("environmental_keyword", _contains("environmental"), Category.ENVIRONMENTAL_RISK),
    HeuristicRule("forced_labor_keyword", _contains("forced_labor"), Category.FORCED_LABOR),
    FALLBACK_RULE,
)


def severity_for_category(category: Category | str) -> Severity:
    value = category.value if isinstance(category, Category) else category
    if value in CRITICAL_CATEGORIES:
        return Severity.CRITICAL
    if value == Category.POLITICAL_EXPOSURE.value:
        return Severity.HIGH
    return Severity.OTHER


def humanize_factor_id(factor_id: str) -> str:
    """'ofac_sdn_adjacent' -> 'Ofac Sdn Adjacent'."""
    label = _WORD_START.sub(lambda m: m.group(0).upper(), factor_id.replace("_", " ")).strip()
    return label or UNKNOWN_LABEL


def match_rule(
    factor_id: str,
    rules: tuple[HeuristicRule, ...] = HEURISTIC_RULES,
) -> HeuristicRule:
    """First rule whose predicate accepts the id."""
    for rule in rules:
        if rule.matches(factor_id):
            return rule
    return FALLBACK_RULE


def infer_descriptor(
    factor_id: str,
    rules: tuple[HeuristicRule, ...] = HEURISTIC_RULES,
) -> FactorDescriptor:
    return match_rule(factor_id, rules).produce(factor_id)
