"""
Factor Classifier — Resolves a raw factor id to a FactorDescriptor.

Resolution order, first hit wins:
    1. canonical reference table (authoritative)
    2. curated fallback table (legacy/alternate ids)
    3. heuristic inference from the id's naming convention (always succeeds)

Every descriptor's category is consolidated onto the closed Category set,
so ``classify`` is total and its output is always groupable.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from prism.cache.classification_cache import ClassificationCache
from prism.config import settings
from prism.core.categories import to_category
from prism.core.curated_factors import CURATED_FACTORS
from prism.core.heuristics import HEURISTIC_RULES, HeuristicRule, humanize_factor_id, infer_descriptor
from prism.core.reference_data import get_reference_table, normalize_level
from prism.models.factor_models import (
    LEVEL_TO_SEVERITY,
    DescriptorSource,
    FactorDescriptor,
    FactorType,
    ReferenceFactor,
    Severity,
)

logger = logging.getLogger("prism.classifier")

_FACTOR_TYPES: dict[str, FactorType] = {t.value: t for t in FactorType}


def _to_factor_type(raw: str | None) -> FactorType | None:
    if not raw:
        return None
    return _FACTOR_TYPES.get(raw.strip().lower(), FactorType.UNKNOWN)


def _from_reference(factor_id: str, entry: ReferenceFactor) -> FactorDescriptor:
    return FactorDescriptor(
        label=entry.name.strip() or humanize_factor_id(factor_id),
        category=to_category(entry.category),
        severity=LEVEL_TO_SEVERITY[entry.level],
        level=entry.level,
        description=entry.description or None,
        type=_to_factor_type(entry.type),
        source=DescriptorSource.REFERENCE,
    )


def _from_curated(factor_id: str, entry: dict[str, str]) -> FactorDescriptor:
    level = normalize_level(entry["level"]) if entry.get("level") else None
    return FactorDescriptor(
        label=entry.get("label") or humanize_factor_id(factor_id),
        category=to_category(entry.get("category")),
        severity=Severity(entry.get("severity", Severity.OTHER.value)),
        level=level,
        description=entry.get("description"),
        type=_to_factor_type(entry.get("type")),
        source=DescriptorSource.CURATED,
    )


class FactorClassifier:
    """
    Three-tier factor classifier.

    Tables are injected for tests; by default the packaged reference table and
    the curated table are used.
    """

    def __init__(
        self,
        reference: dict[str, ReferenceFactor] | None = None,
        curated: dict[str, dict[str, str]] | None = None,
        rules: tuple[HeuristicRule, ...] = HEURISTIC_RULES,
        cache: ClassificationCache | None = None,
    ) -> None:
        self.reference = get_reference_table() if reference is None else reference
        self.curated = CURATED_FACTORS if curated is None else curated
        self.rules = rules
        self.cache = cache

    def classify(self, factor_id: str) -> FactorDescriptor:
        """Classify one factor id. Never raises for a string input."""
        if self.cache is not None:
            cached = self.cache.get(factor_id)
            if cached is not None:
                return cached

        descriptor = self._resolve(factor_id)

        if self.cache is not None:
            self.cache.put(factor_id, descriptor)
        return descriptor

    def classify_many(self, factor_ids: Iterable[str]) -> list[FactorDescriptor]:
        return [self.classify(factor_id) for factor_id in factor_ids]

    def _resolve(self, factor_id: str) -> FactorDescriptor:
        entry = self.reference.get(factor_id)
        if entry is not None:
            return _from_reference(factor_id, entry)

        curated = self.curated.get(factor_id)
        if curated is not None:
            return _from_curated(factor_id, curated)

        logger.debug(f"No table entry for {factor_id!r}, inferring from id")
        return infer_descriptor(factor_id, self.rules)


@lru_cache
def get_classifier() -> FactorClassifier:
    """Shared classifier singleton."""
    cache = (
        ClassificationCache(settings.classification_cache_size)
        if settings.classification_cache_enabled
        else None
    )
    return FactorClassifier(cache=cache)


def classify(factor_id: str) -> FactorDescriptor:
    """Classify a factor id with the shared classifier."""
    return get_classifier().classify(factor_id)
