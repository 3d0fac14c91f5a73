"""
Risk Filter — Restricts screening hits to the factors a profile enables.

Inclusion is flat id membership in ``enabled_factors``. Category-level
``enabled`` flags on the profile are descriptive only and are not consulted.
With no profile, every factor passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from prism.models.profile_models import RiskProfile

F = TypeVar("F")


def factor_id_of(factor: Any) -> str | None:
    """Id of a ``{"id": ...}`` mapping or an object with an ``id`` attribute."""
    if isinstance(factor, Mapping):
        value = factor.get("id")
    else:
        value = getattr(factor, "id", None)
    return value if isinstance(value, str) else None


def filter_by_profile(factors: Sequence[F], profile: RiskProfile | None) -> list[F]:
    """
    Keep only factors enabled by ``profile``.

    ``profile=None`` returns every factor in input order, duplicates
    included. Otherwise the result is deduplicated by id, first occurrence
    kept, so applying the filter twice changes nothing.
    """
    if profile is None:
        return list(factors)

    enabled = profile.enabled_factors
    seen: set[str] = set()
    kept: list[F] = []
    for factor in factors:
        factor_id = factor_id_of(factor)
        if factor_id is None or factor_id in seen or factor_id not in enabled:
            continue
        seen.add(factor_id)
        kept.append(factor)
    return kept


def extract_factor_ids(
    entity_factors: Iterable[Any] | None = None,
    matches: Iterable[Mapping[str, Any]] | None = None,
) -> list[str]:
    """
    Collect factor ids from an entity and all of its matches.

    Ids are deduplicated in first-seen order, entity-level ids first.
    """
    ids: list[str] = []
    seen: set[str] = set()

    def _add(factors: Iterable[Any] | None) -> None:
        for factor in factors or ():
            factor_id = factor_id_of(factor)
            if factor_id and factor_id not in seen:
                seen.add(factor_id)
                ids.append(factor_id)

    _add(entity_factors)
    for match in matches or ():
        _add(match.get("risk_factors"))
    return ids
