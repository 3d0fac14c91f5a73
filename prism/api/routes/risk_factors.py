"""
Risk Factor Routes — reference lookup, classification and grouping.

  GET  /risk-factors            → all reference factors, or ?id= / ?ids= / ?q= / ?category=
  POST /risk-factors/classify   → descriptor per id
  POST /risk-factors/group      → display-ordered category groups
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prism.api.dependencies import get_factor_classifier
from prism.core.classifier import FactorClassifier
from prism.core.grouper import group_factors, level_counts, prepare_display
from prism.core.reference_data import factors_by_category, get_reference_table, search_reference
from prism.models.api_models import ClassifyRequest, ClassifyResponse, GroupResponse, LookupResponse

router = APIRouter(prefix="/risk-factors", tags=["risk-factors"])


@router.get("", response_model=LookupResponse)
async def lookup_risk_factors(
    id: str | None = None,
    ids: str | None = None,
    q: str | None = None,
    category: str | None = None,
):
    """Look up entries of the reference dataset."""
    table = get_reference_table()

    if id is not None:
        entry = table.get(id)
        return LookupResponse(data=entry.model_dump(mode="json") if entry else None)

    if ids is not None:
        wanted = [i.strip() for i in ids.split(",") if i.strip()]
        return LookupResponse(
            data={i: table[i].model_dump(mode="json") for i in wanted if i in table}
        )

    if q:
        table = search_reference(table, q)
    if category:
        table = factors_by_category(table, category)

    return LookupResponse(data={i: f.model_dump(mode="json") for i, f in table.items()})


@router.post("/classify", response_model=ClassifyResponse)
async def classify_risk_factors(
    req: ClassifyRequest,
    classifier: FactorClassifier = Depends(get_factor_classifier),
):
    """Classify raw factor ids. Unknown ids are inferred, never rejected."""
    return ClassifyResponse(data={factor_id: classifier.classify(factor_id) for factor_id in req.ids})


@router.post("/group", response_model=GroupResponse)
async def group_risk_factors(
    req: ClassifyRequest,
    classifier: FactorClassifier = Depends(get_factor_classifier),
):
    """Group factor ids by category in display order."""
    grouped = group_factors(req.ids, classifier)
    return GroupResponse(
        categories=prepare_display(grouped),
        level_counts=level_counts(req.ids, classifier),
        has_risk=bool(req.ids),
    )
