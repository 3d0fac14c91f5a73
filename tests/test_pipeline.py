"""
Tests for Assessment Pipeline — filter, score and group one screened entity.
"""

from prism.engine.pipeline import AssessmentPipeline, assess_entity
from prism.models.factor_models import Category


def test_assess_with_profile(classifier, scoring_profile):
    pipeline = AssessmentPipeline(classifier)
    result = pipeline.assess(
        [{"id": "ofac_sdn_sanctioned"}, {"id": "cpi_score"}],
        [{"id": "m1", "risk_factors": [{"id": "pep"}, {"id": "ofac_sdn_sanctioned"}]}],
        scoring_profile,
    )
    assert result.factor_ids == ["ofac_sdn_sanctioned", "pep"]
    assert result.score.total_score == 13
    assert result.score.meets_threshold is True
    assert result.risk_level == "critical"
    assert [g.category for g in result.categories] == [Category.SANCTIONS, Category.POLITICAL_EXPOSURE]
    assert result.profile_id == "scoring"
    assert result.has_risk


def test_assess_without_profile_is_fail_open(classifier):
    result = AssessmentPipeline(classifier).assess(
        [{"id": "cpi_score"}, {"id": "pep"}], [], None
    )
    assert result.factor_ids == ["cpi_score", "pep"]
    assert result.score.total_score == 0
    assert result.score.threshold == 0
    assert result.risk_level == "low"
    assert result.profile_id is None


def test_assess_nothing_triggered(classifier, scoring_profile):
    result = AssessmentPipeline(classifier).assess([], [], scoring_profile)
    assert result.factor_ids == []
    assert result.categories == []
    assert not result.has_risk


def test_assess_entity_uses_shared_classifier(scoring_profile):
    result = assess_entity([{"id": "pep"}], None, scoring_profile)
    assert result.factor_ids == ["pep"]
    assert result.score.total_score == 3
    assert result.risk_level == "medium"
