"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from prism.audit.logger import AuditLogger
from prism.core.classifier import FactorClassifier, get_classifier
from prism.engine.pipeline import AssessmentPipeline
from prism.profiles.store import ProfileStore


@lru_cache
def get_profile_store() -> ProfileStore:
    """Shared profile store singleton."""
    return ProfileStore()


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


def get_factor_classifier() -> FactorClassifier:
    """Shared classifier singleton."""
    return get_classifier()


@lru_cache
def get_pipeline() -> AssessmentPipeline:
    """Shared assessment pipeline singleton."""
    return AssessmentPipeline(classifier=get_classifier())
