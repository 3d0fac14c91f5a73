"""
Audit Logger — JSON-lines trail of scoring decisions.

One line per decision: UTC timestamp, profile id, how many factors were
evaluated and scored, the total against its threshold, and the time taken.
"""

from __future__ import annotations

import json
import logging
import time
from collections import deque
from collections.abc import Iterator
from pathlib import Path

from prism.config import settings
from prism.models.profile_models import RiskProfile
from prism.models.score_models import EntityRiskScore, ScoreAuditEntry

logger = logging.getLogger("prism.audit")


class AuditLogger:
    """Appends ScoreAuditEntry records to a JSON-lines file."""

    def __init__(self, log_path: str | None = None, enabled: bool | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self.enabled = settings.audit_enabled if enabled is None else enabled

    def record(
        self,
        profile: RiskProfile | None,
        factors_evaluated: int,
        score: EntityRiskScore,
        started: float,
    ) -> ScoreAuditEntry:
        """Build the entry for one scoring decision and log it."""
        entry = ScoreAuditEntry(
            profile_id=profile.id if profile else None,
            factors_evaluated=factors_evaluated,
            factors_scored=len(score.triggered_risk_factors),
            total_score=score.total_score,
            threshold=score.threshold,
            meets_threshold=score.meets_threshold,
            scoring_enabled=bool(profile and profile.risk_scoring_enabled),
            duration_ms=round((time.time() - started) * 1000, 2),
        )
        self.log(entry)
        return entry

    def log(self, entry: ScoreAuditEntry) -> None:
        if not self.enabled:
            return

        line = json.dumps({
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            **entry.model_dump(),
        })
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log {self.log_path}: {e}")

    def _iter_records(self) -> Iterator[dict]:
        if not self.log_path.exists():
            return
        try:
            with open(self.log_path, encoding="utf-8") as f:
                for raw in f:
                    raw = raw.strip()
                    if not raw:
                        continue
                    try:
                        yield json.loads(raw)
                    except json.JSONDecodeError:
                        logger.warning(f"Skipping corrupt audit line in {self.log_path}")
        except OSError as e:
            logger.error(f"Failed to read audit log {self.log_path}: {e}")

    def read_recent(self, count: int = 50, profile_id: str | None = None) -> list[dict]:
        """The last ``count`` decisions, optionally for one profile only."""
        records = (
            r for r in self._iter_records()
            if profile_id is None or r.get("profile_id") == profile_id
        )
        return list(deque(records, maxlen=count))
