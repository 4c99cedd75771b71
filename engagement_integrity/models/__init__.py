"""Pydantic models for the engagement integrity pipeline."""

from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import (
    AggregateDecision,
    DecisionReasons,
    EvaluationKind,
    EvaluationReport,
    EvaluationResult,
    QualityTier,
    Verdict,
)
from engagement_integrity.models.model_submission import (
    ActionType,
    EngagementSubmission,
    Evidence,
    EvidenceType,
    HistoryEntry,
    RecentEngagement,
)

__all__ = [
    # Submission models
    "ActionType",
    "EngagementSubmission",
    "Evidence",
    "EvidenceType",
    "HistoryEntry",
    "RecentEngagement",
    # Result models
    "AggregateDecision",
    "DecisionReasons",
    "EvaluationKind",
    "EvaluationReport",
    "EvaluationResult",
    "QualityTier",
    "Verdict",
    # Policy configuration
    "FusionWeights",
]
