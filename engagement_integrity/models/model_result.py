"""Result models produced by evaluators, the decision policy and the registry."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from engagement_integrity.models.common import _utc_now


class EvaluationKind(str, Enum):
    """Identity of the evaluator that produced a result."""

    CONTENT_RELEVANCE = "content_relevance"
    SPAM_SCORE = "spam_score"
    ENGAGEMENT_FRAUD = "engagement_fraud"
    PARTICIPATION_CONSISTENCY = "participation_consistency"
    ENGAGEMENT_QUALITY = "engagement_quality"


class QualityTier(str, Enum):
    """Engagement quality tiers."""

    EXCEPTIONAL = "exceptional"
    HIGH = "high"
    GOOD = "good"
    BASIC = "basic"
    LOW = "low"


class Verdict(str, Enum):
    """Final admission decision for a submission."""

    ADMIT = "admit"
    FLAG = "flag"
    REJECT = "reject"


class DecisionReasons:
    """Moderator-facing reason codes."""

    FRAUD_DETECTED = "FRAUD_DETECTED"
    SPAM_DETECTED = "SPAM_DETECTED"
    SESSION_HOPPING = "SESSION_HOPPING"


class EvaluationResult(BaseModel):
    """Output of a single evaluator for a single submission.

    Created fresh per call and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    kind: EvaluationKind = Field(description="Evaluator that produced this result")
    score: float = Field(ge=0.0, le=1.0, description="Higher = more of the property named by kind")
    indicators: list[str] = Field(
        default_factory=list, description="Signals that fired, in detection order"
    )
    verdict: bool | None = Field(
        default=None, description="Evaluator-specific boolean (is_spam, is_fraud, bonus_eligible)"
    )
    evaluated_at: datetime = Field(default_factory=_utc_now)
    details: dict[str, Any] = Field(
        default_factory=dict, description="Evaluator-specific diagnostics"
    )

    @property
    def flags(self) -> list[str]:
        """Alias used by participation consistency."""
        return self.indicators

    @property
    def is_spam(self) -> bool:
        return self.kind == EvaluationKind.SPAM_SCORE and bool(self.verdict)

    @property
    def is_fraud(self) -> bool:
        return self.kind == EvaluationKind.ENGAGEMENT_FRAUD and bool(self.verdict)


class AggregateDecision(BaseModel):
    """Fused admit/flag/reject decision over all evaluator results."""

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    trust_score: float = Field(ge=0.0, le=1.0, description="Fused legitimacy score")
    contributing_results: list[EvaluationResult] = Field(default_factory=list)
    reasons: list[str] = Field(
        default_factory=list, description="Reason codes from DecisionReasons"
    )
    points_awarded: int = Field(default=0, ge=0, description="Raid points granted on admit")


class EvaluationReport(BaseModel):
    """Everything the raid coordinator needs to act on one submission."""

    user_id: str
    raid_id: str
    results: list[EvaluationResult] = Field(default_factory=list)
    decision: AggregateDecision
    failed_evaluators: list[str] = Field(
        default_factory=list, description="Evaluators excluded after raising"
    )

    def result_for(self, kind: EvaluationKind) -> EvaluationResult | None:
        """Return the result of one evaluator, if it ran."""
        for result in self.results:
            if result.kind == kind:
                return result
        return None
