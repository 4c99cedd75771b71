"""Participation consistency evaluator for timing regularity across sessions."""

import logging
import math
from collections import Counter
from datetime import datetime

from engagement_integrity.consts import (
    CONSISTENCY_TRIGGERS,
    HIGH_VARIANCE_CV,
    NEUTRAL_CONSISTENCY_SCORE,
    RAPID_SEQUENCE_SECONDS,
    SESSION_HOPPING_MAX_ENTRIES_PER_GROUP,
    SESSION_HOPPING_MIN_GROUPS,
    SESSION_HOPPING_PENALTY,
)
from engagement_integrity.evaluators.text import add_indicator, clamp_score, contains_any
from engagement_integrity.models.model_result import EvaluationKind, EvaluationResult
from engagement_integrity.models.model_submission import EngagementSubmission, HistoryEntry

logger = logging.getLogger(__name__)


def coefficient_of_variation(values: list[float]) -> float:
    """Population standard deviation divided by mean.

    Returns 1.0 (maximal inconsistency) for an empty list or a zero mean.
    """
    if not values:
        return 1.0

    mean = sum(values) / len(values)
    if mean == 0:
        return 1.0

    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance) / mean


class ParticipationConsistencyEvaluator:
    """Flags inconsistencies in a user's engagement timing across sessions.

    Algorithm:
        intervals = gaps in seconds between chronologically sorted history
        cv = std(intervals) / mean(intervals)
        score = 1 - min(1, cv)
        session hopping (3+ raids, < 2 actions per raid): -0.15

    Fewer than two timestamped entries yields the neutral 0.5 with an
    insufficient_history flag. Advisory only: no boolean verdict.
    """

    kind = EvaluationKind.PARTICIPATION_CONSISTENCY

    def validate(self, submission: EngagementSubmission) -> bool:
        return (
            contains_any(submission.text, CONSISTENCY_TRIGGERS)
            or submission.engagement_history is not None
        )

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Calculate consistency score from the engagement history.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Consistency result with score between 0-1
        """
        evaluated_at = current_time or submission.submitted_at
        history = submission.engagement_history or []

        timestamps = sorted(entry.timestamp for entry in history if entry.timestamp is not None)
        if len(timestamps) < 2:
            return EvaluationResult(
                kind=self.kind,
                score=NEUTRAL_CONSISTENCY_SCORE,
                indicators=["insufficient_history"],
                evaluated_at=evaluated_at,
                details={"intervals_count": 0},
            )

        intervals = [
            (later - earlier).total_seconds() for earlier, later in zip(timestamps, timestamps[1:])
        ]
        cv = coefficient_of_variation(intervals)
        score = 1.0 - min(1.0, cv)

        flags: list[str] = []
        if cv > HIGH_VARIANCE_CV:
            add_indicator(flags, "high_variance_intervals")
        if any(interval < RAPID_SEQUENCE_SECONDS for interval in intervals):
            add_indicator(flags, "rapid_sequence_events")

        if self._is_session_hopping(history):
            add_indicator(flags, "session_hopping")
            score = max(0.0, score - SESSION_HOPPING_PENALTY)

        score = clamp_score(score)
        logger.debug(f"Participation consistency score: {score:.2f} (cv={cv:.2f})")

        return EvaluationResult(
            kind=self.kind,
            score=score,
            indicators=flags,
            evaluated_at=evaluated_at,
            details={
                "intervals_count": len(intervals),
                "coefficient_of_variation": round(cv, 3),
            },
        )

    def _is_session_hopping(self, history: list[HistoryEntry]) -> bool:
        """Many different raids touched with very few actions each."""
        groups = Counter(entry.raid_id or "unknown" for entry in history)
        return (
            len(groups) >= SESSION_HOPPING_MIN_GROUPS
            and len(history) / len(groups) < SESSION_HOPPING_MAX_ENTRIES_PER_GROUP
        )
