"""Engagement fraud evaluator for automated or fabricated engagement."""

import logging
from collections import Counter
from datetime import datetime

from engagement_integrity.consts import (
    BURST_MIN_COUNT,
    BURST_WEIGHT,
    BURST_WINDOW_SECONDS,
    FLAGGED_PATTERNS,
    FRAUD_TEXT_TRIGGERS,
    FRAUD_THRESHOLD,
    HIGH_VALUE_ACTIONS,
    IDENTICAL_ACTIONS_MIN_COUNT,
    IDENTICAL_ACTIONS_RATIO,
    IDENTICAL_ACTIONS_WEIGHT,
    NO_EVIDENCE_WEIGHT,
    REPEATED_TEXT_MIN_COUNT,
    REPEATED_TEXT_WEIGHT,
    SAME_TIMESTAMP_MIN_COUNT,
    SAME_TIMESTAMP_WEIGHT,
    SUSPICIOUS_PATTERNS_WEIGHT,
)
from engagement_integrity.evaluators.text import add_indicator, clamp_score, contains_any
from engagement_integrity.models.model_result import EvaluationKind, EvaluationResult
from engagement_integrity.models.model_submission import (
    EngagementSubmission,
    Evidence,
    EvidenceType,
    RecentEngagement,
)

logger = logging.getLogger(__name__)


class EngagementFraudEvaluator:
    """Detects fraudulent or automated engagement.

    Additive rules (clamped to 1):
    - High-value action (verify/quote/comment) without evidence: +0.3
    - Upstream detector flagged rapid_fire or bot_like_behavior: +0.3
    - 5+ recent engagements within 10s of this submission: +0.3
    - 5+ recent engagements, top action type > 80% of them: +0.1
    - Same normalized text submitted 3+ times: +0.2
    - 5+ recent engagements sharing one millisecond timestamp: +0.25

    is_fraud = score >= 0.6

    Burst detection measures against submission.submitted_at, never the wall
    clock, so replaying a submission reproduces its score.
    """

    kind = EvaluationKind.ENGAGEMENT_FRAUD

    def validate(self, submission: EngagementSubmission) -> bool:
        has_engagement = contains_any(submission.text, FRAUD_TEXT_TRIGGERS)
        has_context = (
            submission.action_type is not None or submission.recent_engagements is not None
        )
        return has_engagement or has_context

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Calculate fraud score from evidence, hints and recent activity.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Fraud result with score between 0-1 and is_fraud verdict
        """
        recent = submission.recent_engagements or []

        score = 0.0
        indicators: list[str] = []

        # Evidence checks (for higher-value actions)
        if submission.action_type is None:
            add_indicator(indicators, "missing_action_type")
        elif submission.action_type.value in HIGH_VALUE_ACTIONS and not submission.evidence:
            score += NO_EVIDENCE_WEIGHT
            add_indicator(indicators, "no_evidence_high_value")

        # Patterns flagged by the upstream detector
        if any(pattern in FLAGGED_PATTERNS for pattern in submission.suspicious_patterns_hint):
            score += SUSPICIOUS_PATTERNS_WEIGHT
            add_indicator(indicators, "suspicious_patterns_flag")

        if self._count_in_burst_window(recent, submission.submitted_at) >= BURST_MIN_COUNT:
            score += BURST_WEIGHT
            add_indicator(indicators, "burst_activity_10s")

        if self._has_identical_action_majority(recent):
            score += IDENTICAL_ACTIONS_WEIGHT
            add_indicator(indicators, "identical_actions_majority")

        if self._has_repeated_text(recent):
            score += REPEATED_TEXT_WEIGHT
            add_indicator(indicators, "repeated_text_patterns")

        if self._has_timestamp_cluster(recent):
            score += SAME_TIMESTAMP_WEIGHT
            add_indicator(indicators, "same_timestamp_cluster")

        score = clamp_score(score)
        is_fraud = score >= FRAUD_THRESHOLD
        logger.debug(f"Engagement fraud score: {score:.2f} ({'fraud' if is_fraud else 'ok'})")

        return EvaluationResult(
            kind=self.kind,
            score=score,
            indicators=indicators,
            verdict=is_fraud,
            evaluated_at=current_time or submission.submitted_at,
            details={"evidence_valid": validate_evidence(submission.evidence)},
        )

    def _count_in_burst_window(self, recent: list[RecentEngagement], now: datetime) -> int:
        count = 0
        for engagement in recent:
            if engagement.timestamp is None:
                continue
            if (now - engagement.timestamp).total_seconds() <= BURST_WINDOW_SECONDS:
                count += 1
        return count

    def _has_identical_action_majority(self, recent: list[RecentEngagement]) -> bool:
        if len(recent) < IDENTICAL_ACTIONS_MIN_COUNT:
            return False
        counts = Counter((e.action_type or "unknown").lower() for e in recent)
        top_count = max(counts.values())
        return top_count / len(recent) > IDENTICAL_ACTIONS_RATIO

    def _has_repeated_text(self, recent: list[RecentEngagement]) -> bool:
        counts = Counter(
            normalized
            for normalized in (e.submission_text.strip().lower() for e in recent)
            if normalized
        )
        return any(count >= REPEATED_TEXT_MIN_COUNT for count in counts.values())

    def _has_timestamp_cluster(self, recent: list[RecentEngagement]) -> bool:
        # Bucket by millisecond
        counts = Counter(
            e.timestamp.replace(microsecond=e.timestamp.microsecond // 1000 * 1000)
            for e in recent
            if e.timestamp is not None
        )
        return any(count >= SAME_TIMESTAMP_MIN_COUNT for count in counts.values())


def validate_evidence(evidence: Evidence | str | None) -> bool:
    """Check that attached evidence is usable for verification.

    A plain string attestation is accepted as-is. A screenshot needs an
    http(s) URL; a video needs an http(s) URL and a positive duration.
    """
    if not evidence:
        return False
    if isinstance(evidence, str):
        return True

    has_url = evidence.url.startswith(("http://", "https://"))
    if evidence.type == EvidenceType.SCREENSHOT:
        return has_url
    if evidence.type == EvidenceType.VIDEO:
        return has_url and (evidence.duration or 0) > 0
    return False
