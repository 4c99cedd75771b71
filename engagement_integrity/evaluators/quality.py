"""Engagement quality evaluator for depth and community value of submissions."""

import logging
from datetime import datetime

from engagement_integrity.consts import (
    BONUS_ELIGIBLE_THRESHOLD,
    BRIEF_CONTENT_LENGTH,
    BRIEF_CONTENT_PENALTY,
    COMMUNITY_BONUS,
    COMMUNITY_WORDS,
    DETAILED_CONTENT_BONUS,
    DETAILED_CONTENT_LENGTH,
    EMOTIONAL_BONUS,
    EMOTIONAL_WORDS,
    ENGAGEMENT_TYPE_VALUES,
    QUALITY_BASELINE,
    QUALITY_SPAM_PENALTY,
    QUALITY_SPAM_PHRASES,
    QUALITY_TRIGGERS,
    QUALITY_WORD_BONUS,
    QUALITY_WORD_MAX_BONUS,
    QUALITY_WORDS,
)
from engagement_integrity.evaluators.text import add_indicator, clamp_score, contains_any
from engagement_integrity.models.model_result import (
    EvaluationKind,
    EvaluationResult,
    QualityTier,
)
from engagement_integrity.models.model_submission import EngagementSubmission

logger = logging.getLogger(__name__)

# Lower bound of each tier, highest first
TIER_THRESHOLDS: list[tuple[float, QualityTier]] = [
    (0.8, QualityTier.EXCEPTIONAL),
    (0.65, QualityTier.HIGH),
    (0.5, QualityTier.GOOD),
    (0.35, QualityTier.BASIC),
]

TIER_FEEDBACK: dict[QualityTier, str] = {
    QualityTier.EXCEPTIONAL: (
        "Exceptional quality engagement - thoughtful, detailed, and community-focused"
    ),
    QualityTier.HIGH: "High quality engagement - meaningful contribution with good depth",
    QualityTier.GOOD: "Good engagement - solid participation with room for enhancement",
    QualityTier.BASIC: "Basic engagement - consider adding more context or personal insight",
    QualityTier.LOW: (
        "Low quality engagement - needs significant improvement for community value"
    ),
}


def get_quality_tier(score: float) -> QualityTier:
    """Map a quality score onto its tier."""
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return QualityTier.LOW


def detect_engagement_type(text: str) -> str | None:
    """Highest-value engagement keyword in the text, ties broken by precedence order."""
    lowered = text.lower()
    detected = None
    best_value = 0.0
    for engagement_type, value in ENGAGEMENT_TYPE_VALUES.items():
        if engagement_type in lowered and value > best_value:
            detected = engagement_type
            best_value = value
    return detected


class EngagementQualityEvaluator:
    """Evaluates the quality of engagement text.

    Starts from a 0.5 baseline and adds/subtracts for:
    - Length: > 100 chars +0.2, < 20 chars -0.1
    - Quality vocabulary: +0.1 per distinct word, max +0.3
    - Engagement type: comment 0.4, quote 0.3, share 0.2, retweet 0.2, like 0.1
    - Community context: +0.15
    - Spam phrases: -0.3
    - Emotional intelligence: +0.1

    bonus_eligible = score >= 0.7
    """

    kind = EvaluationKind.ENGAGEMENT_QUALITY

    def validate(self, submission: EngagementSubmission) -> bool:
        return contains_any(submission.text, QUALITY_TRIGGERS)

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Calculate quality score and tier for the submission text.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Quality result with score between 0-1 and bonus_eligible verdict
        """
        text = submission.text.lower()
        score = QUALITY_BASELINE
        indicators: list[str] = []

        if len(text) > DETAILED_CONTENT_LENGTH:
            score += DETAILED_CONTENT_BONUS
            add_indicator(indicators, "detailed_content")
        elif len(text) < BRIEF_CONTENT_LENGTH:
            score -= BRIEF_CONTENT_PENALTY
            add_indicator(indicators, "brief_content")

        quality_word_count = sum(1 for word in QUALITY_WORDS if word in text)
        if quality_word_count > 0:
            score += min(QUALITY_WORD_MAX_BONUS, quality_word_count * QUALITY_WORD_BONUS)
            add_indicator(indicators, "quality_language")

        engagement_type = detect_engagement_type(text)
        if engagement_type:
            score += ENGAGEMENT_TYPE_VALUES[engagement_type]
            add_indicator(indicators, f"{engagement_type}_engagement")

        if contains_any(text, COMMUNITY_WORDS):
            score += COMMUNITY_BONUS
            add_indicator(indicators, "community_focused")

        if contains_any(text, QUALITY_SPAM_PHRASES):
            score -= QUALITY_SPAM_PENALTY
            add_indicator(indicators, "potential_spam")

        if contains_any(text, EMOTIONAL_WORDS):
            score += EMOTIONAL_BONUS
            add_indicator(indicators, "emotional_intelligence")

        score = clamp_score(score)
        tier = get_quality_tier(score)
        bonus_eligible = score >= BONUS_ELIGIBLE_THRESHOLD
        logger.debug(f"Engagement quality evaluation: {score:.2f} ({tier.value})")

        return EvaluationResult(
            kind=self.kind,
            score=score,
            indicators=indicators,
            verdict=bonus_eligible,
            evaluated_at=current_time or submission.submitted_at,
            details={
                "quality_tier": tier.value,
                "feedback": TIER_FEEDBACK[tier],
                "engagement_type": engagement_type or "unknown",
                "bonus_eligible": bonus_eligible,
            },
        )
