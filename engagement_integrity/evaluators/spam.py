"""Spam score evaluator for low-effort or promotional submissions."""

import logging
from datetime import datetime

from engagement_integrity.consts import (
    CAPS_MIN_LENGTH,
    CAPS_RATIO_THRESHOLD,
    CAPS_WEIGHT,
    EXCLAMATION_MIN_COUNT,
    EXCLAMATION_WEIGHT,
    MULTIPLE_LINKS_MIN_COUNT,
    MULTIPLE_LINKS_WEIGHT,
    SPAM_PATTERNS,
    SPAM_THRESHOLD,
    SPAM_TRIGGERS,
)
from engagement_integrity.evaluators.text import (
    add_indicator,
    clamp_score,
    contains_any,
    count_urls,
    uppercase_ratio,
)
from engagement_integrity.models.model_result import EvaluationKind, EvaluationResult
from engagement_integrity.models.model_submission import EngagementSubmission

logger = logging.getLogger(__name__)


class SpamScoreEvaluator:
    """Detects low-effort or spammy engagement submissions.

    Additive weights (clamped to 1):
        follow me 0.25, buy now 0.30, click here 0.25,
        free 0.20, promo 0.20, giveaway 0.20,
        3+ exclamation marks 0.15, 2+ links 0.15,
        uppercase ratio > 0.4 on text longer than 12 chars 0.20

    is_spam = score >= 0.7
    """

    kind = EvaluationKind.SPAM_SCORE

    def validate(self, submission: EngagementSubmission) -> bool:
        return contains_any(submission.text, SPAM_TRIGGERS)

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Calculate spam score from keyword and formatting heuristics.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Spam result with score between 0-1 and is_spam verdict
        """
        raw_text = submission.text
        text = raw_text.lower()

        score = 0.0
        indicators: list[str] = []

        for pattern, weight in SPAM_PATTERNS.items():
            if pattern in text:
                score += weight
                add_indicator(indicators, pattern)

        if text.count("!") >= EXCLAMATION_MIN_COUNT:
            score += EXCLAMATION_WEIGHT
            add_indicator(indicators, "excessive_exclamations")

        if count_urls(raw_text) >= MULTIPLE_LINKS_MIN_COUNT:
            score += MULTIPLE_LINKS_WEIGHT
            add_indicator(indicators, "multiple_links")

        if uppercase_ratio(raw_text) > CAPS_RATIO_THRESHOLD and len(raw_text) > CAPS_MIN_LENGTH:
            score += CAPS_WEIGHT
            add_indicator(indicators, "all_caps_ratio")

        score = clamp_score(score)
        is_spam = score >= SPAM_THRESHOLD
        logger.debug(f"Spam score evaluation: {score:.2f} ({'spam' if is_spam else 'ok'})")

        return EvaluationResult(
            kind=self.kind,
            score=score,
            indicators=indicators,
            verdict=is_spam,
            evaluated_at=current_time or submission.submitted_at,
        )
