"""Content relevance evaluator for comment/quote submissions."""

import logging
from datetime import datetime

from engagement_integrity.consts import (
    GENERIC_PHRASE_PENALTY,
    GENERIC_PHRASES,
    HIGH_OVERLAP_THRESHOLD,
    MODERATE_OVERLAP_THRESHOLD,
    RELEVANCE_TRIGGERS,
    TOPIC_MATCH_BONUS,
)
from engagement_integrity.evaluators.text import (
    add_indicator,
    clamp_score,
    contains_any,
    jaccard,
    tokenize,
)
from engagement_integrity.models.model_result import EvaluationKind, EvaluationResult
from engagement_integrity.models.model_submission import EngagementSubmission

logger = logging.getLogger(__name__)


class ContentRelevanceEvaluator:
    """Scores how relevant the user's text is to the raided post.

    Algorithm:
        relevance = jaccard(tokens(text), tokens(target))
        + 0.1 if a declared topic appears in the user's tokens (cap 1)
        - 0.1 if the text contains generic praise (floor 0)

    The overlap indicator is taken from the base relevance, before either
    adjustment. Purely advisory: no boolean verdict.
    """

    kind = EvaluationKind.CONTENT_RELEVANCE

    def validate(self, submission: EngagementSubmission) -> bool:
        return contains_any(submission.text, RELEVANCE_TRIGGERS) or bool(submission.target_text)

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Calculate relevance of the submission text to the target content.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Relevance result with score between 0-1
        """
        user_text = submission.text.strip()
        target_text = submission.target_text

        user_tokens = set(tokenize(user_text))
        target_tokens = set(tokenize(target_text))

        base = jaccard(user_tokens, target_tokens)
        indicators: list[str] = []

        if base >= HIGH_OVERLAP_THRESHOLD:
            add_indicator(indicators, "high_token_overlap")
        elif base >= MODERATE_OVERLAP_THRESHOLD:
            add_indicator(indicators, "moderate_token_overlap")
        else:
            add_indicator(indicators, "low_token_overlap")

        relevance = base

        # Declared topics mentioned by the user
        if any(str(topic).lower() in user_tokens for topic in submission.topics):
            relevance = min(1.0, relevance + TOPIC_MATCH_BONUS)
            add_indicator(indicators, "topic_match")

        # Generic praise carries no relevance
        if contains_any(user_text, GENERIC_PHRASES):
            relevance = max(0.0, relevance - GENERIC_PHRASE_PENALTY)
            add_indicator(indicators, "generic_phrase_penalty")

        score = clamp_score(relevance)
        logger.debug(f"Content relevance score: {score:.2f}")

        return EvaluationResult(
            kind=self.kind,
            score=score,
            indicators=indicators,
            evaluated_at=current_time or submission.submitted_at,
            details={"target_provided": bool(target_text)},
        )
