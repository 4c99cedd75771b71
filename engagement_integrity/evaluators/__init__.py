"""Evaluators module for judging engagement submissions.

Submissions are judged by five independent evaluators:
- Content relevance (token overlap with the raid target)
- Spam score (promotional patterns, link and caps abuse)
- Engagement fraud (missing evidence, bursts, repeated text)
- Participation consistency (timing regularity, session hopping)
- Engagement quality (depth, vocabulary, community focus)

All evaluators are stateless: EngagementSubmission → EvaluationResult.
The registry runs the applicable ones and the composite policy turns their
results into an admit/flag/reject decision.
"""

from engagement_integrity.evaluators.base import BaseEvaluator
from engagement_integrity.evaluators.composite import (
    DecisionPolicy,
    calculate_trust_score,
    decide,
    moderator_summary,
    user_message,
)
from engagement_integrity.evaluators.consistency import (
    ParticipationConsistencyEvaluator,
    coefficient_of_variation,
)
from engagement_integrity.evaluators.fraud import EngagementFraudEvaluator, validate_evidence
from engagement_integrity.evaluators.points import award_points, get_points_for_action
from engagement_integrity.evaluators.quality import (
    EngagementQualityEvaluator,
    detect_engagement_type,
    get_quality_tier,
)
from engagement_integrity.evaluators.registry import EvaluatorRegistry, default_evaluators
from engagement_integrity.evaluators.relevance import ContentRelevanceEvaluator
from engagement_integrity.evaluators.spam import SpamScoreEvaluator

__all__ = [
    # Protocol
    "BaseEvaluator",
    # Individual evaluators
    "ContentRelevanceEvaluator",
    "SpamScoreEvaluator",
    "EngagementFraudEvaluator",
    "ParticipationConsistencyEvaluator",
    "EngagementQualityEvaluator",
    # Orchestration
    "EvaluatorRegistry",
    "default_evaluators",
    # Decision policy
    "DecisionPolicy",
    "decide",
    "calculate_trust_score",
    "user_message",
    "moderator_summary",
    # Points
    "award_points",
    "get_points_for_action",
    # Utilities
    "coefficient_of_variation",
    "detect_engagement_type",
    "get_quality_tier",
    "validate_evidence",
]
