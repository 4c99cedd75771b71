"""Decision policy combining evaluator results into a single verdict."""

from collections.abc import Callable

from engagement_integrity.consts import (
    ADMIT_MESSAGE,
    FLAG_MESSAGE,
    NEUTRAL_TRUST_SCORE,
    REJECT_MESSAGE,
    SCORE_PRECISION,
)
from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import (
    AggregateDecision,
    DecisionReasons,
    EvaluationKind,
    EvaluationResult,
    Verdict,
)

DecisionPolicy = Callable[[list[EvaluationResult], FusionWeights], AggregateDecision]


def calculate_trust_score(results: list[EvaluationResult], weights: FusionWeights) -> float:
    """Calculate weighted trust score over the non-fraud evaluators.

    Spam score is a risk, so it is inverted before combining. Weights are
    renormalised over the evaluators that actually ran; with none of them
    present the neutral 0.5 is returned.

    Args:
        results: Evaluator results for one submission
        weights: Evaluator weights (must sum to 1.0)

    Returns:
        Trust score between 0-1
    """
    weight_by_kind = {
        EvaluationKind.CONTENT_RELEVANCE: weights.relevance,
        EvaluationKind.SPAM_SCORE: weights.spam,
        EvaluationKind.PARTICIPATION_CONSISTENCY: weights.consistency,
        EvaluationKind.ENGAGEMENT_QUALITY: weights.quality,
    }

    weighted_sum = 0.0
    total_weight = 0.0
    for result in results:
        weight = weight_by_kind.get(result.kind)
        if weight is None:
            continue
        signal = 1.0 - result.score if result.kind == EvaluationKind.SPAM_SCORE else result.score
        weighted_sum += weight * signal
        total_weight += weight

    if total_weight == 0:
        return NEUTRAL_TRUST_SCORE

    return round(min(1.0, max(0.0, weighted_sum / total_weight)), SCORE_PRECISION)


def decide(results: list[EvaluationResult], weights: FusionWeights) -> AggregateDecision:
    """Default decision policy.

    - reject: the fraud evaluator returned is_fraud
    - flag: the spam evaluator returned is_spam, or consistency flagged
      session_hopping (held for manual review)
    - admit: otherwise

    The trust score is computed in every case so moderators can see it.
    """
    reasons: list[str] = []

    if any(result.is_fraud for result in results):
        reasons.append(DecisionReasons.FRAUD_DETECTED)
    if any(result.is_spam for result in results):
        reasons.append(DecisionReasons.SPAM_DETECTED)
    if any(
        result.kind == EvaluationKind.PARTICIPATION_CONSISTENCY
        and "session_hopping" in result.flags
        for result in results
    ):
        reasons.append(DecisionReasons.SESSION_HOPPING)

    if DecisionReasons.FRAUD_DETECTED in reasons:
        verdict = Verdict.REJECT
    elif reasons:
        verdict = Verdict.FLAG
    else:
        verdict = Verdict.ADMIT

    return AggregateDecision(
        verdict=verdict,
        trust_score=calculate_trust_score(results, weights),
        contributing_results=list(results),
        reasons=reasons,
    )


def user_message(decision: AggregateDecision) -> str:
    """Message safe to show the submitting user.

    Never names indicators or reasons, so users cannot tune submissions
    against the detectors.
    """
    if decision.verdict == Verdict.REJECT:
        return REJECT_MESSAGE
    if decision.verdict == Verdict.FLAG:
        return FLAG_MESSAGE
    return ADMIT_MESSAGE


def moderator_summary(decision: AggregateDecision) -> str:
    """Full explanation for moderators: verdict, reasons and every fired indicator."""
    lines = [
        f"verdict={decision.verdict.value} trust={decision.trust_score:.3f}",
        f"reasons: {', '.join(decision.reasons) or 'none'}",
    ]
    for result in decision.contributing_results:
        indicators = ", ".join(result.indicators) or "-"
        lines.append(f"  {result.kind.value}: {result.score:.3f} [{indicators}]")
    return "\n".join(lines)
