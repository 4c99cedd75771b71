"""Base evaluator protocol defining the contract for all evaluators."""

from datetime import datetime
from typing import Protocol

from engagement_integrity.models.model_result import EvaluationKind, EvaluationResult
from engagement_integrity.models.model_submission import EngagementSubmission


class BaseEvaluator(Protocol):
    """Protocol defining the evaluator contract.

    An evaluator is a (validate, evaluate) pair. ``validate`` decides whether
    the submission carries the signals this evaluator needs; ``evaluate``
    is a pure function of the submission and returns a fresh result with a
    score between 0 and 1.

    This stateless design enables:
    - Easy testing with hand-built submissions
    - Parallelizable evaluation
    - Deterministic replay during dispute resolution
    """

    kind: EvaluationKind

    def validate(self, submission: EngagementSubmission) -> bool:
        """Return True if this evaluator applies to the submission."""
        ...

    def evaluate(
        self, submission: EngagementSubmission, current_time: datetime | None = None
    ) -> EvaluationResult:
        """Score the submission on this dimension.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submission.submitted_at
                so repeated evaluations are identical)

        Returns:
            EvaluationResult with a score between 0-1
        """
        ...
