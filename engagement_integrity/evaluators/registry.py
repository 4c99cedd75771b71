"""Evaluator registry for orchestrating all integrity evaluators."""

import asyncio
import logging
from datetime import datetime

from engagement_integrity.evaluators.base import BaseEvaluator
from engagement_integrity.evaluators.composite import DecisionPolicy, decide
from engagement_integrity.evaluators.consistency import ParticipationConsistencyEvaluator
from engagement_integrity.evaluators.fraud import EngagementFraudEvaluator
from engagement_integrity.evaluators.points import award_points
from engagement_integrity.evaluators.quality import EngagementQualityEvaluator
from engagement_integrity.evaluators.relevance import ContentRelevanceEvaluator
from engagement_integrity.evaluators.spam import SpamScoreEvaluator
from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import (
    AggregateDecision,
    EvaluationReport,
    EvaluationResult,
)
from engagement_integrity.models.model_submission import EngagementSubmission

logger = logging.getLogger(__name__)

# Marker for evaluators whose validate() declined the submission
_SKIPPED = object()


def _name(evaluator: BaseEvaluator) -> str:
    return type(evaluator).__name__


def default_evaluators() -> list[BaseEvaluator]:
    """The five evaluators in their canonical order."""
    return [
        ContentRelevanceEvaluator(),
        SpamScoreEvaluator(),
        EngagementFraudEvaluator(),
        ParticipationConsistencyEvaluator(),
        EngagementQualityEvaluator(),
    ]


class EvaluatorRegistry:
    """Orchestrates all evaluators to judge engagement submissions.

    This registry manages the evaluators and provides a unified interface
    for scoring submissions. It handles:
    - Asking each evaluator whether it applies
    - Running the applicable ones, sequentially or concurrently
    - Isolating evaluators that raise
    - Handing results to the decision policy and awarding points

    The registry computes no scores itself.
    """

    def __init__(
        self,
        evaluators: list[BaseEvaluator] | None = None,
        policy: DecisionPolicy = decide,
        weights: FusionWeights | None = None,
        points_table: dict[str, int] | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            evaluators: Evaluators in result order (defaults to all five)
            policy: Decision policy (results, weights) -> AggregateDecision
            weights: Fusion weights (defaults to env overrides or built-ins)
            points_table: Points per action type (defaults to the raid table)
        """
        self.evaluators = evaluators if evaluators is not None else default_evaluators()
        self.policy = policy
        self.weights = weights or FusionWeights.from_env()
        self.points_table = points_table

    def applicable(self, submission: EngagementSubmission) -> list[BaseEvaluator]:
        """Evaluators whose validate() accepts the submission, in registry order.

        An evaluator whose validate() raises is logged and skipped.
        """
        selected = []
        for evaluator in self.evaluators:
            try:
                if evaluator.validate(submission):
                    selected.append(evaluator)
            except Exception:
                logger.exception(f"{_name(evaluator)}.validate failed for {submission.user_id}")
        return selected

    def evaluate_submission(
        self,
        submission: EngagementSubmission,
        current_time: datetime | None = None,
    ) -> tuple[list[EvaluationResult], list[str]]:
        """Run every evaluator sequentially.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Tuple of (results in registry order, names of failed evaluators)
        """
        results: list[EvaluationResult] = []
        failed: list[str] = []

        for evaluator in self.evaluators:
            result = self._run_one(evaluator, submission, current_time)
            if result is None:
                failed.append(_name(evaluator))
            elif result is not _SKIPPED:
                results.append(result)

        return results, failed

    async def evaluate_submission_async(
        self,
        submission: EngagementSubmission,
        current_time: datetime | None = None,
        timeout: float | None = None,
    ) -> tuple[list[EvaluationResult], list[str]]:
        """Run every evaluator concurrently in worker threads.

        Results come back in registry order regardless of completion order.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)
            timeout: Seconds to wait for all evaluators (None waits forever)

        Returns:
            Tuple of (results in registry order, names of failed evaluators)

        Raises:
            TimeoutError: If the evaluators do not finish within timeout
        """
        tasks = [
            asyncio.to_thread(self._run_one, evaluator, submission, current_time)
            for evaluator in self.evaluators
        ]
        outcomes = await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)

        results: list[EvaluationResult] = []
        failed: list[str] = []
        for evaluator, result in zip(self.evaluators, outcomes):
            if result is None:
                failed.append(_name(evaluator))
            elif result is not _SKIPPED:
                results.append(result)

        return results, failed

    def decide(self, results: list[EvaluationResult]) -> AggregateDecision:
        """Apply the decision policy with this registry's weights."""
        return self.policy(results, self.weights)

    def evaluate(
        self,
        submission: EngagementSubmission,
        current_time: datetime | None = None,
    ) -> EvaluationReport:
        """Evaluate a submission end to end.

        Args:
            submission: The submission to evaluate
            current_time: Evaluation timestamp (defaults to submitted_at)

        Returns:
            Report with results, decision and awarded points
        """
        results, failed = self.evaluate_submission(submission, current_time)
        return self._build_report(submission, results, failed)

    async def evaluate_async(
        self,
        submission: EngagementSubmission,
        current_time: datetime | None = None,
        timeout: float | None = None,
    ) -> EvaluationReport:
        """Async variant of evaluate() running evaluators concurrently."""
        results, failed = await self.evaluate_submission_async(submission, current_time, timeout)
        return self._build_report(submission, results, failed)

    def evaluate_batch(
        self,
        submissions: list[EngagementSubmission],
        current_time: datetime | None = None,
    ) -> list[EvaluationReport]:
        """Evaluate multiple submissions.

        Args:
            submissions: Submissions to evaluate
            current_time: Evaluation timestamp (defaults to each submitted_at)

        Returns:
            One report per submission, in input order
        """
        return [self.evaluate(submission, current_time) for submission in submissions]

    def _run_one(
        self,
        evaluator: BaseEvaluator,
        submission: EngagementSubmission,
        current_time: datetime | None,
    ) -> EvaluationResult | object | None:
        """Run one evaluator; None on failure, _SKIPPED when not applicable."""
        name = _name(evaluator)
        try:
            if not evaluator.validate(submission):
                logger.debug(f"{name} not applicable to submission from {submission.user_id}")
                return _SKIPPED
            return evaluator.evaluate(submission, current_time)
        except Exception:
            logger.exception(f"{name} failed for submission from {submission.user_id}")
            return None

    def _build_report(
        self,
        submission: EngagementSubmission,
        results: list[EvaluationResult],
        failed: list[str],
    ) -> EvaluationReport:
        decision = self.decide(results)
        points = award_points(decision, submission, self.points_table)
        decision = decision.model_copy(update={"points_awarded": points})

        logger.info(
            f"Decision for {submission.user_id or 'unknown'} on {submission.raid_id or 'unknown'}: "
            f"{decision.verdict.value} (trust={decision.trust_score:.3f}, points={points})"
        )
        if failed:
            logger.warning(f"Excluded failed evaluators: {', '.join(failed)}")

        return EvaluationReport(
            user_id=submission.user_id,
            raid_id=submission.raid_id,
            results=results,
            decision=decision,
            failed_evaluators=failed,
        )


def main() -> None:
    """Demonstrate full evaluation pipeline."""
    from datetime import timedelta, timezone

    from engagement_integrity.evaluators.composite import moderator_summary, user_message
    from engagement_integrity.models.model_submission import (
        ActionType,
        HistoryEntry,
        RecentEngagement,
    )

    print("Evaluator Registry Demo")
    print("=" * 50)

    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    samples = [
        EngagementSubmission(
            user_id="alice",
            raid_id="raid-1",
            action_type=ActionType.COMMENT,
            text=(
                "Great insight on the community roadmap, I really appreciate "
                "how thoughtful this analysis of the launch plan is."
            ),
            target_content="community roadmap launch plan analysis",
            evidence="https://example.com/shot.png",
            submitted_at=now,
        ),
        EngagementSubmission(
            user_id="bot-7",
            raid_id="raid-1",
            action_type=ActionType.LIKE,
            text="engagement",
            submitted_at=now,
            recent_engagements=[
                RecentEngagement(action_type="like", timestamp=now - timedelta(seconds=1))
                for _ in range(6)
            ],
        ),
        EngagementSubmission(
            user_id="hopper",
            raid_id="raid-9",
            text="consistency check",
            submitted_at=now,
            engagement_history=[
                HistoryEntry(raid_id=f"raid-{i}", timestamp=now - timedelta(minutes=10 * i))
                for i in range(4)
            ],
        ),
    ]

    registry = EvaluatorRegistry()
    for report in registry.evaluate_batch(samples):
        print(f"\n{report.user_id}: {user_message(report.decision)}")
        print(moderator_summary(report.decision))


if __name__ == "__main__":
    main()
