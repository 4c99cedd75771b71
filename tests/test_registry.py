"""Tests for EvaluatorRegistry orchestration."""

import asyncio
import time
from datetime import timedelta
from unittest.mock import patch

import pytest

from engagement_integrity.evaluators.registry import EvaluatorRegistry, default_evaluators
from engagement_integrity.evaluators.spam import SpamScoreEvaluator
from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import (
    AggregateDecision,
    DecisionReasons,
    EvaluationKind,
    Verdict,
)
from engagement_integrity.models.model_submission import ActionType


class SlowEvaluator:
    """Evaluator that takes longer than callers are willing to wait."""

    kind = EvaluationKind.ENGAGEMENT_QUALITY

    def validate(self, submission):
        return True

    def evaluate(self, submission, current_time=None):
        time.sleep(0.5)
        raise AssertionError("should have timed out")


@pytest.fixture
def registry(default_weights) -> EvaluatorRegistry:
    return EvaluatorRegistry(weights=default_weights)


class TestEvaluatorRegistry:
    """Tests for EvaluatorRegistry."""

    def test_default_evaluator_order(self):
        kinds = [evaluator.kind for evaluator in default_evaluators()]
        assert kinds == [
            EvaluationKind.CONTENT_RELEVANCE,
            EvaluationKind.SPAM_SCORE,
            EvaluationKind.ENGAGEMENT_FRAUD,
            EvaluationKind.PARTICIPATION_CONSISTENCY,
            EvaluationKind.ENGAGEMENT_QUALITY,
        ]

    def test_applicable_skips_unrelated_evaluators(self, registry, legit_submission):
        kinds = [evaluator.kind for evaluator in registry.applicable(legit_submission)]
        assert EvaluationKind.PARTICIPATION_CONSISTENCY not in kinds
        assert EvaluationKind.CONTENT_RELEVANCE in kinds

    def test_nothing_applicable(self, registry, make_submission):
        report = registry.evaluate(make_submission(text="hello"))

        assert report.results == []
        assert report.decision.verdict == Verdict.ADMIT
        assert report.decision.trust_score == 0.5

    def test_legit_submission_admitted_with_points(self, registry, legit_submission):
        report = registry.evaluate(legit_submission)

        assert [r.kind for r in report.results] == [
            EvaluationKind.CONTENT_RELEVANCE,
            EvaluationKind.SPAM_SCORE,
            EvaluationKind.ENGAGEMENT_FRAUD,
            EvaluationKind.ENGAGEMENT_QUALITY,
        ]
        assert report.decision.verdict == Verdict.ADMIT
        assert report.decision.points_awarded == 5
        assert report.decision.trust_score == pytest.approx(0.906, abs=0.001)
        assert report.failed_evaluators == []
        assert report.user_id == "user-1"
        assert report.raid_id == "raid-1"

    def test_bot_burst_rejected(self, registry, make_submission, bot_burst):
        submission = make_submission(
            action_type=ActionType.LIKE, text="raid like", recent_engagements=bot_burst
        )
        report = registry.evaluate(submission)

        assert report.decision.verdict == Verdict.REJECT
        assert DecisionReasons.FRAUD_DETECTED in report.decision.reasons
        assert report.decision.points_awarded == 0

    def test_session_hopper_flagged(self, registry, make_submission, hopping_history):
        submission = make_submission(
            action_type=ActionType.LIKE, text="raid check-in", engagement_history=hopping_history
        )
        report = registry.evaluate(submission)

        assert report.decision.verdict == Verdict.FLAG
        assert report.decision.reasons == [DecisionReasons.SESSION_HOPPING]
        assert report.decision.points_awarded == 0

    def test_failing_evaluator_is_isolated(self, registry, legit_submission):
        with patch.object(SpamScoreEvaluator, "evaluate", side_effect=RuntimeError("boom")):
            report = registry.evaluate(legit_submission)

        assert report.failed_evaluators == ["SpamScoreEvaluator"]
        assert report.result_for(EvaluationKind.SPAM_SCORE) is None
        assert report.result_for(EvaluationKind.CONTENT_RELEVANCE) is not None
        assert report.decision.verdict == Verdict.ADMIT

    def test_failing_validate_is_isolated(self, registry, legit_submission):
        with patch.object(SpamScoreEvaluator, "validate", side_effect=ValueError("bad")):
            results, failed = registry.evaluate_submission(legit_submission)
            applicable = registry.applicable(legit_submission)

        assert failed == ["SpamScoreEvaluator"]
        assert all(r.kind != EvaluationKind.SPAM_SCORE for r in results)
        assert all(e.kind != EvaluationKind.SPAM_SCORE for e in applicable)

    def test_custom_policy(self, legit_submission, default_weights):
        def always_flag(results, weights):
            return AggregateDecision(verdict=Verdict.FLAG, trust_score=0.0, reasons=["MANUAL"])

        registry = EvaluatorRegistry(policy=always_flag, weights=default_weights)
        report = registry.evaluate(legit_submission)

        assert report.decision.verdict == Verdict.FLAG
        assert report.decision.reasons == ["MANUAL"]

    def test_custom_points_table(self, legit_submission, default_weights):
        registry = EvaluatorRegistry(weights=default_weights, points_table={"comment": 10})
        assert registry.evaluate(legit_submission).decision.points_awarded == 10

    def test_weights_from_env(self, monkeypatch):
        monkeypatch.setenv("EIP_WEIGHT_RELEVANCE", "0.4")
        monkeypatch.setenv("EIP_WEIGHT_QUALITY", "0.15")
        registry = EvaluatorRegistry()

        assert registry.weights == FusionWeights(relevance=0.4, quality=0.15)

    def test_evaluate_batch(self, registry, legit_submission, make_submission):
        reports = registry.evaluate_batch([legit_submission, make_submission(text="hello")])

        assert len(reports) == 2
        assert reports[0].decision.verdict == Verdict.ADMIT
        assert reports[1].results == []

    def test_evaluated_at_defaults_to_submission_time(
        self, registry, legit_submission, base_time
    ):
        report = registry.evaluate(legit_submission)
        assert all(r.evaluated_at == base_time for r in report.results)

        later = base_time + timedelta(hours=1)
        report = registry.evaluate(legit_submission, current_time=later)
        assert all(r.evaluated_at == later for r in report.results)

    def test_replay_is_identical(self, registry, legit_submission):
        first = registry.evaluate(legit_submission)
        second = registry.evaluate(legit_submission)
        assert first.model_dump() == second.model_dump()


class TestEvaluatorRegistryAsync:
    """Tests for the concurrent entry points."""

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, registry, make_submission, bot_burst, hopping_history):
        submission = make_submission(
            action_type=ActionType.QUOTE,
            text="quote this raid, free giveaway!!!",
            target_content="raid giveaway thread",
            recent_engagements=bot_burst,
            engagement_history=hopping_history,
        )

        sync_report = registry.evaluate(submission)
        async_report = await registry.evaluate_async(submission)

        assert async_report == sync_report
        assert [r.kind for r in async_report.results] == list(EvaluationKind)

    @pytest.mark.asyncio
    async def test_async_isolates_failures(self, registry, legit_submission):
        with patch.object(SpamScoreEvaluator, "evaluate", side_effect=RuntimeError("boom")):
            results, failed = await registry.evaluate_submission_async(legit_submission)

        assert failed == ["SpamScoreEvaluator"]
        assert all(r.kind != EvaluationKind.SPAM_SCORE for r in results)

    @pytest.mark.asyncio
    async def test_async_timeout(self, legit_submission, default_weights):
        registry = EvaluatorRegistry(evaluators=[SlowEvaluator()], weights=default_weights)

        with pytest.raises(asyncio.TimeoutError):
            await registry.evaluate_async(legit_submission, timeout=0.05)
