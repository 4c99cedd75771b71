"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_submission import (
    ActionType,
    EngagementSubmission,
    HistoryEntry,
    RecentEngagement,
)


@pytest.fixture
def base_time() -> datetime:
    """Fixed submission time so every evaluation is reproducible."""
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_submission(base_time: datetime) -> Callable[..., EngagementSubmission]:
    """Factory building submissions with sensible defaults."""

    def _make(**overrides) -> EngagementSubmission:
        data = {
            "user_id": "user-1",
            "raid_id": "raid-1",
            "submitted_at": base_time,
        }
        data.update(overrides)
        return EngagementSubmission(**data)

    return _make


@pytest.fixture
def legit_submission(make_submission) -> EngagementSubmission:
    """A thoughtful comment with evidence and a calm history."""
    return make_submission(
        action_type=ActionType.COMMENT,
        text="comment: bitcoin halving analysis",
        target_content="bitcoin halving analysis thread",
        topics=["bitcoin"],
        evidence="screenshot",
        recent_engagements=[],
    )


@pytest.fixture
def bot_burst(base_time: datetime) -> list[RecentEngagement]:
    """Five identical likes stamped at the same instant."""
    return [
        RecentEngagement(action_type="like", timestamp=base_time, submission_text="nice")
        for _ in range(5)
    ]


@pytest.fixture
def hopping_history(base_time: datetime) -> list[HistoryEntry]:
    """Three raids, one action each, one minute apart."""
    return [
        HistoryEntry(raid_id=f"raid-{i}", timestamp=base_time - timedelta(minutes=i))
        for i in range(3)
    ]


@pytest.fixture
def default_weights() -> FusionWeights:
    return FusionWeights()
