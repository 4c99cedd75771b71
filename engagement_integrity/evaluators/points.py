"""Raid point award for admitted submissions."""

from engagement_integrity.consts import DEFAULT_ACTION_POINTS, DEFAULT_ENGAGEMENT_POINTS
from engagement_integrity.models.model_result import AggregateDecision, Verdict
from engagement_integrity.models.model_submission import EngagementSubmission


def get_points_for_action(action: str | None, points_table: dict[str, int] | None = None) -> int:
    """Points for an action, falling back to the default for unknown actions."""
    table = points_table or DEFAULT_ENGAGEMENT_POINTS
    if not action:
        return DEFAULT_ACTION_POINTS
    return table.get(action, DEFAULT_ACTION_POINTS)


def award_points(
    decision: AggregateDecision,
    submission: EngagementSubmission,
    points_table: dict[str, int] | None = None,
) -> int:
    """Points the raid coordinator should grant.

    Only admitted submissions earn points; flagged ones wait for a moderator
    and rejected ones earn nothing.
    """
    if decision.verdict != Verdict.ADMIT:
        return 0
    action = submission.action_type.value if submission.action_type else None
    return get_points_for_action(action, points_table)
