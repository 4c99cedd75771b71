"""Input models for engagement submissions and the history windows that travel with them."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from engagement_integrity.models.common import _as_utc, _utc_now


class ActionType(str, Enum):
    """Engagement actions a raid participant can claim."""

    LIKE = "like"
    RETWEET = "retweet"
    QUOTE = "quote"
    COMMENT = "comment"
    VERIFY = "verify"


class EvidenceType(str, Enum):
    """Kinds of structured attestation."""

    SCREENSHOT = "screenshot"
    VIDEO = "video"


class Evidence(BaseModel):
    """Structured proof attached to a submission."""

    model_config = ConfigDict(frozen=True)

    type: EvidenceType = Field(description="Attestation kind")
    url: str = Field(default="", description="Where the screenshot/video is hosted")
    duration: float | None = Field(default=None, description="Video length in seconds")


class RecentEngagement(BaseModel):
    """A prior engagement by the same user inside the current burst window."""

    model_config = ConfigDict(frozen=True)

    action_type: str | None = Field(default=None, description="Action claimed at the time")
    timestamp: datetime | None = Field(default=None, description="When it was submitted")
    submission_text: str = Field(default="", description="Free text submitted with it")

    @field_validator("timestamp")
    @classmethod
    def _timestamp_as_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class HistoryEntry(BaseModel):
    """A prior engagement by the same user, spanning raids/sessions."""

    model_config = ConfigDict(frozen=True)

    raid_id: str | None = Field(default=None, description="Raid the engagement belonged to")
    timestamp: datetime | None = Field(default=None, description="When it happened")

    @field_validator("timestamp")
    @classmethod
    def _timestamp_as_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class EngagementSubmission(BaseModel):
    """A user's claim of having engaged with a raid target.

    Immutable per evaluation call. History windows are fetched by the caller;
    ``None`` means the window was not supplied, an empty list means it was
    supplied and empty. Evaluators treat the two differently when deciding
    whether they apply.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(default="", description="Opaque user identifier")
    raid_id: str = Field(default="", description="Opaque raid identifier")
    action_type: ActionType | None = Field(default=None, description="Claimed action")
    text: str = Field(default="", description="User-supplied comment/quote text")

    # Relevance inputs
    target_content: str | None = Field(default=None, description="Text of the raided post")
    reference_text: str | None = Field(
        default=None, description="Fallback reference text when target_content is empty"
    )
    topics: list[str] = Field(default_factory=list, description="Declared raid topics")

    # Attestation
    evidence: Evidence | str | None = Field(default=None, description="Proof of engagement")
    suspicious_patterns_hint: list[str] = Field(
        default_factory=list, description="Tags pre-flagged by an upstream detector"
    )

    submitted_at: datetime = Field(default_factory=_utc_now, description="Submission time")

    # Bounded history windows
    recent_engagements: list[RecentEngagement] | None = Field(
        default=None, description="Prior engagements in the current burst window"
    )
    engagement_history: list[HistoryEntry] | None = Field(
        default=None, description="Prior engagements across raids/sessions"
    )

    @field_validator("submitted_at")
    @classmethod
    def _submitted_at_as_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def target_text(self) -> str:
        """Reference text used for relevance comparison."""
        return (self.target_content or self.reference_text or "").strip()
