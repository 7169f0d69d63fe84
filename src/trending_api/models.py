"""Typed snapshots of rankable documents and feed payloads.

Documents arrive from the store with camelCase field names; those names are
used as aliases so the models can be validated straight from a ``_source``
and serialized back in the same shape.  Missing or null numeric fields fall
back to zero here, at the adapter boundary, so the scoring functions can
assume fully-populated input.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Undated documents sort as the oldest possible content.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class _Document(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A stored null means "absent": let the field default apply.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class _Identified(_Document):
    id: str = Field(..., description="Document id")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return str(v)
        return v


class _Timestamped(_Identified):
    created_at: datetime = Field(EPOCH, alias="createdAt")

    @field_validator("created_at", mode="after")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ProgramMetrics(_Document):
    """Quality and engagement signals attached to a program."""

    completion_7d: float = Field(0.0, alias="completion7d", description="7-day completion rate, 0-100")
    save_rate: float = Field(0.0, alias="saveRate", description="0-1")
    comment_velocity: float = Field(0.0, alias="commentVelocity", description="Non-negative, unbounded")
    retention_w3: float = Field(0.0, alias="retentionW3", description="Week-3 retention, 0-1")
    refund_rate: float = Field(0.0, alias="refundRate", description="0-1")
    report_rate: float = Field(0.0, alias="reportRate", description="0-1")


class RankableProgram(_Timestamped):
    """A published, public training program."""

    metrics: ProgramMetrics = Field(default_factory=ProgramMetrics)
    coach_id: str | None = Field(None, alias="coachId")

    @field_validator("coach_id", mode="before")
    @classmethod
    def _coerce_coach_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return str(v)
        return v


class RankableCoach(_Identified):
    verified: bool = False
    followers: int = 0


class Visibility(str, Enum):
    PUBLIC = "public"
    RESTRICTED = "restricted"


class RankablePost(_Timestamped):
    """A social post as seen by the explore feed."""

    like_count: int = Field(0, alias="likeCount")
    comment_count: int = Field(0, alias="commentCount")
    visibility: Visibility | None = None

    @field_validator("visibility", mode="before")
    @classmethod
    def _normalize_visibility(cls, v: Any) -> Any:
        # The store also knows "friends" and "private"; anything that is not
        # public is restricted as far as the explore feed is concerned.
        if isinstance(v, Visibility) or v is None:
            return v
        if str(v).strip().lower() == Visibility.PUBLIC.value:
            return Visibility.PUBLIC
        return Visibility.RESTRICTED

    @property
    def is_public(self) -> bool:
        return self.visibility in (None, Visibility.PUBLIC)


# ---------------------------------------------------------------------------
# Feed payloads
# ---------------------------------------------------------------------------

class DiscoverFeed(BaseModel):
    """Programs or coaches for the discover screen."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[dict[str, Any]] = Field(default_factory=list)
    from_cache: bool = Field(
        False, alias="fromCache", description="True when served without recomputing"
    )


class ExploreFeed(BaseModel):
    """Posts for the social explore screen."""

    items: list[dict[str, Any]] = Field(default_factory=list)
