"""Tests for document snapshot models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from .models import EPOCH, DiscoverFeed, RankableCoach, RankablePost, RankableProgram, Visibility


class TestRankableProgram:
    def test_validates_from_store_document(self):
        program = RankableProgram.model_validate({
            "id": "p1",
            "createdAt": "2026-01-10T00:00:00Z",
            "coachId": "c1",
            "metrics": {"completion7d": 55.5, "retentionW3": 0.2},
        })
        assert program.metrics.completion_7d == 55.5
        assert program.metrics.retention_w3 == 0.2
        assert program.metrics.save_rate == 0.0
        assert program.coach_id == "c1"

    def test_defaults_when_fields_missing(self):
        program = RankableProgram.model_validate({"id": "p1"})
        assert program.created_at == EPOCH
        assert program.coach_id is None
        assert program.metrics.comment_velocity == 0.0

    def test_naive_timestamps_are_utc(self):
        program = RankableProgram.model_validate({"id": "p1", "createdAt": "2026-01-10T06:30:00"})
        assert program.created_at == datetime(2026, 1, 10, 6, 30, tzinfo=timezone.utc)

    def test_numeric_ids_become_strings(self):
        program = RankableProgram.model_validate({"id": 42, "coachId": 7})
        assert program.id == "42"
        assert program.coach_id == "7"

    def test_rejects_nan_metrics(self):
        with pytest.raises(ValidationError):
            RankableProgram.model_validate({"id": "p1", "metrics": {"saveRate": float("nan")}})

    def test_extra_fields_round_trip_with_store_names(self):
        program = RankableProgram.model_validate({
            "id": "p1",
            "name": "Mobility Reset",
            "tags": ["mobility"],
            "metrics": {"completion7d": 10},
        })
        dumped = program.model_dump(mode="json", by_alias=True)
        assert dumped["name"] == "Mobility Reset"
        assert dumped["tags"] == ["mobility"]
        assert dumped["metrics"]["completion7d"] == 10


class TestRankablePost:
    @pytest.mark.parametrize("raw", ["friends", "private", "restricted"])
    def test_non_public_visibility_is_restricted(self, raw):
        post = RankablePost.model_validate({"id": "s1", "visibility": raw})
        assert post.visibility is Visibility.RESTRICTED
        assert not post.is_public

    def test_public_visibility(self):
        post = RankablePost.model_validate({"id": "s1", "visibility": "PUBLIC"})
        assert post.visibility is Visibility.PUBLIC
        assert post.is_public

    def test_unset_visibility_is_public(self):
        assert RankablePost.model_validate({"id": "s1"}).is_public


def test_coach_defaults():
    coach = RankableCoach.model_validate({"id": "c1", "followers": None})
    assert coach.verified is False
    assert coach.followers == 0


def test_discover_feed_serializes_from_cache_alias():
    feed = DiscoverFeed(items=[{"id": "a"}], from_cache=True)
    assert feed.model_dump(by_alias=True) == {"items": [{"id": "a"}], "fromCache": True}
