"""Trending scores for programs and posts.

Both scores combine engagement/quality signals with an exponential time
decay.  The decay never reaches zero: it is applied as
``floor + (1 - floor) * decay`` so old-but-excellent content is discounted,
not erased.

* **Programs** blend completion, saves, comment velocity and retention,
  subtract refund and report penalties, decay with a 14-day half-life
  (floor 0.6) and finally add a coach boost for verified status and
  follower count.
* **Posts** add log-compressed like and comment counts (comments weigh
  1.5x likes) and decay with a 2-day half-life (floor 0.5).

Scores are only used for ordering.  They are not clamped and may be
negative.
"""

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ...models import RankableCoach, RankablePost, RankableProgram

SECONDS_PER_DAY = 86400.0
LN2 = math.log(2)


class ScoringConfig(BaseModel):
    """Weights, half-lives and boosts used by the scoring functions."""

    model_config = ConfigDict(frozen=True)

    # Program base score
    completion_weight: float = 0.35
    save_weight: float = 0.20
    comment_weight: float = 0.15
    retention_weight: float = 0.10
    refund_penalty: float = 0.20
    report_penalty: float = 0.25
    comment_velocity_log_factor: float = 40.0
    comment_score_cap: float = 100.0

    # Program decay
    program_half_life_days: float = 14.0
    program_decay_floor: float = 0.6

    # Coach boost
    verified_boost: float = 8.0
    follower_log_factor: float = 5.0

    # Posts
    like_log_factor: float = 40.0
    post_comment_log_factor: float = 60.0
    post_half_life_days: float = 2.0
    post_decay_floor: float = 0.5


DEFAULT_SCORING_CONFIG = ScoringConfig()


def _clamp_pct(value: float) -> float:
    return max(0.0, min(100.0, value))


def age_in_days(created_at: datetime, now: datetime) -> float:
    """Age of a document in days; future timestamps count as brand new."""
    return max(0.0, (now - created_at).total_seconds() / SECONDS_PER_DAY)


def decay_multiplier(age_days: float, half_life_days: float, floor: float) -> float:
    """Exponential decay rescaled into ``[floor, 1]``."""
    decay = math.exp(-LN2 * age_days / half_life_days)
    return floor + (1.0 - floor) * decay


def coach_boost(coach: RankableCoach | None, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> float:
    if coach is None:
        return 0.0
    boost = config.verified_boost if coach.verified else 0.0
    # ~25 at 100k followers
    boost += math.log10(max(0, coach.followers) + 1) * config.follower_log_factor
    return boost


def program_trending_score(
    program: RankableProgram,
    coach: RankableCoach | None,
    now: datetime,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Trending score for a program; higher is more trending.

    ``coach`` is the program's resolved coach, or ``None`` when the program
    has no coach or the id did not match a known coach.
    """
    m = program.metrics

    completion = _clamp_pct(m.completion_7d)
    save = _clamp_pct(m.save_rate * 100)
    retention = _clamp_pct(m.retention_w3 * 100)
    refund = _clamp_pct(m.refund_rate * 100)
    report = _clamp_pct(m.report_rate * 100)
    comment_score = min(
        config.comment_score_cap,
        math.log10(max(0.0, m.comment_velocity) + 1) * config.comment_velocity_log_factor,
    )

    score = (
        config.completion_weight * completion
        + config.save_weight * save
        + config.comment_weight * comment_score
        + config.retention_weight * retention
        - config.refund_penalty * refund
        - config.report_penalty * report
    )

    score *= decay_multiplier(
        age_in_days(program.created_at, now),
        config.program_half_life_days,
        config.program_decay_floor,
    )

    return score + coach_boost(coach, config)


def post_trending_score(
    post: RankablePost,
    now: datetime,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Trending score for an explore post."""
    like_score = math.log10(max(0, post.like_count) + 1) * config.like_log_factor
    comment_score = math.log10(max(0, post.comment_count) + 1) * config.post_comment_log_factor

    return (like_score + comment_score) * decay_multiplier(
        age_in_days(post.created_at, now),
        config.post_half_life_days,
        config.post_decay_floor,
    )
