"""Trending scores, ranking and the feed result cache."""

from .cache import CACHE_TTL_SECONDS, CacheEntry, ResultCache
from .ranker import MAX_FEED_LIMIT, clamp_limit, order_by, rank
from .scoring import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    decay_multiplier,
    post_trending_score,
    program_trending_score,
)

__all__ = [
    "CACHE_TTL_SECONDS",
    "CacheEntry",
    "ResultCache",
    "MAX_FEED_LIMIT",
    "clamp_limit",
    "order_by",
    "rank",
    "DEFAULT_SCORING_CONFIG",
    "ScoringConfig",
    "decay_multiplier",
    "post_trending_score",
    "program_trending_score",
]
