"""Feed dispatcher for the discover and explore screens.

A request names a feed tab.  The tab picks the candidate query and the
ordering; the result is cached per ``(tab, limit, debug)`` for the cache TTL.

Discover tabs:

* ``coaches`` – coaches by verified status, then follower count.
* ``for_you`` – programs by 7-day completion, then newest first.  No decay
  and no coach boost.
* ``trending`` – programs by ``program_trending_score``.

Explore tabs:

* ``default`` – posts by raw like count, then comment count.
* ``trending`` – posts by ``post_trending_score``.

A failed fetch propagates as ``UpstreamFetchError`` and leaves the cache
untouched.
"""

import copy
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..errors import InvalidTabError
from ..models import DiscoverFeed, ExploreFeed
from .ranking import (
    DEFAULT_SCORING_CONFIG,
    ResultCache,
    ScoringConfig,
    clamp_limit,
    order_by,
    post_trending_score,
    program_trending_score,
    rank,
)
from .sources import MetricSource, PostOrder

logger = logging.getLogger(__name__)

# Upper bound on documents pulled from the store per recompute.
DEFAULT_CANDIDATE_POOL_SIZE = 300

Items = list[dict[str, Any]]


class DiscoverTab(str, Enum):
    COACHES = "coaches"
    FOR_YOU = "for_you"
    TRENDING = "trending"


class ExploreTab(str, Enum):
    DEFAULT = "default"
    TRENDING = "trending"


def _parse_tab(tab_enum: type[Enum], feed: str, tab: str) -> Any:
    try:
        return tab_enum(tab)
    except ValueError:
        raise InvalidTabError(feed, str(tab), [t.value for t in tab_enum]) from None


def discover_cache_key(tab: DiscoverTab, limit: int, debug: bool) -> str:
    # Coaches carry no debug score, so the flag does not split their slot.
    if tab is DiscoverTab.COACHES:
        return f"discover:{tab.value}:{limit}"
    return f"discover:{tab.value}:{limit}:{int(bool(debug))}"


def explore_cache_key(tab: ExploreTab, limit: int) -> str:
    return f"explore:{tab.value}:{limit}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedService:
    """Serves discover and explore feeds from a metric source and a cache.

    The cache is owned by the service instance; pass one in to share it or
    to control its clock in tests.
    """

    def __init__(
        self,
        source: MetricSource,
        cache: ResultCache | None = None,
        scoring: ScoringConfig = DEFAULT_SCORING_CONFIG,
        candidate_pool_size: int = DEFAULT_CANDIDATE_POOL_SIZE,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.source = source
        self.cache = cache if cache is not None else ResultCache()
        self.scoring = scoring
        self.candidate_pool_size = candidate_pool_size
        self._now = now

        self._discover_handlers: dict[DiscoverTab, Callable[[int, bool], Awaitable[Items]]] = {
            DiscoverTab.COACHES: self._coaches,
            DiscoverTab.FOR_YOU: self._for_you_programs,
            DiscoverTab.TRENDING: self._trending_programs,
        }
        self._explore_handlers: dict[ExploreTab, Callable[[int], Awaitable[Items]]] = {
            ExploreTab.DEFAULT: self._engagement_posts,
            ExploreTab.TRENDING: self._trending_posts,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_discover_feed(
        self,
        tab: str = DiscoverTab.FOR_YOU.value,
        limit: int = 20,
        debug: bool = False,
    ) -> DiscoverFeed:
        discover_tab = _parse_tab(DiscoverTab, "discover", tab)
        limit = clamp_limit(limit)
        key = discover_cache_key(discover_tab, limit, debug)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Discover cache hit for %s", key)
            return DiscoverFeed(items=copy.deepcopy(cached), from_cache=True)

        logger.info("Recomputing discover feed %s", key)
        items = await self._discover_handlers[discover_tab](limit, debug)
        self.cache.put(key, items)
        # Callers get their own copy; the cached payload is never handed out.
        return DiscoverFeed(items=copy.deepcopy(items), from_cache=False)

    async def get_explore_feed(
        self,
        tab: str = ExploreTab.DEFAULT.value,
        limit: int = 20,
    ) -> ExploreFeed:
        explore_tab = _parse_tab(ExploreTab, "explore", tab)
        limit = clamp_limit(limit)
        key = explore_cache_key(explore_tab, limit)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Explore cache hit for %s", key)
            return ExploreFeed(items=copy.deepcopy(cached))

        logger.info("Recomputing explore feed %s", key)
        items = await self._explore_handlers[explore_tab](limit)
        self.cache.put(key, items)
        return ExploreFeed(items=copy.deepcopy(items))

    # ------------------------------------------------------------------
    # Discover tabs
    # ------------------------------------------------------------------

    async def _coaches(self, limit: int, debug: bool) -> Items:
        coaches = await self.source.fetch_coaches(limit)
        return order_by(coaches, key=lambda c: (c.verified, c.followers), limit=limit)

    async def _for_you_programs(self, limit: int, debug: bool) -> Items:
        programs = await self.source.fetch_programs(self.candidate_pool_size)
        return order_by(
            programs,
            key=lambda p: (p.metrics.completion_7d, p.created_at),
            limit=limit,
        )

    async def _trending_programs(self, limit: int, debug: bool) -> Items:
        programs = await self.source.fetch_programs(self.candidate_pool_size)
        if not programs:
            return []

        coach_ids = list(dict.fromkeys(p.coach_id for p in programs if p.coach_id))
        coaches = {c.id: c for c in await self.source.fetch_coaches_by_ids(coach_ids)}

        now = self._now()
        return rank(
            programs,
            lambda p: program_trending_score(p, coaches.get(p.coach_id), now, self.scoring),
            limit,
            include_debug_score=debug,
        )

    # ------------------------------------------------------------------
    # Explore tabs
    # ------------------------------------------------------------------

    async def _public_posts(self, order: PostOrder):
        posts = await self.source.fetch_posts(self.candidate_pool_size, order=order)
        return [p for p in posts if p.is_public]

    async def _engagement_posts(self, limit: int) -> Items:
        posts = await self._public_posts(PostOrder.ENGAGEMENT)
        return order_by(posts, key=lambda p: (p.like_count, p.comment_count), limit=limit)

    async def _trending_posts(self, limit: int) -> Items:
        posts = await self._public_posts(PostOrder.RECENT)
        now = self._now()
        return rank(
            posts,
            lambda p: post_trending_score(p, now, self.scoring),
            limit,
        )
