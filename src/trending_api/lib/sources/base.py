"""Read-only access to rankable documents.

The ranking engine never writes to the store.  A ``MetricSource`` hands back
validated snapshots; filtering to published/public content is the source's
job, not the ranker's.  Any failure (connection, timeout, malformed
document) must surface as ``UpstreamFetchError``.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

from ...models import RankableCoach, RankablePost, RankableProgram


class PostOrder(str, Enum):
    """Order in which the post candidate pool is taken from the store."""

    RECENT = "recent"
    ENGAGEMENT = "engagement"


class MetricSource(ABC):
    """Abstract snapshot provider for programs, coaches and posts."""

    @abstractmethod
    async def fetch_programs(self, limit: int) -> list[RankableProgram]:
        """Published, public programs (at most ``limit``)."""
        ...

    @abstractmethod
    async def fetch_coaches(self, limit: int) -> list[RankableCoach]:
        """Coach candidates for the coaches tab (at most ``limit``)."""
        ...

    @abstractmethod
    async def fetch_coaches_by_ids(self, ids: Sequence[str]) -> list[RankableCoach]:
        """Coaches matching ``ids``.  Unknown ids are simply absent."""
        ...

    @abstractmethod
    async def fetch_posts(
        self, limit: int, order: PostOrder = PostOrder.RECENT
    ) -> list[RankablePost]:
        """Posts with public (or unset) visibility (at most ``limit``).

        ``order`` decides which posts make the cut when the store holds more
        than ``limit``: newest first, or most liked then most commented.
        """
        ...
