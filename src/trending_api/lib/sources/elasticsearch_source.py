"""Elasticsearch-backed metric source.

Reads snapshots from three indices (names come from ``Settings``):

* ``programs`` – filtered to ``isPublished`` and ``isPublic`` documents.
* ``coaches`` – looked up by id for coach boosts, or listed by
  ``verified`` then ``followers`` for the coaches tab.
* ``posts`` – filtered to ``visibility: public`` or no visibility at all.

Every client error, unexpected response or document that fails validation
is re-raised as ``UpstreamFetchError`` so the feed layer can abort the
request without touching its cache.
"""

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ...config import Settings
from ...errors import UpstreamFetchError
from ...models import RankableCoach, RankablePost, RankableProgram
from ..elasticsearch import iter_hit_documents, unwrap_es_response
from .base import MetricSource, PostOrder

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def programs_query() -> dict:
    return {
        "bool": {
            "filter": [
                {"term": {"isPublished": True}},
                {"term": {"isPublic": True}},
            ]
        }
    }


def public_posts_query() -> dict:
    # Non-scoring: the pool order comes from the sort, not from relevance.
    return {
        "bool": {
            "filter": [
                {
                    "bool": {
                        "should": [
                            {"term": {"visibility": "public"}},
                            {"bool": {"must_not": {"exists": {"field": "visibility"}}}},
                        ],
                        "minimum_should_match": 1,
                    }
                }
            ]
        }
    }


POST_SORTS: dict[PostOrder, list[dict]] = {
    PostOrder.RECENT: [{"createdAt": "desc"}],
    PostOrder.ENGAGEMENT: [{"likeCount": "desc"}, {"commentCount": "desc"}],
}


def _with_engagement_counts(doc: dict[str, Any]) -> dict[str, Any]:
    """Derive ``likeCount``/``commentCount`` from stored arrays when missing."""
    for count_field, list_field in (("likeCount", "likes"), ("commentCount", "comments")):
        if doc.get(count_field) is None and isinstance(doc.get(list_field), list):
            doc[count_field] = len(doc[list_field])
    return doc


class ElasticsearchMetricSource(MetricSource):
    """``MetricSource`` over an ``AsyncElasticsearch`` client."""

    def __init__(self, es, settings: Settings | None = None):
        self.es = es
        self.settings = settings or Settings()

    async def _search(self, index: str, **kwargs) -> dict:
        try:
            resp = await self.es.search(index=index, **kwargs)
        except Exception as exc:
            logger.exception("Elasticsearch search failed", extra={"index": index})
            raise UpstreamFetchError(f"Search on '{index}' failed") from exc
        return unwrap_es_response(resp)

    @staticmethod
    def _validate(model: type[M], index: str, doc: dict[str, Any]) -> M:
        try:
            return model.model_validate(doc)
        except ValidationError as exc:
            logger.error(
                "Malformed document in '%s' (id=%s): %s", index, doc.get("id"), exc
            )
            raise UpstreamFetchError(f"Malformed document in '{index}'") from exc

    async def fetch_programs(self, limit: int) -> list[RankableProgram]:
        index = self.settings.programs_index
        data = await self._search(index, query=programs_query(), size=limit)
        return [
            self._validate(RankableProgram, index, doc)
            for doc in iter_hit_documents(data)
        ]

    async def fetch_coaches(self, limit: int) -> list[RankableCoach]:
        index = self.settings.coaches_index
        data = await self._search(
            index,
            query={"match_all": {}},
            size=limit,
            sort=[{"verified": "desc"}, {"followers": "desc"}],
        )
        return [
            self._validate(RankableCoach, index, doc)
            for doc in iter_hit_documents(data)
        ]

    async def fetch_coaches_by_ids(self, ids: Sequence[str]) -> list[RankableCoach]:
        if not ids:
            return []
        index = self.settings.coaches_index
        data = await self._search(
            index, query={"ids": {"values": list(ids)}}, size=len(ids)
        )
        return [
            self._validate(RankableCoach, index, doc)
            for doc in iter_hit_documents(data)
        ]

    async def fetch_posts(
        self, limit: int, order: PostOrder = PostOrder.RECENT
    ) -> list[RankablePost]:
        index = self.settings.posts_index
        data = await self._search(
            index, query=public_posts_query(), size=limit, sort=POST_SORTS[order]
        )
        return [
            self._validate(RankablePost, index, _with_engagement_counts(doc))
            for doc in iter_hit_documents(data)
        ]
