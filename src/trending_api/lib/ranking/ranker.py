"""Sort, truncate and serialize candidate snapshots into feed items."""

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

# Hard ceiling on items per feed page, whatever the caller asks for.
MAX_FEED_LIMIT = 50

T = TypeVar("T", bound=BaseModel)


def clamp_limit(limit: int, ceiling: int = MAX_FEED_LIMIT) -> int:
    """Bound a requested page size to ``[0, ceiling]``."""
    return max(0, min(ceiling, int(limit)))


def serialize(entity: BaseModel, score: float | None = None) -> dict[str, Any]:
    """Dump an entity in document-store field names, optionally with its score."""
    item = entity.model_dump(mode="json", by_alias=True)
    if score is not None:
        item["score"] = round(score, 2)
    return item


def rank(
    candidates: Sequence[T],
    score_fn: Callable[[T], float],
    limit: int,
    include_debug_score: bool = False,
) -> list[dict[str, Any]]:
    """Return the top ``limit`` candidates by ``score_fn``, highest first.

    Each candidate is scored exactly once.  ``sorted`` is stable (also with
    ``reverse=True``), so equal scores keep their fetch order.  When
    ``include_debug_score`` is set every item carries its score rounded to
    two decimals under ``score``.
    """
    limit = clamp_limit(limit)
    if not candidates or limit == 0:
        return []

    scored = [(score_fn(c), c) for c in candidates]
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)[:limit]

    return [
        serialize(entity, score if include_debug_score else None)
        for score, entity in scored
    ]


def order_by(
    candidates: Sequence[T],
    key: Callable[[T], Any],
    limit: int,
) -> list[dict[str, Any]]:
    """Top ``limit`` candidates by a descending sort ``key`` (stable, unscored)."""
    limit = clamp_limit(limit)
    if not candidates or limit == 0:
        return []
    ordered = sorted(candidates, key=key, reverse=True)[:limit]
    return [serialize(c) for c in ordered]
