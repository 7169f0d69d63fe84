"""Discover router – programs and coaches for the discover screen.

GET /discover
    Ranked programs (``for_you`` / ``trending``) or coaches (``coaches``).
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from ..errors import InvalidTabError, UpstreamFetchError
from ..models import DiscoverFeed

router = APIRouter(tags=["discover"])

logger = logging.getLogger(__name__)


@router.get("/discover", response_model=DiscoverFeed)
async def discover_feed(
    request: Request,
    tab: str = Query("for_you", description="One of coaches, for_you, trending"),
    limit: int = Query(20, ge=1, description="Page size; values above 50 are clamped"),
    debug: bool = Query(False, description="Attach the trending score to each program"),
) -> DiscoverFeed:
    """Return the discover feed for ``tab``, served from cache when fresh."""
    feeds = request.app.state.feeds
    try:
        return await feeds.get_discover_feed(tab=tab, limit=limit, debug=debug)
    except InvalidTabError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamFetchError as exc:
        logger.exception("Discover feed '%s' failed", tab)
        raise HTTPException(status_code=502, detail="Error loading discover") from exc
