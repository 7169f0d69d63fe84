"""Explore router – public posts for the social explore screen.

GET /social/explore
    Posts by raw engagement (``default``) or by trending score (``trending``).
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from ..errors import InvalidTabError, UpstreamFetchError
from ..models import ExploreFeed

router = APIRouter(tags=["explore"])

logger = logging.getLogger(__name__)


@router.get("/social/explore", response_model=ExploreFeed)
async def explore_feed(
    request: Request,
    tab: str = Query("default", description="One of default, trending"),
    limit: int = Query(20, ge=1, description="Page size; values above 50 are clamped"),
) -> ExploreFeed:
    """Public posts for the explore screen."""
    feeds = request.app.state.feeds
    try:
        return await feeds.get_explore_feed(tab=tab, limit=limit)
    except InvalidTabError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamFetchError as exc:
        logger.exception("Explore feed '%s' failed", tab)
        raise HTTPException(status_code=502, detail="Error loading explore feed") from exc
