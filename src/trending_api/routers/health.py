from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    cached_feeds: int = Field(0, alias="cachedFeeds")


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck(request: Request) -> HealthResponse:
    feeds = getattr(request.app.state, "feeds", None)
    cached = len(feeds.cache) if feeds is not None else 0
    return HealthResponse(status="ok", cached_feeds=cached)
