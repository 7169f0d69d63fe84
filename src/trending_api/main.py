import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from elasticsearch import AsyncElasticsearch
from fastapi import FastAPI

from .config import Settings
from .lib.feeds import FeedService
from .lib.ranking import ResultCache
from .lib.sources import ElasticsearchMetricSource
from .routers import discover, explore, health

logger = logging.getLogger(__name__)


async def sweep_periodically(cache: ResultCache, interval_seconds: float) -> None:
    """Reclaim expired cache entries every ``interval_seconds``."""
    while True:
        await asyncio.sleep(interval_seconds)
        cache.sweep()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    es = AsyncElasticsearch(
        settings.elasticsearch_url,
        api_key=settings.elasticsearch_api_key,
    )
    cache = ResultCache()
    app.state.es = es
    app.state.feeds = FeedService(
        ElasticsearchMetricSource(es, settings),
        cache=cache,
        candidate_pool_size=settings.candidate_pool_size,
    )
    sweeper = asyncio.create_task(
        sweep_periodically(cache, settings.cache_sweep_interval_seconds)
    )
    logger.info("Feed service ready (elasticsearch=%s)", settings.elasticsearch_url)
    try:
        yield
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
        await es.close()


app = FastAPI(
    title="Fitness Trending API",
    description="Trending and discovery feeds for programs, coaches and posts",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(discover.router)
app.include_router(explore.router)


@app.get("/")
async def root():
    return {"message": "Fitness Trending API"}
