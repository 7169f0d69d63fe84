"""Runtime settings read from the environment.

``.env`` is loaded when the package is imported, so every value here can be
set either in the process environment or in a local ``.env`` file.
"""

import os

from pydantic import BaseModel, Field


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


class Settings(BaseModel):
    """Connection and sizing settings for the feed service."""

    elasticsearch_url: str = Field(
        "http://localhost:9200", description="Elasticsearch endpoint"
    )
    elasticsearch_api_key: str | None = Field(
        None, description="Optional Elasticsearch API key"
    )
    programs_index: str = "programs"
    coaches_index: str = "coaches"
    posts_index: str = "posts"
    candidate_pool_size: int = Field(
        300, ge=1, description="Maximum documents fetched per recompute"
    )
    cache_sweep_interval_seconds: int = Field(
        300, ge=1, description="How often expired cache entries are reclaimed"
    )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            elasticsearch_url=os.environ.get("ELASTICSEARCH_URL", "http://localhost:9200"),
            elasticsearch_api_key=os.environ.get("ELASTICSEARCH_API_KEY") or None,
            programs_index=os.environ.get("PROGRAMS_INDEX", "programs"),
            coaches_index=os.environ.get("COACHES_INDEX", "coaches"),
            posts_index=os.environ.get("POSTS_INDEX", "posts"),
            candidate_pool_size=_env_int("CANDIDATE_POOL_SIZE", 300),
            cache_sweep_interval_seconds=_env_int("CACHE_SWEEP_INTERVAL_SECONDS", 300),
        )
