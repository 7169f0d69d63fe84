from fastapi.testclient import TestClient

from trending_api.lib.feeds import FeedService
from trending_api.lib.ranking import ResultCache
from trending_api.main import app

client = TestClient(app)


def test_healthcheck_returns_200():
    response = client.get("/health")
    assert response.status_code == 200


def test_healthcheck_response_body():
    response = client.get("/health")
    assert response.json() == {"status": "ok", "cachedFeeds": 0}


def test_healthcheck_reports_cached_feeds():
    cache = ResultCache()
    cache.put("discover:trending:20:0", [])
    app.state.feeds = FeedService(source=None, cache=cache)
    try:
        response = client.get("/health")
    finally:
        delattr(app.state, "feeds")
    assert response.json()["cachedFeeds"] == 1


def test_root_names_the_service():
    response = client.get("/")
    assert response.json() == {"message": "Fitness Trending API"}
