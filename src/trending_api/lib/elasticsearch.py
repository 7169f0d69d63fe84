"""Shared Elasticsearch utilities.

Helpers for turning Elasticsearch responses into plain documents for the
metric source.
"""

import logging
from collections.abc import Iterator
from typing import Any

from elastic_transport import ObjectApiResponse

from ..errors import UpstreamFetchError

logger = logging.getLogger(__name__)


def unwrap_es_response(resp) -> dict:
    """Unwrap an Elasticsearch response, handling both ObjectApiResponse and dict.

    Raises ``UpstreamFetchError`` if the response type is unexpected.
    """
    if isinstance(resp, ObjectApiResponse):
        return resp.body
    elif isinstance(resp, dict):
        return resp
    else:
        logger.error("Unexpected Elasticsearch response type: %s", type(resp))
        raise UpstreamFetchError("Invalid Elasticsearch response")


def _malformed(what: str) -> UpstreamFetchError:
    logger.error("Malformed Elasticsearch response: %s", what)
    return UpstreamFetchError("Malformed Elasticsearch response")


def iter_hit_documents(data: dict) -> Iterator[dict[str, Any]]:
    """Yield each hit's ``_source`` with ``id`` filled from ``_id`` when absent.

    Raises ``UpstreamFetchError`` when the hits envelope, a hit or a
    ``_source`` is not shaped like an Elasticsearch search response.
    """
    if not isinstance(data, dict):
        raise _malformed("response body is not an object")
    outer = data.get("hits", {})
    if not isinstance(outer, dict):
        raise _malformed("hits is not an object")
    hits = outer.get("hits", [])
    if not isinstance(hits, list):
        raise _malformed("hits.hits is not a list")

    for hit in hits:
        if not isinstance(hit, dict):
            raise _malformed("hit is not an object")
        source = hit.get("_source") or {}
        if not isinstance(source, dict):
            raise _malformed("_source is not an object")
        src = dict(source)
        if src.get("id") is None and hit.get("_id") is not None:
            src["id"] = hit["_id"]
        yield src
