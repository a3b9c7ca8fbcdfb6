"""Read-only client for the OpenSearch translations index.

The index is populated and kept fresh elsewhere; the workbench only queries
it for fuzzy match candidates. Documents carry at least ``project_id``,
``key``, ``rfc5646_locale``, ``source_copy`` and ``copy``.
"""

from contextlib import asynccontextmanager
from typing import Any

from opensearchpy import NotFoundError, OpenSearchException
from opensearchpy._async.client import AsyncOpenSearch

from workbench.core.config import settings
from workbench.core.exceptions import ExternalServiceError
from workbench.core.logging import get_logger

logger = get_logger(__name__)

_client: AsyncOpenSearch | None = None


def get_translation_index_client() -> AsyncOpenSearch:
    """Get the global OpenSearch client instance."""
    if _client is None:
        raise ExternalServiceError(
            "OpenSearch", "client not initialized, enter translation_index_lifespan"
        )
    return _client


def _parse_url(url: str) -> tuple[str, int, bool]:
    use_ssl = url.startswith("https://")
    host = url.replace("https://", "").replace("http://", "").rstrip("/")

    if ":" in host:
        host_part, port_part = host.rsplit(":", 1)
        return host_part, int(port_part), use_ssl
    return host, 443 if use_ssl else 9200, use_ssl


@asynccontextmanager
async def translation_index_lifespan():
    """Async context manager for OpenSearch client lifecycle."""
    global _client

    if not settings.OPENSEARCH_URL:
        logger.warning("opensearch_disabled", reason="OPENSEARCH_URL not configured")
        yield
        return

    host, port, use_ssl = _parse_url(settings.OPENSEARCH_URL)
    _client = AsyncOpenSearch(
        hosts=[{"host": host, "port": port}],
        use_ssl=use_ssl,
        verify_certs=settings.OPENSEARCH_VERIFY_CERTS,
        ssl_show_warn=False,
        pool_maxsize=10,
        retry_on_timeout=True,
        max_retries=3,
    )

    try:
        info = await _client.info()
        logger.info(
            "opensearch_connected",
            cluster_name=info["cluster_name"],
            version=info["version"]["number"],
            index=settings.TRANSLATIONS_INDEX,
        )
        yield
    finally:
        await _client.close()
        _client = None
        logger.info("opensearch_disconnected")


def build_fuzzy_query(locale: str, source_copy: str) -> dict[str, Any]:
    """Query DSL for translated entries in a locale sharing any source token."""
    return {
        "bool": {
            "must": [
                {
                    "match": {
                        "source_copy": {"query": source_copy, "operator": "or"}
                    }
                }
            ],
            "filter": [
                {"term": {"rfc5646_locale": locale}},
                {"exists": {"field": "copy"}},
            ],
        }
    }


async def search_fuzzy_candidates(
    locale: str,
    source_copy: str,
    limit: int,
) -> list[dict[str, Any]]:
    """Fetch up to `limit` fuzzy match candidates from the translations index.

    Args:
        locale: Locale the candidates must be translated into
        source_copy: Text matched against the candidates' source copy
        limit: Maximum number of raw candidates to return

    Returns:
        The candidates' source documents, in index relevance order

    Raises:
        ExternalServiceError: If the index cannot be queried
    """
    client = get_translation_index_client()
    body = {
        "query": build_fuzzy_query(locale, source_copy),
        "size": limit,
    }

    try:
        response = await client.search(index=settings.TRANSLATIONS_INDEX, body=body)
    except NotFoundError:
        # Index not created yet
        return []
    except OpenSearchException as e:
        logger.exception(
            "translation_index_search_failed",
            locale=locale,
            error=str(e),
        )
        raise ExternalServiceError("OpenSearch", str(e)) from e

    return [hit["_source"] for hit in response["hits"]["hits"]]
