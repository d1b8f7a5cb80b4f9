"""
Elasticsearch document store implementation.
"""

from typing import Any, Dict, Optional

from elasticsearch import ApiError, AsyncElasticsearch, TransportError

from config.config import Settings
from repositories.base import BaseDocumentStore
from common.exceptions import DocumentStoreException, DocumentStoreInitializationException
from common.logging import get_logger

logger = get_logger("elasticsearch_repository")

_SUCCESSFUL_RESULTS = ("created", "updated")


class ElasticsearchDocumentStore(BaseDocumentStore):
    """
    Document store backed by an AsyncElasticsearch client.
    The client pools connections and is shared by all requests.
    """

    def __init__(self, client: AsyncElasticsearch):
        self.client = client

    async def create(self, index: str, document: Dict[str, Any]) -> None:
        try:
            response = await self.client.index(index=index, document=document)
        except ApiError as e:
            status_code = getattr(e.meta, "status", None)
            raise DocumentStoreException(
                detail=f"Elasticsearch request failed with status code: '{status_code}'",
                index=index,
                status_code=status_code,
            ) from e
        except TransportError as e:
            raise DocumentStoreException(
                detail=f"Elasticsearch transport error: {e}",
                index=index,
            ) from e
        except Exception as e:
            raise DocumentStoreException(
                detail=f"Failed to index document: {e}",
                index=index,
            ) from e

        result = response.get("result") if response is not None else None
        if result not in _SUCCESSFUL_RESULTS:
            raise DocumentStoreException(
                detail=f"Unexpected Elasticsearch index result: '{result}'",
                index=index,
            )

        logger.debug(f"Indexed telemetry document into {index}", extra={"index": index})

    async def close(self) -> None:
        await self.client.close()


def create_elasticsearch_document_store(
    settings: Settings,
    client: Optional[AsyncElasticsearch] = None,
) -> ElasticsearchDocumentStore:
    """Build the store from ELASTIC_* settings.

    Raises DocumentStoreInitializationException when the client cannot be configured.
    """
    if client is not None:
        return ElasticsearchDocumentStore(client)

    if not settings.elastic_url:
        raise DocumentStoreInitializationException(
            detail="ELASTIC_URL is not set",
            backend="elasticsearch",
        )

    basic_auth = None
    if settings.elastic_username:
        basic_auth = (settings.elastic_username, settings.elastic_password)

    try:
        client = AsyncElasticsearch(
            hosts=[settings.elastic_url],
            basic_auth=basic_auth,
            request_timeout=settings.elastic_request_timeout,
        )
    except Exception as e:
        raise DocumentStoreInitializationException(
            detail=f"Failed to init Elasticsearch client: {e}",
            backend="elasticsearch",
        ) from e

    logger.info(
        "Elasticsearch client configured",
        extra={"authenticated": basic_auth is not None},
    )
    return ElasticsearchDocumentStore(client)
