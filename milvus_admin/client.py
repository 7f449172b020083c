"""Milvus client adapter."""

from typing import Optional

from pymilvus import AsyncMilvusClient

from ._utils import logger
from .config import MilvusConfig


class MilvusClientProvider:
    """Own the single ``AsyncMilvusClient`` shared by every request.

    The client is built on first use and reused afterwards. Construction is
    synchronous, so concurrent callers on one event loop always observe the
    same instance.
    """

    def __init__(self, config: Optional[MilvusConfig] = None):
        self.config = config or MilvusConfig()
        self._client: Optional[AsyncMilvusClient] = None

    def get_client(self) -> AsyncMilvusClient:
        """Get or create the Milvus client."""
        if self._client is None:
            logger.info(f"Connecting to Milvus at {self.config.uri}")
            self._client = AsyncMilvusClient(**self.config.to_client_kwargs())
        return self._client

    async def check_health(self) -> bool:
        """Return True when the server answers a ``list_collections`` call."""
        try:
            await self.get_client().list_collections()
            return True
        except Exception as e:
            logger.warning(f"Milvus health check failed: {e}")
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("Milvus client closed")
