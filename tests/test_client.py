"""Tests for the Milvus client provider and error translation."""

import pytest
from unittest.mock import AsyncMock, patch

from pymilvus.exceptions import MilvusException, MilvusUnavailableException

from milvus_admin.client import MilvusClientProvider
from milvus_admin.config import MilvusConfig
from milvus_admin.exceptions import (
    DatabaseConnectionError,
    QueryError,
    milvus_errors,
)


@patch("milvus_admin.client.AsyncMilvusClient")
def test_client_created_once(mock_client_class):
    """The client is built lazily and reused."""
    provider = MilvusClientProvider(MilvusConfig(host="milvus", port=19531))
    assert provider._client is None

    first = provider.get_client()
    second = provider.get_client()

    assert first is second
    mock_client_class.assert_called_once_with(uri="http://milvus:19531", db_name="default")


@patch("milvus_admin.client.AsyncMilvusClient")
def test_client_receives_credentials(mock_client_class):
    provider = MilvusClientProvider(MilvusConfig(username="root", password="Milvus"))
    provider.get_client()

    kwargs = mock_client_class.call_args.kwargs
    assert kwargs["user"] == "root"
    assert kwargs["password"] == "Milvus"


@pytest.mark.asyncio
@patch("milvus_admin.client.AsyncMilvusClient")
async def test_close_resets_client(mock_client_class):
    mock_client_class.return_value.close = AsyncMock()
    provider = MilvusClientProvider(MilvusConfig())
    provider.get_client()

    await provider.close()

    mock_client_class.return_value.close.assert_awaited_once()
    assert provider._client is None


@pytest.mark.asyncio
@patch("milvus_admin.client.AsyncMilvusClient")
async def test_check_health(mock_client_class):
    mock_client_class.return_value.list_collections = AsyncMock(return_value=["docs"])
    provider = MilvusClientProvider(MilvusConfig())
    assert await provider.check_health() is True

    mock_client_class.return_value.list_collections = AsyncMock(
        side_effect=MilvusException(message="connection refused")
    )
    assert await provider.check_health() is False


def test_milvus_errors_translates_operation_failure():
    with pytest.raises(QueryError) as exc_info:
        with milvus_errors(QueryError, "Failed to query docs"):
            raise MilvusException(message="field vec not exist")

    assert "Failed to query docs" in exc_info.value.reason
    assert "field vec not exist" in exc_info.value.reason
    assert isinstance(exc_info.value.__cause__, MilvusException)


def test_milvus_errors_translates_unavailable_server():
    with pytest.raises(DatabaseConnectionError):
        with milvus_errors(QueryError, "Failed to query docs"):
            raise MilvusUnavailableException(message="server unavailable")


def test_milvus_errors_leaves_other_exceptions():
    with pytest.raises(KeyError):
        with milvus_errors(QueryError, "Failed to query docs"):
            raise KeyError("id")
