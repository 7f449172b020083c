"""Dependency injection for FastAPI."""

from fastapi import Depends, Request
from typing import TYPE_CHECKING

from ..backup import BackupManager

if TYPE_CHECKING:
    from ..client import MilvusClientProvider


async def get_client_provider(request: Request) -> "MilvusClientProvider":
    """Get the shared Milvus client provider from app state."""
    return request.app.state.milvus


async def get_backup_manager(
    request: Request,
    client_provider: "MilvusClientProvider" = Depends(get_client_provider)
) -> BackupManager:
    """Build a BackupManager over the shared client and configured backup directory."""
    config = request.app.state.backup_config
    return BackupManager(client_provider, config.backup_dir, config.export_batch_size)
