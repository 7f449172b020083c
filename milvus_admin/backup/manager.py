"""Backup and restore orchestration for Milvus collections."""

from pathlib import Path
from typing import List

from ..client import MilvusClientProvider
from .catalog import BackupCatalog
from .exporter import CollectionExporter
from .models import BackupEntry, ExportResult, RestoreResult
from .restorer import CollectionRestorer


class BackupManager:
    """Entry point for export, restore, listing and deletion of backups."""

    def __init__(
        self,
        client_provider: MilvusClientProvider,
        backup_dir: str = "./backups",
        export_batch_size: int = 1000
    ):
        """Initialize backup manager.

        Args:
            client_provider: Shared Milvus client provider
            backup_dir: Directory for backup artifacts
            export_batch_size: Rows fetched per query page during export
        """
        self.client_provider = client_provider
        self.backup_dir = Path(backup_dir)
        self.export_batch_size = export_batch_size
        self.catalog = BackupCatalog(self.backup_dir)

    async def create_backup(self, collection_name: str) -> ExportResult:
        """Export a collection to ``{date}-{collection}.json`` + ``.jsonl``."""
        exporter = CollectionExporter(
            self.client_provider.get_client(),
            self.backup_dir,
            batch_size=self.export_batch_size
        )
        return await exporter.export(collection_name)

    async def restore_backup(
        self,
        schema_file: str,
        data_file: str,
        create_if_missing: bool = False
    ) -> RestoreResult:
        """Restore a collection from a schema and a data artifact."""
        restorer = CollectionRestorer(self.client_provider.get_client(), self.backup_dir)
        return await restorer.restore(schema_file, data_file, create_if_missing)

    async def list_backups(self) -> List[BackupEntry]:
        return await self.catalog.list_backups()

    async def delete_backup(self, backup_name: str) -> bool:
        return await self.catalog.delete_backup(backup_name)

    async def get_artifact_path(self, filename: str) -> Path:
        return await self.catalog.get_artifact_path(filename)
