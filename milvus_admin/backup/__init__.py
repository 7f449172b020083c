"""Backup and restore of Milvus collections as schema/data artifact pairs."""

from .manager import BackupManager
from .catalog import BackupCatalog
from .exporter import CollectionExporter
from .restorer import CollectionRestorer

__all__ = ["BackupManager", "BackupCatalog", "CollectionExporter", "CollectionRestorer"]
