"""Listing and deletion of backup pairs in the backup directory."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Any

from .._utils import logger
from ..exceptions import ArtifactNotFoundError, BackupNotFoundError
from .models import BackupEntry
from .utils import (
    DATA_SUFFIX,
    SCHEMA_SUFFIX,
    count_records,
    parse_timestamp,
    read_schema_metadata,
    validate_artifact_name,
)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class BackupCatalog:
    """View the backup directory as a set of schema/data pairs."""

    def __init__(self, backup_dir: Path):
        self.backup_dir = Path(backup_dir)

    async def list_backups(self) -> List[BackupEntry]:
        """List complete backup pairs, newest first.

        Unreadable schema or data files are logged and keep empty metadata;
        they never abort the listing. Entries without a usable timestamp sort
        after dated ones.
        """
        if not self.backup_dir.is_dir():
            return []

        groups: Dict[str, Dict[str, Any]] = {}

        for path in sorted(self.backup_dir.iterdir()):
            if not path.is_file():
                continue

            if path.suffix == SCHEMA_SUFFIX:
                group = groups.setdefault(path.stem, {})
                group["schema_file"] = path.name
                try:
                    metadata = await read_schema_metadata(path)
                    group["collection"] = metadata["collection"]
                    group["timestamp"] = parse_timestamp(metadata["timestamp"])
                except Exception as e:
                    logger.warning(f"Failed to read schema file {path.name}: {e}")

            elif path.suffix == DATA_SUFFIX:
                group = groups.setdefault(path.stem, {})
                group["data_file"] = path.name
                try:
                    group["record_count"] = await count_records(path)
                except Exception as e:
                    logger.warning(f"Failed to read data file {path.name}: {e}")

        backups = [
            BackupEntry(name=name, **group)
            for name, group in groups.items()
            if "schema_file" in group and "data_file" in group
        ]

        backups.sort(key=lambda b: (b.timestamp is not None, b.timestamp or _OLDEST), reverse=True)

        return backups

    async def delete_backup(self, backup_name: str) -> bool:
        """Delete the schema and/or data file of a backup.

        Returns:
            True when at least one file was removed

        Raises:
            BackupNotFoundError: neither file exists
        """
        validate_artifact_name(backup_name)
        deleted = False

        for suffix in (SCHEMA_SUFFIX, DATA_SUFFIX):
            path = self.backup_dir / f"{backup_name}{suffix}"
            if path.exists():
                path.unlink()
                deleted = True

        if not deleted:
            raise BackupNotFoundError(backup_name)

        logger.info(f"Deleted backup: {backup_name}")
        return True

    async def get_artifact_path(self, filename: str) -> Path:
        """Resolve a schema or data file inside the backup directory."""
        validate_artifact_name(filename)
        path = self.backup_dir / filename

        if path.suffix not in (SCHEMA_SUFFIX, DATA_SUFFIX) or not path.is_file():
            raise ArtifactNotFoundError("file", filename)

        return path
