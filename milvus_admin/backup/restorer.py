"""Restore a Milvus collection from a schema/data artifact pair."""

from pathlib import Path
from typing import Any, Dict, List

from .._utils import logger
from ..exceptions import (
    ArtifactNotFoundError,
    CollectionMissingError,
    CreateError,
    IndexCreationError,
    InsertError,
    QueryError,
    milvus_errors,
)
from .models import RestoreResult, SchemaArtifact
from .schema import build_collection_schema, build_index_params
from .utils import load_schema_artifact, read_records, validate_artifact_name


class CollectionRestorer:
    """Recreate (optionally) and refill a collection from backup artifacts."""

    def __init__(self, client: Any, backup_dir: Path):
        self.client = client
        self.backup_dir = Path(backup_dir)

    async def restore(
        self,
        schema_file: str,
        data_file: str,
        create_if_missing: bool = False
    ) -> RestoreResult:
        """Restore one backup pair.

        Both artifacts are parsed before the database is touched, so a
        malformed file fails the restore without creating or inserting
        anything. When this call creates the collection and a later step
        fails, the new collection is dropped again; existing collections are
        never dropped.

        Args:
            schema_file: Schema artifact file name inside the backup directory
            data_file: Data artifact file name inside the backup directory
            create_if_missing: Create the collection from the stored schema if absent

        Returns:
            RestoreResult with parsed and inserted record counts
        """
        schema_path = self.backup_dir / validate_artifact_name(schema_file)
        data_path = self.backup_dir / validate_artifact_name(data_file)

        if not schema_path.is_file():
            raise ArtifactNotFoundError("schema", schema_file)
        if not data_path.is_file():
            raise ArtifactNotFoundError("data", data_file)

        artifact = await load_schema_artifact(schema_path)
        records = await read_records(data_path)
        collection_name = artifact.collection_name

        logger.info(f"Starting restore of {collection_name} from {schema_file} + {data_file}")

        with milvus_errors(QueryError, "Failed to list collections"):
            existing = await self.client.list_collections()

        created = False
        if collection_name not in existing:
            if not create_if_missing:
                raise CollectionMissingError(collection_name)
            await self._create_collection(artifact)
            created = True
        else:
            logger.debug(f"Collection {collection_name} exists, skipping creation")

        try:
            insert_count = await self._load_and_insert(artifact, records)
        except Exception:
            if created:
                await self._drop_collection(collection_name)
            raise

        if insert_count != len(records):
            logger.warning(
                f"Restore of {collection_name}: {len(records)} records read but Milvus reported {insert_count} inserted"
            )

        logger.info(f"Restore complete: {collection_name} ({len(records)} records)")

        return RestoreResult(
            collection_name=collection_name,
            record_count=len(records),
            insert_count=insert_count,
            created=created,
        )

    async def _create_collection(self, artifact: SchemaArtifact) -> None:
        collection_name = artifact.collection_name
        logger.info(f"Creating collection: {collection_name}")

        with milvus_errors(CreateError, f"Failed to create collection {collection_name}"):
            await self.client.create_collection(
                collection_name,
                schema=build_collection_schema(artifact.schema_),
            )

        try:
            for index in artifact.indexes:
                logger.debug(f"Creating index {index.index_name or index.field_name} on {collection_name}")
                with milvus_errors(
                    IndexCreationError,
                    f"Failed to create index on {collection_name}.{index.field_name}"
                ):
                    await self.client.create_index(collection_name, build_index_params(index))
        except Exception:
            await self._drop_collection(collection_name)
            raise

    async def _load_and_insert(self, artifact: SchemaArtifact, records: List[Dict[str, Any]]) -> int:
        collection_name = artifact.collection_name

        with milvus_errors(QueryError, f"Failed to load collection {collection_name}"):
            await self.client.load_collection(collection_name)

        if not records:
            return 0

        primary = artifact.schema_.primary_field
        if primary is not None and primary.auto_id:
            # Milvus rejects explicit keys for auto-id primary fields
            records = [{k: v for k, v in r.items() if k != primary.name} for r in records]

        with milvus_errors(InsertError, f"Failed to insert into {collection_name}"):
            response = await self.client.insert(collection_name, data=records)

        return int(response.get("insert_count", len(records)))

    async def _drop_collection(self, collection_name: str) -> None:
        """Drop a collection created by a restore that failed afterwards."""
        logger.warning(f"Restore failed, dropping newly created collection: {collection_name}")
        try:
            await self.client.drop_collection(collection_name)
        except Exception as e:
            logger.error(f"Failed to drop collection {collection_name}, manual cleanup required: {e}")
