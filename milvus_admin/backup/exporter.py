"""Export a Milvus collection into a schema/data artifact pair."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

from .._utils import logger, dumps_record
from ..exceptions import QueryError, milvus_errors
from .models import CollectionSchemaDescriptor, ExportResult, IndexDescriptor, SchemaArtifact
from .schema import index_from_description, schema_from_description
from .utils import (
    DATA_SUFFIX,
    PARTIAL_SUFFIX,
    SCHEMA_SUFFIX,
    generate_backup_name,
    save_schema_artifact,
)

# Vector types whose query values come back as raw bytes
BINARY_FIELD_TYPES = {"BINARY_VECTOR", "FLOAT16_VECTOR", "BFLOAT16_VECTOR"}


class CollectionExporter:
    """Write a collection's schema, indexes and rows to the backup directory."""

    def __init__(self, client: Any, backup_dir: Path, batch_size: int = 1000):
        """Initialize exporter.

        Args:
            client: ``AsyncMilvusClient`` (or compatible) instance
            backup_dir: Directory receiving the artifacts
            batch_size: Rows fetched per query page
        """
        self.client = client
        self.backup_dir = Path(backup_dir)
        self.batch_size = batch_size

    async def export(self, collection_name: str) -> ExportResult:
        """Export one collection.

        The schema file is written before any row is fetched. Rows stream into
        a ``.partial`` file that is renamed only after the last page, so a
        failure never leaves a data file that looks complete. The schema file
        of a failed export stays behind and is hidden from listings because
        its pair is incomplete.
        """
        logger.info(f"Starting export of collection: {collection_name}")

        schema = await self.describe_schema(collection_name)
        indexes = await self.describe_indexes(collection_name)
        check_exportable(schema)

        with milvus_errors(QueryError, f"Failed to load collection {collection_name}"):
            await self.client.load_collection(collection_name)

        now = datetime.now(timezone.utc)
        backup_name = generate_backup_name(collection_name, now)
        self.backup_dir.mkdir(parents=True, exist_ok=True)

        schema_path = self.backup_dir / f"{backup_name}{SCHEMA_SUFFIX}"
        data_path = self.backup_dir / f"{backup_name}{DATA_SUFFIX}"
        partial_path = data_path.with_name(data_path.name + PARTIAL_SUFFIX)

        await save_schema_artifact(
            SchemaArtifact(
                collection_name=collection_name,
                schema=schema,
                indexes=indexes,
                timestamp=now,
            ),
            schema_path,
        )

        record_count = 0
        try:
            with open(partial_path, "w", encoding="utf-8") as f:
                async for page in self.iter_records(collection_name, schema):
                    for record in page:
                        f.write(_encode_record(collection_name, record) + "\n")
                    record_count += len(page)
            partial_path.replace(data_path)
        finally:
            if partial_path.exists():
                partial_path.unlink()

        logger.info(f"Export complete: {collection_name} -> {backup_name} ({record_count} records)")

        return ExportResult(
            collection_name=collection_name,
            schema_file=schema_path.name,
            data_file=data_path.name,
            record_count=record_count,
        )

    async def describe_schema(self, collection_name: str) -> CollectionSchemaDescriptor:
        with milvus_errors(QueryError, f"Failed to describe collection {collection_name}"):
            description = await self.client.describe_collection(collection_name)
        return schema_from_description(collection_name, description)

    async def describe_indexes(self, collection_name: str) -> List[IndexDescriptor]:
        indexes = []
        with milvus_errors(QueryError, f"Failed to describe indexes of {collection_name}"):
            index_names = await self.client.list_indexes(collection_name)
            for index_name in index_names:
                description = await self.client.describe_index(collection_name, index_name)
                if description:
                    indexes.append(index_from_description(description))
        return indexes

    async def iter_records(
        self,
        collection_name: str,
        schema: CollectionSchemaDescriptor
    ) -> AsyncIterator[List[Dict[str, Any]]]:
        """Yield the collection's rows page by page.

        Pages are chained on the primary key: each query asks for rows whose
        key is greater than the largest key seen so far. Every page is sent
        with ``iterator="True"``, which makes Milvus return the smallest keys
        first (the same request flag pymilvus' ``QueryIterator`` uses). A
        plain limited query returns an arbitrary subset and would let the
        cursor skip rows.
        """
        primary = schema.primary_field
        if primary is None:
            raise QueryError(f"Collection {collection_name} has no primary key field")

        last_key: Optional[Any] = None
        while True:
            expr = "" if last_key is None else f"{primary.name} > {_literal(last_key)}"
            with milvus_errors(QueryError, f"Failed to query collection {collection_name}"):
                page = await self.client.query(
                    collection_name,
                    filter=expr,
                    output_fields=["*"],
                    limit=self.batch_size,
                    iterator="True",
                )
            if not page:
                break

            yield page

            if len(page) < self.batch_size:
                break
            last_key = max(record[primary.name] for record in page)


def check_exportable(schema: CollectionSchemaDescriptor) -> None:
    """Refuse collections whose rows cannot be written as JSON lines."""
    binary_fields = [f.name for f in schema.fields if f.type in BINARY_FIELD_TYPES]
    if binary_fields:
        raise QueryError(
            f"Collection {schema.collection_name} cannot be exported: "
            f"binary vector fields are not supported ({', '.join(binary_fields)})"
        )


def _encode_record(collection_name: str, record: Dict[str, Any]) -> str:
    try:
        return dumps_record(record)
    except (TypeError, ValueError) as e:
        raise QueryError(f"Failed to serialise a record of {collection_name}: {e}") from e


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)
