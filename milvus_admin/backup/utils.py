"""Utility functions for backup/restore operations."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from pydantic import ValidationError

from .._utils import logger, json_default
from ..exceptions import ArtifactParseError, InconsistentRecordsError, InvalidArtifactNameError
from .models import SchemaArtifact

SCHEMA_SUFFIX = ".json"
DATA_SUFFIX = ".jsonl"
PARTIAL_SUFFIX = ".partial"


def generate_backup_name(collection_name: str, now: Optional[datetime] = None) -> str:
    """Generate the base name shared by a schema/data pair.

    Returns:
        Backup name in format: YYYY-MM-DD-<collection>
    """
    now = now or datetime.now(timezone.utc)
    return f"{now.strftime('%Y-%m-%d')}-{collection_name}"


def validate_artifact_name(name: str) -> str:
    """Reject names that would resolve outside the backup directory."""
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise InvalidArtifactNameError(name)
    return name


async def save_schema_artifact(artifact: SchemaArtifact, output_path: Path) -> None:
    """Save schema artifact JSON to file.

    Args:
        artifact: Schema artifact to persist
        output_path: Output file path
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(artifact.model_dump(mode="json", by_alias=True), f, indent=2, default=json_default)

    logger.debug(f"Schema artifact saved: {output_path}")


async def load_schema_artifact(schema_path: Path) -> SchemaArtifact:
    """Load and validate a schema artifact.

    Raises:
        ArtifactParseError: file is not JSON or does not match the schema document layout
    """
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        artifact = SchemaArtifact.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ArtifactParseError(f"Invalid JSON in schema file {schema_path.name}: {e}") from e
    except ValidationError as e:
        raise ArtifactParseError(f"Malformed schema file {schema_path.name}: {e}") from e

    logger.debug(f"Schema artifact loaded: {schema_path}")
    return artifact


async def read_schema_metadata(schema_path: Path) -> Dict[str, Any]:
    """Read collection name and timestamp from a schema file without full validation."""
    with open(schema_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("schema document is not a JSON object")
    collection = data.get("collection_name")
    return {
        "collection": collection if isinstance(collection, str) else None,
        "timestamp": data.get("timestamp"),
    }


async def read_records(data_path: Path) -> List[Dict[str, Any]]:
    """Parse every non-blank line of a data artifact.

    Parsing completes before anything is returned, so a malformed line fails
    the whole artifact.

    Raises:
        ArtifactParseError: a line is not valid JSON or not a JSON object
        InconsistentRecordsError: records do not share the first record's fields
    """
    records: List[Dict[str, Any]] = []
    with open(data_path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ArtifactParseError(
                    f"Invalid JSON in {data_path.name} at line {line_number}: {e.msg}"
                ) from e
            if not isinstance(record, dict):
                raise ArtifactParseError(
                    f"Line {line_number} of {data_path.name} is not a JSON object"
                )
            records.append(record)

    if records:
        expected = set(records[0])
        for position, record in enumerate(records[1:], start=2):
            if set(record) != expected:
                missing = sorted(expected - set(record))
                extra = sorted(set(record) - expected)
                raise InconsistentRecordsError(
                    f"Record {position} of {data_path.name} has a different field set "
                    f"(missing: {missing}, unexpected: {extra})"
                )

    logger.debug(f"Read {len(records)} records from {data_path}")
    return records


async def count_records(data_path: Path) -> int:
    """Count non-blank lines of a data artifact."""
    count = 0
    with open(data_path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                count += 1
    return count


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; None when missing or unparseable."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
