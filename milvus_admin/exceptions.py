"""Exceptions raised by the backup subsystem and the Milvus client adapter."""

from contextlib import contextmanager
from typing import Iterator, Type

from pymilvus.exceptions import MilvusException, MilvusUnavailableException


class MilvusAdminError(Exception):
    """Base exception for milvus-admin errors."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DatabaseConnectionError(MilvusAdminError):
    """Milvus server could not be reached."""


class OperationError(MilvusAdminError):
    """Milvus reported a non-success status for an operation."""


class QueryError(OperationError):
    pass


class InsertError(OperationError):
    pass


class CreateError(OperationError):
    pass


class IndexCreationError(OperationError):
    pass


class ArtifactNotFoundError(MilvusAdminError):
    """A schema, data or other backup file is missing from the backup directory."""

    def __init__(self, kind: str, filename: str):
        label = {"schema": "Schema file", "data": "Data file"}.get(kind, "File")
        super().__init__(f"{label} not found: {filename}")
        self.kind = kind
        self.filename = filename


class CollectionMissingError(MilvusAdminError):
    def __init__(self, collection_name: str):
        super().__init__(f"Collection {collection_name} does not exist")
        self.collection_name = collection_name


class BackupNotFoundError(MilvusAdminError):
    def __init__(self, backup_name: str):
        super().__init__(f"Backup not found: {backup_name}")
        self.backup_name = backup_name


class ArtifactParseError(MilvusAdminError):
    """A schema document or a data line could not be parsed."""


class InconsistentRecordsError(ArtifactParseError):
    """Records in one data artifact do not share a single field set."""


class InvalidArtifactNameError(MilvusAdminError):
    def __init__(self, name: str):
        super().__init__(f"Invalid backup file name: {name!r}")
        self.name = name


@contextmanager
def milvus_errors(error_cls: Type[OperationError], action: str) -> Iterator[None]:
    """Translate pymilvus exceptions raised inside the block.

    An unreachable server becomes ``DatabaseConnectionError``; any other
    ``MilvusException`` becomes ``error_cls`` carrying the server's reason.
    """
    try:
        yield
    except MilvusUnavailableException as e:
        raise DatabaseConnectionError(f"{action}: Milvus unavailable: {e.message}") from e
    except MilvusException as e:
        raise error_cls(f"{action}: {e.message}") from e
