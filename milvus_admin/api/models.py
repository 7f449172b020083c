"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime, timezone

from ..backup.models import BackupEntry


class RestoreRequest(BaseModel):
    schema_file: str = Field(..., alias="schemaFile", min_length=1)
    data_file: str = Field(..., alias="dataFile", min_length=1)
    create_if_not_exists: bool = Field(False, alias="createIfNotExists")

    model_config = ConfigDict(populate_by_name=True)


class BackupFiles(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_file: str = Field(..., alias="schema")
    data: str


class BackupCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    files: BackupFiles
    record_count: int = Field(..., alias="recordCount")


class RestoreResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    collection: str
    record_count: int = Field(..., alias="recordCount")
    insert_count: int = Field(..., alias="insertCount")
    created: bool


class BackupListResponse(BaseModel):
    success: bool = True
    backups: List[BackupEntry]


class DeleteResponse(BaseModel):
    success: bool = True
    deleted: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthStatus(BaseModel):
    status: str  # "healthy", "unhealthy"
    milvus: bool
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

