"""Data models for backup/restore operations."""

from datetime import datetime
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FieldDescriptor(BaseModel):
    """One field of a collection schema."""

    name: str
    type: str = Field(..., description="Milvus DataType name, e.g. INT64 or FLOAT_VECTOR")
    description: str = ""
    is_primary: bool = False
    auto_id: bool = False
    params: Dict[str, Any] = Field(default_factory=dict, description="Type parameters such as dim or max_length")
    element_type: Optional[str] = None
    is_partition_key: bool = False
    nullable: bool = False


class CollectionSchemaDescriptor(BaseModel):
    """Collection schema as captured from ``describe_collection``."""

    collection_name: str
    description: str = ""
    auto_id: bool = False
    enable_dynamic_field: bool = False
    fields: List[FieldDescriptor] = Field(default_factory=list)

    @property
    def primary_field(self) -> Optional[FieldDescriptor]:
        for field in self.fields:
            if field.is_primary:
                return field
        return None


class IndexDescriptor(BaseModel):
    """Index definition as captured from ``describe_index``."""

    field_name: str
    index_name: str = ""
    index_type: str = ""
    metric_type: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)


class SchemaArtifact(BaseModel):
    """On-disk schema document of a backup pair."""

    collection_name: str
    schema_: CollectionSchemaDescriptor = Field(..., alias="schema")
    indexes: List[IndexDescriptor] = Field(default_factory=list)
    timestamp: datetime

    model_config = ConfigDict(populate_by_name=True)


class BackupEntry(BaseModel):
    """A complete schema + data pair found in the backup directory."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    schema_file: str = Field(..., alias="schema")
    data_file: str = Field(..., alias="data")
    collection: Optional[str] = None
    timestamp: Optional[datetime] = None
    record_count: Optional[int] = Field(None, alias="recordCount")


class ExportResult(BaseModel):
    collection_name: str
    schema_file: str
    data_file: str
    record_count: int


class RestoreResult(BaseModel):
    collection_name: str
    record_count: int
    insert_count: int
    created: bool = False
