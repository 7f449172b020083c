"""Conversion between Milvus schema/index descriptions and backup descriptors."""

from typing import Any, Dict, List

from pymilvus import CollectionSchema, DataType, FieldSchema
from pymilvus.milvus_client import IndexParams

from .models import CollectionSchemaDescriptor, FieldDescriptor, IndexDescriptor

# Keys of describe_index that describe build progress, not the index itself
_INDEX_RUNTIME_KEYS = {"total_rows", "indexed_rows", "pending_index_rows", "state", "index_state_fail_reason"}
_INDEX_IDENTITY_KEYS = {"field_name", "index_name", "index_type", "metric_type", "params"}


def _type_name(value: Any) -> str:
    if isinstance(value, DataType):
        return value.name
    if isinstance(value, int):
        return DataType(value).name
    return str(value).upper()


def _coerce_param(value: Any) -> Any:
    # Milvus reports some numeric parameters as strings ("dim": "8", "M": "16")
    if isinstance(value, str) and value.lstrip("-").isdigit():
        return int(value)
    return value


def field_from_description(field: Dict[str, Any]) -> FieldDescriptor:
    element_type = field.get("element_type")
    return FieldDescriptor(
        name=field["name"],
        type=_type_name(field["type"]),
        description=field.get("description", "") or "",
        is_primary=bool(field.get("is_primary", False)),
        auto_id=bool(field.get("auto_id", False)),
        params={k: _coerce_param(v) for k, v in (field.get("params") or {}).items()},
        element_type=_type_name(element_type) if element_type is not None else None,
        is_partition_key=bool(field.get("is_partition_key", False)),
        nullable=bool(field.get("nullable", False)),
    )


def schema_from_description(collection_name: str, description: Dict[str, Any]) -> CollectionSchemaDescriptor:
    """Build a descriptor from the dict returned by ``describe_collection``."""
    fields = [field_from_description(f) for f in description.get("fields", [])]
    return CollectionSchemaDescriptor(
        collection_name=collection_name,
        description=description.get("description", "") or "",
        auto_id=bool(description.get("auto_id", False)) or any(f.is_primary and f.auto_id for f in fields),
        enable_dynamic_field=bool(description.get("enable_dynamic_field", False)),
        fields=fields,
    )


def index_from_description(description: Dict[str, Any]) -> IndexDescriptor:
    """Build a descriptor from the dict returned by ``describe_index``."""
    params = {
        k: _coerce_param(v)
        for k, v in description.items()
        if k not in _INDEX_RUNTIME_KEYS and k not in _INDEX_IDENTITY_KEYS
    }
    nested = description.get("params")
    if isinstance(nested, dict):
        params.update({k: _coerce_param(v) for k, v in nested.items()})

    return IndexDescriptor(
        field_name=description["field_name"],
        index_name=description.get("index_name", "") or "",
        index_type=description.get("index_type", "") or "",
        metric_type=description.get("metric_type") or None,
        params=params,
    )


def build_collection_schema(descriptor: CollectionSchemaDescriptor) -> CollectionSchema:
    """Rebuild a pymilvus ``CollectionSchema`` from a stored descriptor."""
    fields: List[FieldSchema] = []
    for field in descriptor.fields:
        kwargs: Dict[str, Any] = dict(field.params)
        if field.is_primary:
            kwargs["is_primary"] = True
            kwargs["auto_id"] = field.auto_id
        if field.element_type:
            kwargs["element_type"] = DataType[field.element_type]
        if field.is_partition_key:
            kwargs["is_partition_key"] = True
        if field.nullable:
            kwargs["nullable"] = True
        fields.append(FieldSchema(
            field.name,
            DataType[field.type],
            description=field.description,
            **kwargs
        ))

    return CollectionSchema(
        fields,
        description=descriptor.description,
        enable_dynamic_field=descriptor.enable_dynamic_field,
    )


def build_index_params(index: IndexDescriptor) -> IndexParams:
    """Wrap one stored index in the ``IndexParams`` container ``create_index`` expects."""
    index_params = IndexParams()
    kwargs: Dict[str, Any] = {"params": dict(index.params)}
    if index.metric_type:
        kwargs["metric_type"] = index.metric_type
    index_params.add_index(
        field_name=index.field_name,
        index_type=index.index_type,
        index_name=index.index_name,
        **kwargs
    )
    return index_params
