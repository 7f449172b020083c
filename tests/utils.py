"""Test utilities for milvus-admin tests."""
import json
import re
from copy import deepcopy
from typing import Any, Dict, List, Optional

from pymilvus import DataType
from pymilvus.exceptions import MilvusException

_CURSOR_EXPR = re.compile(r"^(\w+) > (.+)$")


def docs_description(auto_id: bool = False) -> Dict[str, Any]:
    """describe_collection() output for a small collection with a vector field."""
    id_field = {"field_id": 100, "name": "id", "description": "", "type": DataType.INT64,
                "params": {}, "is_primary": True}
    if auto_id:
        id_field["auto_id"] = True
    return {
        "collection_name": "docs",
        "auto_id": auto_id,
        "num_shards": 1,
        "description": "test documents",
        "fields": [
            id_field,
            {"field_id": 101, "name": "text", "description": "", "type": DataType.VARCHAR,
             "params": {"max_length": 256}},
            {"field_id": 102, "name": "vector", "description": "", "type": DataType.FLOAT_VECTOR,
             "params": {"dim": 2}},
        ],
        "enable_dynamic_field": False,
        "consistency_level": 2,
    }


def docs_index_description() -> Dict[str, Any]:
    """describe_index() output for an HNSW index on the vector field."""
    return {
        "field_name": "vector",
        "index_name": "vector_idx",
        "index_type": "HNSW",
        "metric_type": "COSINE",
        "M": "16",
        "efConstruction": "200",
        "total_rows": 3,
        "indexed_rows": 3,
        "pending_index_rows": 0,
        "state": "Finished",
    }


DOCS_RECORDS = [
    {"id": 1, "text": "a", "vector": [0.1, 0.2]},
    {"id": 2, "text": "b", "vector": [0.3, 0.4]},
    {"id": 3, "text": "c", "vector": [0.5, 0.6]},
]


def make_docs_collection(client: "FakeMilvusClient", records: Optional[List[Dict[str, Any]]] = None) -> None:
    client.add_collection(
        "docs",
        docs_description(),
        records=DOCS_RECORDS if records is None else records,
        indexes={"vector_idx": docs_index_description()},
    )


class FakeMilvusClient:
    """In-memory stand-in for ``AsyncMilvusClient``.

    Supports the calls made by the backup subsystem. Queries honour an empty
    filter or a ``<pk> > <value>`` cursor. Like Milvus, a limited query returns
    the smallest keys first only when sent with ``iterator="True"``; otherwise
    rows come back in insertion order.
    """

    def __init__(self):
        self.collections: Dict[str, Dict[str, Any]] = {}
        self.queries: List[Dict[str, Any]] = []
        self.inserts: List[Dict[str, Any]] = []
        self.created_indexes: List[Any] = []
        self.dropped: List[str] = []
        self.fail_on: Dict[str, str] = {}
        self._next_id = 1000

    def add_collection(self, name, description, records=(), indexes=None):
        self.collections[name] = {
            "description": deepcopy(description),
            "rows": deepcopy(list(records)),
            "indexes": dict(indexes or {}),
            "loaded": False,
        }

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.collections[name]["rows"]

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise MilvusException(message=self.fail_on[operation])

    def _primary(self, name: str) -> Dict[str, Any]:
        fields = self.collections[name]["description"]["fields"]
        return next(f for f in fields if f.get("is_primary"))

    def _get(self, name: str) -> Dict[str, Any]:
        if name not in self.collections:
            raise MilvusException(message=f"collection not found[collection={name}]")
        return self.collections[name]

    async def list_collections(self, **kwargs) -> List[str]:
        self._check("list_collections")
        return list(self.collections)

    async def describe_collection(self, collection_name: str, **kwargs) -> Dict[str, Any]:
        self._check("describe_collection")
        return deepcopy(self._get(collection_name)["description"])

    async def list_indexes(self, collection_name: str, **kwargs) -> List[str]:
        return list(self._get(collection_name)["indexes"])

    async def describe_index(self, collection_name: str, index_name: str, **kwargs) -> Dict[str, Any]:
        return deepcopy(self._get(collection_name)["indexes"][index_name])

    async def load_collection(self, collection_name: str, **kwargs) -> None:
        self._check("load_collection")
        self._get(collection_name)["loaded"] = True

    async def query(self, collection_name: str, filter: str = "", output_fields=None, limit=None, **kwargs):
        self._check("query")
        iterator = kwargs.get("iterator") == "True"
        self.queries.append({
            "collection_name": collection_name, "filter": filter, "limit": limit, "iterator": iterator,
        })
        primary = self._primary(collection_name)["name"]
        rows = list(self._get(collection_name)["rows"])
        if iterator:
            rows.sort(key=lambda r: r[primary])

        if filter:
            match = _CURSOR_EXPR.match(filter)
            assert match and match.group(1) == primary, f"unsupported filter: {filter}"
            bound = json.loads(match.group(2))
            rows = [r for r in rows if r[primary] > bound]

        if limit is not None:
            rows = rows[:limit]
        return deepcopy(rows)

    async def create_collection(self, collection_name: str, schema=None, **kwargs) -> None:
        self._check("create_collection")
        description = schema.to_dict()
        description["collection_name"] = collection_name
        self.add_collection(collection_name, description)

    async def create_index(self, collection_name: str, index_params, **kwargs) -> None:
        self._check("create_index")
        self._get(collection_name)
        for param in index_params:
            self.created_indexes.append((collection_name, param))
            self.collections[collection_name]["indexes"][param.index_name or param.field_name] = {
                "field_name": param.field_name,
                "index_name": param.index_name,
                "index_type": param.index_type,
            }

    async def insert(self, collection_name: str, data: List[Dict[str, Any]], **kwargs) -> Dict[str, Any]:
        self._check("insert")
        collection = self._get(collection_name)
        primary = self._primary(collection_name)
        ids = []
        for row in data:
            row = dict(row)
            if primary.get("auto_id"):
                assert primary["name"] not in row, "explicit key for auto-id field"
                row[primary["name"]] = self._next_id
                self._next_id += 1
            collection["rows"].append(row)
            ids.append(row[primary["name"]])
        self.inserts.append({"collection_name": collection_name, "data": data})
        return {"insert_count": len(data), "ids": ids}

    async def drop_collection(self, collection_name: str, **kwargs) -> None:
        self._check("drop_collection")
        self.dropped.append(collection_name)
        self.collections.pop(collection_name, None)

    async def close(self) -> None:
        pass
