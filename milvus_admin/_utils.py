import json
import logging
from typing import Any

logger = logging.getLogger("milvus-admin")


def json_default(value: Any) -> Any:
    """Fallback encoder for values the json module cannot serialise.

    Milvus query results may carry numpy scalars and arrays for vector and
    numeric fields; those are converted with ``tolist()``. Any other type,
    raw ``bytes`` included, raises ``TypeError`` so that a record is never
    written in a form that cannot be read back.
    """
    if hasattr(value, "tolist"):
        return value.tolist()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_record(record: dict) -> str:
    """Serialise one record as a single JSON line (no trailing newline)."""
    return json.dumps(record, ensure_ascii=False, default=json_default)
