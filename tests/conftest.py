"""Global pytest configuration and fixtures."""

import pytest
import sys
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.utils import FakeMilvusClient, make_docs_collection


@pytest.fixture
def temp_backup_dir():
    """Create temporary backup directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_client():
    """In-memory Milvus client holding a three-record ``docs`` collection."""
    client = FakeMilvusClient()
    make_docs_collection(client)
    return client
