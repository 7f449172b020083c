from .client import MilvusClientProvider
from .config import MilvusConfig, BackupConfig
from .backup import BackupManager

__version__ = "0.3.0"
__author__ = "milvus-admin contributors"
__url__ = "https://github.com/milvus-admin/milvus-admin"

__all__ = ["MilvusClientProvider", "MilvusConfig", "BackupConfig", "BackupManager"]
