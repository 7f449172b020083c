"""Configuration management for milvus-admin."""

from dataclasses import dataclass
from typing import Optional, Dict, Any

# Largest limit Milvus accepts on a single query
MAX_QUERY_LIMIT = 16384


@dataclass(frozen=True)
class MilvusConfig:
    """Milvus connection configuration."""
    host: str = "localhost"
    port: int = 19530
    username: Optional[str] = None
    password: Optional[str] = None
    db_name: str = "default"
    timeout: Optional[float] = None

    def __post_init__(self):
        """Validate configuration."""
        if not self.host:
            raise ValueError("host must not be empty")
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def uri(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        # Credentials are only sent when both halves are configured
        return bool(self.username and self.password)

    def to_client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``AsyncMilvusClient``."""
        kwargs: Dict[str, Any] = {"uri": self.uri, "db_name": self.db_name}
        if self.has_credentials:
            kwargs["user"] = self.username
            kwargs["password"] = self.password
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs


@dataclass(frozen=True)
class BackupConfig:
    """Backup directory and export settings."""
    backup_dir: str = "./backups"
    export_batch_size: int = 1000

    def __post_init__(self):
        """Validate configuration."""
        if not self.backup_dir:
            raise ValueError("backup_dir must not be empty")
        if self.export_batch_size <= 0:
            raise ValueError(f"export_batch_size must be positive, got {self.export_batch_size}")
        if self.export_batch_size > MAX_QUERY_LIMIT:
            raise ValueError(
                f"export_batch_size must not exceed {MAX_QUERY_LIMIT}, got {self.export_batch_size}"
            )
