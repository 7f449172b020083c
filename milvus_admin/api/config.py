"""Configuration for FastAPI application."""

from pydantic_settings import BaseSettings
from pydantic import validator, Field
from typing import List, Optional, Union
import json

from ..config import MilvusConfig, BackupConfig


class Settings(BaseSettings):
    # API Configuration
    api_prefix: str = "/api"
    api_title: str = "milvus-admin API"
    api_version: str = "1.0.0"
    allowed_origins: Union[str, List[str]] = ["*"]

    @validator('allowed_origins', pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed_origins from string or list."""
        if isinstance(v, str):
            # If it's a JSON array string, parse it
            if v.startswith('['):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v]
            # Single origin string
            return [v]
        return v

    # Milvus connection
    milvus_host: str = "localhost"
    milvus_port: int = 19530
    milvus_username: Optional[str] = None
    milvus_password: Optional[str] = None
    milvus_db_name: str = "default"
    milvus_timeout: Optional[float] = None

    # Backups
    backup_dir: str = "./backups"
    export_batch_size: int = Field(default=1000, description="Rows fetched per query page during export")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables

    def milvus_config(self) -> MilvusConfig:
        return MilvusConfig(
            host=self.milvus_host,
            port=self.milvus_port,
            username=self.milvus_username or None,
            password=self.milvus_password or None,
            db_name=self.milvus_db_name,
            timeout=self.milvus_timeout
        )

    def backup_config(self) -> BackupConfig:
        return BackupConfig(
            backup_dir=self.backup_dir,
            export_batch_size=self.export_batch_size
        )


settings = Settings()
