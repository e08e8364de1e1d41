"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 4000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./ledger.db"
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class StorageSettings(BaseModel):
    upload_dir: Path = Field(default=Path("storage/uploads"))


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Transaction Ledger"
    api_prefix: str = ""

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    storage: StorageSettings = StorageSettings()
    logging: LoggingSettings = LoggingSettings()

    template_dir: Path = Path("app/web/templates")

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def upload_storage_dir(self) -> str:
        return str(self.storage.upload_dir)

    @property
    def log_level(self) -> str:
        return self.logging.level


@lru_cache()
def get_settings() -> Settings:
    return Settings()
