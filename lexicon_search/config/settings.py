"""Application settings and configuration management."""

from functools import lru_cache
from typing import List

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from ..models.entry import SearchMode


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Lexicon Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Data source
    data_path: str = Field(default="data/dizionario_parmigiano.json")
    parts_path: str = Field(default="data/parts.json")

    # Search Configuration
    default_mode: SearchMode = Field(default=SearchMode.FORWARD)
    page_size: int = Field(default=40)
    max_page_size: int = Field(default=500)
    max_query_length: int = Field(default=100)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEXICON_",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
