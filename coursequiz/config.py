"""Configuration loader for the course quiz generator."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Course Quiz"
    version: str = "1.0.0"


class ChunkingConfig(BaseModel):
    """Content chunking configuration (sizes in characters)."""

    target_size: int = Field(default=500, ge=1)
    overlap_width: int = Field(default=50, ge=0)


class RetrievalConfig(BaseModel):
    """Segment retrieval configuration."""

    keyword_case_sensitive: bool = False


class GenerationConfig(BaseModel):
    """LLM generation configuration."""

    provider: str = "anthropic"
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4000
    temperature: float = 0.4
    max_attempts: int = Field(default=3, ge=1)
    base_delay_seconds: float = Field(default=5.0, ge=0)
    pass_threshold: float = 70.0


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/segments.db"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # API keys loaded from environment
    anthropic_api_key: str | None = None


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Override API keys from environment
    config.anthropic_api_key = os.getenv("ANTHROPIC_API_KEY") or None

    return config
