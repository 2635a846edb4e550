from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEXMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (console or json)")

    # Map Generation Configuration
    default_map_width: int = Field(default=48, description="Default map width in cells")
    default_map_height: int = Field(default=42, description="Default map height in cells")
    default_radius: int = Field(default=3, description="Default province radius")
    default_land_fraction: float = Field(default=0.6, description="Default land fraction")
    max_map_width: int = Field(default=400, description="Max allowed map width")
    max_map_height: int = Field(default=400, description="Max allowed map height")

    # Resources
    province_names_file: Optional[str] = Field(
        default=None, description="Province names file, one per line (packaged list if unset)"
    )
    template_set: str = Field(default="classic", description="Default province template set")


# Instantiate singleton settings object
settings = Settings()
