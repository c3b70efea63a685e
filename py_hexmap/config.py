"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Map Generation Configuration
    grid_width: int = Field(default=16, ge=1, description="Grid width in hex columns")
    grid_height: int = Field(default=9, ge=1, description="Grid height in hex rows")
    num_regions: int = Field(default=18, ge=1, description="Number of regions to partition the grid into")
    num_terrains: int = Field(default=6, ge=1, le=6, description="Number of terrain types available for colouring")
    relaxation_rounds: int = Field(default=4, ge=0, description="Region relaxation rounds before the final pass")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    class Config:
        env_prefix = "HEXMAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
