"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Synthesis
    max_iterations: int = Field(
        default=10, description="Maximum refinement iterations accepted by the API"
    )
    default_backend: str = Field(
        default="numpy", description="Random backend used when a request names none"
    )
    default_seed: str = Field(
        default="terrain", description="Seed used when a request names none"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format (plain or json)")

    class Config:
        env_file = ".env"
        env_prefix = "PY_TERRAIN_"


settings = Settings()
