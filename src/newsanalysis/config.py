from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    news_api_base_url: str = "http://localhost:5000"
    news_api_timeout_ms: int = Field(default=30000, gt=0)
    probe_timeout: float = Field(default=3.0, gt=0)
    default_model_name: str = "Ensemble"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "case_sensitive": False,
    }


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
