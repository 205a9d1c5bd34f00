from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import RoutingMode

# Sample snapshots shipped with the package; point ROUTING_DATA_DIR at the real ones.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Service configuration, read from ROUTING_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="ROUTING_", env_file=".env", extra="ignore")

    data_dir: Path = Field(default=DEFAULT_DATA_DIR)
    mid_settings_file: str = "mid_settings.json"
    routing_weights_file: str = "routing_weights.json"
    merchant_settings_file: str = "merchant_settings.json"
    default_mode: RoutingMode = RoutingMode.SIMPLE
    log_level: str = "INFO"
    idempotency_max_entries: int = 10_000
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def mid_settings_path(self) -> Path:
        return self.data_dir / self.mid_settings_file

    @property
    def routing_weights_path(self) -> Path:
        return self.data_dir / self.routing_weights_file

    @property
    def merchant_settings_path(self) -> Path:
        return self.data_dir / self.merchant_settings_file


@lru_cache()
def get_settings() -> Settings:
    return Settings()
