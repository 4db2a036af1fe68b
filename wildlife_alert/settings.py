from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    log_level: str = "INFO"
    directions_api_key: str | None = None
    directions_base_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    directions_timeout: float = 10.0
    default_speed_kmh: float = 12.0
    stations_file: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="WILDLIFE_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
    )


settings = Settings()
