from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "mini-idp-demo-app"
    debug: bool = False
    api_host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "postgres"
    db_user: str = "postgres"
    db_password: str = ""
    db_connect_timeout_seconds: float = 5.0
    db_pool_size: int = 5

    startup_delay_ms: int = Field(default=3000, ge=0)
    health_probe_timeout_seconds: float | None = None
    shutdown_timeout_seconds: int = 10

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def startup_delay_seconds(self) -> float:
        return self.startup_delay_ms / 1000

    @property
    def probe_timeout_seconds(self) -> float:
        # Falls back to the client's own connect timeout.
        if self.health_probe_timeout_seconds is None:
            return self.db_connect_timeout_seconds
        return self.health_probe_timeout_seconds


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
