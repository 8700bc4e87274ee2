from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

try:
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
except ImportError:  # pragma: no cover
    ZoneInfo = None  # type: ignore
    ZoneInfoNotFoundError = KeyError  # type: ignore


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database - PostgreSQL in production, SQLite file for local runs
    DATABASE_URL: str = "sqlite:///./checkbill.db"

    # Timezone in which reminder schedules are stored and compared
    DEFAULT_TIMEZONE: str = "Asia/Jakarta"

    LOG_LEVEL: str = "INFO"

    @field_validator("DEFAULT_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        if ZoneInfo is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()


settings = Settings()
