from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional


class ReminderSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="REMINDER_", env_file=".env", extra="ignore")

    # Scheduling
    SCHEDULER_POLL_INTERVAL_SECONDS: float = 60.0

    # Alerts look-ahead shown by the surrounding service
    ALERT_WINDOW_DAYS: int = 7

    # Celery configuration (only used by the beat deployment)
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None

    # Metrics
    METRICS_ENABLED: bool = False
    METRICS_PORT: int = 9105

    @field_validator("SCHEDULER_POLL_INTERVAL_SECONDS")
    @classmethod
    def positive_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("SCHEDULER_POLL_INTERVAL_SECONDS must be greater than 0")
        return v

    @field_validator("ALERT_WINDOW_DAYS")
    @classmethod
    def non_negative_window(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ALERT_WINDOW_DAYS must be >= 0")
        return v


settings = ReminderSettings()
