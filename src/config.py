"""Configuration settings for ChronoMatch."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///data/chronomatch.db"
    database_echo: bool = False

    # Scheduler
    scheduler_timezone: str = "UTC"
    scheduler_job_defaults: dict = {
        "coalesce": True,
        "max_instances": 1,
        "misfire_grace_time": 30
    }

    # Occurrence search horizon
    max_year_rollovers: int = 5

    # Logging
    log_level: str = "INFO"
    log_file: str = "data/chronomatch.log"

    class Config:
        env_prefix = "CHRONOMATCH_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
