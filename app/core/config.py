from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    # NODE_ENV is accepted too, for existing deployments
    env: str = Field(
        default="production",
        validation_alias=AliasChoices("ENV", "NODE_ENV"),
        description="development runs the job at startup",
    )
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # MongoDB
    mongodb_uri: str = Field(default="mongodb://localhost:27017/architech", alias="MONGODB_URI")
    mongodb_db_name: str = Field(default="architech", alias="MONGODB_DB_NAME")

    # Cron trigger
    cron_secret_token: str = Field(default="", alias="CRON_SECRET_TOKEN")

    # Sentry
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")

    # Credits
    credit_history_retention_days: int = 40
    default_daily_limit: int = 10

    @property
    def is_development(self) -> bool:
        return self.env.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
