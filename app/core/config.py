"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

Database settings follow the libpq names (PGHOST, PGPORT, ...) so the same
environment works for psql and for the API. DATABASE_URL, when set, wins.
"""

from functools import lru_cache
from typing import List
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    database_url: str = ""
    pghost: str = "localhost"
    pgport: int = 5432
    pgdatabase: str = "jobspeedy"
    pguser: str = "postgres"
    pgpassword: str = ""
    pgsslmode: str = ""

    # Connection pool
    db_pool_size: int = 10
    db_pool_recycle_seconds: int = 30

    # OpenAI (job ad generation, resume extraction)
    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"

    # App
    service_name: str = "jobspeedy-ai-admin-backend"
    port: int = 4000
    log_level: str = "INFO"
    debug: bool = False
    cors_origins: str = "*"

    # XML feeds
    public_site_url: str = "https://jobspeedy-ai.com"
    publisher_name: str = "JobSpeedy AI"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        if self.database_url:
            url = self.database_url
            for prefix in ("postgres://", "postgresql://"):
                if url.startswith(prefix):
                    return "postgresql+psycopg2://" + url[len(prefix):]
            return url
        return (
            f"postgresql+psycopg2://{quote_plus(self.pguser)}:{quote_plus(self.pgpassword)}"
            f"@{self.pghost}:{self.pgport}/{self.pgdatabase}"
        )

    @property
    def postgres_connect_args(self) -> dict:
        """Driver arguments; hosted databases (DATABASE_URL) always use SSL."""
        if self.database_url or self.pgsslmode.lower() == "require":
            return {"sslmode": "require"}
        return {}

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
