from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unknown env vars so a shared .env can carry settings for other services.
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "CRM Insights"
    ENVIRONMENT: str = "development"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str = "sqlite:///./crm_insights.db"
    DB_ECHO: bool = False

    BACKEND_CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])
    ALLOWED_HOSTS: list[str] = Field(
        default_factory=lambda: [
            "localhost",
            "127.0.0.1",
            "testserver",
        ]
    )

    ENABLE_API_DOCS: bool = False

    LOG_LEVEL: str = "INFO"
    # Structured JSON lines for log shippers; plain text otherwise.
    LOG_JSON: bool = False

    HEALTH_RATE_LIMIT: str = "60/minute"

    # Number of calendar months in the revenue bar series.
    REVENUE_CHART_MONTHS: int = Field(default=6, ge=1, le=24)

    # JSON snapshot loaded by `python -m crm_insights.bootstrap`.
    BOOTSTRAP_SNAPSHOT_PATH: str = ""

    @model_validator(mode="after")
    def _prod_guards(self):
        if self.ENVIRONMENT.lower() == "production":
            if self.ENABLE_API_DOCS:
                raise ValueError("ENABLE_API_DOCS must be false in production")
            if any(h == "*" for h in self.ALLOWED_HOSTS):
                raise ValueError('ALLOWED_HOSTS must not contain "*" in production')
        else:
            if not self.ALLOWED_HOSTS:
                self.ALLOWED_HOSTS = ["*"]
        return self

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        return self.DATABASE_URL


@lru_cache
def get_settings() -> Settings:
    return Settings()
