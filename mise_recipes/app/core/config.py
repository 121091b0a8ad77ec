import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RENDER_TIMEOUT_MS = 12000


class Settings(BaseSettings):
    markdown_service_url: str = Field("https://markdown.new/", alias="INGEST_MARKDOWN_SERVICE_URL")
    markdown_enabled: bool = Field(True, alias="INGEST_ENABLE_MARKDOWN")
    markdown_timeout_seconds: float = Field(15.0, alias="INGEST_MARKDOWN_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field("MiseEnPlaceBot/2.0", alias="SCRAPER_USER_AGENT")
    html_fetch_timeout_seconds: float = Field(10.0, alias="INGEST_HTML_TIMEOUT_SECONDS")
    metadata_fetch_timeout_seconds: float = Field(6.0, alias="INGEST_METADATA_TIMEOUT_SECONDS")
    render_worker_url: str | None = Field(None, alias="INGEST_RENDER_WORKER_URL")
    render_worker_token: str | None = Field(None, alias="INGEST_RENDER_WORKER_TOKEN")
    # Raw flag: unset means enabled, only "false" disables.
    render_fallback_flag: str | None = Field(None, alias="INGEST_ENABLE_RENDER_FALLBACK")
    render_timeout_ms: str | None = Field(None, alias="INGEST_RENDER_TIMEOUT_MS")
    convert_to_metric: bool = Field(False, alias="INGEST_CONVERT_TO_METRIC")
    default_shopping_location: str = Field("Woolies", alias="SHOPPING_DEFAULT_LOCATION")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def render_flag_enabled(self) -> bool:
        flag = (self.render_fallback_flag or "").strip().lower()
        return flag != "false"

    @property
    def render_fallback_enabled(self) -> bool:
        """Rendering needs both the flag and a configured worker endpoint."""
        return self.render_flag_enabled and bool(self.render_worker_url)

    @property
    def render_timeout_seconds(self) -> float:
        raw = (self.render_timeout_ms or "").strip()
        try:
            parsed = float(raw) if raw else DEFAULT_RENDER_TIMEOUT_MS
        except ValueError:
            parsed = DEFAULT_RENDER_TIMEOUT_MS
        if parsed != parsed or parsed < 1000 or parsed == float("inf"):
            parsed = DEFAULT_RENDER_TIMEOUT_MS
        return int(parsed) / 1000


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
