import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    openai_api_key: SecretStr | None = Field(None, alias="OPENAI_API_KEY")
    anthropic_api_key: SecretStr | None = Field(None, alias="ANTHROPIC_API_KEY")
    openai_base_url: str = Field("https://api.openai.com", alias="OPENAI_BASE_URL")
    anthropic_base_url: str = Field("https://api.anthropic.com", alias="ANTHROPIC_BASE_URL")
    anthropic_version: str = Field("2023-06-01", alias="ANTHROPIC_VERSION")
    claude_model_name: str = Field("claude-3-7-sonnet-latest", alias="CLAUDE_MODEL_NAME")
    # One of the ModelType values; resolved lazily to avoid an import cycle.
    default_ai_model: str = Field("claude-3-7-sonnet-latest", alias="DEFAULT_AI_MODEL")
    llm_max_tokens: int = Field(2000, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(90.0, alias="LLM_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field("Recipe Parser Bot/1.0", alias="SCRAPER_USER_AGENT")
    fetch_max_redirects: int = Field(10, alias="FETCH_MAX_REDIRECTS")
    fetch_timeout_seconds: float = Field(15.0, alias="FETCH_TIMEOUT_SECONDS")
    fetch_block_private_hosts: bool = Field(True, alias="FETCH_BLOCK_PRIVATE_HOSTS")
    media_root: Path = Field(Path("media"), alias="MEDIA_ROOT")
    media_base_url: str = Field("/media", alias="MEDIA_BASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
