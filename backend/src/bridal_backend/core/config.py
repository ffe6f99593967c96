from functools import lru_cache
from typing import List
import logging

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_ACCESS_CODE = "BRIDELAB2026"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    env: str = Field("development", alias="ENV")
    api_prefix: str = Field("/api", alias="API_PREFIX")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    allowed_origins_raw: str | None = Field(None, alias="ALLOWED_ORIGINS")

    # Chat completion provider (OpenAI or any OpenAI-compatible API)
    openai_base_url: str = Field("https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    llm_model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    llm_temperature: float = Field(0.7, alias="LLM_TEMPERATURE")
    openai_timeout_s: float = Field(90, alias="OPENAI_TIMEOUT_S")

    # Shared invite code for the portal gate
    access_code: str = Field(DEFAULT_ACCESS_CODE, alias="ACCESS_CODE")

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def _blank_key_is_absent(cls, v: str | None) -> str | None:
        if v is None:
            return None
        val = str(v).strip()
        return val or None

    @property
    def allowed_origins(self) -> List[str]:
        if self.allowed_origins_raw:
            return [item.strip() for item in self.allowed_origins_raw.split(",") if item.strip()]
        return ["http://localhost:3000"]

    @property
    def has_llm_credential(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()


def assert_secure_configuration() -> None:
    """Fail fast in non-development envs when the default invite code is in use.

    A missing provider key is not a problem: the chat relay degrades to its
    canned reply, which is how preview deployments run.
    """
    log = logging.getLogger("bridal.core.config")
    env = (settings.env or "").strip().lower()
    if not settings.has_llm_credential:
        log.info("OPENAI_API_KEY not set; chat relay will answer with the fallback reply.")
    if env in {"dev", "development", "local"}:
        if settings.access_code == DEFAULT_ACCESS_CODE:
            log.warning("Using default ACCESS_CODE in development; DO NOT use in production.")
        return

    problems: list[str] = []
    if settings.access_code == DEFAULT_ACCESS_CODE:
        problems.append("ACCESS_CODE must be set to a private invite code")
    if not settings.access_code.strip():
        problems.append("ACCESS_CODE must not be empty")

    if problems:
        raise RuntimeError(
            "Insecure configuration detected for ENV!='development': " + "; ".join(problems)
        )
