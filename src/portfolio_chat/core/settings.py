from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Provider = Literal["bedrock", "openai", "dummy"]

DEFAULT_TRIGGER_TOPICS = ("experience", "leadership", "crypto")


class Settings(BaseSettings):
    """Runtime settings read from the environment (and an optional .env file)."""

    aws_region: str = Field(
        default="us-east-1", validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION")
    )
    bucket: str = Field(default="", alias="S3_BUCKET_NAME")
    data_prefix: str = Field(default="rag-data/", alias="S3_DATA_PREFIX")
    snapshot_key: str = Field(default="portfolio-documents.json", alias="S3_SNAPSHOT_KEY")
    # Read documents from a local directory instead of S3 (local testing)
    local_data_dir: Path | None = Field(default=None, alias="LOCAL_DATA_DIR")

    llm_provider: Provider = Field(default="bedrock", alias="LLM_PROVIDER")
    model_id: str = Field(default="meta.llama3-8b-instruct-v1:0", alias="MODEL_ID")
    max_tokens: int = Field(default=500, alias="MAX_TOKENS")
    temperature: float = Field(default=0.7, alias="TEMPERATURE")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")

    site_config_path: Path | None = Field(default=None, alias="SITE_CONFIG_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("llm_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str):
            return v.strip().lower() or "bedrock"
        return v

    # Empty env values ("MAX_TOKENS=") fall back to defaults instead of failing validation
    @field_validator("max_tokens", mode="before")
    @classmethod
    def _coerce_tokens(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str) and not v.strip():
            return 500
        return v

    @field_validator("temperature", mode="before")
    @classmethod
    def _coerce_temperature(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str) and not v.strip():
            return 0.7
        return v

    @field_validator("local_data_dir", "site_config_path", mode="before")
    @classmethod
    def _blank_path(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SiteConfig(BaseModel):
    """First-party site facts and chatbot feature flags injected into the router.

    Accepts both snake_case and the camelCase keys used by the site's content file.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    owner_name: str = Field(default="Ousseini Oumarou", alias="ownerName")
    assistant_name: str = Field(default="Sensei", alias="assistantName")
    contact_url: str = Field(
        default="https://www.ousseinioumarou.com/#contact", alias="contactUrl"
    )
    # Topics allowed to search the full (external + scraped) corpus
    rag_trigger_topics: tuple[str, ...] = Field(
        default=DEFAULT_TRIGGER_TOPICS, alias="ragTriggerTopics"
    )
    # Suggested questions for the widget; not used by the engine
    faq: tuple[str, ...] = Field(default=(), alias="faq")
    # Source label marking first-party documents
    config_source: str = Field(default="config.js", alias="configSource")

    @field_validator("rag_trigger_topics", "faq", mode="before")
    @classmethod
    def _listify(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return ()
        if isinstance(v, str):
            return tuple(s.strip() for s in v.split(",") if s.strip())
        return tuple(str(s).strip() for s in v if str(s).strip())

    @property
    def owner_first_name(self) -> str:
        parts = self.owner_name.split()
        return parts[0].lower() if parts else ""


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "SiteConfig", "get_settings", "Provider"]
