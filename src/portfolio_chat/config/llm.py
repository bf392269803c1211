from __future__ import annotations

"""Composition: construct LLMPort implementations from settings.

``LLM_PROVIDER`` selects the adapter: ``bedrock`` (default, boto3), ``openai``
(langchain-openai) or ``dummy`` (offline canned reply).
"""

from portfolio_chat.application.ports.llm_port import LLMPort  # noqa: E402
from portfolio_chat.core.settings import Settings, get_settings  # noqa: E402
from portfolio_chat.exceptions import ConfigurationError  # noqa: E402
from portfolio_chat.infra.llm.providers import BedrockLLM, DummyLLM, OpenAIChatLLM  # noqa: E402


def build_llm_from_settings(settings: Settings | None = None) -> LLMPort:
    s = settings or get_settings()
    prov = (s.llm_provider or "bedrock").lower().strip()
    if prov == "bedrock":
        return BedrockLLM(model_id=s.model_id, region=s.aws_region)
    if prov == "openai":
        return OpenAIChatLLM(model=s.openai_model, api_key=s.openai_api_key, base_url=s.openai_base_url)
    if prov == "dummy":
        return DummyLLM()
    raise ConfigurationError(f"Unknown LLM_PROVIDER: {s.llm_provider!r}")


__all__ = ["build_llm_from_settings"]
