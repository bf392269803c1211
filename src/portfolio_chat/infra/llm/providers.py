from __future__ import annotations

"""Infrastructure LLM providers implementing the LLMPort contract.

Adapters:
- DummyLLM: dependency-free canned/echo replies for tests and offline use.
- BedrockLLM: boto3 ``bedrock-runtime`` ``invoke_model`` with a text-completion body.
- OpenAIChatLLM: wraps langchain-openai ChatOpenAI with a single user message.

All adapters return raw text; an unusable provider body becomes "" and transport
failures surface as GenerationError.
"""

import json  # noqa: E402
import logging  # noqa: E402
import time  # noqa: E402
from dataclasses import dataclass, field  # noqa: E402
from typing import Any  # noqa: E402

from portfolio_chat.application.ports.llm_port import LLMPort  # noqa: E402
from portfolio_chat.exceptions import GenerationError  # noqa: E402
from portfolio_chat.infra.prompting.parsers import extract_generated_text  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_BEDROCK_MODEL = "meta.llama3-8b-instruct-v1:0"


@dataclass
class DummyLLM(LLMPort):
    """Test double: returns ``reply`` when set, otherwise echoes the prompt's last line."""

    reply: str | None = None
    calls: list[str] = field(default_factory=list)

    def generate(self, prompt: str, *, max_tokens: int = 500, temperature: float = 0.7) -> str:
        self.calls.append(prompt)
        if self.reply is not None:
            return self.reply
        lines = [ln for ln in prompt.splitlines() if ln.strip()]
        return lines[-1] if lines else ""


@dataclass
class BedrockLLM(LLMPort):
    """Amazon Bedrock text completion through ``invoke_model``.

    The request body is ``{prompt, max_gen_len, temperature}`` (Meta Llama
    family); the response body is parsed with ``extract_generated_text`` so
    other model families that answer with ``outputText``/``completion`` work too.
    """

    model_id: str = DEFAULT_BEDROCK_MODEL
    region: str = "us-east-1"
    client: Any = None

    def __post_init__(self) -> None:
        if self.client is None:
            import boto3

            self.client = boto3.client("bedrock-runtime", region_name=self.region)

    def generate(self, prompt: str, *, max_tokens: int = 500, temperature: float = 0.7) -> str:
        from botocore.exceptions import BotoCoreError, ClientError

        body = json.dumps(
            {"prompt": prompt, "max_gen_len": int(max_tokens), "temperature": float(temperature)}
        )
        t0 = time.perf_counter()
        try:
            resp = self.client.invoke_model(
                modelId=self.model_id,
                contentType="application/json",
                accept="application/json",
                body=body,
            )
            raw = resp["body"].read()
        except (BotoCoreError, ClientError) as e:
            raise GenerationError(f"Bedrock invoke_model failed for {self.model_id}: {e}") from e
        logger.info(
            "Bedrock %s answered in %.0f ms", self.model_id, (time.perf_counter() - t0) * 1000
        )
        return extract_generated_text(raw)


@dataclass
class OpenAIChatLLM(LLMPort):
    """OpenAI Chat-based LLM using langchain-openai.

    The prompt already carries all instructions, so it is sent as one user message.
    """

    model: str
    api_key: str | None = None
    base_url: str | None = None

    def __post_init__(self) -> None:  # lazy import and instantiate client
        try:
            from langchain_openai import ChatOpenAI
        except Exception as e:  # pragma: no cover - import guarded
            raise RuntimeError(
                "langchain-openai is required for OpenAIChatLLM.\n"
                "Install with: pip install langchain-openai openai"
            ) from e

        kwargs: dict[str, object] = {"model": self.model}
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["base_url"] = self.base_url
        self._chat = ChatOpenAI(**kwargs)

    def generate(self, prompt: str, *, max_tokens: int = 500, temperature: float = 0.7) -> str:
        t0 = time.perf_counter()
        try:
            resp = self._chat.invoke(
                [{"role": "user", "content": prompt}],
                max_tokens=int(max_tokens),
                temperature=float(temperature),
            )
        except Exception as e:  # noqa: BLE001
            raise GenerationError(f"OpenAIChatLLM failed to generate: {e}") from e
        logger.info("OpenAI %s answered in %.0f ms", self.model, (time.perf_counter() - t0) * 1000)
        text = getattr(resp, "content", None)
        return text.strip() if isinstance(text, str) else ""


__all__ = ["DEFAULT_BEDROCK_MODEL", "BedrockLLM", "DummyLLM", "OpenAIChatLLM"]
