from __future__ import annotations

import pytest

from portfolio_chat.application.ports.llm_port import LLMPort
from portfolio_chat.application.ports.loader_port import DocumentLoaderPort
from portfolio_chat.application.use_cases.answer_chat import ChatUseCase
from portfolio_chat.config.composition import build_router
from portfolio_chat.core.settings import SiteConfig
from portfolio_chat.domain.document import Document
from portfolio_chat.domain.intents import Intent
from portfolio_chat.exceptions import GenerationError

DOCS = [
    Document(title="Skills", content="Cloud: AWS, Azure", source="config.js"),
    Document(
        title="NBA Game Day Alerts",
        content="Built an alert system with AWS Lambda and Amazon SNS. Scores are sent by SMS.",
        source="config.js",
    ),
    Document(
        title="Bebeyel AI Agent",
        content="Built a retrieval AI agent on Amazon Bedrock for the portfolio.",
        source="config.js",
    ),
]

# --- Fakes -------------------------------------------------------------------


class FakeLoader(DocumentLoaderPort):
    def __init__(self, docs: list[Document]) -> None:
        self.docs = docs
        self.calls = 0

    def load(self) -> list[Document]:
        self.calls += 1
        return list(self.docs)


class FakeLLM(LLMPort):
    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str, *, max_tokens: int = 500, temperature: float = 0.7) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def _use_case(llm: FakeLLM, docs: list[Document] | None = None) -> tuple[ChatUseCase, FakeLoader]:
    loader = FakeLoader(DOCS if docs is None else docs)
    return ChatUseCase(loader=loader, router=build_router(SiteConfig()), llm=llm), loader


# --- Tests -------------------------------------------------------------------


def test_direct_answers_skip_generation() -> None:
    llm = FakeLLM("never used")
    uc, loader = _use_case(llm)
    out = uc.answer("What are your skills?")
    assert out.intent is Intent.SKILLS
    assert out.message == "- AWS\n- Azure"
    assert llm.prompts == []
    assert loader.calls == 1


def test_no_context_answers_without_calling_generator() -> None:
    llm = FakeLLM("never used")
    uc, _ = _use_case(llm, docs=[])
    out = uc.answer("What is the capital of France?")
    assert out.message.startswith("I don't have that specific information")
    assert llm.prompts == []


def test_generated_text_is_sanitized() -> None:
    llm = FakeLLM(
        "**Answer:** He built alerts with AWS Lambda and SNS. It sends scores by SMS. It runs daily."
    )
    uc, _ = _use_case(llm)
    out = uc.answer("Tell me about the NBA alerts system", name="Ada")
    assert out.intent is Intent.GENERAL
    assert out.message == "He built alerts with AWS Lambda and SNS. It sends scores by SMS."
    assert len(llm.prompts) == 1
    assert "VISITOR: Ada" in llm.prompts[0]
    assert "Amazon SNS" in llm.prompts[0]


def test_empty_generation_becomes_fallback_with_help_tail() -> None:
    uc, _ = _use_case(FakeLLM("   "))
    out = uc.answer("Tell me about the NBA alerts system")
    assert out.message == "Sorry, I could not generate a response. How can I help further?"


def test_star_replies_keep_their_lines() -> None:
    star = (
        "Situation: The portfolio needed a chatbot.\n"
        "Task: Build it.\n"
        "Action: Used Amazon Bedrock. See https://example.com\n"
        "Result: Visitors get answers."
    )
    uc, _ = _use_case(FakeLLM(star))
    out = uc.answer("What AI projects have you built?")
    assert out.intent is Intent.AI_PROJECT
    lines = out.message.splitlines()
    assert [ln.split(":")[0] for ln in lines] == ["Situation", "Task", "Action", "Result"]
    assert "http" not in out.message


def test_transport_failure_propagates() -> None:
    uc, _ = _use_case(FakeLLM(error=GenerationError("throttled")))
    with pytest.raises(GenerationError):
        uc.answer("Tell me about the NBA alerts system")


def test_french_message_gets_french_fixed_reply() -> None:
    uc, _ = _use_case(FakeLLM("unused"), docs=[])
    out = uc.answer("Quelle est la capitale de la France ?")
    assert out.message.startswith("Je n'ai pas cette information")
