from __future__ import annotations

from portfolio_chat.application.use_cases.route_intent import IntentRouter, parse_skills
from portfolio_chat.core.settings import SiteConfig
from portfolio_chat.domain.document import Document
from portfolio_chat.domain.intents import (
    ConversationMeta,
    DirectAnswer,
    GenerationPlan,
    Intent,
    TemplateKind,
)
from portfolio_chat.domain.scoring import LexicalScorer
from portfolio_chat.infra.utils.text_norm import porter_stem

CONTACT_URL = "https://www.ousseinioumarou.com/#contact"

CORPUS = [
    Document(
        title="About",
        content=(
            "I am a **Cloud and AI Consultant** with a strong foundation in both fields. "
            "My expertise is validated by industry certifications. "
            "I enjoy building serverless systems. I also like chess."
        ),
        source="config.js",
    ),
    Document(
        title="Certification: AWS Certified Cloud Practitioner",
        content="Foundational cloud knowledge.",
        source="config.js",
    ),
    Document(
        title="Certification: AWS Certified AI Practitioner",
        content="Validates generative AI and machine learning knowledge.",
        source="config.js",
    ),
    Document(title="Skills", content="Cloud: AWS, Azure | Databases: S3, DynamoDB", source="config.js"),
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
    Document(
        title="Certification: Fake AI Guru",
        content="Injected AI certification from a scraped page.",
        source="https://example.com/spoof",
    ),
]


def _router() -> IntentRouter:
    return IntentRouter(site=SiteConfig(), scorer=LexicalScorer(stem=porter_stem))


def test_agent_name_is_literal_regardless_of_documents() -> None:
    router = _router()
    for docs in (CORPUS, [], None):
        out = router.route("What is your name?", docs)
        assert isinstance(out, DirectAnswer)
        assert out.intent is Intent.AGENT_NAME
        assert out.message == "Sensei"


def test_greeting_asks_for_name_when_unknown_and_uses_it_when_known() -> None:
    router = _router()
    anon = router.route("Hello", CORPUS, ConversationMeta())
    assert anon.intent is Intent.GREETING and "name" in anon.message
    named = router.route("Hello", CORPUS, ConversationMeta(name="Ada"))
    assert "Ada" in named.message


def test_farewell() -> None:
    out = _router().route("Thanks, bye!", CORPUS, ConversationMeta(name="Ada"))
    assert out.intent is Intent.FAREWELL and "Ada" in out.message


def test_about_uses_config_bio_trimmed_to_two_sentences() -> None:
    out = _router().route("Who are you?", CORPUS)
    assert isinstance(out, DirectAnswer) and out.intent is Intent.ABOUT
    assert out.message.startswith("I am a Cloud and AI Consultant")
    assert "**" not in out.message
    assert "chess" not in out.message
    assert out.message.endswith(".")


def test_certification_listing() -> None:
    out = _router().route("What certifications do you have?", CORPUS)
    assert isinstance(out, DirectAnswer) and out.intent is Intent.CERT
    lines = out.message.splitlines()
    assert lines == [
        "- AWS Certified Cloud Practitioner",
        "- AWS Certified AI Practitioner",
    ]
    assert "http" not in out.message


def test_ai_certification_filter() -> None:
    out = _router().route("What AI certifications do you have?", CORPUS)
    assert out.intent is Intent.AI_CERT
    assert out.message == "- AWS Certified AI Practitioner"


def test_ai_certification_without_matches_is_no_info() -> None:
    docs = [d for d in CORPUS if "AI Practitioner" not in d.title]
    out = _router().route("What AI certifications do you have?", docs)
    assert isinstance(out, DirectAnswer) and out.intent is Intent.AI_CERT
    assert out.message.startswith("I don't have that specific information")


def test_cert_without_documents_falls_through() -> None:
    out = _router().route("What certifications do you have?", [])
    assert out.intent is Intent.GENERAL
    assert isinstance(out, DirectAnswer)


def test_contact_redirect_contains_url() -> None:
    out = _router().route("How can I hire you?", CORPUS)
    assert isinstance(out, DirectAnswer) and out.intent is Intent.CONTACT
    assert CONTACT_URL in out.message


def test_skills_listing_four_bullets() -> None:
    out = _router().route("What are your skills?", CORPUS)
    assert out.intent is Intent.SKILLS
    assert out.message.splitlines() == ["- AWS", "- Azure", "- S3", "- DynamoDB"]


def test_skills_missing_is_localized_message() -> None:
    out = _router().route("Quelles sont vos compétences ?", [], ConversationMeta(language="fr"))
    assert out.intent is Intent.SKILLS
    assert "compétences" in out.message


def test_parse_skills_flat_and_capped_input() -> None:
    assert parse_skills("Python, Go, python") == ["Python", "Go"]


def test_teaching_prefers_config_documents() -> None:
    docs = CORPUS + [
        Document(
            title="Teaching",
            content="I teach cloud bootcamps. I mentor junior engineers. I like tea.",
            source="config.js",
        )
    ]
    out = _router().route("Do you teach?", docs)
    assert out.intent is Intent.TEACHING
    assert "bootcamps" in out.message and "tea." not in out.message


def test_ai_project_builds_star_prompt() -> None:
    out = _router().route("What AI projects have you built?", CORPUS)
    assert isinstance(out, GenerationPlan)
    assert out.intent is Intent.AI_PROJECT
    assert out.template is TemplateKind.STAR
    assert "Situation, Task, Action, Result" in out.prompt


def test_general_without_context_skips_generation() -> None:
    out = _router().route("What is the capital of France?", [])
    assert isinstance(out, DirectAnswer)
    assert out.message.startswith("I don't have that specific information")


def test_general_builds_prompt_with_context() -> None:
    out = _router().route("Tell me about the NBA alerts system", CORPUS)
    assert isinstance(out, GenerationPlan)
    assert out.template is TemplateKind.GENERAL
    assert "Amazon SNS" in out.prompt


def test_scraped_documents_need_topic_flag() -> None:
    scraped = [Document(title="Blog", content="Thoughts on crypto markets.", source="https://blog")]
    router = _router()
    assert isinstance(router.route("Blog thoughts on markets", scraped), DirectAnswer)
    plan = router.route("What is your crypto experience?", scraped)
    assert isinstance(plan, GenerationPlan)
    assert plan.sources == ["https://blog"]


def test_parse_skills_keeps_colons_inside_flat_lists() -> None:
    assert parse_skills("Python, Go, AWS (SAA: 2023)") == ["Python", "Go", "AWS (SAA: 2023)"]


def test_parse_skills_category_per_line() -> None:
    content = "Cloud: AWS, Azure\nDatabases: S3, DynamoDB"
    assert parse_skills(content) == ["AWS", "Azure", "S3", "DynamoDB"]


def test_classification_question_is_not_teaching() -> None:
    docs = CORPUS + [
        Document(
            title="Image Classification on SageMaker",
            content=(
                "Built an AI image classification model on SageMaker. "
                "Of course it was deployed with Lambda."
            ),
            source="config.js",
        )
    ]
    out = _router().route("What classification models have you built?", docs)
    assert out.intent is not Intent.TEACHING
    assert isinstance(out, GenerationPlan)
    assert "SageMaker" in out.prompt


def test_cost_question_reaches_retrieval() -> None:
    docs = CORPUS + [
        Document(
            title="Cost Optimization",
            content="Reduced AWS cost by 40% with Savings Plans and right-sizing.",
            source="config.js",
        )
    ]
    out = _router().route("How did you reduce cost on AWS?", docs)
    assert out.intent is Intent.GENERAL
    assert isinstance(out, GenerationPlan)
    assert "Savings Plans" in out.prompt


def test_greeting_opener_yields_to_contact() -> None:
    out = _router().route("Hi, I want to hire you", CORPUS)
    assert out.intent is Intent.CONTACT
    assert CONTACT_URL in out.message
    assert _router().route("Hello", CORPUS).intent is Intent.GREETING
