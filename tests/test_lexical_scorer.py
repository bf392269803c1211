from __future__ import annotations

import pytest

from portfolio_chat.domain.document import Document
from portfolio_chat.domain.scoring import GREETING_CONTEXT, LexicalScorer, ScoringConfig
from portfolio_chat.infra.utils.text_norm import porter_stem

DOCS = [
    Document(title="About", content="I am a cloud consultant. I love hiking.", source="config.js"),
    Document(
        title="Serverless API",
        content="Built a serverless API on AWS Lambda. The project used DynamoDB for storage.",
        source="config.js",
    ),
    Document(
        title="Certification: AWS Certified AI Practitioner",
        content="Validates generative AI knowledge.",
        source="config.js",
    ),
]


def test_greeting_only_message_short_circuits() -> None:
    scorer = LexicalScorer()
    for msg in ("hello", "Hi there", "well good morning"):
        res = scorer.score(msg, DOCS)
        assert res.context == GREETING_CONTEXT
        assert res.sources == []


def test_non_list_corpus_gives_empty_result() -> None:
    res = LexicalScorer().score("serverless", None)  # type: ignore[arg-type]
    assert res.is_empty and res.sources == []


def test_ranking_prefers_token_overlap() -> None:
    scorer = LexicalScorer(stem=porter_stem)
    ranked = scorer.rank("serverless lambda", DOCS)
    assert ranked[0].title == "Serverless API"
    assert ranked[0].score > ranked[-1].score


def test_raw_token_weighs_more_than_stem() -> None:
    scorer = LexicalScorer(ScoringConfig(hint_weight=0.0), stem=porter_stem)
    q_stems = [porter_stem("teaching")]
    exact = scorer.score_document(["teaching"], q_stems, Document(content="teaching"))
    stem_only = scorer.score_document(["teaching"], q_stems, Document(content="teach"))
    assert exact == pytest.approx(1.8)
    assert stem_only == pytest.approx(0.8)


def test_context_uses_matching_sentences_and_sources() -> None:
    res = LexicalScorer(stem=porter_stem).score("Which project used DynamoDB?", DOCS)
    assert "DynamoDB" in res.context
    assert "config.js" in res.sources


def test_context_is_bounded() -> None:
    big = [
        Document(title=f"Doc {i}", content=("cloud migration work. " * 200), source=f"s3:{i}")
        for i in range(5)
    ]
    res = LexicalScorer().score("cloud migration", big)
    assert 0 < len(res.context) <= 1500
    assert len(res.sources) == 3


def test_teaching_fallback_replaces_weak_hits() -> None:
    docs = [
        Document(title="Hobbies", content="Weekend hiking.", source="config.js"),
        Document(title="Workshops", content="Ran a Python workshop for students.", source="s3:w.md"),
    ]
    res = LexicalScorer().score("do you mentor?", docs)
    assert "workshop" in res.context.lower()


def test_certification_substring_fallback() -> None:
    docs = [Document(title="Badges", content="Holds several certifications.", source="x")]
    res = LexicalScorer(ScoringConfig(hint_weight=0.0)).score("certif", docs)
    assert "certifications" in res.context


def test_sources_fall_back_to_title() -> None:
    docs = [Document(title="Serverless API", content="Lambda project.", source="")]
    res = LexicalScorer().score("lambda", docs)
    assert res.sources == ["Serverless API"]
