from __future__ import annotations

from portfolio_chat.domain.dedup import DedupConfig, DuplicateDetector
from portfolio_chat.domain.document import Document, is_config_sourced


def test_from_mapping_drops_empty_and_non_dict() -> None:
    assert Document.from_mapping({"title": " ", "content": ""}) is None
    assert Document.from_mapping(["not", "a", "dict"]) is None
    doc = Document.from_mapping({"title": "About", "content": None, "source": "config.js"})
    assert doc == Document(title="About", content="", source="config.js")


def test_same_title_and_content_prefix_is_one_document() -> None:
    prefix = "x" * 40
    a = Document(title="Skills ", content=prefix + " first tail", source="config.js")
    b = Document(title="Skills", content=prefix + " second tail", source="s3:rag-data/skills.md")
    c = Document(title="Skills", content="different content", source="config.js")

    kept, skipped = DuplicateDetector().unique([a, b, c])

    assert kept == [a, c]
    assert skipped == [b]


def test_dedup_can_be_disabled() -> None:
    a = Document(title="T", content="same")
    kept, skipped = DuplicateDetector(DedupConfig(enabled=False)).unique([a, a])
    assert kept == [a, a] and skipped == []


def test_config_source_gate() -> None:
    assert is_config_sourced(Document(title="About", source="config.js"))
    assert is_config_sourced(Document(title="About", source="config"))
    assert not is_config_sourced(Document(title="About", source="https://example.com"))
    assert is_config_sourced(Document(title="About", source="site"), label="site")
