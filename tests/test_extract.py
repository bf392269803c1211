from __future__ import annotations

import json
from pathlib import Path

from portfolio_chat.domain.document import Document
from portfolio_chat.infra.storage.local_store import LocalObjectStore
from portfolio_chat.pipeline.extract import build_snapshot, dump_documents, extract_documents
from portfolio_chat.pipeline.precompute import precompute_snapshot

SITE = {
    "sections": [{"title": "Intro", "content": "Hi"}, "junk"],
    "projects": [{"title": "NBA Alerts", "description": "SNS alerts"}, {"titleFr": "Projet"}],
    "skills": {"Cloud": [{"name": "AWS"}, "Azure"], "Data": []},
    "credly": {
        "manualCertifications": [
            {
                "name": "AWS AI Practitioner",
                "description": "GenAI",
                "issued_at_date": "2024-05-01",
                "public_url": "https://credly.com/x",
            }
        ]
    },
    "certifications": ["CKA", "CKA"],
    "about": "I am a consultant.",
    "personalInfo": {"description": "Builder."},
}


def test_extract_documents_flattens_site_content() -> None:
    docs = extract_documents(SITE)
    assert [(d.title, d.content) for d in docs] == [
        ("Intro", "Hi"),
        ("NBA Alerts", "SNS alerts"),
        ("Projet", ""),
        ("Skills", "Cloud: AWS, Azure"),
        ("Certification: AWS AI Practitioner", "GenAI \nIssued: 2024-05-01 \nLink: https://credly.com/x"),
        ("Certifications", "CKA"),
        ("About", "I am a consultant."),
        ("About", "Builder."),
    ]
    assert {d.source for d in docs} == {"config.js"}


def test_flat_skill_lists_are_merged() -> None:
    docs = extract_documents({"skills": ["Python", "Go"], "profile": {"skills": ["Go", "Rust"]}})
    assert docs == [Document(title="Skills", content="Python, Go, Rust", source="config.js")]


def test_extract_ignores_non_objects() -> None:
    assert extract_documents(["not", "a", "mapping"]) == []  # type: ignore[arg-type]


def test_build_snapshot_dedups_scraped_pages() -> None:
    extra = [
        Document(title="NBA Alerts", content="SNS alerts", source="https://site/nba"),
        Document(title="https://site", content="Landing page", source="https://site"),
    ]
    docs = build_snapshot({"projects": [{"title": "NBA Alerts", "description": "SNS alerts"}]}, extra)
    assert [d.source for d in docs] == ["config.js", "https://site"]
    assert json.loads(dump_documents(docs))[1] == {
        "title": "https://site",
        "content": "Landing page",
        "source": "https://site",
    }


def test_precompute_aggregates_prefix_and_uploads(tmp_path: Path) -> None:
    data = tmp_path / "rag-data"
    data.mkdir()
    a = {"title": "A", "content": "alpha", "source": "config.js"}
    (data / "a.json").write_text(json.dumps([a, a]), encoding="utf-8")
    (data / "b.txt").write_text("bravo", encoding="utf-8")
    (tmp_path / "portfolio-documents.json").write_text("[]", encoding="utf-8")

    store = LocalObjectStore(tmp_path)
    docs = precompute_snapshot(store, upload=True)

    assert [d.title for d in docs] == ["A", "b.txt"]
    stored = json.loads((tmp_path / "portfolio-documents.json").read_text(encoding="utf-8"))
    assert stored == [a, {"title": "b.txt", "content": "bravo", "source": "s3:rag-data/b.txt"}]


def test_precompute_without_upload_leaves_store_untouched(tmp_path: Path) -> None:
    (tmp_path / "rag-data").mkdir()
    (tmp_path / "rag-data" / "c.md").write_text("charlie", encoding="utf-8")
    docs = precompute_snapshot(LocalObjectStore(tmp_path), upload=False)
    assert [d.title for d in docs] == ["c.md"]
    assert not (tmp_path / "portfolio-documents.json").exists()
