"""Build snapshot documents from the site's structured content."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from portfolio_chat.domain.dedup import DuplicateDetector
from portfolio_chat.domain.document import CONFIG_SOURCE, Document
from portfolio_chat.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _names(items: Iterable[Any]) -> list[str]:
    out: list[str] = []
    for it in items:
        if isinstance(it, Mapping):
            name = _text(it.get("name")) or _text(it.get("nameFr"))
        else:
            name = _text(it)
        if name:
            out.append(name)
    return out


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _sections(content: Mapping[str, Any], source: str) -> list[Document]:
    docs: list[Document] = []
    for section in content.get("sections") or []:
        if not isinstance(section, Mapping):
            continue
        docs.append(
            Document(
                title=_text(section.get("title")) or "Section",
                content=_text(section.get("content")),
                source=source,
            )
        )
    return docs


def _projects(content: Mapping[str, Any], source: str) -> list[Document]:
    docs: list[Document] = []
    for project in content.get("projects") or []:
        if not isinstance(project, Mapping):
            continue
        title = (
            _text(project.get("title"))
            or _text(project.get("name"))
            or _text(project.get("titleFr"))
            or "Project"
        )
        desc = _text(project.get("description")) or _text(project.get("descriptionFr"))
        docs.append(Document(title=title, content=desc, source=source))
    return docs


def _skills(content: Mapping[str, Any], source: str) -> list[Document]:
    docs: list[Document] = []
    skills = content.get("skills")
    profile = content.get("profile") if isinstance(content.get("profile"), Mapping) else {}

    if isinstance(skills, Mapping):
        lines = []
        for category, items in skills.items():
            if isinstance(items, list):
                names = _names(items)
                if names:
                    lines.append(f"{category}: {', '.join(names)}")
        if lines:
            docs.append(Document(title="Skills", content=" | ".join(lines), source=source))

    flat: list[str] = []
    if isinstance(skills, list):
        flat.extend(_names(skills))
    if isinstance(profile.get("skills"), list):
        flat.extend(_names(profile["skills"]))
    merged = _unique(flat)
    if merged:
        docs.append(Document(title="Skills", content=", ".join(merged), source=source))
    return docs


def _certifications(content: Mapping[str, Any], source: str) -> list[Document]:
    docs: list[Document] = []
    credly = content.get("credly") if isinstance(content.get("credly"), Mapping) else {}
    for cert in credly.get("manualCertifications") or []:
        if not isinstance(cert, Mapping):
            continue
        name = _text(cert.get("name"))
        bits = []
        if _text(cert.get("description")):
            bits.append(_text(cert.get("description")))
        if _text(cert.get("issued_at_date")):
            bits.append(f"Issued: {_text(cert.get('issued_at_date'))}")
        if _text(cert.get("public_url")):
            bits.append(f"Link: {_text(cert.get('public_url'))}")
        docs.append(
            Document(
                title=f"Certification: {name}" if name else "Certification",
                content=" \n".join(bits),
                source=source,
            )
        )

    profile = content.get("profile") if isinstance(content.get("profile"), Mapping) else {}
    flat: list[str] = []
    for seq in (content.get("certifications"), profile.get("certifications")):
        if isinstance(seq, list):
            flat.extend(_names(seq))
    merged = _unique(flat)
    if merged:
        docs.append(Document(title="Certifications", content=", ".join(merged), source=source))
    return docs


def _bio(content: Mapping[str, Any], source: str) -> list[Document]:
    docs: list[Document] = []
    if _text(content.get("about")):
        docs.append(Document(title="About", content=_text(content["about"]), source=source))
    if _text(content.get("summary")):
        docs.append(Document(title="Summary", content=_text(content["summary"]), source=source))
    info = content.get("personalInfo")
    if isinstance(info, Mapping) and _text(info.get("description")):
        docs.append(Document(title="About", content=_text(info["description"]), source=source))
    return docs


def extract_documents(site_content: Mapping[str, Any], source: str = CONFIG_SOURCE) -> list[Document]:
    """Flatten site content into first-party documents labelled ``source``.

    Handles sections, projects, skills (category object or flat lists),
    certifications (Credly-style entries and flat lists) and bio fields.
    Documents without title and content are dropped.
    """
    if not isinstance(site_content, Mapping):
        return []
    docs: list[Document] = []
    for part in (_sections, _projects, _skills, _certifications, _bio):
        docs.extend(part(site_content, source))
    return [d for d in docs if d.title.strip() or d.content.strip()]


def load_site_content(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read site content {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Site content {p} must be a JSON object")
    return data


def build_snapshot(
    site_content: Mapping[str, Any],
    extra: Iterable[Document] = (),
    dedup: DuplicateDetector | None = None,
) -> list[Document]:
    docs = extract_documents(site_content)
    docs.extend(extra)
    kept, skipped = (dedup or DuplicateDetector()).unique(docs)
    if skipped:
        logger.info("Dropped %d duplicate documents", len(skipped))
    return kept


def dump_documents(docs: Iterable[Document]) -> str:
    return json.dumps([d.to_dict() for d in docs], ensure_ascii=False, indent=2)
