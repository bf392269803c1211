from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from portfolio_chat.application.ports.object_store_port import ObjectStorePort
from portfolio_chat.domain.dedup import DuplicateDetector
from portfolio_chat.domain.document import Document
from portfolio_chat.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ("txt", "md")


def _extension(key: str) -> str:
    name = key.rsplit("/", 1)[-1]
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def _coerce(parsed: Any) -> list[Document]:
    items = parsed if isinstance(parsed, list) else [parsed]
    docs: list[Document] = []
    for item in items:
        doc = Document.from_mapping(item)
        if doc is not None:
            docs.append(doc)
    return docs


def parse_json_documents(body: str) -> list[Document]:
    """Decode a JSON list of documents or a single document; raises DocumentLoadError."""
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"Bad JSON: {e}") from e
    return _coerce(parsed)


def documents_from_object(key: str, body: str, prefix: str = "") -> list[Document]:
    """Turn one stored object into documents according to its extension.

    ``.json`` holds a list of documents or a single one; ``.txt``/``.md`` become a
    single document titled by the key relative to ``prefix``; anything else is ignored.
    """
    ext = _extension(key)
    if ext == "json":
        return parse_json_documents(body)
    if ext in TEXT_EXTENSIONS:
        title = key[len(prefix) :] if prefix and key.startswith(prefix) else key
        doc = Document.from_mapping({"title": title, "content": body, "source": f"s3:{key}"})
        return [doc] if doc is not None else []
    return []


@dataclass
class DocumentStoreLoader:
    """Load the corpus for one request: legacy snapshot first, then every object under ``prefix``.

    Individual unreadable or malformed objects are logged and skipped; a listing
    failure keeps whatever was loaded so far.
    """

    store: ObjectStorePort
    prefix: str = "rag-data/"
    snapshot_key: str | None = "portfolio-documents.json"
    dedup: DuplicateDetector = field(default_factory=DuplicateDetector)

    def _is_snapshot(self, key: str) -> bool:
        snap = self.snapshot_key
        return bool(snap) and (key == snap or key.endswith("/" + snap))

    def _load_snapshot(self) -> list[Document]:
        if not self.snapshot_key:
            return []
        try:
            body = self.store.get_text(self.snapshot_key)
        except DocumentLoadError as e:
            logger.warning("Snapshot load skipped: %s", e)
            return []
        if body is None:
            return []
        try:
            return parse_json_documents(body)
        except DocumentLoadError as e:
            logger.warning("Snapshot %s: %s", self.snapshot_key, e)
            return []

    def collect_prefix(self, *, skip_snapshot: bool = True) -> list[Document]:
        docs: list[Document] = []
        try:
            for key in self.store.list_keys(self.prefix):
                if not key or key.endswith("/"):
                    continue
                if skip_snapshot and self._is_snapshot(key):
                    continue
                try:
                    body = self.store.get_text(key)
                    if body is None:
                        continue
                    docs.extend(documents_from_object(key, body, self.prefix))
                except DocumentLoadError as e:
                    logger.warning("Skipping %s: %s", key, e)
        except Exception as e:  # noqa: BLE001
            logger.warning("Prefix listing of %r failed: %s", self.prefix, e)
        return docs

    def load(self) -> list[Document]:
        docs = self._load_snapshot()
        docs.extend(self.collect_prefix())
        kept, skipped = self.dedup.unique(docs)
        logger.info("Loaded %d documents (%d duplicates dropped)", len(kept), len(skipped))
        return kept
