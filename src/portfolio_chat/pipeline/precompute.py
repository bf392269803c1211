"""Aggregate every document under the data prefix into one snapshot object."""

from __future__ import annotations

import logging

from portfolio_chat.application.ports.object_store_port import ObjectStorePort
from portfolio_chat.application.use_cases.load_documents import DocumentStoreLoader
from portfolio_chat.domain.dedup import DuplicateDetector
from portfolio_chat.domain.document import Document
from portfolio_chat.pipeline.extract import dump_documents

logger = logging.getLogger(__name__)


def precompute_snapshot(
    store: ObjectStorePort,
    prefix: str = "rag-data/",
    snapshot_key: str = "portfolio-documents.json",
    upload: bool = False,
    dedup: DuplicateDetector | None = None,
) -> list[Document]:
    """Parse objects under ``prefix`` like the request-time loader, dedup, optionally upload.

    The snapshot itself is skipped while listing so re-running never feeds the
    previous snapshot back in.
    """
    loader = DocumentStoreLoader(
        store=store, prefix=prefix, snapshot_key=snapshot_key, dedup=dedup or DuplicateDetector()
    )
    docs = loader.collect_prefix()
    kept, skipped = loader.dedup.unique(docs)
    logger.info("Aggregated %d documents from %s (%d duplicates)", len(kept), prefix, len(skipped))
    if upload:
        store.put_text(snapshot_key, dump_documents(kept))
        logger.info("Uploaded snapshot to %s", snapshot_key)
    return kept
