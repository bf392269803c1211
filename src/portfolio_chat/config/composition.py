from __future__ import annotations

"""Composition root: build the chat use-case from settings.

The cached getter keeps long-lived processes (Lambda warm starts, CLI) from
rebuilding adapters; the use-case itself is stateless wiring.
"""

from functools import lru_cache  # noqa: E402

from portfolio_chat.application.ports.object_store_port import ObjectStorePort  # noqa: E402
from portfolio_chat.application.use_cases import (  # noqa: E402
    ChatUseCase,
    DocumentStoreLoader,
    IntentRouter,
)
from portfolio_chat.config.llm import build_llm_from_settings  # noqa: E402
from portfolio_chat.config.site_config import load_site_config  # noqa: E402
from portfolio_chat.core.settings import Settings, SiteConfig, get_settings  # noqa: E402
from portfolio_chat.domain.scoring import LexicalScorer  # noqa: E402
from portfolio_chat.exceptions import ConfigurationError  # noqa: E402
from portfolio_chat.infra.storage.local_store import LocalObjectStore  # noqa: E402
from portfolio_chat.infra.utils.text_norm import porter_stem  # noqa: E402


def build_object_store(settings: Settings | None = None) -> ObjectStorePort:
    s = settings or get_settings()
    if s.local_data_dir is not None:
        return LocalObjectStore(s.local_data_dir)
    if not s.bucket:
        raise ConfigurationError("S3_BUCKET_NAME is not set (or set LOCAL_DATA_DIR)")
    from portfolio_chat.infra.storage.s3_store import S3ObjectStore

    return S3ObjectStore(bucket=s.bucket, region=s.aws_region)


def build_router(site: SiteConfig) -> IntentRouter:
    scorer = LexicalScorer(stem=porter_stem, extra_hints=[site.owner_first_name])
    return IntentRouter(site=site, scorer=scorer)


def build_chat_use_case(settings: Settings | None = None) -> ChatUseCase:
    s = settings or get_settings()
    site = load_site_config(s.site_config_path)
    loader = DocumentStoreLoader(
        store=build_object_store(s), prefix=s.data_prefix, snapshot_key=s.snapshot_key
    )
    return ChatUseCase(
        loader=loader,
        router=build_router(site),
        llm=build_llm_from_settings(s),
        max_tokens=int(s.max_tokens),
        temperature=float(s.temperature),
    )


@lru_cache(maxsize=1)
def get_chat_use_case() -> ChatUseCase:
    return build_chat_use_case()


__all__ = [
    "build_chat_use_case",
    "build_object_store",
    "build_router",
    "get_chat_use_case",
]
