from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from portfolio_chat.core.settings import SiteConfig
from portfolio_chat.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_site_config(path: str | Path | None) -> SiteConfig:
    """Read the chatbot feature flags from JSON.

    Accepts either the flags object itself or a site content document carrying
    them under ``chatbot``. No path means defaults.
    """
    if path is None:
        return SiteConfig()
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Site config not found: {p}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid site config {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Site config {p} must be a JSON object")

    data = raw.get("chatbot") if isinstance(raw.get("chatbot"), dict) else raw
    try:
        cfg = SiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid site config {p}: {e}") from e
    logger.info("Loaded site config from %s (topics=%s)", p, ", ".join(cfg.rag_trigger_topics))
    return cfg
