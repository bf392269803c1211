from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from portfolio_chat.application.ports.object_store_port import ObjectStorePort
from portfolio_chat.exceptions import DocumentLoadError


@dataclass
class LocalObjectStore(ObjectStorePort):
    """ObjectStorePort over a local directory; keys are POSIX paths relative to ``root``."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def _path(self, key: str) -> Path:
        return self.root / Path(*key.split("/"))

    def list_keys(self, prefix: str) -> Iterator[str]:
        if not self.root.is_dir():
            return
        for p in sorted(self.root.rglob("*")):
            if not p.is_file():
                continue
            key = p.relative_to(self.root).as_posix()
            if key.startswith(prefix):
                yield key

    def get_text(self, key: str) -> str | None:
        p = self._path(key)
        if not p.is_file():
            return None
        try:
            return p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(f"Could not read {p}: {e}") from e

    def put_text(self, key: str, body: str, content_type: str = "application/json") -> None:
        p = self._path(key)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(body, encoding="utf-8")
