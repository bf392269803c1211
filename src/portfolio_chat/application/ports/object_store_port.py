from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol


class ObjectStorePort(Protocol):
    """Minimal key/value object store: list under a prefix, read and write text."""

    def list_keys(self, prefix: str) -> Iterable[str]:  # pragma: no cover - interface
        ...

    def get_text(self, key: str) -> str | None:  # pragma: no cover - interface
        """Return the object body, or None when the key does not exist."""
        ...

    def put_text(
        self, key: str, body: str, content_type: str = "application/json"
    ) -> None:  # pragma: no cover - interface
        ...
