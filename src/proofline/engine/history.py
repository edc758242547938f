"""Bounded per-document version history for tone rewrites and reverts."""

from __future__ import annotations

from collections import deque

from proofline.models.document import VersionSnapshot
from proofline.models.rewriting import ToneType

DEFAULT_LIMIT = 10


class VersionHistory:
    """Newest-first ring buffer; the oldest snapshot is evicted when full."""

    def __init__(self, limit: int = DEFAULT_LIMIT):
        self._entries: deque[VersionSnapshot] = deque(maxlen=limit)

    def record(self, content: str, action: str, tone: ToneType | None = None) -> VersionSnapshot:
        snapshot = VersionSnapshot(content=content, action=action, tone=tone)
        self._entries.appendleft(snapshot)
        return snapshot

    def entries(self) -> list[VersionSnapshot]:
        return list(self._entries)

    def get(self, version_id: str) -> VersionSnapshot | None:
        return next((v for v in self._entries if v.id == version_id), None)

    def __len__(self) -> int:
        return len(self._entries)
