"""
Registry of uploads waiting for their /mint call.

Each /upload gets its own entry keyed by a random upload id, so
concurrent clients never see each other's pending records. Entries
expire after a fixed lifetime.
"""

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ruru_nft.core.config import settings
from ruru_nft.core.logger import logger
from ruru_nft.models.nft_models import NFTRecord


@dataclass
class PendingUpload:
    upload_id: str
    image_url: str
    metadata_url: str
    record: NFTRecord
    created_at: float = field(default_factory=time.monotonic)


class PendingUploadRegistry:
    """Thread-safe, expiring map of upload id -> PendingUpload."""

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl if ttl is not None else settings.PENDING_UPLOAD_TTL
        self._clock = clock
        self._entries: Dict[str, PendingUpload] = {}
        self._lock = threading.Lock()

    def _expired(self, entry: PendingUpload) -> bool:
        return self._clock() - entry.created_at > self.ttl

    def _purge_locked(self):
        expired = [key for key, entry in self._entries.items() if self._expired(entry)]
        for key in expired:
            entry = self._entries.pop(key)
            logger.warning(
                f"Pending upload {key} expired before mint; "
                f"orphaned pins: {entry.image_url}, {entry.metadata_url}"
            )

    def add(self, record: NFTRecord, image_url: str, metadata_url: str) -> PendingUpload:
        """Register a freshly pinned upload and return its entry."""
        entry = PendingUpload(
            upload_id=uuid.uuid4().hex,
            image_url=image_url,
            metadata_url=metadata_url,
            record=record,
            created_at=self._clock(),
        )
        with self._lock:
            self._purge_locked()
            self._entries[entry.upload_id] = entry
        return entry

    def pop(self, upload_id: str) -> Optional[PendingUpload]:
        """Take a live entry out of the registry, or None if unknown or expired."""
        with self._lock:
            self._purge_locked()
            return self._entries.pop(upload_id, None)

    def restore(self, entry: PendingUpload):
        """Put back an entry whose mint failed, keeping its original age."""
        with self._lock:
            self._entries[entry.upload_id] = entry

    def __len__(self) -> int:
        with self._lock:
            self._purge_locked()
            return len(self._entries)
