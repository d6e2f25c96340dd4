"""Content-addressed storage of original uploads.

Every original lives at ``{root}/{hash}.{ext}``. The presence of a file for a
hash is the deduplication gate: admitting the same bytes again writes nothing.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class AdmitResult(Enum):
    """Outcome of offering bytes to the raw store."""

    INSERTED = "inserted"
    DUPLICATE = "duplicate"


class RawStore:
    """Stores original bytes under their content hash."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def raw_path(self, content_hash: str, ext: str) -> Path:
        """Return the canonical path for a hash and extension."""
        return self.root / f"{content_hash}.{ext}"

    def find(self, content_hash: str) -> Path | None:
        """Return the stored original for a hash, whatever its extension."""
        for candidate in self.root.glob(f"{content_hash}.*"):
            if candidate.is_file():
                return candidate
        return None

    def admit(self, data: bytes, content_hash: str, ext: str) -> AdmitResult:
        """Store ``data`` unless content with the same hash is already present.

        A hash already stored under another extension also counts as a
        duplicate, so one hash never maps to two originals.

        Raises:
            OSError: If the bytes cannot be written.
        """
        target = self.raw_path(content_hash, ext)
        if target.exists() or self.find(content_hash) is not None:
            return AdmitResult.DUPLICATE

        self.root.mkdir(parents=True, exist_ok=True)
        tmp = target.with_name(f".{target.name}.tmp")
        try:
            tmp.write_bytes(data)
            os.replace(tmp, target)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Stored raw %s (%d bytes)", target.name, len(data))
        return AdmitResult.INSERTED

    def evict(self, content_hash: str, ext: str) -> None:
        """Remove an original whose later pipeline stages failed."""
        self.raw_path(content_hash, ext).unlink(missing_ok=True)
