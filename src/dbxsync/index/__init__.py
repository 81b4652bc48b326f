"""Cloud Search index exports."""

from __future__ import annotations

from .cloudsearch import MAX_INLINE_CONTENT_BYTES, CloudSearchIndex, QueuedItem

__all__ = ["CloudSearchIndex", "QueuedItem", "MAX_INLINE_CONTENT_BYTES"]
