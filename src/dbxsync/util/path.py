"""Path helpers for Dropbox paths and item keys."""

from __future__ import annotations

from typing import Iterable


def join(segments: Iterable[str]) -> str:
    """
    Join path segments with '/' and collapse '//' into '/'.

    The collapse is a single left-to-right pass, so 'a/b' + '/c' gives 'a/b/c'.
    An empty sequence gives ''.
    """
    return "/".join(segments).replace("//", "/")


def basename(path: str) -> str:
    """Return the last non-empty segment of a slash-separated path."""
    parts = [p for p in path.split("/") if p]
    return parts[-1] if parts else ""
