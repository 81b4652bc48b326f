"""Synchronization engine exports."""

from __future__ import annotations

from .assembler import DocumentAssembler
from .directory import DirectoryEnumerator
from .pagination import drain
from .sharing import SharingResolver
from .walker import TreeWalker, item_key

__all__ = [
    "DocumentAssembler",
    "DirectoryEnumerator",
    "SharingResolver",
    "TreeWalker",
    "drain",
    "item_key",
]
