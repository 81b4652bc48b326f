"""Traversal state codec exports."""

from __future__ import annotations

from .codec import SCHEMA_VERSION, decode, encode, is_valid

__all__ = ["SCHEMA_VERSION", "encode", "decode", "is_valid"]
