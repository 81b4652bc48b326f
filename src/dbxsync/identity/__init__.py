"""Identity mapping exports."""

from __future__ import annotations

from .mapper import IdentityMapper, is_mappable

__all__ = ["IdentityMapper", "is_mappable"]
