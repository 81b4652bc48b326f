"""Result models for a connector traversal run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


ItemStatus = Literal["indexed", "deleted", "failed"]


@dataclass(slots=True)
class ItemResult:
    """Result for a single polled item."""

    key: str
    status: ItemStatus

    children: int = 0
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class TraversalReport:
    """Aggregate result for one Connector.run_full_traversal call."""

    roots: int
    results: list[ItemResult] = field(default_factory=list)

    @property
    def summary(self) -> dict[str, int]:
        summary: dict[str, int] = {"indexed": 0, "deleted": 0, "failed": 0}
        for r in self.results:
            summary[r.status] = summary.get(r.status, 0) + 1
        return summary

    @property
    def failed_keys(self) -> list[str]:
        return [r.key for r in self.results if r.status == "failed"]
