"""All-or-nothing page draining."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from dbxsync.models import Page

T = TypeVar("T")


def drain(fetch: Callable[[Optional[str]], Page[T]]) -> list[T]:
    """
    Call fetch(cursor) until a page comes back without a cursor.

    fetch(None) requests the first page. Items are returned in page order.
    Any exception from fetch propagates and nothing collected so far is
    returned.
    """
    items: list[T] = []
    cursor: Optional[str] = None

    while True:
        page = fetch(cursor)
        items.extend(page.items)
        if not page.has_more:
            break
        cursor = page.cursor

    return items
