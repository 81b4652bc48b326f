from __future__ import annotations

import mimetypes
from typing import Optional

DEFAULT_MIME: str = "application/octet-stream"

# Content types Dropbox reports for any download, regardless of the file.
GENERIC_MIMES: set[str] = {
    DEFAULT_MIME,
    "binary/octet-stream",
    "application/binary",
}


def is_generic(content_type: Optional[str]) -> bool:
    if not content_type:
        return True
    return content_type.split(";", 1)[0].strip().lower() in GENERIC_MIMES


def resolve_content_type(content_type: Optional[str], name: str) -> str:
    """
    Pick the content type to index for a downloaded file.

    A specific type from the download response wins; otherwise the type is
    guessed from the file name, falling back to application/octet-stream.
    """
    if not is_generic(content_type):
        return content_type.split(";", 1)[0].strip()  # type: ignore[union-attr]
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_MIME
