from .mime import DEFAULT_MIME, is_generic, resolve_content_type
from .path import basename, join
from .time import as_utc, now_utc, parse_rfc3339, to_rfc3339

__all__ = [
    "join",
    "basename",
    "DEFAULT_MIME",
    "is_generic",
    "resolve_content_type",
    "now_utc",
    "parse_rfc3339",
    "to_rfc3339",
    "as_utc",
]
