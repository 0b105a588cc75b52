"""URL composition: base URL joining and repeated-key query encoding."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from .types import Params


def join_url(base_url: str | None, path: str) -> str:
    """Join ``base_url`` and ``path`` with exactly one slash between them."""
    if not base_url:
        return path
    if base_url.endswith("/") and path.startswith("/"):
        return base_url + path[1:]
    if base_url.endswith("/") or path.startswith("/"):
        return base_url + path
    return f"{base_url}/{path}"


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Params | None) -> str:
    """Encode ``params`` preserving key order.

    A list or tuple value yields one pair per element under the same key.
    ``None`` values, including list elements, are skipped.
    """
    if not params:
        return ""
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            pairs.append((key, _encode_scalar(item)))
    return urlencode(pairs)


def build_url(
    base_url: str | None, path: str, params: Params | None = None
) -> str:
    url = join_url(base_url, path)
    query = encode_query(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
