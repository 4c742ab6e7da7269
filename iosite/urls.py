"""
Resource URL helpers.

Links to static resources must respect the path prefix the site is mounted
under, e.g. "/io15".
"""

from __future__ import annotations

import posixpath
from datetime import datetime, timezone
from typing import Callable


def resource_url(prefix: str, first: str, *parts: str) -> str:
    """
    Return absolute path to a resource referenced by parts.

    Given prefix "/myprefix", resource_url(prefix, "images", "img.jpg")
    returns "/myprefix/images/img.jpg". A first part starting with
    http(s):// is returned as is and the remaining parts are ignored.
    """
    lp = first.lower()
    if lp.startswith("http://") or lp.startswith("https://"):
        return first

    p = "/".join((first,) + parts)
    if not p.startswith(prefix):
        p = prefix + "/" + p
    return clean_path(p)


def clean_path(p: str) -> str:
    """Lexically clean a slash-separated path."""
    cleaned = posixpath.normpath(p)
    # normpath keeps exactly two leading slashes
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def url_helper(prefix: str) -> Callable[..., str]:
    """Bind resource_url to a prefix for use as the "url" template global."""

    def url(first: str, *parts: str) -> str:
        return resource_url(prefix, first, *parts)

    return url


def rfc3339(value: datetime) -> str:
    """Format a timestamp as RFC3339 in whole seconds, using "Z" for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.replace(microsecond=0).isoformat()
    if value.utcoffset().total_seconds() == 0 and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text
