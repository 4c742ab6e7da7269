"""
Page kinds and the page registry.

Every page name is classified once, when it is registered, into a PageKind.
Layout selection and sitemap exclusion consult the kind instead of matching
name prefixes at each call site.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple


LAYOUT_FULL = "layout_full.html"
LAYOUT_PARTIAL = "layout_partial.html"
LAYOUT_BARE = "layout_bare.html"
LAYOUT_ERROR = "layout_error.html"

# Names starting with these are internal pages: never listed in the sitemap.
INTERNAL_PREFIXES: Tuple[str, ...] = ("embed", "upgrade", "admin/", "debug/")


class PageKind(str, Enum):
    """Classification of a template by its role on the site."""
    PAGE = "page"            # Public page, full or partial layout
    ERROR = "error"          # HTTP error page, "error_404"
    BARE = "bare"            # Rendered without site chrome ("upgrade")
    INTERNAL = "internal"    # Embeds, admin and debug pages
    LAYOUT = "layout"        # Layout skeletons, never rendered directly

    @classmethod
    def classify(cls, name: str) -> "PageKind":
        """Derive the kind of a page from its naming convention."""
        if name.startswith("layout_"):
            return cls.LAYOUT
        if name.startswith("error_"):
            return cls.ERROR
        if name == "upgrade":
            return cls.BARE
        if name.startswith(INTERNAL_PREFIXES):
            return cls.INTERNAL
        return cls.PAGE

    @property
    def in_sitemap(self) -> bool:
        return self is PageKind.PAGE

    def layout(self, partial: bool) -> str:
        """Layout file for this kind; error and bare pages ignore partial."""
        if self is PageKind.ERROR:
            return LAYOUT_ERROR
        if self is PageKind.BARE:
            return LAYOUT_BARE
        if partial:
            return LAYOUT_PARTIAL
        return LAYOUT_FULL


class PageRegistry:
    """
    Registry of page names and their kinds.

    Names looked up without prior registration are classified by naming
    convention but not stored, so lookups of request-derived names never
    grow the registry.

    Example:
        registry = PageRegistry()
        registry.register("promo_embed_video", PageKind.INTERNAL)
        registry.kind_of("error_404")   # PageKind.ERROR
    """

    def __init__(self, pages: Optional[Iterable[str]] = None):
        self._lock = threading.Lock()
        self._kinds: Dict[str, PageKind] = {}
        for name in pages or ():
            self.register(name)

    def register(self, name: str, kind: Optional[PageKind] = None) -> PageKind:
        """Register a page. An explicit kind overrides the naming convention."""
        kind = kind or PageKind.classify(name)
        with self._lock:
            self._kinds[name] = kind
        return kind

    def kind_of(self, name: str) -> PageKind:
        with self._lock:
            kind = self._kinds.get(name)
        if kind is None:
            kind = PageKind.classify(name)
        return kind

    def layout_for(self, name: str, partial: bool) -> str:
        return self.kind_of(name).layout(partial)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._kinds

    def __iter__(self) -> Iterator[Tuple[str, PageKind]]:
        with self._lock:
            items = sorted(self._kinds.items())
        return iter(items)
