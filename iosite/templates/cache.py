"""
Template cache - Process-wide map of compiled templates.

Keys are (page name, layout name) tuples. Entries are never evicted: the set
of keys is fixed by the templates shipped with a deployment. In development
mode nothing is stored, so every render recompiles from disk and template
edits show up without a restart.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from jinja2 import Template


logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


@dataclass
class TemplateCacheStats:
    """Counters for cache observability."""
    hits: int = 0
    misses: int = 0
    stores: int = 0

    @property
    def hit_rate(self) -> float:
        """Cache hit rate as a percentage."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return (self.hits / total) * 100.0


class TemplateCache:
    """
    Thread-safe in-memory cache of compiled templates.

    A single lock guards every lookup and insert. The lock is never held while
    a template is being compiled.

    Args:
        dev_mode: Skip all inserts (development mode)
    """

    def __init__(self, dev_mode: bool = False):
        self.dev_mode = dev_mode
        self._lock = threading.Lock()
        self._templates: Dict[CacheKey, Template] = {}
        self.stats = TemplateCacheStats()

    def get(self, key: CacheKey) -> Tuple[Optional[Template], bool]:
        """Return (template, found) for key."""
        with self._lock:
            template = self._templates.get(key)
            if template is None:
                self.stats.misses += 1
                return None, False
            self.stats.hits += 1
            return template, True

    def put(self, key: CacheKey, template: Template) -> None:
        """Store template under key, unless in development mode."""
        if self.dev_mode:
            return
        with self._lock:
            self._templates[key] = template
            self.stats.stores += 1

    def insert_if_absent(self, key: CacheKey, template: Template) -> Template:
        """
        Store template unless another one is already cached under key.

        Returns the cached template, which is the argument when it was stored
        or in development mode.
        """
        if self.dev_mode:
            return template
        with self._lock:
            existing = self._templates.get(key)
            if existing is not None:
                logger.debug("Template %s compiled concurrently, keeping first", key)
                return existing
            self._templates[key] = template
            self.stats.stores += 1
            return template

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._templates
