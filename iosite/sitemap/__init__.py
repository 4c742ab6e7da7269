"""
Sitemap generation for templated pages and schedule sessions.
"""

from .builder import (
    Sitemap,
    SitemapBuilder,
    SitemapItem,
    SITEMAP_NAMESPACE,
)
from .schedule import JsonScheduleSource, ScheduleSnapshot, ScheduleSource

__all__ = [
    "Sitemap",
    "SitemapBuilder",
    "SitemapItem",
    "SITEMAP_NAMESPACE",
    "JsonScheduleSource",
    "ScheduleSnapshot",
    "ScheduleSource",
]
