"""
Sitemap builder - Templated pages plus schedule session links.
"""

from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from urllib.parse import quote, urlencode, urljoin

from ..templates.loader import TemplateLoader
from ..templates.pages import PageRegistry
from ..urls import rfc3339
from .schedule import ScheduleSource


logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

FREQ_DAILY = "daily"
FREQ_WEEKLY = "weekly"

HOME_PAGE = "home"
SCHEDULE_PAGE = "schedule"


@dataclass
class SitemapItem:
    """One <url> entry."""
    loc: str
    changefreq: Optional[str] = None
    lastmod: Optional[datetime] = None


@dataclass
class Sitemap:
    """Ordered sitemap entries."""
    items: List[SitemapItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_element(self) -> ET.Element:
        urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
        for item in self.items:
            url = ET.SubElement(urlset, "url")
            ET.SubElement(url, "loc").text = item.loc
            if item.changefreq:
                ET.SubElement(url, "changefreq").text = item.changefreq
            if item.lastmod is not None:
                ET.SubElement(url, "lastmod").text = rfc3339(item.lastmod)
        return urlset

    def to_xml(self) -> bytes:
        """Serialize as a sitemap protocol document."""
        return ET.tostring(self.to_element(), encoding="utf-8", xml_declaration=True)


class SitemapBuilder:
    """
    Builds the site sitemap.

    Args:
        loader: Loader of the templates directory to walk
        schedule: Source of the latest schedule
        registry: Page registry deciding which pages are listed

    Example:
        builder = SitemapBuilder(loader, JsonScheduleSource("schedule.json"))
        sitemap = await builder.build("https://events.google.com/io2015/")
        xml = sitemap.to_xml()
    """

    def __init__(
        self,
        loader: TemplateLoader,
        schedule: ScheduleSource,
        registry: Optional[PageRegistry] = None,
    ):
        self.loader = loader
        self.schedule = schedule
        self.registry = registry or PageRegistry()

    async def build(self, base_url: str) -> Sitemap:
        """
        Return a sitemap of templated pages and schedule sessions.

        Locations are resolved against base_url. Any directory walk or
        schedule fetch error propagates; no partial sitemap is returned.
        """
        pages = await asyncio.to_thread(self.loader.list_pages)
        items = self.page_items(base_url, pages)
        items.extend(await self.session_items(base_url))
        logger.info("Built sitemap with %d entries", len(items))
        return Sitemap(items=items)

    def page_items(self, base_url: str, pages: Iterable[str]) -> List[SitemapItem]:
        items = []
        for name in pages:
            if not self.registry.kind_of(name).in_sitemap:
                continue
            freq = FREQ_WEEKLY
            if name == HOME_PAGE:
                name = ""
                freq = FREQ_DAILY
            items.append(SitemapItem(loc=urljoin(base_url, quote(name)), changefreq=freq))
        return items

    async def session_items(self, base_url: str) -> List[SitemapItem]:
        sched = await self.schedule.latest(None)
        mod = sched.modified
        if mod.tzinfo is None:
            mod = mod.replace(tzinfo=timezone.utc)
        mod = mod.astimezone(timezone.utc)

        items = []
        for sid in sorted(sched.sessions):
            loc = urljoin(base_url, SCHEDULE_PAGE + "?" + urlencode({"sid": sid}))
            items.append(SitemapItem(loc=loc, changefreq=FREQ_DAILY, lastmod=mod))
        return items
