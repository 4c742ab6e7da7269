"""
Page Renderer - Fills page metadata defaults and executes templates.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from http import HTTPStatus
from typing import Optional

from jinja2 import Template
from markupsafe import escape

from ..config import SiteConfig
from ..urls import rfc3339
from .context import DEFAULT_TITLE, DESC_DEFAULT, OG_IMAGE_DEFAULT, PageContext
from .engine import TemplateResolver


logger = logging.getLogger(__name__)

STATIC_ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body><h1>{status}</h1><p>{reason}</p></body>
</html>
"""


def static_error_page(status: int) -> bytes:
    """Error response that needs no template."""
    try:
        reason = HTTPStatus(status).phrase
    except ValueError:
        reason = "Error"
    return STATIC_ERROR_PAGE.format(
        title=escape(DEFAULT_TITLE), status=status, reason=escape(reason)
    ).encode("utf-8")


def page_title(template: Template) -> str:
    """Execute the "title" block without data, falling back to DEFAULT_TITLE."""
    block = template.blocks.get("title")
    if block is None:
        return DEFAULT_TITLE
    try:
        title = "".join(block(template.new_context()))
    except Exception as e:
        logger.debug("Title block of %s failed: %s", template.name, e)
        return DEFAULT_TITLE
    return title.strip() or DEFAULT_TITLE


class PageRenderer:
    """
    Renders site pages to bytes.

    Args:
        config: Site configuration
        resolver: Template resolver

    Example:
        renderer = PageRenderer(config, resolver)
        body = renderer.render("home")
        body = renderer.render("schedule", partial=True, data=PageContext(title="Schedule"))
    """

    def __init__(self, config: SiteConfig, resolver: TemplateResolver):
        self.config = config
        self.resolver = resolver

    def render(
        self,
        name: str,
        partial: bool = False,
        data: Optional[PageContext] = None,
    ) -> bytes:
        """
        Render page name using its layout.

        Raises:
            TemplateNotFound: If the page or layout is missing
            TemplateSyntaxError: If a template is malformed
            TemplateError: If execution fails
        """
        template = self.resolver.resolve(name, partial)
        context = self.fill_defaults(name, template, data)
        return template.render(context.to_dict()).encode("utf-8")

    async def render_async(
        self,
        name: str,
        partial: bool = False,
        data: Optional[PageContext] = None,
    ) -> bytes:
        """Render in a worker thread; file reads may block on a cache miss."""
        return await asyncio.to_thread(self.render, name, partial, data)

    def fill_defaults(
        self,
        name: str,
        template: Template,
        data: Optional[PageContext] = None,
    ) -> PageContext:
        """Return a copy of data with every empty field defaulted."""
        if data is None:
            ctx = PageContext()
        else:
            ctx = replace(data, live_ids=list(data.live_ids), extras=dict(data.extras))

        config = self.config
        if not ctx.env:
            ctx.env = config.env
        if not ctx.client_id:
            ctx.client_id = config.client_id
        if not ctx.prefix:
            ctx.prefix = config.prefix
        if not ctx.slug:
            ctx.slug = name
        if not ctx.start_date_str:
            ctx.start_date_str = rfc3339(
                config.schedule_start.astimezone(config.schedule_location)
            )
        if not ctx.desc:
            ctx.desc = DESC_DEFAULT
        if not ctx.og_image:
            ctx.og_image = OG_IMAGE_DEFAULT
        if not ctx.title:
            ctx.title = page_title(template)
        if not ctx.og_title:
            ctx.og_title = ctx.title
        return ctx

    def render_error(
        self,
        status: int,
        partial: bool = False,
        data: Optional[PageContext] = None,
    ) -> bytes:
        """
        Render the "error_<status>" page.

        Never raises: if the error page itself fails, a static page is
        returned instead.
        """
        name = f"error_{status}"
        try:
            return self.render(name, partial, data)
        except Exception:
            logger.exception("Rendering %s failed, serving static error page", name)
            return static_error_page(status)
