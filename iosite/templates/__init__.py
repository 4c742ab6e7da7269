"""
Site templates - Jinja2-based page rendering.

Pages are compiled together with a layout picked by page kind, cached per
(page, layout) for the process lifetime and rendered with defaulted page
metadata.

Example:
    from iosite.config import load_config
    from iosite.templates import PageRenderer, TemplateCache, TemplateResolver

    config = load_config(["site.yaml"])
    cache = TemplateCache(dev_mode=config.is_dev)
    renderer = PageRenderer(config, TemplateResolver(config, cache))

    html = renderer.render("home")
"""

from .cache import TemplateCache, TemplateCacheStats
from .context import PageContext, DEFAULT_TITLE, DESC_DEFAULT, OG_IMAGE_DEFAULT
from .engine import TemplateResolver, create_environment, safe_html
from .loader import TemplateLoader
from .pages import (
    PageKind,
    PageRegistry,
    LAYOUT_FULL,
    LAYOUT_PARTIAL,
    LAYOUT_BARE,
    LAYOUT_ERROR,
)
from .renderer import PageRenderer, page_title, static_error_page

__all__ = [
    # Cache
    "TemplateCache",
    "TemplateCacheStats",

    # Context
    "PageContext",
    "DEFAULT_TITLE",
    "DESC_DEFAULT",
    "OG_IMAGE_DEFAULT",

    # Engine
    "TemplateResolver",
    "TemplateLoader",
    "create_environment",
    "safe_html",

    # Pages
    "PageKind",
    "PageRegistry",
    "LAYOUT_FULL",
    "LAYOUT_PARTIAL",
    "LAYOUT_BARE",
    "LAYOUT_ERROR",

    # Rendering
    "PageRenderer",
    "page_title",
    "static_error_page",
]
