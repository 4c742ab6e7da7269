"""
iosite - Server-side page rendering and sitemap for the Google I/O 2015 site.

- Templates: layout selection by page kind, cached compilation, defaulted metadata
- Sitemap: templated pages merged with schedule session links
- Config: layered site configuration (YAML/JSON, .env, environment)
- Faults: structured errors for config and schedule data
"""

__version__ = "0.1.0"

from .config import SiteConfig, ConfigLoader, load_config
from .faults import Fault, FaultDomain, Severity, ConfigFault, ScheduleFault
from .urls import resource_url
from .templates import (
    PageContext,
    PageKind,
    PageRegistry,
    PageRenderer,
    TemplateCache,
    TemplateLoader,
    TemplateResolver,
)
from .sitemap import (
    JsonScheduleSource,
    ScheduleSnapshot,
    Sitemap,
    SitemapBuilder,
    SitemapItem,
)

__all__ = [
    # Config
    "SiteConfig",
    "ConfigLoader",
    "load_config",

    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigFault",
    "ScheduleFault",

    # URLs
    "resource_url",

    # Templates
    "PageContext",
    "PageKind",
    "PageRegistry",
    "PageRenderer",
    "TemplateCache",
    "TemplateLoader",
    "TemplateResolver",

    # Sitemap
    "JsonScheduleSource",
    "ScheduleSnapshot",
    "Sitemap",
    "SitemapBuilder",
    "SitemapItem",
]
