"""
Template Engine - Layout selection and cached template compilation.

A page template is compiled together with one layout: the page file is parsed
as a child of the layout, so the blocks it defines ("title", "content", ...)
fill the layout skeleton.

Delimiters differ from Jinja2 defaults so that client-side binding syntax
("{{ binding }}") passes through untouched:
- Statements: {% if x %} ... {% endif %}
- Expressions: {%= x %}
- Comments: {# ... #}
"""

from typing import Any, Callable, Dict, Optional
import logging
from jinja2 import Environment, Template, select_autoescape
from markupsafe import Markup

from ..config import SiteConfig
from ..urls import url_helper
from .cache import TemplateCache
from .loader import TemplateLoader
from .pages import PageRegistry


logger = logging.getLogger(__name__)

BLOCK_START = "{%"
BLOCK_END = "%}"
VARIABLE_START = "{%="
VARIABLE_END = "%}"


def safe_html(value: str) -> Markup:
    """Mark value as safe HTML. The caller asserts it is not user-controlled."""
    return Markup(value)


def create_environment(
    loader: TemplateLoader,
    prefix: str = "",
    *,
    dev_mode: bool = False,
    globals: Optional[Dict[str, Any]] = None,
    filters: Optional[Dict[str, Callable]] = None,
) -> Environment:
    """
    Create the Jinja2 environment shared by all pages.

    Layouts are loaded through the environment and cached by Jinja2 itself,
    except in dev mode where every lookup rereads the file.
    """
    env = Environment(
        loader=loader,
        block_start_string=BLOCK_START,
        block_end_string=BLOCK_END,
        variable_start_string=VARIABLE_START,
        variable_end_string=VARIABLE_END,
        autoescape=select_autoescape(
            enabled_extensions=["html", "htm", "xml"],
            default_for_string=True,
        ),
        cache_size=0 if dev_mode else 400,
        auto_reload=dev_mode,
    )

    env.globals["safeHTML"] = safe_html
    env.globals["url"] = url_helper(prefix)

    if globals:
        env.globals.update(globals)
    if filters:
        env.filters.update(filters)

    return env


class TemplateResolver:
    """
    Resolves a page name to a compiled template.

    Args:
        config: Site configuration
        cache: Shared template cache (one per process)
        registry: Page registry (default: convention-based)
        loader: Template loader (default: config.templates_path)
        globals: Extra template globals
        filters: Extra template filters

    Example:
        cache = TemplateCache(dev_mode=config.is_dev)
        resolver = TemplateResolver(config, cache)
        template = resolver.resolve("schedule", partial=True)
    """

    def __init__(
        self,
        config: SiteConfig,
        cache: TemplateCache,
        *,
        registry: Optional[PageRegistry] = None,
        loader: Optional[TemplateLoader] = None,
        globals: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Callable]] = None,
    ):
        self.config = config
        self.cache = cache
        self.registry = registry or PageRegistry()
        self.loader = loader or TemplateLoader(str(config.templates_path))
        self.env = create_environment(
            self.loader,
            config.prefix,
            dev_mode=cache.dev_mode,
            globals=globals,
            filters=filters,
        )

    def layout_for(self, name: str, partial: bool) -> str:
        return self.registry.layout_for(name, partial)

    def resolve(self, name: str, partial: bool = False) -> Template:
        """
        Return the compiled template for page name.

        Compilation runs outside the cache lock; when two threads compile the
        same page at once, the first insert wins.

        Raises:
            TemplateNotFound: If the page or its layout doesn't exist
            TemplateSyntaxError: If either file has syntax errors
        """
        layout = self.layout_for(name, partial)
        key = (name, layout)

        template, found = self.cache.get(key)
        if found:
            return template

        logger.debug("Compiling page %r with %s", name, layout)
        template = self.compile(name, layout)
        return self.cache.insert_if_absent(key, template)

    def compile(self, name: str, layout: str) -> Template:
        """Parse page name as a child of layout. Nothing is cached here."""
        # load the layout now so a missing or broken one fails resolution
        self.env.get_template(layout)

        source, filename, uptodate = self.loader.page_source(self.env, name)
        header = f'{BLOCK_START} extends "{layout}" {BLOCK_END}'
        code = self.env.compile(header + source, name + ".html", filename)
        return self.env.template_class.from_code(
            self.env, code, self.env.make_globals(None), uptodate
        )
