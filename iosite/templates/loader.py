"""
Template Loader - Filesystem loader for the site templates directory.

Supports:
- Jinja2 source loading with up-to-date checks (used for dev-mode reloads)
- Page discovery for the sitemap, failing loudly on walk errors
"""

from typing import Any, Callable, List, Optional, Tuple
from pathlib import Path
import os
from jinja2 import BaseLoader
from jinja2.loaders import FileSystemLoader


PAGE_SUFFIX = ".html"


def _raise(err: OSError) -> None:
    raise err


class TemplateLoader(BaseLoader):
    """
    Loader rooted at the templates directory.

    Page names are paths relative to the root, "/"-separated, without the
    ".html" suffix: "templates/admin/users.html" is page "admin/users".

    Args:
        root: Templates directory
        encoding: Source file encoding
    """

    def __init__(self, root: str, encoding: str = "utf-8"):
        self.root = Path(root)
        self._fs_loader = FileSystemLoader(str(self.root), encoding=encoding)

    def get_source(
        self,
        environment: Any,
        template: str
    ) -> Tuple[str, Optional[str], Optional[Callable[[], bool]]]:
        """
        Load template source.

        Returns:
            Tuple of (source, filename, uptodate_func)

        Raises:
            TemplateNotFound: If template cannot be found
        """
        return self._fs_loader.get_source(environment, template)

    def page_source(self, environment: Any, name: str):
        """Load the source of page name ("home" -> "home.html")."""
        return self.get_source(environment, name + PAGE_SUFFIX)

    def list_templates(self) -> List[str]:
        return [name + PAGE_SUFFIX for name in self.list_pages()]

    def list_pages(self) -> List[str]:
        """
        Walk the templates directory and return sorted page names.

        Raises:
            OSError: If the directory is missing or a subdirectory can't be read
        """
        pages = []
        for root, dirs, files in os.walk(self.root, onerror=_raise):
            root_path = Path(root)
            for filename in files:
                if not filename.endswith(PAGE_SUFFIX):
                    continue
                relative = (root_path / filename).relative_to(self.root)
                pages.append(relative.as_posix()[: -len(PAGE_SUFFIX)])
        return sorted(pages)
