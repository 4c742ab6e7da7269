"""
Shared test fixtures for the iosite test suite.
"""

import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from iosite.config import SiteConfig
from iosite.templates import PageRenderer, TemplateCache, TemplateResolver


# ============================================================================
# Template tree
# ============================================================================

SITE_TEMPLATES = {
    "layout_full.html": (
        "<html><head><title>{%= title %}</title>"
        '<meta property="og:title" content="{%= og_title %}">'
        "</head><body class=\"full\">{% block content %}{% endblock %}</body></html>"
    ),
    "layout_partial.html": '<div class="partial">{% block content %}{% endblock %}</div>',
    "layout_bare.html": '<html><body class="bare">{% block content %}{% endblock %}</body></html>',
    "layout_error.html": '<html><body class="error">{% block content %}{% endblock %}</body></html>',
    "home.html": "{% block content %}Home {%= slug %}{% endblock %}",
    "about.html": "{% block title %}About{% endblock %}{% block content %}<p>{%= desc %}</p>{% endblock %}",
    "schedule.html": "{% block title %}Sessions{% endblock %}{% block content %}Schedule{% endblock %}",
    "upgrade.html": "{% block content %}Upgrade your browser{% endblock %}",
    "embed.html": "{% block content %}Embed{% endblock %}",
    "error_404.html": "{% block content %}Not found{% endblock %}",
    "admin/users.html": "{% block content %}Users{% endblock %}",
    "debug/info.html": "{% block content %}Debug{% endblock %}",
    "notes.txt": "not a page",
}


@pytest.fixture
def site_dir():
    """Create a temporary site directory with a templates tree."""
    temp_dir = tempfile.mkdtemp()
    templates_path = Path(temp_dir) / "templates"

    for name, source in SITE_TEMPLATES.items():
        path = templates_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)

    yield Path(temp_dir)

    shutil.rmtree(temp_dir)


@pytest.fixture
def templates_path(site_dir):
    return site_dir / "templates"


@pytest.fixture
def config(site_dir):
    return SiteConfig(
        env="prod",
        client_id="client-123",
        prefix="/io15",
        dir=str(site_dir),
        schedule_start=datetime(2015, 5, 28, 16, 0, tzinfo=timezone.utc),
        schedule_timezone="America/Los_Angeles",
    )


@pytest.fixture
def cache():
    return TemplateCache()


@pytest.fixture
def resolver(config, cache):
    return TemplateResolver(config, cache)


@pytest.fixture
def renderer(config, resolver):
    return PageRenderer(config, resolver)
