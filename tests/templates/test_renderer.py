"""
Test page rendering and metadata defaults.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from iosite.templates import (
    DEFAULT_TITLE,
    DESC_DEFAULT,
    OG_IMAGE_DEFAULT,
    PageContext,
    PageRenderer,
    TemplateCache,
    TemplateResolver,
    page_title,
)


def test_render_returns_bytes(renderer):
    body = renderer.render("home")

    assert isinstance(body, bytes)
    assert b'<body class="full">Home home</body>' in body


def test_title_from_title_block(renderer, resolver):
    template = resolver.resolve("schedule")

    ctx = renderer.fill_defaults("schedule", template, PageContext())

    assert ctx.title == "Sessions"
    assert ctx.og_title == "Sessions"
    assert b"<title>Sessions</title>" in renderer.render("schedule")


def test_explicit_og_title_kept(renderer, resolver):
    template = resolver.resolve("schedule")

    ctx = renderer.fill_defaults("schedule", template, PageContext(og_title="Share me"))

    assert ctx.title == "Sessions"
    assert ctx.og_title == "Share me"


def test_default_title_without_title_block(renderer, resolver):
    template = resolver.resolve("home")

    ctx = renderer.fill_defaults("home", template, None)

    assert ctx.title == DEFAULT_TITLE
    assert ctx.og_title == DEFAULT_TITLE


def test_default_title_when_block_fails(resolver, templates_path):
    (templates_path / "bad_title.html").write_text(
        "{% block title %}{%= missing.attr %}{% endblock %}{% block content %}x{% endblock %}"
    )

    assert page_title(resolver.resolve("bad_title")) == DEFAULT_TITLE


def test_default_title_when_helper_raises(config, cache, templates_path):
    def backend_title():
        raise RuntimeError("backend down")

    resolver = TemplateResolver(config, cache, globals={"backend_title": backend_title})
    renderer = PageRenderer(config, resolver)
    (templates_path / "live.html").write_text(
        "{% block title %}{%= backend_title() %}{% endblock %}{% block content %}Live{% endblock %}"
    )

    assert page_title(resolver.resolve("live")) == DEFAULT_TITLE
    assert f"<title>{DEFAULT_TITLE}</title>".encode() in renderer.render("live")


def test_default_title_when_block_empty(resolver, templates_path):
    (templates_path / "empty_title.html").write_text(
        "{% block title %}  {% endblock %}{% block content %}x{% endblock %}"
    )

    assert page_title(resolver.resolve("empty_title")) == DEFAULT_TITLE


def test_start_date_in_whole_seconds(config, resolver):
    config = replace(
        config, schedule_start=datetime(2015, 5, 28, 16, 0, 0, 250000, tzinfo=timezone.utc)
    )
    renderer = PageRenderer(config, resolver)

    ctx = renderer.fill_defaults("about", resolver.resolve("about"), None)

    assert ctx.start_date_str == "2015-05-28T09:00:00-07:00"


def test_defaults_from_config(renderer, resolver):
    ctx = renderer.fill_defaults("about", resolver.resolve("about"), None)

    assert ctx.env == "prod"
    assert ctx.client_id == "client-123"
    assert ctx.prefix == "/io15"
    assert ctx.slug == "about"
    assert ctx.start_date_str == "2015-05-28T09:00:00-07:00"
    assert ctx.desc == DESC_DEFAULT
    assert ctx.og_image == OG_IMAGE_DEFAULT
    assert ctx.title == "About"


def test_explicit_values_never_overwritten(renderer, resolver):
    data = PageContext(
        env="stage",
        client_id="other",
        prefix="/x",
        slug="custom",
        title="My title",
        desc="Custom description",
        og_image="images/custom.png",
        start_date_str="2015-01-01T00:00:00Z",
    )

    ctx = renderer.fill_defaults("about", resolver.resolve("about"), data)

    assert ctx.env == "stage"
    assert ctx.client_id == "other"
    assert ctx.prefix == "/x"
    assert ctx.slug == "custom"
    assert ctx.title == "My title"
    assert ctx.og_title == "My title"
    assert ctx.desc == "Custom description"
    assert ctx.og_image == "images/custom.png"
    assert ctx.start_date_str == "2015-01-01T00:00:00Z"


def test_caller_context_not_mutated(renderer):
    data = PageContext(desc="Custom description", live_ids=["abc"])

    body = renderer.render("about", data=data)

    assert b"<p>Custom description</p>" in body
    assert data.title == ""
    assert data.slug == ""
    assert data.og_image == ""
    assert data.live_ids == ["abc"]


def test_extras_reach_template(renderer, templates_path):
    (templates_path / "live.html").write_text(
        "{% block content %}{% for id in live_ids %}[{%= id %}]{% endfor %}{%= banner %}{% endblock %}"
    )

    body = renderer.render("live", partial=True, data=PageContext(
        live_ids=["v1", "v2"], extras={"banner": "On air", "title": "ignored"},
    ))

    assert body == b'<div class="partial">[v1][v2]On air</div>'


def test_experiment_context():
    ctx = PageContext.for_experiment(title="Experiment")

    assert ctx.title == "Experiment"
    assert ctx.og_image == "images/io15-experiment.png"
    assert "Make music" in ctx.desc


def test_upgrade_and_error_layouts(renderer):
    assert b'class="bare"' in renderer.render("upgrade", partial=True)
    assert b'class="error">Not found' in renderer.render("error_404", partial=True)


def test_missing_page_propagates(renderer):
    with pytest.raises(TemplateNotFound):
        renderer.render("missing")


def test_execution_error_propagates(renderer, templates_path):
    (templates_path / "crash.html").write_text(
        "{% block content %}{%= missing.attr %}{% endblock %}"
    )

    with pytest.raises(UndefinedError):
        renderer.render("crash")


def test_render_error_page(renderer):
    body = renderer.render_error(404)

    assert b'<body class="error">Not found</body>' in body


def test_render_error_falls_back_to_static_page(renderer):
    body = renderer.render_error(500)

    assert b"<h1>500</h1>" in body
    assert b"Internal Server Error" in body


def test_render_error_fallback_when_error_layout_broken(renderer, templates_path):
    (templates_path / "layout_error.html").write_text("{% block content %}{% if %}")

    body = renderer.render_error(404)

    assert b"<h1>404</h1>" in body
    assert b"Not Found" in body


def test_dev_mode_renders_fresh(config, templates_path):
    renderer = PageRenderer(config, TemplateResolver(config, TemplateCache(dev_mode=True)))
    assert b"Home" in renderer.render("home")

    (templates_path / "home.html").write_text("{% block content %}Welcome{% endblock %}")

    assert b"Welcome" in renderer.render("home")


@pytest.mark.asyncio
async def test_render_async(renderer):
    body = await renderer.render_async("schedule", partial=True)

    assert body == b'<div class="partial">Schedule</div>'
