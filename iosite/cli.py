"""iosite CLI - Render pages and build the sitemap from the command line.

Commands:
    render   - Render a page to stdout or a file
    sitemap  - Build sitemap.xml from templates and a schedule JSON file
    pages    - List pages with their kind and layout
"""

import asyncio
import logging
from typing import Optional

import click
from jinja2 import TemplateError

from . import __version__
from .config import ConfigLoader
from .faults import Fault
from .sitemap import JsonScheduleSource, SitemapBuilder
from .templates import PageContext, PageRenderer, TemplateCache, TemplateResolver


def _write(output: Optional[str], data: bytes) -> None:
    if output:
        with open(output, "wb") as f:
            f.write(data)
    else:
        stdout = click.get_binary_stream("stdout")
        stdout.write(data)
        stdout.flush()


@click.group()
@click.version_option(version=__version__, prog_name="iosite")
@click.option('--config', '-c', 'config_paths', multiple=True, help='YAML or JSON config file')
@click.option('--env-file', type=click.Path(dir_okay=False), help='.env file with IOSITE_* keys')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, config_paths, env_file: Optional[str], verbose: bool):
    """Render site pages and build the sitemap."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = ConfigLoader.load(list(config_paths), env_file=env_file).site_config()
    except Fault as e:
        raise click.ClickException(str(e))

    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    ctx.obj['resolver'] = TemplateResolver(config, TemplateCache(dev_mode=config.is_dev))


@cli.command()
@click.argument('name')
@click.option('--partial', is_flag=True, help='Render with the partial layout')
@click.option('--title', default="", help='Explicit page title')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output file (default: stdout)')
@click.pass_context
def render(ctx, name: str, partial: bool, title: str, output: Optional[str]):
    """
    Render page NAME.

    Examples:
      iosite render home
      iosite render schedule --partial -o schedule.html
    """
    renderer = PageRenderer(ctx.obj['config'], ctx.obj['resolver'])
    try:
        body = renderer.render(name, partial, PageContext(title=title))
    except (TemplateError, OSError) as e:
        raise click.ClickException(f"{name}: {e}")
    _write(output, body)


@cli.command()
@click.argument('base_url')
@click.option('--schedule', '-s', 'schedule_path', required=True,
              type=click.Path(dir_okay=False), help='Schedule JSON file')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output file (default: stdout)')
@click.pass_context
def sitemap(ctx, base_url: str, schedule_path: str, output: Optional[str]):
    """
    Build the sitemap for BASE_URL.

    Examples:
      iosite sitemap https://events.google.com/io2015/ -s schedule.json
    """
    resolver = ctx.obj['resolver']
    builder = SitemapBuilder(resolver.loader, JsonScheduleSource(schedule_path), resolver.registry)
    try:
        result = asyncio.run(builder.build(base_url))
    except (Fault, OSError) as e:
        raise click.ClickException(str(e))
    _write(output, result.to_xml())


@cli.command()
@click.pass_context
def pages(ctx):
    """List pages with their kind and full-page layout."""
    resolver = ctx.obj['resolver']
    try:
        names = resolver.loader.list_pages()
    except OSError as e:
        raise click.ClickException(str(e))
    for name in names:
        kind = resolver.registry.kind_of(name)
        click.echo(f"{name}\t{kind.value}\t{kind.layout(False)}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
