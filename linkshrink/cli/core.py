"""Core CLI commands.

Commands never perform network I/O: they assemble requests and interpret
replies that a transport (or the user) obtained elsewhere.
"""

from __future__ import annotations
import click
import json as _json
import logging

from .helpers import cli, get_shrinker_class, build_shrinker
from ..config import load_env_source
from ..errors import ProviderResponseError, ResponseSchemaError
from ..providers import (
    HttpMethod,
    available_shrinkers,
    build_request,
    get_shrinker,
    interpret_response,
    sanitize_url,
)
from ..utils.output import error, info, key_value, redact, section_header, warning

logger = logging.getLogger(__name__)


def _json_enabled(cfg: dict, flag: bool | None) -> bool:
    if flag is not None:
        return flag
    return bool((cfg.get('output') or {}).get('json', False))


def _parse_params(pairs: tuple[str, ...]) -> dict:
    params: dict = {}
    for pair in pairs:
        if '=' not in pair:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--param")
        key, value = pair.split('=', 1)
        params[key.strip()] = value
    return params


@cli.command(name="providers")
@click.option('--json/--no-json', 'as_json', default=None, help='Emit JSON instead of text')
@click.pass_context
def list_providers(ctx: click.Context, as_json: bool | None):
    """List registered shrinkers and whether their API key is set."""
    cfg = ctx.obj
    env = load_env_source()
    rows = []
    for name in available_shrinkers():
        shrinker = get_shrinker(name)(env=env)
        rows.append({
            'name': name,
            'method': HttpMethod(shrinker.http_method()).value,
            'content_type': shrinker.content_type(),
            'key_var': shrinker.api_key_var(),
            'has_key': shrinker.has_api_key(),
            'charts': shrinker.supports_charts(),
        })

    if _json_enabled(cfg, as_json):
        click.echo(_json.dumps(rows, indent=2))
        return

    if not rows:
        click.echo(error("No shrinkers registered (set LSK__PLUGINS to load provider modules)"))
        return
    click.echo(section_header(f"{len(rows)} shrinker(s)"))
    for row in rows:
        key_state = click.style('set', fg='green') if row['has_key'] else click.style('missing', fg='yellow')
        extra = ', charts' if row['charts'] else ''
        click.echo(info(f"{row['name']} [{row['method']} {row['content_type']}{extra}] {row['key_var']}: {key_state}"))


@cli.command()
@click.argument('url')
def sanitize(url: str):
    """Print the normalized, percent-encoded form of URL."""
    click.echo(sanitize_url(url))


@cli.command()
@click.argument('url')
@click.option('--provider', '-p', default=None, help='Shrinker name (defaults to configured provider)')
@click.option('--param', 'params', multiple=True, help='Body parameter KEY=VALUE (repeatable)')
@click.option('--json/--no-json', 'as_json', default=None, help='Emit JSON instead of text')
@click.pass_context
def request(ctx: click.Context, url: str, provider: str | None, params: tuple[str, ...], as_json: bool | None):
    """Show the HTTP request a transport would send to shrink URL."""
    cfg = ctx.obj
    body_params = _parse_params(params)
    shrinker = build_shrinker(cfg, provider, url)
    req = build_request(shrinker, body_params)

    if _json_enabled(cfg, as_json):
        click.echo(_json.dumps(req.to_dict(), indent=2))
        return

    click.echo(section_header(f"{req.provider} request"))
    click.echo(key_value('Method', req.method.value))
    click.echo(key_value('URL', req.display_url()))
    click.echo(key_value('Content-Type', req.content_type))
    click.echo(key_value('API key', redact(req.api_key)))
    if req.body is not None:
        click.echo(key_value('Body', req.body))
    if not shrinker.has_api_key():
        click.echo(warning(f"{shrinker.api_key_var()} not set; URL carries no query parameters"), err=True)


@cli.command()
@click.argument('source', type=click.File('r'), default='-')
@click.option('--provider', '-p', default=None, help='Shrinker name (defaults to configured provider)')
@click.pass_context
def parse(ctx: click.Context, source, provider: str | None):
    """Interpret a provider's JSON reply read from SOURCE (file or '-')."""
    cls = get_shrinker_class(ctx.obj, provider)
    name = cls.short_name()
    try:
        result = interpret_response(cls.schema, source.read(), provider=name)
    except ResponseSchemaError as e:
        raise click.ClickException(f"{name}: {e}")
    except ProviderResponseError as e:
        raise click.ClickException(str(e))

    if not result.ok:
        raise click.ClickException(f"{name} reported an error: {result.error}")
    click.echo(result.short_url)


@cli.command()
@click.argument('url')
@click.option('--provider', '-p', default=None, help='Shrinker name (defaults to configured provider)')
@click.option('--width', type=int, default=None, help='Image width in pixels')
@click.option('--height', type=int, default=None, help='Image height in pixels')
@click.pass_context
def chart(ctx: click.Context, url: str, provider: str | None, width: int | None, height: int | None):
    """Print a QR code / chart image URL for URL."""
    cfg = ctx.obj
    shrinker = build_shrinker(cfg, provider, url)
    if not shrinker.supports_charts():
        raise click.ClickException(f"{shrinker.short_name()} does not generate charts")

    image_size = dict((cfg.get('chart') or {}).get('image_size') or {})
    if width is not None:
        image_size['width'] = width
    if height is not None:
        image_size['height'] = height
    logger.debug(f"Rendering chart via {shrinker.short_name()} with {image_size}")
    click.echo(shrinker.generate_chart_url(shrinker.url, image_size))


@cli.command(name="config")
@click.option("--section", "-s", help="Only show a specific top-level section (e.g. chart, output).")
@click.pass_context
def show_config(ctx: click.Context, section: str | None):
    """Show current configuration settings."""
    data = ctx.obj
    if section:
        section = section.lower()
        if section not in data:
            raise click.UsageError(f"Unknown section '{section}'. Available: {', '.join(sorted(data.keys()))}")
        data = {section: data[section]}
    click.echo(_json.dumps(data, indent=2, sort_keys=True))


__all__ = ["list_providers", "sanitize", "request", "parse", "chart", "show_config"]
