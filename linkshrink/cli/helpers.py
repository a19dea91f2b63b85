from __future__ import annotations
import click

from ..config import load_typed_config, load_env_source, resolve_provider_name
from ..version import __version__
from ..errors import ProviderNotFoundError
from ..providers import Shrinker, available_shrinkers, get_shrinker
from ..providers.plugins import load_plugins


def get_shrinker_class(cfg: dict, provider_name: str | None) -> type[Shrinker]:
    """Resolve the shrinker class for a command.

    Raises:
        click.UsageError: If no provider is configured or the name is unknown
    """
    try:
        name = resolve_provider_name(cfg, provider_name, available_shrinkers())
        return get_shrinker(name)
    except (ValueError, ProviderNotFoundError) as e:
        raise click.UsageError(str(e))


def build_shrinker(cfg: dict, provider_name: str | None, url: str | None = None) -> Shrinker:
    """Create a fresh shrinker reading API keys from environment and .env."""
    cls = get_shrinker_class(cfg, provider_name)
    return cls(url=url, env=load_env_source())


@click.group()
@click.version_option(version=__version__, prog_name="link-shrink")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Override configured log level')
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """Inspect URL-shortening providers without touching the network.

    \b
    TYPICAL WORKFLOWS:

    \b
    Discover providers:
      linkshrink providers              # Registered shrinkers and key status

    \b
    Prepare a request:
      linkshrink sanitize example.com   # Normalized, encoded long URL
      linkshrink request example.com    # Method, URL, headers, body

    \b
    Interpret a reply:
      linkshrink parse reply.json       # Short URL or provider error
      cat reply.json | linkshrink parse -

    \b
    Shrinkers are loaded from plugin modules listed in LSK__PLUGINS.
    API keys are read from <NAME>_URL_KEY environment variables.
    """
    if not isinstance(ctx.obj, dict):
        overrides = {'log_level': log_level} if log_level else None
        ctx.obj = load_typed_config(overrides).to_dict()
    elif log_level:
        ctx.obj['log_level'] = log_level

    try:
        load_plugins(ctx.obj.get('plugins') or [])
    except ImportError as e:
        raise click.ClickException(f"Failed to load shrinker plugin: {e}")


__all__ = ["cli", "get_shrinker_class", "build_shrinker"]
