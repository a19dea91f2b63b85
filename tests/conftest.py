"""Pytest fixtures for shrinker tests.

Global test safety measures:
 - Every test starts with an empty shrinker registry and plugin cache
 - LSK__* configuration and *_URL_KEY credentials are removed from the env
"""
import os
import pytest
from pathlib import Path
from typing import Dict, Any

from linkshrink.providers import base as providers_base
from linkshrink.providers import plugins as providers_plugins
from linkshrink.providers import HttpMethod, Shrinker, image_size_param, response_options

SHORTY_BASE = "http://shorty.com/api/2.0/shorten"


@pytest.fixture(autouse=True)
def isolated_registry(monkeypatch):
    """Fresh registry per test so registrations never leak."""
    registry: Dict[str, type] = {}
    monkeypatch.setattr(providers_base, "_shrinkers", registry)
    monkeypatch.setattr(providers_plugins, "_loaded", set())
    return registry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LSK__") or key.endswith("_URL_KEY") or key == "LSK_ENABLE_DOTENV":
            monkeypatch.delenv(key, raising=False)


class Shorty(Shrinker):
    """GET shrinker answering ``{"data": {"url": ...}}``."""

    name = "shorty"
    schema = response_options(lambda r: r.collection("data").short_url("url").error())

    def base_url(self):
        return SHORTY_BASE

    def query_parameter(self, url):
        return f"?url={url}"


class Posty(Shrinker):
    """POST shrinker that sends the key and URL in the body."""

    name = "posty"
    schema = response_options(lambda r: r.short_url("shortUrl").error("message"))

    def base_url(self):
        return "https://posty.example/v1/links"

    def query_parameter(self, url):
        return f"?key={self.api_key()}"

    def http_method(self):
        return HttpMethod.POST

    def body_parameters(self, params=None):
        body = dict(params or {})
        body["longUrl"] = self.url
        return body

    def generate_chart_url(self, url, image_size=None):
        return f"https://posty.example/qr?size={image_size_param(image_size)}&data={url}"


@pytest.fixture
def shorty_cls():
    return Shorty


@pytest.fixture
def posty_cls():
    return Posty


@pytest.fixture
def test_config(tmp_path: Path) -> Dict[str, Any]:
    """Minimal configuration dict for CLI invocations (``obj=cfg``)."""
    return {
        'log_level': 'DEBUG',
        'provider': None,
        'plugins': [],
        'chart': {'image_size': {'width': 150, 'height': 150}},
        'output': {'json': False},
    }


@pytest.fixture
def plugin_path(monkeypatch):
    """Make tests/plugins importable and force a fresh import of its modules."""
    import sys

    monkeypatch.syspath_prepend(str(Path(__file__).parent / "plugins"))
    monkeypatch.delitem(sys.modules, "shorty_plugin", raising=False)
    return "shorty_plugin"
