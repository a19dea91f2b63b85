"""Shrinker abstraction layer.

This module defines the contract every URL-shortening provider implements and
the behaviour shared by all of them, so additional providers (is.gd, TinyURL,
Bitly, ...) can be integrated by overriding a handful of small methods.

Key abstractions:
- Shrinker: base class with required overrides and shared URL/key handling
- HttpMethod: request verb a shrinker expects
- sanitize_url: scheme-prefixing + percent-encoding of a long URL
- Registry: register_shrinker / get_shrinker / create_shrinker

Example:
    @register_shrinker
    class Shorty(Shrinker):
        name = "shorty"
        schema = response_options(lambda r: r.collection("data").short_url("url"))

        def base_url(self):
            return "http://shorty.com/api/2.0/shorten"

        def query_parameter(self, url):
            return f"?url={url}"
"""
from __future__ import annotations
import re
import logging
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar, Dict, Mapping
from urllib.parse import quote

from ..errors import DuplicateProviderError, ProviderNotFoundError
from .credentials import api_key_env_var, has_api_key, resolve_api_key
from .schema import ResponseSchema

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json"

# Prefix test only; the remainder of the URL is not validated.
_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)
# Output shape of sanitize_url: encoded scheme, then unreserved chars or %XX escapes
_SANITIZED = re.compile(r"https?%3A%2F%2F(?:[A-Za-z0-9_.~-]|%[0-9A-Fa-f]{2})*", re.IGNORECASE)


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


def sanitize_url(candidate: str) -> str:
    """Normalize a long URL for embedding in a query string.

    ``http://`` is prepended when no http/https scheme is present and the
    result is fully percent-encoded, so escapes already in the URL survive a
    single decode by the provider. Input that is already in sanitized form is
    returned unchanged. Never raises: characters that cannot be encoded as
    UTF-8 (lone surrogates from undecodable argv bytes) are escaped bytewise.

    Args:
        candidate: Long URL as supplied by the user

    Returns:
        Percent-encoded absolute URL
    """
    if _SANITIZED.fullmatch(candidate):
        return candidate
    if not _SCHEME_PREFIX.match(candidate):
        candidate = f"http://{candidate}"
    return quote(_utf8_bytes(candidate), safe="")


def _utf8_bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


@lru_cache(maxsize=None)
def _short_name_for(cls: type) -> str:
    explicit = cls.__dict__.get("name")
    if explicit:
        return explicit
    return cls.__qualname__.rsplit(".", 1)[-1]


class Shrinker:
    """Base class for URL-shortening providers.

    Subclasses must override base_url() and query_parameter(); shrinkers that
    can render QR codes or charts also override generate_chart_url(). Every
    other method has a default that fits a plain GET/JSON API.

    An instance holds one long URL and is meant for a single shrink
    operation; do not share it across concurrent requests. Set the URL
    before calling api_url(): with an API key configured and no URL set,
    api_url() raises ValueError instead of appending an empty parameter.
    """

    # Explicit identifier; falls back to the class name when unset
    name: ClassVar[str | None] = None
    schema: ClassVar[ResponseSchema] = ResponseSchema()

    def __init__(self, url: str | None = None, env: Mapping[str, str] | None = None):
        """Create a shrinker, optionally with the long URL already set.

        Args:
            url: Long URL to shrink (stored sanitized)
            env: Credential source; defaults to the process environment
        """
        self._env = env
        self._url: str | None = None
        if url is not None:
            self.url = url

    # ---------------- Required overrides -----------------

    def base_url(self) -> str:
        """API endpoint for shrink requests."""
        raise NotImplementedError(f"{type(self).__name__}.base_url not implemented")

    def query_parameter(self, url: str) -> str:
        """Query string appended to base_url() (e.g. ``?url=<encoded>``)."""
        raise NotImplementedError(f"{type(self).__name__}.query_parameter not implemented")

    def generate_chart_url(self, url: str, image_size: Dict[str, Any] | None = None) -> str:
        """URL of a QR code or chart image for ``url``."""
        raise NotImplementedError(f"{type(self).__name__}.generate_chart_url not implemented")

    # ---------------- Identity & credentials -----------------

    @classmethod
    def short_name(cls) -> str:
        """Canonical identifier, cached per shrinker type."""
        return _short_name_for(cls)

    @classmethod
    def api_key_var(cls) -> str:
        return api_key_env_var(cls.short_name())

    @classmethod
    def supports_charts(cls) -> bool:
        return cls.generate_chart_url is not Shrinker.generate_chart_url

    def has_api_key(self) -> bool:
        return has_api_key(self.short_name(), self._env)

    def api_key(self) -> str | None:
        return resolve_api_key(self.short_name(), self._env)

    # ---------------- Request shape -----------------

    @property
    def url(self) -> str | None:
        """Sanitized long URL (never the raw input)."""
        return self._url

    @url.setter
    def url(self, candidate: str) -> None:
        self._url = sanitize_url(candidate)

    def sanitize_url(self, candidate: str) -> str:
        return sanitize_url(candidate)

    def api_url(self) -> str:
        """Full request URL.

        Without a configured API key the bare base URL is returned; deciding
        whether that is acceptable is up to the caller.

        Raises:
            ValueError: If a key is configured but no URL was set
        """
        base = self.base_url()
        if not self.has_api_key():
            return base
        if self._url is None:
            raise ValueError(f"No URL set on {self.short_name()} shrinker")
        return base + self.query_parameter(self._url)

    def body_parameters(self, params: Dict[str, Any] | None = None) -> Dict[str, Any] | None:
        """Request body for POST shrinkers; pass-through by default."""
        if not params:
            return None
        return params

    def http_method(self) -> HttpMethod:
        return HttpMethod.GET

    def content_type(self) -> str:
        return DEFAULT_CONTENT_TYPE

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.short_name()!r} url={self._url!r}>"


# ---------------- Shrinker registry -----------------

_shrinkers: dict[str, type[Shrinker]] = {}


def _key(name: str) -> str:
    return name.lower()


def register_shrinker(shrinker_cls: type[Shrinker] | None = None, *, replace: bool = False):
    """Register a shrinker class under its short name.

    Usable directly (``register_shrinker(Shorty)``) or as a class decorator,
    with or without arguments.

    Args:
        shrinker_cls: Shrinker subclass to register
        replace: Overwrite an existing registration with the same name

    Returns:
        The registered class (decorator friendly)

    Raises:
        TypeError: If the argument is not a Shrinker subclass
        DuplicateProviderError: If the name is taken and replace is False
    """
    def _register(cls: type[Shrinker]) -> type[Shrinker]:
        if not (isinstance(cls, type) and issubclass(cls, Shrinker)):
            raise TypeError(f"Expected a Shrinker subclass, got {cls!r}")
        key = _key(cls.short_name())
        existing = _shrinkers.get(key)
        if existing is not None and existing is not cls and not replace:
            raise DuplicateProviderError(
                f"Shrinker '{key}' already registered by {existing.__qualname__}"
            )
        _shrinkers[key] = cls
        logger.debug(f"Registered shrinker '{key}' ({cls.__qualname__})")
        return cls

    if shrinker_cls is None:
        return _register
    return _register(shrinker_cls)


def unregister_shrinker(name: str) -> None:
    """Remove a registration; unknown names are ignored."""
    _shrinkers.pop(_key(name), None)


def get_shrinker(name: str) -> type[Shrinker]:
    """Get registered shrinker class by name (case-insensitive).

    Raises:
        ProviderNotFoundError: If no shrinker is registered under that name
    """
    try:
        return _shrinkers[_key(name)]
    except KeyError:
        raise ProviderNotFoundError(name, available_shrinkers()) from None


def create_shrinker(name: str, url: str | None = None, env: Mapping[str, str] | None = None) -> Shrinker:
    """Instantiate a fresh single-use shrinker by name."""
    return get_shrinker(name)(url=url, env=env)


def available_shrinkers() -> list[str]:
    """Get sorted list of registered shrinker names."""
    return sorted(_shrinkers.keys())


__all__ = [
    "HttpMethod", "Shrinker", "sanitize_url", "DEFAULT_CONTENT_TYPE",
    "register_shrinker", "unregister_shrinker", "get_shrinker",
    "create_shrinker", "available_shrinkers",
]
