"""API key discovery.

Credentials are looked up by convention: a shrinker named ``shorty`` reads
``SHORTY_URL_KEY``. The environment mapping is injected so callers (and
tests) can supply their own source instead of the process environment.
"""
from __future__ import annotations
import os
import logging
from typing import Mapping

logger = logging.getLogger(__name__)

KEY_SUFFIX = "_URL_KEY"


def api_key_env_var(short_name: str) -> str:
    """Environment variable name holding the key for a shrinker."""
    return f"{short_name.upper()}{KEY_SUFFIX}"


def has_api_key(short_name: str, env: Mapping[str, str] | None = None) -> bool:
    """True when the key variable exists, whatever its value (even empty)."""
    source = os.environ if env is None else env
    return api_key_env_var(short_name) in source


def resolve_api_key(short_name: str, env: Mapping[str, str] | None = None) -> str | None:
    """Return the configured key, or None when the variable is absent.

    A missing key is a normal state for shrinkers that need no credentials.
    """
    source = os.environ if env is None else env
    var = api_key_env_var(short_name)
    if var not in source:
        logger.debug(f"No API key configured ({var} not set)")
        return None
    return source[var]


__all__ = ["api_key_env_var", "has_api_key", "resolve_api_key", "KEY_SUFFIX"]
