from __future__ import annotations
import os
import json
import logging
from typing import Any, Dict, Mapping
from pathlib import Path
import copy

from .providers.credentials import KEY_SUFFIX

logger = logging.getLogger(__name__)

ENV_PREFIX = "LSK__"

_DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "provider": None,
    "plugins": [],
    "chart": {
        "image_size": {"width": 150, "height": 150},
    },
    "output": {"json": False},
}


def resolve_provider_name(cfg: Dict[str, Any], explicit: str | None, available: list[str]) -> str:
    """Pick the shrinker to use for a command.

    Precedence: explicit name, then the configured default provider, then the
    only registered shrinker when exactly one exists.

    Args:
        cfg: Configuration dictionary
        explicit: Name passed on the command line (may be None)
        available: Registered shrinker names

    Returns:
        str: Shrinker name

    Raises:
        ValueError: If no provider can be determined
    """
    if explicit:
        return explicit
    configured = cfg.get('provider')
    if configured:
        logger.debug(f"Using configured provider: {configured}")
        return configured
    if len(available) == 1:
        return available[0]
    if not available:
        raise ValueError(
            "No shrinkers registered. "
            "List plugin modules in LSK__PLUGINS (e.g. LSK__PLUGINS='[\"my_pkg.shrinkers\"]')"
        )
    raise ValueError(
        f"Multiple shrinkers registered: {', '.join(available)}. "
        "Choose one with --provider or set LSK__PROVIDER."
    )


def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Merge dict b into a (shallow copies) returning new dict.
    Nested dicts are merged recursively; other values override.
    """
    result = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)  # type: ignore[arg-type]
        else:
            result[k] = v
    return result


def _load_dotenv(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, val = line.split('=', 1)
        key = key.strip()
        if key.startswith('export '):
            key = key[len('export '):].strip()
        val = val.strip()
        # Strip inline comments starting with # unless inside quotes
        if '#' in val:
            in_single = False
            in_double = False
            result_chars = []
            for ch in val:
                if ch == "'" and not in_double:
                    in_single = not in_single
                elif ch == '"' and not in_single:
                    in_double = not in_double
                if ch == '#' and not in_single and not in_double:
                    break
                result_chars.append(ch)
            val = ''.join(result_chars).rstrip()
        if len(val) >= 2 and val[0] == val[-1] and val[0] in ('"', "'"):
            val = val[1:-1]
        if key:
            values[key] = val
    return values


def _dotenv_enabled(env: Mapping[str, str]) -> bool:
    # Skipped under pytest unless explicitly enabled, for deterministic defaults
    return bool(env.get('LSK_ENABLE_DOTENV')) or not env.get('PYTEST_CURRENT_TEST')


def load_env_source(env: Mapping[str, str] | None = None, dotenv_path: Path | None = None) -> Dict[str, str]:
    """Build the mapping shrinkers read API keys from.

    ``*_URL_KEY`` entries of a .env file are included, with the real
    environment taking precedence.
    """
    env = os.environ if env is None else env
    source: Dict[str, str] = {}
    if _dotenv_enabled(env):
        dotenv_values = _load_dotenv(dotenv_path or Path('.env'))
        source.update({k: v for k, v in dotenv_values.items() if k.endswith(KEY_SUFFIX)})
    source.update(env)
    return source


def load_config(overrides: Dict[str, Any] | None = None, env: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Load configuration merging defaults <- .env <- environment <- overrides.

    During test runs (detected via PYTEST_CURRENT_TEST) .env loading is skipped
    unless LSK_ENABLE_DOTENV=1 is set.

    Args:
        overrides: Dict of values to deep-merge last (primarily for tests).
        env: Environment mapping; defaults to os.environ.

    Returns:
        dict: Configuration dictionary (for typed access use load_typed_config()).
    """
    env = os.environ if env is None else env
    dotenv_values: Dict[str, str] = {}
    if _dotenv_enabled(env):
        dotenv_values = _load_dotenv(Path('.env'))
    # Deep copy defaults to avoid cross-call mutation of nested dicts
    cfg: Dict[str, Any] = copy.deepcopy(_DEFAULTS)

    # Merge .env and real environment (real env wins)
    combined = {**{k: v for k, v in dotenv_values.items() if k.startswith(ENV_PREFIX)},
                **{k: v for k, v in env.items() if k.startswith(ENV_PREFIX)}}
    for raw_key, value in combined.items():
        path_parts = raw_key[len(ENV_PREFIX):].split("__")
        cursor: Dict[str, Any] = cfg
        for part in path_parts[:-1]:
            cursor = cursor.setdefault(part.lower(), {})  # type: ignore[assignment]
        cursor[path_parts[-1].lower()] = coerce_scalar(value)
    if overrides:
        cfg = deep_merge(cfg, overrides)

    plugins = cfg.get('plugins')
    if isinstance(plugins, str):
        cfg['plugins'] = [p.strip() for p in plugins.split(',') if p.strip()]

    _configure_logging(cfg.get('log_level', 'INFO'))

    return cfg


def load_typed_config(overrides: Dict[str, Any] | None = None, env: Mapping[str, str] | None = None):
    """Load configuration as typed AppConfig object.

    Args:
        overrides: Dictionary of override values
        env: Environment mapping; defaults to os.environ.

    Returns:
        AppConfig: Typed configuration object with .to_dict() for dict conversion
    """
    from .config_types import AppConfig
    dict_config = load_config(overrides, env)
    return AppConfig.from_dict(dict_config)


def _configure_logging(level_str: str) -> None:
    """Configure Python logging based on configured level."""
    level_str = str(level_str).upper()
    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }
    level = level_map.get(level_str, logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(message)s',
        force=True  # Reconfigure even if already configured
    )


def coerce_scalar(value: str) -> Any:
    txt = value.strip()
    # JSON object or array
    if (txt.startswith('[') and txt.endswith(']')) or (txt.startswith('{') and txt.endswith('}')):
        try:
            return json.loads(txt)
        except ValueError:
            pass  # fall through to scalar heuristics
    lower = txt.lower()
    if lower in {"true", "yes", "1"}:
        return True
    if lower in {"false", "no", "0"}:
        return False
    if txt.isdigit() or (txt.startswith("-") and txt[1:].isdigit()):
        return int(txt)
    try:
        return float(txt)
    except ValueError:
        return txt

__all__ = [
    "load_config", "load_typed_config", "load_env_source", "deep_merge",
    "coerce_scalar", "resolve_provider_name",
]
