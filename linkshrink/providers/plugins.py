"""Plugin loading for third-party shrinkers.

A plugin is any importable module that calls register_shrinker() at import
time. Modules are listed in the ``plugins`` configuration key.
"""
from __future__ import annotations
import importlib
import logging
from typing import Iterable

from .base import available_shrinkers

logger = logging.getLogger(__name__)

_loaded: set[str] = set()


def load_plugins(modules: Iterable[str]) -> list[str]:
    """Import plugin modules so their shrinkers register.

    Args:
        modules: Dotted module paths

    Returns:
        Names of modules imported by this call (already-loaded ones skipped)

    Raises:
        ImportError: If a module cannot be imported
    """
    imported: list[str] = []
    for module in modules:
        if module in _loaded:
            continue
        before = set(available_shrinkers())
        importlib.import_module(module)
        _loaded.add(module)
        imported.append(module)
        added = sorted(set(available_shrinkers()) - before)
        logger.debug(f"Loaded plugin {module}: {', '.join(added) or 'no new shrinkers'}")
    return imported


__all__ = ["load_plugins"]
