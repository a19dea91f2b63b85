"""Top-level package for link-shrink (linkshrink).

Version identifier is defined in :mod:`linkshrink.version` to keep a single
source of truth that can be imported without pulling heavier submodules.
"""

from .version import __version__  # re-export

__all__ = ["__version__"]
