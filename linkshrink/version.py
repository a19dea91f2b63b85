"""Central version declaration for link-shrink.

Update this file when cutting a new release tag. Keep semantic versioning.
The CLI --version option and pyproject metadata import from here.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
