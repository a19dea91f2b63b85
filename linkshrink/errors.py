"""Exception types raised by the shrinker abstraction.

Missing required overrides raise the builtin ``NotImplementedError``, which is
not part of this hierarchy.
"""
from __future__ import annotations


class ShrinkerError(Exception):
    """Base class for all link-shrink errors."""


class ResponseSchemaError(ShrinkerError):
    """Response schema is incomplete (no short URL key declared)."""


class ProviderResponseError(ShrinkerError):
    """Provider reported a failure inside an otherwise successful response."""

    def __init__(self, provider: str | None, message: str):
        self.provider = provider
        self.message = message
        label = provider or "provider"
        super().__init__(f"{label} reported an error: {message}")


class ProviderNotFoundError(ShrinkerError, KeyError):
    """No shrinker registered under the requested name."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        choices = ", ".join(self.available) or "none registered"
        return f"Unknown shrinker '{self.name}'. Available: {choices}"


class DuplicateProviderError(ShrinkerError, ValueError):
    """A shrinker with the same name is already registered."""


__all__ = [
    "ShrinkerError",
    "ResponseSchemaError",
    "ProviderResponseError",
    "ProviderNotFoundError",
    "DuplicateProviderError",
]
