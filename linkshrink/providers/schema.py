"""Declarative description of a shrinker's JSON reply.

Each shrinker carries one immutable ResponseSchema telling callers where the
shortened URL, an optional wrapping collection, and an error message live in
the decoded response body.

Example:
    class Shorty(Shrinker):
        name = "shorty"
        schema = response_options(lambda r: r.collection("data").short_url("url"))
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ..errors import ResponseSchemaError

DEFAULT_ERROR_KEY = "error"


@dataclass(frozen=True)
class ResponseSchema:
    """Where to find the interesting fields of a decoded response."""
    collection_key: str | None = None
    url_key: str | None = None
    error_key: str = DEFAULT_ERROR_KEY

    @classmethod
    def declare(
        cls,
        collection: str | None = None,
        short_url: str | None = None,
        error: str = DEFAULT_ERROR_KEY,
    ) -> "ResponseSchema":
        """Keyword form of the schema declaration."""
        return cls(collection_key=collection, url_key=short_url, error_key=error)

    def require_url_key(self) -> str:
        """Return url_key or raise when the schema was never completed.

        Raises:
            ResponseSchemaError: If no short URL key was declared
        """
        if not self.url_key:
            raise ResponseSchemaError(
                "Response schema has no short URL key; declare one with short_url()"
            )
        return self.url_key

    def payload(self, body: Mapping[str, Any]) -> Mapping[str, Any] | None:
        """Descend into the collection key, if any.

        Returns:
            The mapping holding the URL/error keys, or None when the declared
            collection is missing or not an object
        """
        if self.collection_key is None:
            return body
        inner = body.get(self.collection_key)
        if isinstance(inner, Mapping):
            return inner
        return None


class SchemaBuilder:
    """Mutable collector used only while a schema is being declared."""

    def __init__(self) -> None:
        self._collection_key: str | None = None
        self._url_key: str | None = None
        self._error_key: str = DEFAULT_ERROR_KEY

    def collection(self, key: str) -> "SchemaBuilder":
        """Payload is nested under this top-level key."""
        self._collection_key = key
        return self

    def short_url(self, key: str) -> "SchemaBuilder":
        """Key holding the shortened URL."""
        self._url_key = key
        return self

    def error(self, key: str = DEFAULT_ERROR_KEY) -> "SchemaBuilder":
        """Key holding a provider error message."""
        self._error_key = key
        return self

    def build(self) -> ResponseSchema:
        return ResponseSchema(
            collection_key=self._collection_key,
            url_key=self._url_key,
            error_key=self._error_key,
        )


def response_options(block: Callable[[SchemaBuilder], Any]) -> ResponseSchema:
    """Run a declaration block once and freeze the result.

    Args:
        block: Callable receiving a SchemaBuilder; its return value is ignored

    Returns:
        Immutable ResponseSchema
    """
    builder = SchemaBuilder()
    block(builder)
    return builder.build()


__all__ = ["ResponseSchema", "SchemaBuilder", "response_options", "DEFAULT_ERROR_KEY"]
