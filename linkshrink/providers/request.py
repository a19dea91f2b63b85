"""Request assembly and response interpretation.

Nothing here performs network I/O. build_request() gathers what a transport
needs to call a shrinker's API; interpret_response() walks a decoded reply
using the shrinker's ResponseSchema.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping
from urllib.parse import quote, quote_plus

from ..errors import ProviderResponseError
from .base import HttpMethod, Shrinker
from .schema import ResponseSchema

logger = logging.getLogger(__name__)

REDACTED = "***"


@dataclass(frozen=True)
class ShrinkRequest:
    """Outbound request shape for a single shrink operation."""
    provider: str
    method: HttpMethod
    url: str
    content_type: str
    headers: Dict[str, str]
    body: str | None = None
    api_key: str | None = field(default=None, repr=False)

    def display_url(self) -> str:
        """Request URL with the API key masked, safe for logs and terminals."""
        url = self.url
        if self.api_key:
            # Raw, percent-encoded and form-encoded spellings of the key
            forms = {
                self.api_key,
                quote(self.api_key, safe="", errors="surrogatepass"),
                quote_plus(self.api_key, errors="surrogatepass"),
            }
            for form in sorted(forms, key=len, reverse=True):
                url = url.replace(form, REDACTED)
        return url

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "method": self.method.value,
            "url": self.display_url() if redact else self.url,
            "content_type": self.content_type,
            "headers": dict(self.headers),
            "body": self.body,
        }


@dataclass(frozen=True)
class ShrinkResult:
    """Outcome of interpreting a provider reply."""
    short_url: str | None = None
    error: str | None = None
    provider: str | None = None
    raw: Any = None

    @property
    def ok(self) -> bool:
        return self.short_url is not None

    def raise_for_error(self) -> str:
        """Return the short URL or raise the provider's error.

        Raises:
            ProviderResponseError: If the reply carried no short URL
        """
        if self.short_url is None:
            raise ProviderResponseError(self.provider, self.error or "no short URL in response")
        return self.short_url


def build_request(shrinker: Shrinker, params: Dict[str, Any] | None = None) -> ShrinkRequest:
    """Assemble the request a transport should send for ``shrinker``.

    Args:
        shrinker: Shrinker with its long URL already set
        params: Optional body parameters, passed through body_parameters()

    Returns:
        ShrinkRequest with a JSON-encoded body (or None)
    """
    body = shrinker.body_parameters(params or {})
    content_type = shrinker.content_type()
    request = ShrinkRequest(
        provider=shrinker.short_name(),
        method=HttpMethod(shrinker.http_method()),
        url=shrinker.api_url(),
        content_type=content_type,
        headers={"Content-Type": content_type},
        body=json.dumps(body) if body is not None else None,
        api_key=shrinker.api_key(),
    )
    logger.debug(f"Built {request.method.value} request for {request.provider}: {request.display_url()}")
    return request


def _message(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def interpret_response(
    schema: ResponseSchema,
    body: Mapping[str, Any] | str | bytes,
    provider: str | None = None,
) -> ShrinkResult:
    """Extract the short URL (or the error) from a provider reply.

    When the schema names a collection the lookup happens inside it; error
    messages are also looked up at the top level since some providers report
    failures outside the wrapper.

    Args:
        schema: Shrinker response schema
        body: Decoded JSON object or raw JSON text
        provider: Provider name used in results and errors

    Returns:
        ShrinkResult with either short_url or error set

    Raises:
        ResponseSchemaError: If the schema declares no short URL key
        ProviderResponseError: If a textual body is not valid JSON
    """
    url_key = schema.require_url_key()
    data: Any = body
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise ProviderResponseError(provider, "response body is not valid JSON") from exc

    if not isinstance(data, Mapping):
        return ShrinkResult(error=f"unexpected response type: {type(data).__name__}", provider=provider, raw=data)

    payload = schema.payload(data)
    if payload is not None:
        short = payload.get(url_key)
        if short:
            logger.debug(f"{provider or 'provider'} returned short URL {short}")
            return ShrinkResult(short_url=str(short), provider=provider, raw=data)
        err = payload.get(schema.error_key)
        if err is None:
            err = data.get(schema.error_key)
        if err is None:
            err = f"'{url_key}' missing from response"
    else:
        err = data.get(schema.error_key)
        if err is None:
            err = f"collection '{schema.collection_key}' missing from response"

    logger.debug(f"{provider or 'provider'} response carried no short URL: {_message(err)}")
    return ShrinkResult(error=_message(err), provider=provider, raw=data)


def image_size_param(image_size: Mapping[str, Any] | None = None, default: int = 150) -> str:
    """Format an image size mapping as ``WxH`` for chart/QR endpoints."""
    size = image_size or {}
    width = int(size.get("width", default))
    height = int(size.get("height", width))
    return f"{width}x{height}"


__all__ = [
    "ShrinkRequest", "ShrinkResult", "build_request",
    "interpret_response", "image_size_param",
]
