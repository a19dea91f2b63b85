"""Shrinker abstraction public API.

No concrete shrinkers ship with the package. Providers register themselves
with register_shrinker(), typically from a plugin module listed in the
``plugins`` configuration key.
"""

from .base import (
    HttpMethod,
    Shrinker,
    sanitize_url,
    register_shrinker,
    unregister_shrinker,
    get_shrinker,
    create_shrinker,
    available_shrinkers,
)
from .credentials import api_key_env_var, has_api_key, resolve_api_key
from .schema import ResponseSchema, SchemaBuilder, response_options
from .request import (
    ShrinkRequest,
    ShrinkResult,
    build_request,
    interpret_response,
    image_size_param,
)


__all__ = [
    "HttpMethod",
    "Shrinker",
    "sanitize_url",
    "register_shrinker",
    "unregister_shrinker",
    "get_shrinker",
    "create_shrinker",
    "available_shrinkers",
    "api_key_env_var",
    "has_api_key",
    "resolve_api_key",
    "ResponseSchema",
    "SchemaBuilder",
    "response_options",
    "ShrinkRequest",
    "ShrinkResult",
    "build_request",
    "interpret_response",
    "image_size_param",
]
