"""Tests for the shrinker registry."""

import pytest

from linkshrink.errors import DuplicateProviderError, ProviderNotFoundError
from linkshrink.providers import (
    Shrinker,
    available_shrinkers,
    create_shrinker,
    get_shrinker,
    register_shrinker,
    unregister_shrinker,
)


def test_register_and_lookup(shorty_cls):
    register_shrinker(shorty_cls)
    assert get_shrinker("shorty") is shorty_cls
    assert get_shrinker("SHORTY") is shorty_cls
    assert available_shrinkers() == ["shorty"]


def test_decorator_forms():
    @register_shrinker
    class Tiny(Shrinker):
        pass

    @register_shrinker(replace=True)
    class Bitly(Shrinker):
        name = "bitly"

    assert available_shrinkers() == ["bitly", "tiny"]
    assert get_shrinker("Tiny") is Tiny
    assert get_shrinker("bitly") is Bitly


def test_duplicate_name_rejected(shorty_cls):
    register_shrinker(shorty_cls)

    class Impostor(Shrinker):
        name = "shorty"

    with pytest.raises(DuplicateProviderError):
        register_shrinker(Impostor)
    register_shrinker(Impostor, replace=True)
    assert get_shrinker("shorty") is Impostor


def test_reregistering_same_class_is_noop(shorty_cls):
    register_shrinker(shorty_cls)
    register_shrinker(shorty_cls)
    assert available_shrinkers() == ["shorty"]


def test_non_shrinker_rejected():
    with pytest.raises(TypeError):
        register_shrinker(object)  # type: ignore[arg-type]


def test_unknown_name(shorty_cls):
    register_shrinker(shorty_cls)
    with pytest.raises(ProviderNotFoundError) as exc_info:
        get_shrinker("nope")
    assert isinstance(exc_info.value, KeyError)
    assert "Available: shorty" in str(exc_info.value)


def test_create_returns_fresh_instances(shorty_cls):
    register_shrinker(shorty_cls)
    first = create_shrinker("shorty", "a.com", env={})
    second = create_shrinker("shorty", "b.com", env={})
    assert isinstance(first, shorty_cls)
    assert first is not second
    assert first.url == "http%3A%2F%2Fa.com"
    assert second.url == "http%3A%2F%2Fb.com"


def test_unregister(shorty_cls):
    register_shrinker(shorty_cls)
    unregister_shrinker("Shorty")
    unregister_shrinker("never-registered")
    assert available_shrinkers() == []
