"""Tests for long URL sanitization."""

import pytest
from urllib.parse import unquote

from linkshrink.providers import sanitize_url


@pytest.mark.parametrize("raw", [
    "example.com",
    "www.example.com/path?q=1&r=2",
    "localhost:8080/a b",
    "ftp.example.org",
    "",
])
def test_missing_scheme_gets_http_prefix(raw):
    result = sanitize_url(raw)
    assert result.startswith("http%3A%2F%2F")
    assert unquote(result) == f"http://{raw}"


@pytest.mark.parametrize("raw", [
    "http://example.com",
    "https://example.com/path?q=1",
    "HTTPS://Example.com",
])
def test_existing_scheme_is_not_duplicated(raw):
    result = sanitize_url(raw)
    assert unquote(result) == raw
    assert unquote(result).lower().count("http") == 1


def test_exact_encoding():
    assert sanitize_url("example.com") == "http%3A%2F%2Fexample.com"
    assert sanitize_url("https://a.io/x?y=1&z=2") == "https%3A%2F%2Fa.io%2Fx%3Fy%3D1%26z%3D2"


def test_result_is_query_safe():
    result = sanitize_url("example.com/a b?c=d&e=f#frag")
    for ch in " ?&=#/:":
        assert ch not in result


@pytest.mark.parametrize("raw", [
    "example.com",
    "https://example.com/a b",
    "example.com/100%",
    "example.com/%zz",
    "http%3A%2F%2Falready.encoded",
    "bücher.de/straße",
])
def test_idempotent(raw):
    once = sanitize_url(raw)
    assert sanitize_url(once) == once


@pytest.mark.parametrize("encoded", [
    "http%3A%2F%2Fexample.com",
    "https%3a%2f%2fexample.com%2fa%20b",
    "http%3A%2F%2Fa.com%2F%3Fnext%3D%252Fhome",
])
def test_already_sanitized_input_is_left_alone(encoded):
    assert sanitize_url(encoded) == encoded


def test_partially_encoded_input_is_encoded_as_is():
    raw = "http%3A%2F%2Fa.com/x y"
    result = sanitize_url(raw)
    assert unquote(result) == f"http://{raw}"
    assert sanitize_url(result) == result


@pytest.mark.parametrize("raw", [
    "http://a.com/?next=%2Fhome%3Fx%3D1%26y%3D2&q=c%2B%2B",
    "https://a.com/search?q=a%26b%3Dc",
    "example.com/path%20with%20spaces",
])
def test_existing_escapes_survive_one_decode(raw):
    expected = raw if raw.startswith("http") else f"http://{raw}"
    assert unquote(sanitize_url(raw)) == expected


def test_escaped_query_values_stay_nested():
    result = sanitize_url("http://a.com/?next=%2Fhome%3Fx%3D1%26y%3D2&q=c%2B%2B")
    assert result == "http%3A%2F%2Fa.com%2F%3Fnext%3D%252Fhome%253Fx%253D1%2526y%253D2%26q%3Dc%252B%252B"


@pytest.mark.parametrize("raw,expected", [
    ("example.com/\udcff", "http%3A%2F%2Fexample.com%2F%FF"),
    ("example.com/\ud800", "http%3A%2F%2Fexample.com%2F%ED%A0%80"),
])
def test_unencodable_characters_never_raise(raw, expected):
    result = sanitize_url(raw)
    assert result == expected
    assert sanitize_url(result) == result


def test_non_ascii_is_utf8_encoded():
    assert sanitize_url("bücher.de") == "http%3A%2F%2Fb%C3%BCcher.de"
