"""Tests for request key construction."""

from __future__ import annotations

import pytest

from nominatim_client.query import build_request_key


BASE = "https://example.org/search"


class TestPassThrough:
    def test_none_params_returns_url(self) -> None:
        assert build_request_key(BASE, None) == BASE

    def test_empty_params_returns_url(self) -> None:
        assert build_request_key(BASE, {}) == BASE

    def test_malformed_url_is_not_validated(self) -> None:
        assert build_request_key("not a url", {"a": "b"}) == "not a url?a=b"


class TestSeparators:
    def test_question_mark_when_url_has_no_query(self) -> None:
        assert build_request_key(BASE, {"q": "x", "format": "json"}) == f"{BASE}?q=x&format=json"

    def test_ampersand_when_url_already_has_query(self) -> None:
        url = f"{BASE}?format=json"
        assert build_request_key(url, {"q": "x"}) == f"{BASE}?format=json&q=x"


class TestEncoding:
    def test_unicode_and_space(self) -> None:
        key = build_request_key(BASE, {"q": "Berlin Straße"})
        assert key == "https://example.org/search?q=Berlin%20Stra%C3%9Fe"

    def test_unreserved_characters_untouched(self) -> None:
        key = build_request_key(BASE, {"a-b_c.d~e": "AZaz09-_.~"})
        assert key == f"{BASE}?a-b_c.d~e=AZaz09-_.~"

    @pytest.mark.parametrize(
        ("raw", "encoded"),
        [
            ("a&b", "a%26b"),
            ("a=b", "a%3Db"),
            ("a/b", "a%2Fb"),
            ("a+b", "a%2Bb"),
            ("50,10", "50%2C10"),
            ("a?b", "a%3Fb"),
        ],
    )
    def test_reserved_characters_escaped(self, raw: str, encoded: str) -> None:
        assert build_request_key(BASE, {"q": raw}) == f"{BASE}?q={encoded}"

    def test_keys_are_encoded(self) -> None:
        assert build_request_key(BASE, {"street name": "x"}) == f"{BASE}?street%20name=x"

    def test_non_string_values_stringified(self) -> None:
        assert build_request_key(BASE, {"limit": 5, "addressdetails": True}) == (
            f"{BASE}?limit=5&addressdetails=True"
        )


class TestOrdering:
    def test_deterministic(self) -> None:
        params = {"q": "Berlin", "format": "jsonv2", "limit": "1"}
        assert build_request_key(BASE, params) == build_request_key(BASE, params)

    def test_iteration_order_preserved_by_default(self) -> None:
        first = build_request_key(BASE, {"a": "1", "b": "2"})
        second = build_request_key(BASE, {"b": "2", "a": "1"})
        assert first == f"{BASE}?a=1&b=2"
        assert second == f"{BASE}?b=2&a=1"

    def test_sort_makes_key_order_independent(self) -> None:
        first = build_request_key(BASE, {"a": "1", "b": "2"}, sort=True)
        second = build_request_key(BASE, {"b": "2", "a": "1"}, sort=True)
        assert first == second == f"{BASE}?a=1&b=2"
