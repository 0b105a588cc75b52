# pyright: reportMissingParameterType=false
import pytest

from courier.networking.urls import build_url, encode_query, join_url


@pytest.mark.parametrize(
    ("base_url", "path"),
    [
        ("https://api.example.com/", "/todos"),
        ("https://api.example.com/", "todos"),
        ("https://api.example.com", "/todos"),
        ("https://api.example.com", "todos"),
    ],
)
def test_join_url_uses_exactly_one_slash(base_url, path):
    assert join_url(base_url, path) == "https://api.example.com/todos"


def test_join_url_without_base_uses_path_verbatim():
    assert join_url(None, "/todos/1") == "/todos/1"
    assert join_url("", "https://other.example/x") == "https://other.example/x"


def test_encode_query_repeats_keys_for_lists():
    assert encode_query({"a": 1, "b": [2, 3]}) == "a=1&b=2&b=3"


def test_encode_query_preserves_key_order():
    assert encode_query({"z": "1", "a": "2", "m": "3"}) == "z=1&a=2&m=3"


def test_encode_query_formats_scalars():
    assert encode_query({"on": True, "off": False, "n": 1.5}) == (
        "on=true&off=false&n=1.5"
    )


def test_encode_query_skips_none_values():
    assert encode_query({"a": None, "b": [1, None, 2]}) == "b=1&b=2"


def test_encode_query_escapes_values():
    assert encode_query({"q": "a b&c"}) == "q=a+b%26c"


def test_build_url_without_params_has_no_question_mark():
    assert build_url("https://api.example.com", "todos", {}) == (
        "https://api.example.com/todos"
    )
    assert build_url("https://api.example.com", "todos", None) == (
        "https://api.example.com/todos"
    )


def test_build_url_appends_query():
    assert build_url(
        "https://api.example.com/", "/todos", {"a": 1, "b": [2, 3]}
    ) == "https://api.example.com/todos?a=1&b=2&b=3"


def test_build_url_extends_existing_query():
    assert build_url(None, "/search?x=1", {"y": 2}) == "/search?x=1&y=2"
