"""Extractor tests - pure decoding of path, query and body into RawParameters.

Tests cover:
    - Scalars coerced to their declared type, constraints left unchecked
    - Absent optional query keys omitted, undeclared keys ignored
    - Decode failures carry the decoder message with the offending key
    - JSON body decoding: valid, malformed, empty, non-UTF-8
"""

import pytest

from conduit.core.errors import ErrorContext, ExtractionError
from conduit.server.extractors import decode_json_body, extract
from conduit.server.routes import find_route


GET_ARTICLES = find_route("GET", "/api/articles")
DELETE_COMMENT = find_route("DELETE", "/api/articles/{slug}/comments/{id}")
CREATE_ARTICLE = find_route("POST", "/api/articles")
GET_TAGS = find_route("GET", "/api/tags")


# -- Path ----------------------------------------------------------------------

def test_path_int_is_coerced():
    raw = extract(DELETE_COMMENT, {"slug": "s", "id": "42"}, {}, b"")
    assert raw.path == {"slug": "s", "id": 42}
    assert raw.query == {}
    assert raw.body is None


def test_path_int_decode_failure_names_the_key():
    with pytest.raises(ExtractionError) as exc_info:
        extract(DELETE_COMMENT, {"slug": "s", "id": "forty-two"}, {}, b"")
    assert exc_info.value.message.startswith("Invalid URL: id: ")
    assert exc_info.value.http_status == 400


# -- Query ---------------------------------------------------------------------

def test_query_coerces_and_skips_absent_and_unknown():
    raw = extract(GET_ARTICLES, {}, {"limit": "5", "tag": "x", "page": "2"}, b"")
    assert raw.query == {"limit": 5, "tag": "x"}


def test_query_leaves_bounds_to_validation():
    raw = extract(GET_ARTICLES, {}, {"offset": "-1", "limit": "0"}, b"")
    assert raw.query == {"offset": -1, "limit": 0}


def test_query_decode_failure():
    with pytest.raises(ExtractionError) as exc_info:
        extract(GET_ARTICLES, {}, {"limit": "ten"}, b"")
    assert exc_info.value.message.startswith(
        "Failed to deserialize query string: limit: ",
    )


def test_route_without_parameters_ignores_everything():
    raw = extract(GET_TAGS, {"x": "1"}, {"y": "2"}, b"garbage")
    assert raw.path == {} and raw.query == {} and raw.body is None


# -- Body ----------------------------------------------------------------------

def test_body_decoded_as_plain_tree():
    raw = extract(CREATE_ARTICLE, {}, {}, b'{"article": {"title": "T"}}')
    assert raw.body == {"article": {"title": "T"}}


def test_malformed_body_carries_context():
    context = ErrorContext(operation="create_article", method="POST")
    with pytest.raises(ExtractionError) as exc_info:
        extract(CREATE_ARTICLE, {}, {}, b'{"article": ', context)
    assert exc_info.value.message.startswith(
        "Failed to parse the request body as JSON: ",
    )
    assert exc_info.value.context is context


@pytest.mark.parametrize("raw_body", [b"", b"\xff\xfe\x00garbage", b"[1, 2"])
def test_undecodable_bodies_are_rejected(raw_body):
    with pytest.raises(ExtractionError):
        decode_json_body(raw_body)


def test_empty_body_message():
    with pytest.raises(ExtractionError) as exc_info:
        decode_json_body(b"")
    assert "EOF while parsing a value" in exc_info.value.message


def test_any_json_value_is_accepted_by_the_decoder():
    assert decode_json_body(b"[1, 2, 3]") == [1, 2, 3]
    assert decode_json_body(b"null") is None


def test_too_deeply_nested_body_is_an_extraction_error():
    with pytest.raises(ExtractionError) as exc_info:
        decode_json_body(b"[" * 100000)
    assert exc_info.value.message.startswith(
        "Failed to parse the request body as JSON: ",
    )
    assert isinstance(exc_info.value.__cause__, RecursionError)
