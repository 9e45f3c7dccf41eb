"""Tests for request profiles, override merging and body encoding."""

import json

import httpx
import pytest

from xdiff.errors import ConfigParseError, InvalidShape, UnsupportedContentType
from xdiff.modules.request import (
    ExtraArgs,
    RequestProfile,
    encode_body,
    encode_query,
    media_type,
)


def _profile(**kwargs) -> RequestProfile:
    kwargs.setdefault("url", "https://example.com/todos")
    return RequestProfile(**kwargs)


class TestCodec:
    """Test content-type driven encoding."""

    def test_media_type_strips_parameters(self):
        assert media_type("Application/JSON; charset=utf-8") == "application/json"
        assert media_type(None) is None
        assert media_type("") is None

    def test_json_is_compact(self):
        assert encode_body({"a": 1, "b": "x"}, "application/json") == b'{"a":1,"b":"x"}'

    def test_empty_json_object(self):
        assert encode_body({}, "application/json") == b"{}"

    def test_form_encoding(self):
        body = {"a": 1, "flag": True, "none": None, "tags": ["x", "y"]}
        encoded = encode_body(body, "application/x-www-form-urlencoded")
        assert encoded == b"a=1&flag=true&none=&tags=x&tags=y"

    def test_multipart_uses_form_encoding(self):
        assert encode_body({"a": "b c"}, "multipart/form-data") == b"a=b+c"

    def test_empty_form_body(self):
        assert encode_body({}, "application/x-www-form-urlencoded") == b""

    def test_nested_mapping_uses_brackets(self):
        assert encode_query({"a": {"b": 1}}) == "a%5Bb%5D=1"

    @pytest.mark.parametrize("content_type", ["text/plain", "application/xml", None])
    def test_unsupported_content_type(self, content_type):
        with pytest.raises(UnsupportedContentType):
            encode_body({"a": 1}, content_type)


class TestRequestProfileFromDict:
    """Test building profiles from config mappings."""

    def test_minimal(self):
        profile = RequestProfile.from_dict({"url": "https://example.com"})
        assert profile.method == "GET"
        assert profile.params is None
        assert profile.body is None
        assert len(profile.headers) == 0

    def test_full(self):
        profile = RequestProfile.from_dict(
            {
                "method": "post",
                "url": "https://example.com",
                "params": {"a": 1},
                "headers": {"X-Num": 5, "Accept": "text/plain"},
                "body": {"k": "v"},
            }
        )
        assert profile.method == "POST"
        assert profile.params == {"a": 1}
        assert profile.headers["x-num"] == "5"
        assert profile.headers["accept"] == "text/plain"
        assert profile.body == {"k": "v"}

    def test_missing_url(self):
        with pytest.raises(ConfigParseError):
            RequestProfile.from_dict({"method": "GET"})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigParseError):
            RequestProfile.from_dict(["https://example.com"])

    def test_non_ascii_header_value(self):
        profile = RequestProfile.from_dict(
            {"url": "https://example.com", "headers": {"x-name": "café"}}
        )
        assert profile.headers["x-name"] == "café"
        assert profile.to_dict()["headers"] == {"x-name": "café"}

    def test_headers_must_be_mapping(self):
        with pytest.raises(ConfigParseError):
            RequestProfile.from_dict({"url": "https://example.com", "headers": ["a"]})

    def test_to_dict_omits_defaults(self):
        profile = RequestProfile.from_dict({"url": "https://example.com"})
        assert profile.to_dict() == {"url": "https://example.com"}

    def test_to_dict_keeps_fields(self):
        data = {
            "method": "PUT",
            "url": "https://example.com",
            "params": {"a": 1},
            "headers": {"accept": "text/plain"},
            "body": {"k": "v"},
        }
        assert RequestProfile.from_dict(data).to_dict() == data


class TestRequestProfileFromUrl:
    """Test building a GET profile from a bare URL."""

    def test_query_moves_into_params(self):
        profile = RequestProfile.from_url("https://example.com/todos?a=1&b=2&c=abc")
        assert profile.url == "https://example.com/todos"
        assert profile.params == {"a": 1, "b": 2, "c": "abc"}
        assert profile.method == "GET"
        assert profile.body is None

    def test_typed_query_values(self):
        profile = RequestProfile.from_url("https://api.example.com/users?active=true&page=2")
        assert profile.method == "GET"
        assert profile.url == "https://api.example.com/users"
        assert profile.params == {"active": True, "page": 2}

    def test_no_query(self):
        profile = RequestProfile.from_url("https://example.com/todos")
        assert profile.params is None
        assert profile.to_dict() == {"url": "https://example.com/todos"}

    @pytest.mark.parametrize("url", ["example.com/todos", "/todos", "ftp://example.com/x"])
    def test_relative_url_rejected(self, url):
        with pytest.raises(InvalidShape):
            RequestProfile.from_url(url)


class TestValidate:
    """Test shape validation."""

    def test_valid(self):
        _profile(params={"a": 1}, body={"b": 2}).validate()

    def test_params_must_be_mapping(self):
        with pytest.raises(InvalidShape, match="Params"):
            _profile(params=[1, 2]).validate()

    def test_body_must_be_mapping(self):
        with pytest.raises(InvalidShape, match="Body"):
            _profile(body="text").validate()

    def test_unknown_method(self):
        with pytest.raises(InvalidShape):
            _profile(method="FETCH").validate()

    def test_relative_url(self):
        with pytest.raises(InvalidShape):
            _profile(url="/todos").validate()

    def test_invalid_profile_cannot_be_resolved(self):
        with pytest.raises(InvalidShape):
            _profile(params="a=1").with_overrides()


class TestWithOverrides:
    """Test merging override sets into a profile."""

    def test_no_overrides_defaults_to_json(self):
        resolved = _profile(params={"a": 1}).with_overrides()
        assert resolved.method == "GET"
        assert resolved.params == {"a": 1}
        assert resolved.headers["content-type"] == "application/json"
        assert resolved.content == b""

    def test_empty_overrides_match_no_overrides(self):
        profile = _profile(params={"a": 1}, body={"x": 1})
        assert profile.with_overrides(ExtraArgs()) == profile.with_overrides(None)

    def test_query_override_is_typed(self):
        resolved = _profile(params={"a": 1}).with_overrides(ExtraArgs.parse(["a=2", "b=yes"]))
        assert resolved.params == {"a": 2, "b": "yes"}

    def test_header_override_replaces_all_values(self):
        headers = httpx.Headers([("x-tag", "one"), ("x-tag", "two")])
        resolved = _profile(headers=headers).with_overrides(ExtraArgs.parse(["%X-Tag=three"]))
        assert resolved.headers.get_list("x-tag") == ["three"]

    def test_last_header_override_wins(self):
        resolved = _profile().with_overrides(ExtraArgs.parse(["%a=1", "%a=2"]))
        assert resolved.headers["a"] == "2"

    def test_non_ascii_header_override(self):
        resolved = _profile().with_overrides(ExtraArgs.parse(["%x-name=café"]))
        assert resolved.headers["x-name"] == "café"

    def test_template_headers_kept(self):
        headers = httpx.Headers({"user-agent": "Aloha"})
        resolved = _profile(headers=headers).with_overrides(ExtraArgs.parse(["%x=1"]))
        assert resolved.headers["user-agent"] == "Aloha"
        assert resolved.headers["x"] == "1"

    def test_body_override_serialized_as_json(self):
        resolved = _profile(method="POST", body={"name": "bob"}).with_overrides(
            ExtraArgs.parse(["@age=30", "@name=alice"])
        )
        assert json.loads(resolved.content) == {"name": "alice", "age": 30}

    def test_body_override_without_template_body(self):
        resolved = _profile(method="POST").with_overrides(ExtraArgs.parse(["@a=1"]))
        assert resolved.content == b'{"a":1}'

    def test_empty_template_body_serializes(self):
        assert _profile(method="POST", body={}).with_overrides().content == b"{}"

    def test_form_content_type(self):
        headers = httpx.Headers({"Content-Type": "application/x-www-form-urlencoded"})
        resolved = _profile(method="POST", headers=headers, body={"a": 1}).with_overrides(
            ExtraArgs.parse(["@b=x y"])
        )
        assert resolved.content == b"a=1&b=x+y"

    def test_content_type_parameters_ignored(self):
        headers = httpx.Headers({"Content-Type": "application/json; charset=utf-8"})
        resolved = _profile(headers=headers, body={"a": 1}).with_overrides()
        assert resolved.content == b'{"a":1}'

    def test_unsupported_content_type(self):
        headers = httpx.Headers({"Content-Type": "text/plain"})
        with pytest.raises(UnsupportedContentType):
            _profile(headers=headers, body={"a": 1}).with_overrides()

    def test_template_is_not_mutated(self):
        profile = _profile(params={"a": 1}, body={"b": 2})
        profile.with_overrides(ExtraArgs.parse(["a=9", "@b=9", "%h=9"]))
        assert profile.params == {"a": 1}
        assert profile.body == {"b": 2}
        assert "h" not in profile.headers


class TestGetUrl:
    """Test final URL construction."""

    def test_merged_params_in_query(self):
        profile = _profile(params={"a": 1})
        assert profile.get_url(ExtraArgs.parse(["b=2"])) == "https://example.com/todos?a=1&b=2"

    def test_no_params_leaves_url_alone(self):
        assert _profile().get_url() == "https://example.com/todos"

    def test_existing_query_is_kept(self):
        profile = _profile(url="https://example.com/todos?x=1", params={"a": True})
        assert profile.get_url() == "https://example.com/todos?x=1&a=true"

    def test_from_url_round_trip(self):
        profile = RequestProfile.from_url("https://example.com/todos?a=1&b=2")
        assert profile.get_url() == "https://example.com/todos?a=1&b=2"
