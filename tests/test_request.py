"""Tests for request descriptors."""

import hashlib

import pytest

from linkqueue.models.request import QueueOperationInfo, Request, compute_unique_key


class TestRequest:
    """Tests for the Request dataclass."""

    def test_defaults(self):
        request = Request(url="https://example.com/page")
        assert request.method == "GET"
        assert request.user_data == {}
        assert request.headers == {}
        assert request.payload is None
        assert request.unique_key == "https://example.com/page"

    def test_unique_key_strips_fragment(self):
        request = Request(url="https://example.com/page#top")
        assert request.unique_key == "https://example.com/page"

    def test_keep_url_fragment(self):
        request = Request(url="https://example.com/page#top", keep_url_fragment=True)
        assert request.unique_key == "https://example.com/page#top"

    def test_method_uppercased(self):
        assert Request(url="https://example.com", method="post").method == "POST"

    def test_explicit_unique_key(self):
        request = Request(url="https://example.com/page", unique_key="custom")
        assert request.unique_key == "custom"

    def test_user_data_not_shared(self):
        first = Request(url="https://example.com/1")
        second = Request(url="https://example.com/2")
        first.user_data["label"] = "x"
        assert second.user_data == {}

    def test_extended_unique_key(self):
        request = Request(
            url="https://example.com/api",
            method="POST",
            payload="x",
            use_extended_unique_key=True,
        )
        payload_hash = hashlib.sha256(b"x").hexdigest()[:8]
        assert request.unique_key == f"POST({payload_hash}):https://example.com/api"

    def test_extended_keys_differ_by_payload(self):
        first = compute_unique_key("https://example.com/api", "POST", "a", use_extended_unique_key=True)
        second = compute_unique_key("https://example.com/api", "POST", "b", use_extended_unique_key=True)
        assert first != second


class TestRefreshUniqueKey:
    """Tests for re-deriving keys after modification."""

    def test_refresh_after_keep_fragment_change(self):
        request = Request(url="https://example.com/page#top")
        request.keep_url_fragment = True
        assert request.refresh_unique_key() == "https://example.com/page#top"

    def test_refresh_after_url_change(self):
        request = Request(url="https://example.com/old")
        request.url = "https://example.com/new"
        assert request.refresh_unique_key() == "https://example.com/new"

    def test_refresh_keeps_explicit_key(self):
        request = Request(url="https://example.com/old")
        request.unique_key = "mine"
        request.url = "https://example.com/new"
        assert request.refresh_unique_key() == "mine"

    def test_refresh_uppercases_method(self):
        request = Request(url="https://example.com/api", payload="x", use_extended_unique_key=True)
        request.method = "post"
        assert request.refresh_unique_key() == compute_unique_key(
            "https://example.com/api", "POST", "x", use_extended_unique_key=True
        )
        assert request.method == "POST"
        assert request.unique_key.startswith("POST(")


class TestRequestSerialization:
    """Tests for from_dict/to_dict."""

    def test_from_dict(self):
        request = Request.from_dict({"url": "https://example.com", "method": "PUT"})
        assert request.url == "https://example.com"
        assert request.method == "PUT"

    def test_from_dict_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown request fields: bogus"):
            Request.from_dict({"url": "https://example.com", "bogus": 1})

    def test_from_dict_requires_url(self):
        with pytest.raises(ValueError, match="url"):
            Request.from_dict({"method": "GET"})

    def test_from_dict_checks_types(self):
        with pytest.raises(ValueError, match="'method' must be str"):
            Request.from_dict({"url": "https://example.com", "method": None})
        with pytest.raises(ValueError, match="'user_data' must be dict"):
            Request.from_dict({"url": "https://example.com", "user_data": "label"})

    def test_to_dict_decodes_bytes_payload(self):
        data = Request(url="https://example.com", payload=b"body").to_dict()
        assert data["payload"] == "body"
        assert data["unique_key"] == "https://example.com"


class TestQueueOperationInfo:
    """Tests for QueueOperationInfo."""

    def test_to_dict(self):
        info = QueueOperationInfo(
            request_id="abc",
            was_already_present=False,
            was_already_handled=False,
            unique_key="https://example.com",
        )
        assert info.to_dict() == {
            "request_id": "abc",
            "was_already_present": False,
            "was_already_handled": False,
            "unique_key": "https://example.com",
        }
