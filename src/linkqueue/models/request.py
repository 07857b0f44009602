"""Request descriptor and queue outcome types."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Optional, Union

from ..urls import normalize_url

Payload = Union[str, bytes, None]

# Accepted value types per Request field
_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "url": (str,),
    "method": (str,),
    "unique_key": (str, type(None)),
    "user_data": (dict,),
    "headers": (dict,),
    "payload": (str, bytes, type(None)),
    "keep_url_fragment": (bool,),
    "use_extended_unique_key": (bool,),
}


def _hash_payload(payload: Payload) -> str:
    if payload is None:
        payload = b""
    elif isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hashlib.sha256(payload).hexdigest()[:8]


def compute_unique_key(
    url: str,
    method: str = "GET",
    payload: Payload = None,
    keep_url_fragment: bool = False,
    use_extended_unique_key: bool = False,
) -> str:
    """
    Derive the deduplication key for a request.

    The plain key is the normalized URL. The extended key also encodes the
    HTTP method and a short payload hash, so that POSTs with different
    bodies to the same URL are kept apart.

    Examples:
        >>> compute_unique_key("https://Example.com/a#top")
        'https://example.com/a'
        >>> compute_unique_key("https://example.com/a", "post", "x", use_extended_unique_key=True)
        'POST(2d711642):https://example.com/a'
    """
    normalized = normalize_url(url, keep_fragment=keep_url_fragment)
    if not use_extended_unique_key:
        return normalized
    return f"{method.upper()}({_hash_payload(payload)}):{normalized}"


@dataclass
class Request:
    """
    A request descriptor ready to be submitted to a request queue.

    Attributes:
        url: Absolute URL to fetch
        method: HTTP method
        unique_key: Deduplication key; derived from the URL when not given
        user_data: Arbitrary data carried along with the request
        headers: HTTP headers to send
        payload: Optional request body
        keep_url_fragment: Keep ``#fragment`` when deriving the unique key
        use_extended_unique_key: Include method and payload in the unique key
    """

    url: str
    method: str = "GET"
    unique_key: Optional[str] = None
    user_data: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    payload: Payload = None
    keep_url_fragment: bool = False
    use_extended_unique_key: bool = False

    # Last automatically derived key; lets refresh_unique_key() tell a
    # derived key apart from one set by the caller.
    _derived_key: Optional[str] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if self.unique_key is None:
            self.unique_key = self._derive_unique_key()
            self._derived_key = self.unique_key

    def _derive_unique_key(self) -> str:
        return compute_unique_key(
            self.url,
            method=self.method,
            payload=self.payload,
            keep_url_fragment=self.keep_url_fragment,
            use_extended_unique_key=self.use_extended_unique_key,
        )

    def refresh_unique_key(self) -> str:
        """
        Re-derive the unique key after the request was modified.

        Keys set explicitly by the caller are left untouched.

        Returns:
            The current unique key
        """
        self.method = self.method.upper()
        if self.unique_key is None or self.unique_key == self._derived_key:
            self.unique_key = self._derive_unique_key()
            self._derived_key = self.unique_key
        return self.unique_key

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of the public fields accepted by the constructor."""
        return frozenset(f.name for f in fields(cls) if f.init)

    @classmethod
    def check_fields(cls, data: Mapping[str, Any]) -> None:
        """
        Check field names and value types of request data.

        Raises:
            ValueError: If a key is not a Request field or a value has the wrong type
        """
        unknown = set(data) - cls.field_names()
        if unknown:
            raise ValueError(f"Unknown request fields: {', '.join(sorted(unknown))}")

        for name, value in data.items():
            expected = _FIELD_TYPES[name]
            if not isinstance(value, expected):
                names = " or ".join("None" if t is type(None) else t.__name__ for t in expected)
                raise ValueError(f"Request field {name!r} must be {names}, got {type(value).__name__}")

        headers = data.get("headers") or {}
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in headers.items()):
            raise ValueError("Request headers must map strings to strings")
        if "method" in data and not data["method"].strip():
            raise ValueError("Request method must not be empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Request:
        """
        Build a Request from a mapping of field values.

        Raises:
            ValueError: If the mapping has unknown keys, bad value types or lacks ``url``
        """
        cls.check_fields(data)
        if "url" not in data:
            raise ValueError("Request data must include 'url'")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        payload = self.payload
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        return {
            "url": self.url,
            "method": self.method,
            "unique_key": self.unique_key,
            "user_data": self.user_data,
            "headers": self.headers,
            "payload": payload,
        }


@dataclass(frozen=True)
class QueueOperationInfo:
    """
    Outcome of adding a single request to a request queue.

    Attributes:
        request_id: Identifier the queue assigned to the request
        was_already_present: The unique key was already in the queue
        was_already_handled: The request with that key was already processed
        unique_key: The deduplication key used
    """

    request_id: str
    was_already_present: bool
    was_already_handled: bool
    unique_key: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "request_id": self.request_id,
            "was_already_present": self.was_already_present,
            "was_already_handled": self.was_already_handled,
            "unique_key": self.unique_key,
        }
