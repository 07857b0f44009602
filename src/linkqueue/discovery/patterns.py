"""Pseudo-URL patterns for matching and templating discovered links."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Union

from ..exceptions import ConfigurationError
from ..models.request import Request

logger = logging.getLogger(__name__)

PURL_KEY = "purl"

# Request fields a template may set; the URL always comes from the link.
TEMPLATE_FIELDS = Request.field_names() - {"url"}

PatternInput = Union[str, "re.Pattern[str]", Mapping[str, Any], "UrlPattern"]


def parse_pseudo_url(purl: str) -> str:
    """
    Translate a pseudo-URL into a regular expression source.

    Text inside ``[...]`` is copied verbatim as a regex group, everything
    else is matched literally. Brackets may nest inside a section.

    Examples:
        >>> parse_pseudo_url("https://example.com/docs/[.*]")
        '^https://example\\\\.com/docs/(.*)$'

    Raises:
        ConfigurationError: If the pseudo-URL is empty or has an unclosed section
    """
    trimmed = purl.strip()
    if not trimmed:
        raise ConfigurationError(f"Cannot parse pseudo-URL {purl!r}: it must be a non-empty string")

    parts = ["^"]
    literal: list[str] = []
    depth = 0

    for ch in trimmed:
        if ch == "[":
            depth += 1
            if depth == 1:
                parts.append(re.escape("".join(literal)))
                literal = []
                parts.append("(")
                continue
        elif ch == "]" and depth > 0:
            depth -= 1
            if depth == 0:
                parts.append(")")
                continue

        if depth > 0:
            parts.append(ch)
        else:
            literal.append(ch)

    if depth > 0:
        raise ConfigurationError(f"Cannot parse pseudo-URL {purl!r}: unclosed '[' section")

    parts.append(re.escape("".join(literal)))
    parts.append("$")
    return "".join(parts)


@dataclass(frozen=True)
class UrlPattern:
    """
    Compiled URL matcher with an optional request template.

    Build instances with :func:`build_url_pattern` or the ``from_*``
    constructors rather than directly.

    Example:
        pattern = UrlPattern.from_pseudo_url(
            "https://example.com/products/[.*]",
            {"user_data": {"label": "DETAIL"}},
        )
        if pattern.matches(url):
            request = pattern.create_request(url)
    """

    regex: re.Pattern[str]
    request_template: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_pseudo_url(
        cls,
        purl: str,
        request_template: Optional[Mapping[str, Any]] = None,
    ) -> UrlPattern:
        """Compile a pseudo-URL string; matching is case-insensitive."""
        source = parse_pseudo_url(purl)
        try:
            regex = re.compile(source, re.IGNORECASE)
        except re.error as e:
            raise ConfigurationError(f"Cannot parse pseudo-URL {purl!r}: {e}") from e
        return cls(regex=regex, request_template=_freeze_template(request_template))

    @classmethod
    def from_regex(
        cls,
        regex: Union[str, re.Pattern[str]],
        request_template: Optional[Mapping[str, Any]] = None,
    ) -> UrlPattern:
        """Wrap a regular expression; it is searched, not anchored."""
        if isinstance(regex, str):
            try:
                regex = re.compile(regex)
            except re.error as e:
                raise ConfigurationError(f"Invalid URL regex {regex!r}: {e}") from e
        return cls(regex=regex, request_template=_freeze_template(request_template))

    def matches(self, url: str) -> bool:
        return self.regex.search(url) is not None

    def create_request(self, url: str) -> Request:
        """
        Build a Request for ``url`` with this pattern's template applied.

        Template values are deep-copied so requests never share mutable state.
        """
        return Request(url=url, **copy.deepcopy(dict(self.request_template)))


def _freeze_template(template: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    if not template:
        return MappingProxyType({})

    unknown = set(template) - TEMPLATE_FIELDS
    if unknown:
        raise ConfigurationError(
            f"Unknown request template fields: {', '.join(sorted(unknown))}. "
            f"Allowed: {', '.join(sorted(TEMPLATE_FIELDS))}"
        )
    try:
        Request.check_fields(template)
    except ValueError as e:
        raise ConfigurationError(f"Invalid request template: {e}") from e
    return MappingProxyType(copy.deepcopy(dict(template)))


def build_url_pattern(value: PatternInput) -> UrlPattern:
    """
    Build a UrlPattern from any of the supported shorthand forms.

    Accepted forms:
        - ``"https://example.com/[.*]"``: pseudo-URL string
        - ``re.compile(r"example\\.com/\\d+")``: regular expression
        - ``{"purl": <str or regex>, **template}``: pattern plus request template
        - an existing ``UrlPattern``

    Raises:
        ConfigurationError: If the value is none of the above
    """
    if isinstance(value, UrlPattern):
        return value

    if isinstance(value, str):
        return UrlPattern.from_pseudo_url(value)

    if isinstance(value, re.Pattern):
        return UrlPattern.from_regex(value)

    if isinstance(value, Mapping):
        if PURL_KEY not in value:
            raise ConfigurationError(f"URL pattern objects must include the {PURL_KEY!r} key, got {dict(value)!r}")

        purl = value[PURL_KEY]
        template = {k: v for k, v in value.items() if k != PURL_KEY}

        if isinstance(purl, str):
            return UrlPattern.from_pseudo_url(purl, template)
        if isinstance(purl, re.Pattern):
            return UrlPattern.from_regex(purl, template)
        raise ConfigurationError(f"The {PURL_KEY!r} of a URL pattern must be a string or regex, got {type(purl).__name__}")

    raise ConfigurationError(
        f"Invalid URL pattern {value!r}: expected a string, a regex, "
        f"a mapping with {PURL_KEY!r}, or a UrlPattern"
    )


def build_url_patterns(values: Optional[Iterable[PatternInput]]) -> list[UrlPattern]:
    """
    Build UrlPatterns from a sequence of shorthand values.

    ``None`` or an empty sequence yields an empty list, which means
    "accept every URL".
    """
    if values is None:
        return []
    if isinstance(values, (str, bytes, Mapping)):
        raise ConfigurationError("URL patterns must be given as a list, not a single value")
    return [build_url_pattern(value) for value in values]


def find_matching_pattern(url: str, patterns: Iterable[UrlPattern]) -> Optional[UrlPattern]:
    """Return the first pattern that matches ``url``, or None."""
    for pattern in patterns:
        if pattern.matches(url):
            return pattern
    return None
