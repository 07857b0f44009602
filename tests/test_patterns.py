"""Tests for URL patterns."""

import re

import pytest

from linkqueue.discovery.patterns import (
    UrlPattern,
    build_url_pattern,
    build_url_patterns,
    find_matching_pattern,
    parse_pseudo_url,
)
from linkqueue.exceptions import ConfigurationError


class TestParsePseudoUrl:
    """Tests for pseudo-URL to regex translation."""

    def test_wildcard_section(self):
        expected = "^" + re.escape("https://example.com/") + "(.*)" + re.escape("") + "$"
        assert parse_pseudo_url("https://example.com/[.*]") == expected

    def test_no_sections_is_literal(self):
        assert parse_pseudo_url("https://x.com/a") == "^" + re.escape("https://x.com/a") + "$"

    def test_surrounding_whitespace_trimmed(self):
        assert parse_pseudo_url("  https://x.com/a ") == parse_pseudo_url("https://x.com/a")

    def test_empty_raises(self):
        with pytest.raises(ConfigurationError, match="non-empty"):
            parse_pseudo_url("   ")

    def test_unclosed_section_raises(self):
        with pytest.raises(ConfigurationError, match="unclosed"):
            parse_pseudo_url("https://example.com/[.*")


class TestUrlPattern:
    """Tests for matching with UrlPattern."""

    def test_wildcard_matches(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/docs/[.*]")
        assert pattern.matches("https://example.com/docs/intro") is True
        assert pattern.matches("https://example.com/docs/") is True
        assert pattern.matches("https://example.com/blog/post") is False

    def test_literal_part_is_escaped(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/[.*]")
        assert pattern.matches("https://exampleXcom/page") is False

    def test_exact_string_is_anchored(self):
        pattern = UrlPattern.from_pseudo_url("https://x.com/a")
        assert pattern.matches("https://x.com/a") is True
        assert pattern.matches("https://x.com/ab") is False
        assert pattern.matches("prefix https://x.com/a") is False

    def test_case_insensitive(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/docs/[.*]")
        assert pattern.matches("HTTPS://EXAMPLE.COM/DOCS/Intro") is True

    def test_nested_brackets(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/item-[[0-9]+]")
        assert pattern.matches("https://example.com/item-42") is True
        assert pattern.matches("https://example.com/item-ab") is False

    def test_invalid_regex_section(self):
        with pytest.raises(ConfigurationError, match="Cannot parse pseudo-URL"):
            UrlPattern.from_pseudo_url("https://example.com/[(]")

    def test_regex_is_searched(self):
        pattern = UrlPattern.from_regex(re.compile(r"/products/\d+$"))
        assert pattern.matches("https://shop.example.com/products/12") is True
        assert pattern.matches("https://shop.example.com/products/new") is False

    def test_regex_from_string(self):
        pattern = UrlPattern.from_regex(r"example\.com")
        assert pattern.matches("https://example.com/") is True

    def test_create_request_applies_template(self):
        pattern = UrlPattern.from_pseudo_url(
            "https://example.com/[.*]",
            {"method": "POST", "user_data": {"label": "DETAIL"}, "headers": {"X-Test": "1"}},
        )
        request = pattern.create_request("https://example.com/item")
        assert request.url == "https://example.com/item"
        assert request.method == "POST"
        assert request.user_data == {"label": "DETAIL"}
        assert request.headers == {"X-Test": "1"}

    def test_template_is_copied_per_request(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/[.*]", {"user_data": {"tags": []}})
        first = pattern.create_request("https://example.com/1")
        first.user_data["tags"].append("seen")
        second = pattern.create_request("https://example.com/2")
        assert second.user_data == {"tags": []}

    def test_template_unknown_field(self):
        with pytest.raises(ConfigurationError, match="Unknown request template fields: colour"):
            UrlPattern.from_pseudo_url("https://example.com/[.*]", {"colour": "red"})

    def test_template_cannot_set_url(self):
        with pytest.raises(ConfigurationError, match="url"):
            UrlPattern.from_pseudo_url("https://example.com/[.*]", {"url": "https://other.com"})

    @pytest.mark.parametrize(
        "template",
        [
            {"method": None},
            {"method": ""},
            {"user_data": "label"},
            {"headers": {"X-Retry": 1}},
            {"payload": 42},
            {"keep_url_fragment": "yes"},
        ],
    )
    def test_template_value_types(self, template):
        with pytest.raises(ConfigurationError, match="Invalid request template"):
            UrlPattern.from_pseudo_url("https://example.com/[.*]", template)


class TestBuildUrlPattern:
    """Tests for building patterns from shorthand values."""

    def test_from_string(self):
        pattern = build_url_pattern("https://example.com/[.*]")
        assert pattern.matches("https://example.com/a") is True

    def test_from_regex(self):
        pattern = build_url_pattern(re.compile(r"\.pdf$"))
        assert pattern.matches("https://example.com/file.pdf") is True

    def test_from_mapping_with_template(self):
        pattern = build_url_pattern({"purl": "https://example.com/[.*]", "user_data": {"label": "X"}})
        assert pattern.request_template == {"user_data": {"label": "X"}}
        assert pattern.create_request("https://example.com/a").user_data == {"label": "X"}

    def test_from_mapping_with_regex_purl(self):
        pattern = build_url_pattern({"purl": re.compile(r"/docs/"), "method": "HEAD"})
        assert pattern.matches("https://example.com/docs/a") is True
        assert pattern.create_request("https://example.com/docs/a").method == "HEAD"

    def test_existing_pattern_returned(self):
        pattern = UrlPattern.from_pseudo_url("https://example.com/[.*]")
        assert build_url_pattern(pattern) is pattern

    def test_mapping_without_purl(self):
        with pytest.raises(ConfigurationError, match="purl"):
            build_url_pattern({"method": "GET"})

    def test_mapping_with_invalid_purl(self):
        with pytest.raises(ConfigurationError, match="string or regex"):
            build_url_pattern({"purl": 42})

    def test_invalid_type(self):
        with pytest.raises(ConfigurationError, match="Invalid URL pattern"):
            build_url_pattern(42)


class TestBuildUrlPatterns:
    """Tests for building pattern lists."""

    def test_none_is_empty(self):
        assert build_url_patterns(None) == []

    def test_empty_list(self):
        assert build_url_patterns([]) == []

    def test_keeps_order(self):
        patterns = build_url_patterns(["https://a.com/[.*]", "https://b.com/[.*]"])
        assert [p.matches("https://a.com/x") for p in patterns] == [True, False]

    def test_single_string_rejected(self):
        with pytest.raises(ConfigurationError, match="list"):
            build_url_patterns("https://example.com/[.*]")

    def test_invalid_entry_rejected(self):
        with pytest.raises(ConfigurationError):
            build_url_patterns(["https://example.com/[.*]", None])


class TestFindMatchingPattern:
    """Tests for first-match-wins selection."""

    def test_first_match_wins(self):
        patterns = build_url_patterns(
            [
                {"purl": "https://example.com/docs/[.*]", "user_data": {"label": "DOCS"}},
                {"purl": "https://example.com/[.*]", "user_data": {"label": "ANY"}},
            ]
        )
        match = find_matching_pattern("https://example.com/docs/intro", patterns)
        assert match is patterns[0]

        match = find_matching_pattern("https://example.com/blog", patterns)
        assert match is patterns[1]

    def test_no_match(self):
        patterns = build_url_patterns(["https://example.com/[.*]"])
        assert find_matching_pattern("https://other.com/", patterns) is None
