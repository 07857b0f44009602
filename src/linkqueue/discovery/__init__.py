"""Link discovery for linkqueue (extraction and pattern matching)."""

from .link_extractors import AnyLinkSource, DocumentSource, LinkSource, PageSource
from .patterns import (
    UrlPattern,
    build_url_pattern,
    build_url_patterns,
    find_matching_pattern,
    parse_pseudo_url,
)

__all__ = [
    # Extraction
    "AnyLinkSource",
    "DocumentSource",
    "LinkSource",
    "PageSource",
    # Patterns
    "UrlPattern",
    "build_url_pattern",
    "build_url_patterns",
    "find_matching_pattern",
    "parse_pseudo_url",
]
