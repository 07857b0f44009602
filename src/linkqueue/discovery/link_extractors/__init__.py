"""Link extraction from rendered pages and parsed documents."""

from typing import Union

from .browser import PageSource
from .protocols import LinkSource
from .static import DocumentSource

# A link source is one of these two; nothing else is accepted.
AnyLinkSource = Union[PageSource, DocumentSource]

__all__ = [
    "AnyLinkSource",
    "DocumentSource",
    "LinkSource",
    "PageSource",
]
