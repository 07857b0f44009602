"""Protocol definitions for link extraction."""

from typing import Protocol


class LinkSource(Protocol):
    """
    Protocol for documents that links can be extracted from.

    Implementations:
    - PageSource: a live, rendered browser page (Playwright)
    - DocumentSource: a statically parsed HTML tree (BeautifulSoup)
    """

    async def extract_urls(self, selector: str) -> list[str]:
        """
        Extract link targets from the document.

        Args:
            selector: CSS selector matching the link elements

        Returns:
            Absolute URLs in document order, empty values excluded
        """
        ...
