"""
linkqueue - Discover links on a page and schedule them in a request queue.

Usage:
    from linkqueue import MemoryRequestQueue, enqueue_links

    queue = MemoryRequestQueue()
    infos = await enqueue_links(
        queue,
        document=html,
        base_url="https://docs.example.com",
        patterns=["https://docs.example.com/guide/[.*]"],
    )
"""

__version__ = "1.0.0"

from .core.enqueue import enqueue_links
from .discovery import DocumentSource, PageSource, UrlPattern, build_url_pattern
from .exceptions import ConfigurationError, LinkQueueError, UnresolvableUrlError
from .models import EnqueueLinksOptions, QueueOperationInfo, Request
from .queue import BATCH_SIZE, MemoryRequestQueue, RequestQueue, add_requests_in_batches

__all__ = [
    "__version__",
    # Core
    "enqueue_links",
    # Sources
    "DocumentSource",
    "PageSource",
    # Patterns
    "UrlPattern",
    "build_url_pattern",
    # Models
    "EnqueueLinksOptions",
    "QueueOperationInfo",
    "Request",
    # Queue
    "BATCH_SIZE",
    "MemoryRequestQueue",
    "RequestQueue",
    "add_requests_in_batches",
    # Errors
    "ConfigurationError",
    "LinkQueueError",
    "UnresolvableUrlError",
]
