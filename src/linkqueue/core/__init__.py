"""Core link enqueueing pipeline."""

from .builder import apply_transform, create_requests, match_requests
from .enqueue import enqueue_links

__all__ = [
    "apply_transform",
    "create_requests",
    "enqueue_links",
    "match_requests",
]
