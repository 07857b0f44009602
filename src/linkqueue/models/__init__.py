"""Linkqueue request and option models."""

from .config import DEFAULT_SELECTOR, EnqueueLinksOptions, RequestTransform
from .request import QueueOperationInfo, Request, compute_unique_key

__all__ = [
    # Options
    "DEFAULT_SELECTOR",
    "EnqueueLinksOptions",
    "RequestTransform",
    # Requests
    "QueueOperationInfo",
    "Request",
    "compute_unique_key",
]
