"""Request queue interface and batched submission."""

from .batch import BATCH_SIZE, add_requests_in_batches
from .memory import MemoryRequestQueue, unique_key_to_request_id
from .protocols import RequestQueue

__all__ = [
    "BATCH_SIZE",
    "MemoryRequestQueue",
    "RequestQueue",
    "add_requests_in_batches",
    "unique_key_to_request_id",
]
