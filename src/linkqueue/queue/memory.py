"""In-memory request queue."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections import OrderedDict
from typing import Optional

from ..models.request import QueueOperationInfo, Request

logger = logging.getLogger(__name__)


def unique_key_to_request_id(unique_key: str) -> str:
    """Derive a stable, short request id from a unique key."""
    return hashlib.sha256(unique_key.encode("utf-8")).hexdigest()[:15]


class MemoryRequestQueue:
    """
    Request queue kept in process memory.

    Deduplicates by ``Request.unique_key``. Nothing is persisted, which makes
    it suitable for tests, one-off runs and the command-line tool.

    Example:
        queue = MemoryRequestQueue()
        info = await queue.add_request(Request(url="https://example.com"))
        request = await queue.fetch_next_request()
        await queue.mark_request_handled(request)
    """

    def __init__(self) -> None:
        """Initialize an empty queue."""
        # request_id -> request, in insertion order
        self._pending: OrderedDict[str, Request] = OrderedDict()
        self._in_progress: dict[str, Request] = {}
        self._handled: set[str] = set()
        self._known: dict[str, str] = {}  # unique_key -> request_id
        self._requests: dict[str, Request] = {}
        self._lock = asyncio.Lock()

        # Statistics
        self._total_added: int = 0
        self._duplicates_found: int = 0

    async def add_request(self, request: Request) -> QueueOperationInfo:
        """
        Add a request unless its unique key is already known.

        Args:
            request: The request to add

        Returns:
            QueueOperationInfo for the request
        """
        unique_key = request.refresh_unique_key()

        async with self._lock:
            request_id = self._known.get(unique_key)
            if request_id is not None:
                self._duplicates_found += 1
                return QueueOperationInfo(
                    request_id=request_id,
                    was_already_present=True,
                    was_already_handled=request_id in self._handled,
                    unique_key=unique_key,
                )

            request_id = unique_key_to_request_id(unique_key)
            self._known[unique_key] = request_id
            self._pending[request_id] = request
            self._requests[request_id] = request
            self._total_added += 1

        logger.debug(f"Queued {request.url} as {request_id}")
        return QueueOperationInfo(
            request_id=request_id,
            was_already_present=False,
            was_already_handled=False,
            unique_key=unique_key,
        )

    async def fetch_next_request(self) -> Optional[Request]:
        """Take the oldest pending request, or None if there is none."""
        async with self._lock:
            if not self._pending:
                return None
            request_id, request = self._pending.popitem(last=False)
            self._in_progress[request_id] = request
            return request

    async def mark_request_handled(self, request: Request) -> None:
        """Record that a fetched request has been processed."""
        request_id = unique_key_to_request_id(request.refresh_unique_key())
        async with self._lock:
            self._in_progress.pop(request_id, None)
            self._handled.add(request_id)

    def get_request(self, request_id: str) -> Optional[Request]:
        """Look up a request by the id returned from add_request()."""
        return self._requests.get(request_id)

    async def is_empty(self) -> bool:
        async with self._lock:
            return not self._pending

    def __len__(self) -> int:
        """Number of requests still waiting to be fetched."""
        return len(self._pending)

    def get_stats(self) -> dict:
        """
        Get queue statistics.

        Returns:
            Dictionary with:
            - pending: Requests waiting to be fetched
            - in_progress: Requests fetched but not yet handled
            - handled: Requests marked as handled
            - total_added: Unique requests ever added
            - duplicates_found: Add attempts rejected as duplicates
        """
        return {
            "pending": len(self._pending),
            "in_progress": len(self._in_progress),
            "handled": len(self._handled),
            "total_added": self._total_added,
            "duplicates_found": self._duplicates_found,
        }
