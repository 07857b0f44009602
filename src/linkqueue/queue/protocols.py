"""Protocol definitions for request queues."""

from typing import Protocol

from ..models.request import QueueOperationInfo, Request


class RequestQueue(Protocol):
    """
    Protocol for persistent, deduplicating request queues.

    The queue owns storage, deduplication by ``unique_key`` and its own
    retry policy. Callers only shape and order the calls into it.
    """

    async def add_request(self, request: Request) -> QueueOperationInfo:
        """
        Add a request to the queue.

        Adding a request whose unique key is already known must not create
        a second entry; the returned info reports it as already present.

        Args:
            request: The request to add

        Returns:
            QueueOperationInfo describing the outcome

        Raises:
            Exception on backend failure (after the queue's own retries)
        """
        ...
