"""Batched submission of requests to a request queue."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from ..models.request import QueueOperationInfo, Request
from .protocols import RequestQueue

logger = logging.getLogger(__name__)

# Requests submitted concurrently per batch
BATCH_SIZE = 5


async def add_requests_in_batches(
    requests: Sequence[Request],
    queue: RequestQueue,
    batch_size: int = BATCH_SIZE,
) -> list[QueueOperationInfo]:
    """
    Add requests to a queue, a batch at a time.

    Requests within a batch are submitted concurrently; the next batch starts
    only after every submission of the current one has settled. If any
    submission fails, the first failure (in input order) is re-raised once
    its batch has settled and the remaining batches are not started.
    Requests from earlier batches stay in the queue.

    Args:
        requests: Requests to submit
        queue: Target request queue
        batch_size: Maximum concurrent submissions

    Returns:
        One QueueOperationInfo per request, in the order of ``requests``
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    results: list[QueueOperationInfo] = []

    for start in range(0, len(requests), batch_size):
        batch = requests[start : start + batch_size]
        outcomes = await asyncio.gather(
            *(queue.add_request(request) for request in batch),
            return_exceptions=True,
        )

        for request, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Failed to enqueue {request.url}: {outcome}")
                raise outcome
            results.append(outcome)

        logger.debug(f"Enqueued batch of {len(batch)} ({len(results)}/{len(requests)})")

    return results
