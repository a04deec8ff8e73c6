# SPDX-License-Identifier: MIT

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

MAX_WORKERS = 16

T = TypeVar("T")


class FanInPolicy(Enum):
    # Return the first error at once; fetches already running finish on their
    # own and their results are thrown away.
    DISCARD_STRAGGLERS = "discard_stragglers"
    # Return the first error at once and cancel every fetch not yet started.
    CANCEL_PENDING = "cancel_pending"


def fan_in(
    tasks: list[Callable[[], T]],
    policy: FanInPolicy,
    max_workers: int | None = None,
) -> list[T]:
    """
    Run tasks concurrently and collect their results in completion order.

    The first task to raise aborts the collection and its exception is
    re-raised to the caller; what happens to the other tasks depends on the
    policy.
    """
    if len(tasks) == 0:
        return []

    executor = ThreadPoolExecutor(
        max_workers=max_workers or min(len(tasks), MAX_WORKERS)
    )
    futures: list[Future[T]] = [executor.submit(task) for task in tasks]
    results: list[T] = []

    try:
        for future in as_completed(futures):
            error = future.exception()
            if error is not None:
                raise error
            results.append(future.result())
    except BaseException:
        if policy is FanInPolicy.CANCEL_PENDING:
            executor.shutdown(wait=False, cancel_futures=True)
        else:
            logger.debug(
                "Discarding %d in-flight fetches", len(futures) - len(results) - 1
            )
            executor.shutdown(wait=False)
        raise

    executor.shutdown(wait=True)
    return results
