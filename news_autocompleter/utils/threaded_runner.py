# threaded_runner.py - small thread pool helpers for bounded-time blocking calls.

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Optional


def make_pool(max_workers: int = 4, name: str = "io") -> ThreadPoolExecutor:
    """Thread pool for blocking I/O (datastore lookups)."""
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)


def wait_result(fut: Future, timeout: Optional[float]) -> Any:
    """
    Block until `fut` settles, at most `timeout` seconds.
    On timeout the future is cancelled (a no-op if it already started)
    and concurrent.futures.TimeoutError is raised.
    """
    try:
        return fut.result(timeout=timeout)
    except FutureTimeout:
        fut.cancel()
        raise
