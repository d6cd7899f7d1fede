"""Run named tasks on a bounded pool of threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed


def run_parallel(tasks, max_parallel):
    """Run ``(name, callable)`` tasks on at most *max_parallel* threads.

    Yields ``(name, result)`` pairs in completion order. Tasks start when
    iteration begins. An exception raised by a task propagates to the
    caller. With no tasks, or *max_parallel* below one, nothing runs.
    """
    tasks = list(tasks)
    workers = min(max_parallel, len(tasks))
    if workers <= 0:
        return
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(fn): name for name, fn in tasks}
        for future in as_completed(futures):
            yield futures[future], future.result()