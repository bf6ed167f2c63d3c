"""Worker pool for polls API calls that must not delay interaction responses."""

from contextvars import copy_context
from concurrent.futures import Future, ThreadPoolExecutor
import threading
from typing import Any, Callable

from structlog.contextvars import bind_contextvars, get_contextvars


THREAD_NAME_PREFIX = "poll-action"
DEFAULT_WORKERS = 4

_lock = threading.Lock()
_executor: ThreadPoolExecutor | None = None
_workers = 0


def configure_executor(max_workers: int = DEFAULT_WORKERS) -> ThreadPoolExecutor:
    """Size the shared pool to *max_workers*, replacing it if the size changed.

    Tasks already queued on a replaced pool still run to completion.
    """

    global _executor, _workers
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")
    with _lock:
        if _executor is not None and _workers == max_workers:
            return _executor
        previous = _executor
        _executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=THREAD_NAME_PREFIX)
        _workers = max_workers
    if previous is not None:
        previous.shutdown(wait=False)
    return _executor


def pool_size() -> int:
    with _lock:
        return _workers


def _get_executor() -> ThreadPoolExecutor:
    with _lock:
        executor = _executor
    return executor if executor is not None else configure_executor()


def run_async(
    func: Callable[..., Any],
    /,
    *args: Any,
    trace_id: str | None = None,
    **kwargs: Any,
) -> Future:
    """Submit *func* to the shared thread pool and return a Future.

    The caller's structlog context travels with the task, so events logged by
    the worker carry the same ``trace_id`` as the interaction that scheduled it.
    """

    context = copy_context()
    if trace_id is not None:
        existing_trace = context.run(lambda: get_contextvars().get("trace_id"))
        if existing_trace != trace_id:
            context.run(lambda: bind_contextvars(trace_id=trace_id))

    def runner() -> Any:
        return context.run(func, *args, **kwargs)

    return _get_executor().submit(runner)
