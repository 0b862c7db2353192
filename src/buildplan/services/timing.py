"""Operation timings for ``--verbose`` output.

A service method decorated with :func:`timed` reports its wall time, plus
the time spent in any :func:`step` blocks run inside it, under
``ServiceResult.meta["timing"]``::

    {"op": "TaskService.run", "duration_ms": 3.1, "steps": {"delete": 2.7}}

Timing stays off until :func:`enable_timing` is called (the CLI does so for
``-v``); when off, the decorator is a single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, ParamSpec, TypeVar

import structlog

from buildplan.services.result import ServiceResult

log = structlog.get_logger(__name__)

_enabled: ContextVar[bool] = ContextVar("buildplan_timing", default=False)
_steps: ContextVar[dict[str, float] | None] = ContextVar("buildplan_timing_steps", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def enable_timing() -> None:
    _enabled.set(True)


def disable_timing() -> None:
    _enabled.set(False)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


@contextmanager
def step(name: str) -> Iterator[None]:
    """Time the enclosed block as *name* within the running operation.

    Outside a :func:`timed` call (or with timing off) this does nothing.
    A step entered twice accumulates.
    """
    steps = _steps.get()
    if steps is None:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        steps[name] = round(steps.get(name, 0.0) + _elapsed_ms(start), 2)


def timed(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Attach ``meta["timing"]`` to the ServiceResult returned by *func*."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        steps: dict[str, float] = {}
        token = _steps.set(steps)
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        finally:
            _steps.reset(token)

        timing: dict[str, Any] = {
            "op": func.__qualname__,
            "duration_ms": _elapsed_ms(start),
            "steps": steps,
        }
        log.debug("timing", **timing)
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "timing": timing}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper
