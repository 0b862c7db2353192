"""Named tasks and the built-in ``clean``.

A task is a zero-argument callable returning a :class:`ServiceResult`, so
failure is an explicit return value rather than an exception. The CLI
dispatches tasks by name through :class:`TaskService`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from buildplan.domain.paths import is_same_or_ancestor
from buildplan.infrastructure.filesystem import delete_tree
from buildplan.services.base import BaseService
from buildplan.services.result import ServiceResult
from buildplan.services.timing import step, timed

if TYPE_CHECKING:
    from buildplan.infrastructure.project import BuildProject

log = structlog.get_logger(__name__)

type Task = Callable[[], ServiceResult]


class TaskRegistry:
    """Mapping from task name to task callable, in registration order."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def register(self, name: str, task: Task) -> None:
        if not name:
            msg = "task name must not be empty"
            raise ValueError(msg)
        if name in self._tasks:
            msg = f"task {name!r} is already registered"
            raise ValueError(msg)
        self._tasks[name] = task

    def get(self, name: str) -> Task | None:
        return self._tasks.get(name)

    def names(self) -> list[str]:
        return list(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks


def clean_build_dir(project: BuildProject) -> ServiceResult:
    """Delete the relocated root build directory.

    Idempotent: a missing directory is success with ``deleted=False``.
    Refuses to delete the project root or any of its ancestors.
    """
    op = "clean"
    target = project.root_build_dir
    if is_same_or_ancestor(target, project.root):
        return ServiceResult.failure(
            op,
            "UNSAFE_DELETE",
            f"Refusing to delete {target}: it contains the project root",
            path=str(target),
            project_root=str(project.root),
        )

    try:
        with step("delete"):
            deleted = delete_tree(target)
    except OSError as exc:
        log.debug("clean.failed", path=str(target), error=str(exc))
        return ServiceResult.failure(
            op, "DELETE_FAILED", f"Could not delete {target}: {exc}", path=str(target)
        )

    log.info("clean.done", path=str(target), deleted=deleted)
    return ServiceResult(ok=True, op=op, data={"path": str(target), "deleted": deleted})


def default_registry(project: BuildProject) -> TaskRegistry:
    registry = TaskRegistry()
    registry.register("clean", lambda: clean_build_dir(project))
    return registry


class TaskService(BaseService):
    """Look up and run tasks by name."""

    @timed
    def run(self, name: str) -> ServiceResult:
        task = self._project.tasks.get(name)
        if task is None:
            return ServiceResult.failure(
                "run",
                "UNKNOWN_TASK",
                f"Task '{name}' not found",
                available=self._project.tasks.names(),
            )
        return task()

    @timed
    def list_tasks(self) -> ServiceResult:
        names = self._project.tasks.names()
        items = [{"name": n} for n in names]
        return ServiceResult(ok=True, op="tasks", data={"items": items, "count": len(items)})
