"""PlanService: read-only views over the resolved build configuration."""

from __future__ import annotations

from typing import Any

from buildplan.domain.paths import PlanError
from buildplan.domain.types import RepositoryScope
from buildplan.services.base import BaseService
from buildplan.services.result import ServiceResult
from buildplan.services.timing import step, timed


class PlanService(BaseService):
    """Expose plugins, mirrors and build directories to the CLI."""

    @timed
    def plan(self) -> ServiceResult:
        """Everything an external build tool needs, in one payload."""
        config = self._project.config
        with step("dump"):
            data: dict[str, Any] = config.model_dump(mode="json")
        data["tasks"] = self._project.tasks.names()
        return ServiceResult(ok=True, op="plan", data=data)

    @timed
    def plugins(self) -> ServiceResult:
        items = [p.model_dump(mode="json") for p in self._project.config.plugins]
        return ServiceResult(ok=True, op="plugins", data={"items": items, "count": len(items)})

    @timed
    def repositories(
        self,
        scope: RepositoryScope = RepositoryScope.DEPENDENCIES,
        *,
        project: str | None = None,
    ) -> ServiceResult:
        """Mirrors for *scope*, optionally merged with a subproject's own."""
        op = "repositories"
        try:
            mirrors = self._project.resolver.resolve_repositories(scope, project)
        except PlanError as exc:
            return ServiceResult.failure(op, "UNKNOWN_PROJECT", str(exc), project=project)
        items = [{"priority": i, "url": m.url} for i, m in enumerate(mirrors, start=1)]
        data: dict[str, Any] = {"scope": str(scope), "items": items, "count": len(items)}
        if project is not None:
            data["project"] = project
        return ServiceResult(ok=True, op=op, data=data)

    @timed
    def build_dirs(self) -> ServiceResult:
        plan = self._project.config.build_dirs
        items = [
            {"project": path, "build_dir": str(build_dir)}
            for path, build_dir in plan.subproject_build_dirs.items()
        ]
        return ServiceResult(
            ok=True,
            op="build_dirs",
            data={
                "root_build_dir": str(plan.root_build_dir),
                "items": items,
                "count": len(items),
            },
        )
