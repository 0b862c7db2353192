"""BuildConfigResolver: turns settings into a frozen BuildConfiguration.

Resolution is a single eager pass with no retries and no partial state:
the first :class:`~buildplan.domain.paths.PlanError` aborts the load.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildplan.domain.models import (
    BuildConfiguration,
    BuildDirectoryPlan,
    EvaluationDependency,
    PluginReference,
    RepositoryMirror,
)
from buildplan.domain.paths import (
    DuplicateProjectError,
    UnknownProjectError,
    compute_root_build_dir,
    compute_subproject_build_dir,
    normalize_project_path,
    project_simple_name,
)
from buildplan.domain.types import ROOT_PROJECT_PATH, RepositoryScope
from buildplan.infrastructure.filesystem import discover_subprojects

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from buildplan.config.settings import BuildPlanSettings

logger = logging.getLogger(__name__)


def _mirrors(urls: Iterable[str]) -> tuple[RepositoryMirror, ...]:
    """Build mirrors in order, dropping later duplicates of a URL."""
    seen: set[str] = set()
    out: list[RepositoryMirror] = []
    for url in urls:
        if url in seen:
            continue
        seen.add(url)
        out.append(RepositoryMirror(url=url))
    return tuple(out)


class BuildConfigResolver:
    """Resolve plugins, mirrors, build directories and evaluation order.

    Usage::

        config = BuildConfigResolver(settings).resolve()
    """

    def __init__(self, settings: BuildPlanSettings) -> None:
        self._settings = settings
        self._subprojects: list[str] = self._load_subprojects()
        self._dependencies: list[EvaluationDependency] = []

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def subprojects(self) -> tuple[str, ...]:
        return tuple(self._subprojects)

    def _load_subprojects(self) -> list[str]:
        include = self._settings.projects.include
        if include is None:
            include = discover_subprojects(self._settings.project_root)
        paths: list[str] = []
        for name in include:
            path = normalize_project_path(name)
            if path != ROOT_PROJECT_PATH and path not in paths:
                paths.append(path)
        return paths

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    def resolve_repositories(
        self,
        scope: RepositoryScope = RepositoryScope.DEPENDENCIES,
        project: str | None = None,
    ) -> tuple[RepositoryMirror, ...]:
        """Mirrors for *scope* in declaration order.

        With *project*, that subproject's extra mirrors are merged after
        the root list (root first, first occurrence of a URL wins).
        """
        repos = self._settings.repositories
        urls = list(repos.plugins if scope is RepositoryScope.PLUGINS else repos.dependencies)
        if project is not None:
            urls.extend(self._project_repository_urls(project))
        return _mirrors(urls)

    def _project_repository_urls(self, project: str) -> list[str]:
        path = self._require_known(project)
        extras = self._settings.projects.repositories
        for key in (path, project_simple_name(path)):
            if key in extras:
                return list(extras[key])
        return []

    # ------------------------------------------------------------------
    # Build directories
    # ------------------------------------------------------------------

    def default_build_dir(self) -> Path:
        """The conventional ``<project_root>/build`` before relocation."""
        return self._settings.project_root / self._settings.build.default_dir

    def compute_root_build_dir(
        self, base_dir: Path | None = None, offset: str | None = None
    ) -> Path:
        base = self.default_build_dir() if base_dir is None else base_dir
        rel = self._settings.build.relocate if offset is None else offset
        return compute_root_build_dir(base, rel)

    def compute_subproject_build_dir(self, root_build_dir: Path, project: str) -> Path:
        return compute_subproject_build_dir(root_build_dir, project_simple_name(project))

    def build_directory_plan(self) -> BuildDirectoryPlan:
        root = self.compute_root_build_dir()
        dirs: dict[str, Path] = {}
        owners: dict[str, str] = {}
        for path in self._subprojects:
            name = project_simple_name(path)
            if name in owners:
                msg = (
                    f"subprojects {owners[name]} and {path} would share "
                    f"build directory {root / name}"
                )
                raise DuplicateProjectError(msg)
            owners[name] = path
            dirs[path] = self.compute_subproject_build_dir(root, path)
        return BuildDirectoryPlan(root_build_dir=root, subproject_build_dirs=dirs)

    # ------------------------------------------------------------------
    # Evaluation constraints
    # ------------------------------------------------------------------

    def _require_known(self, project: str) -> str:
        path = normalize_project_path(project)
        if path != ROOT_PROJECT_PATH and path not in self._subprojects:
            msg = f"Project with path '{path}' could not be found"
            raise UnknownProjectError(msg)
        return path

    def register_evaluation_dependency(self, dependent: str, depends_on: str) -> None:
        """Record that *depends_on* must be configured before *dependent*.

        Cycles are not checked here; see
        :meth:`buildplan.infrastructure.graph.EvaluationGraph.order`.
        """
        dep = EvaluationDependency(
            dependent=self._require_known(dependent),
            depends_on=self._require_known(depends_on),
        )
        if dep not in self._dependencies:
            self._dependencies.append(dep)

    def _apply_declared_constraints(self) -> None:
        projects = self._settings.projects
        target = projects.evaluation_depends_on
        if target:
            for path in self._subprojects:
                if path == normalize_project_path(target):
                    continue
                self.register_evaluation_dependency(path, target)
        for dependent, targets in projects.depends_on.items():
            for depends_on in targets:
                self.register_evaluation_dependency(dependent, depends_on)

    # ------------------------------------------------------------------
    # Single pass
    # ------------------------------------------------------------------

    def resolve(self) -> BuildConfiguration:
        """Run the whole resolution and freeze the result."""
        plugins = tuple(
            PluginReference(id=p.id, apply=p.apply, version=p.version)
            for p in self._settings.plugins
        )
        repositories = {scope: self.resolve_repositories(scope) for scope in RepositoryScope}
        extras: dict[str, tuple[RepositoryMirror, ...]] = {}
        for path in self._subprojects:
            urls = self._project_repository_urls(path)
            if urls:
                extras[path] = _mirrors(urls)
        build_dirs = self.build_directory_plan()
        self._apply_declared_constraints()

        config = BuildConfiguration(
            project_root=self._settings.project_root,
            subprojects=tuple(self._subprojects),
            plugins=plugins,
            repositories=repositories,
            subproject_repositories=extras,
            build_dirs=build_dirs,
            evaluation_dependencies=tuple(self._dependencies),
        )
        logger.debug(
            "Resolved build configuration: %d subprojects, root build dir %s",
            len(config.subprojects),
            config.build_dirs.root_build_dir,
        )
        return config
