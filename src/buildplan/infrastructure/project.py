"""BuildProject: the single dependency injected into every service.

Owns the frozen :class:`BuildConfiguration` (resolved eagerly at
construction, so a bad config fails before any command runs), the
evaluation graph and the task registry. The graph and registry are built
lazily so commands that don't need them never pay for them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from buildplan.infrastructure.graph import EvaluationGraph
from buildplan.infrastructure.resolver import BuildConfigResolver

if TYPE_CHECKING:
    from pathlib import Path

    from buildplan.config.settings import BuildPlanSettings
    from buildplan.domain.models import BuildConfiguration
    from buildplan.services.tasks import TaskRegistry

logger = logging.getLogger(__name__)


class BuildProject:
    """A resolved multi-module build rooted at ``settings.project_root``."""

    def __init__(self, settings: BuildPlanSettings) -> None:
        self.settings = settings
        self.resolver = BuildConfigResolver(settings)
        self.config: BuildConfiguration = self.resolver.resolve()
        self._graph: EvaluationGraph | None = None
        self._tasks: TaskRegistry | None = None

    @property
    def root(self) -> Path:
        return self.config.project_root

    @property
    def root_build_dir(self) -> Path:
        return self.config.build_dirs.root_build_dir

    @property
    def graph(self) -> EvaluationGraph:
        """Evaluation-order graph (built on first access)."""
        if self._graph is None:
            self._graph = EvaluationGraph(
                self.config.subprojects,
                self.config.evaluation_dependencies,
            )
        return self._graph

    @property
    def tasks(self) -> TaskRegistry:
        """Named tasks; ``clean`` is always registered."""
        if self._tasks is None:
            from buildplan.services.tasks import default_registry

            self._tasks = default_registry(self)
        return self._tasks
