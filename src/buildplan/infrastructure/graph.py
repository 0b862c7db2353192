"""EvaluationGraph: NetworkX digraph of project evaluation constraints.

Edges point from ``depends_on`` to ``dependent``, so a topological sort
yields a valid configuration order. Cycle detection happens here, on the
consuming side, never while constraints are being registered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

from buildplan.domain.types import ROOT_PROJECT_PATH

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildplan.domain.models import EvaluationDependency

type _Graph = nx.DiGraph


class EvaluationCycleError(Exception):
    """The declared evaluation dependencies form a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(" -> ".join([*cycle, cycle[0]]) if cycle else "cycle")


class EvaluationGraph:
    """Lazy-built graph over the root project, subprojects and constraints."""

    def __init__(
        self,
        projects: Iterable[str],
        dependencies: Iterable[EvaluationDependency],
    ) -> None:
        self._projects = list(projects)
        self._dependencies = list(dependencies)
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def _build(self) -> _Graph:
        """The root project precedes every subproject, as in Gradle."""
        g: _Graph = nx.DiGraph()
        g.add_node(ROOT_PROJECT_PATH)
        for path in self._projects:
            g.add_edge(ROOT_PROJECT_PATH, path)
        for dep in self._dependencies:
            g.add_edge(dep.depends_on, dep.dependent)
        return g

    def order(self) -> list[str]:
        """Topological evaluation order; ties broken lexicographically.

        Raises:
            EvaluationCycleError: The constraints are cyclic.
        """
        try:
            return list(nx.lexicographical_topological_sort(self.graph))
        except nx.NetworkXUnfeasible as exc:
            cycle = [u for u, _v in nx.find_cycle(self.graph)]
            raise EvaluationCycleError(cycle) from exc

    def predecessors(self, path: str) -> list[str]:
        """Projects that must be configured directly before *path*."""
        return sorted(self.graph.predecessors(path))
