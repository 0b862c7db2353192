"""EvaluationService: configuration order of the root project and subprojects."""

from __future__ import annotations

import structlog

from buildplan.infrastructure.graph import EvaluationCycleError
from buildplan.services.base import BaseService
from buildplan.services.result import ServiceResult
from buildplan.services.timing import step, timed

log = structlog.get_logger(__name__)


class EvaluationService(BaseService):
    """Order projects so every ``depends_on`` is configured first."""

    @timed
    def order(self) -> ServiceResult:
        op = "order"
        graph = self._project.graph
        try:
            with step("sort"):
                ordered = graph.order()
        except EvaluationCycleError as exc:
            log.debug("evaluation.cycle", cycle=exc.cycle)
            return ServiceResult.failure(
                op, "CYCLE", f"Circular evaluation dependency: {exc}", cycle=exc.cycle
            )

        items = [
            {"position": i, "project": path, "after": graph.predecessors(path)}
            for i, path in enumerate(ordered, start=1)
        ]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})
