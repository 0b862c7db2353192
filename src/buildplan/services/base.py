"""BaseService: foundation for all buildplan services.

Every service receives a :class:`BuildProject` at construction time. The
project carries the frozen configuration, so services never re-resolve.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildplan.infrastructure.project import BuildProject


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class PlanService(BaseService):
            def plan(self) -> ServiceResult:
                config = self._project.config
                ...
    """

    def __init__(self, project: BuildProject) -> None:
        self._project = project
