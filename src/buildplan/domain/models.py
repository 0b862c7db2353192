"""Resolved build-configuration entities.

All models are frozen: they are built once during configuration load and
never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from buildplan.domain.types import RepositoryScope


class PluginReference(BaseModel):
    """A plugin declared at the root, optionally applied."""

    model_config = {"frozen": True}

    id: str
    apply: bool = False
    version: str | None = None

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "plugin id must not be empty"
            raise ValueError(msg)
        return v


class RepositoryMirror(BaseModel):
    """An alternate endpoint for fetching artifacts. Reachability is not checked."""

    model_config = {"frozen": True}

    url: str

    @field_validator("url")
    @classmethod
    def _url_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "repository url must not be empty"
            raise ValueError(msg)
        return v


class BuildDirectoryPlan(BaseModel):
    """Relocated root build directory plus one child directory per subproject.

    INVARIANT: every subproject directory is a direct child of
    ``root_build_dir`` and no two subprojects share one.
    """

    model_config = {"frozen": True}

    root_build_dir: Path
    subproject_build_dirs: dict[str, Path] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _children_of_root(self) -> BuildDirectoryPlan:
        seen: set[Path] = set()
        for name, path in self.subproject_build_dirs.items():
            if path.parent != self.root_build_dir:
                msg = f"build dir for {name!r} is not under {self.root_build_dir}"
                raise ValueError(msg)
            if path in seen:
                msg = f"build dir {path} assigned twice"
                raise ValueError(msg)
            seen.add(path)
        return self


class EvaluationDependency(BaseModel):
    """``dependent`` must be configured after ``depends_on``."""

    model_config = {"frozen": True}

    dependent: str
    depends_on: str


class BuildConfiguration(BaseModel):
    """The whole resolved configuration, passed by reference to services."""

    model_config = {"frozen": True}

    project_root: Path
    subprojects: tuple[str, ...] = ()
    plugins: tuple[PluginReference, ...] = ()
    repositories: dict[RepositoryScope, tuple[RepositoryMirror, ...]] = Field(
        default_factory=dict
    )
    subproject_repositories: dict[str, tuple[RepositoryMirror, ...]] = Field(
        default_factory=dict
    )
    build_dirs: BuildDirectoryPlan
    evaluation_dependencies: tuple[EvaluationDependency, ...] = ()
