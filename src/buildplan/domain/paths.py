"""Build-directory path arithmetic and project path normalization.

Everything here is lexical: no filesystem access, no symlink resolution.
Two calls with the same inputs always produce the same path, and the
computed directories need not exist yet (creation is deferred to the
first write by whatever tool builds into them).
"""

from __future__ import annotations

import os
from pathlib import Path

from buildplan.domain.types import ROOT_PROJECT_PATH


class PlanError(Exception):
    """Base class for fatal configuration-load errors."""


class InvalidPathError(PlanError):
    """A build-directory path cannot be represented."""


class UnknownProjectError(PlanError):
    """A project path does not name a known project."""


class DuplicateProjectError(PlanError):
    """Two subprojects would share the same build directory."""


def _check_representable(value: str, what: str) -> None:
    if "\x00" in value:
        msg = f"{what} contains a NUL byte: {value!r}"
        raise InvalidPathError(msg)


def compute_root_build_dir(base_dir: Path | str, relative_offset: str) -> Path:
    """Resolve *relative_offset* against *base_dir*.

    The join is normalized lexically, so ``..`` segments climb out of
    *base_dir* (and stop at the filesystem root, as POSIX does).

    Examples:
        >>> compute_root_build_dir(Path("/proj"), "../../build").as_posix()
        '/build'

    Raises:
        InvalidPathError: The offset is empty or absolute, or either value
            contains a NUL byte.
    """
    base = str(base_dir)
    _check_representable(base, "base directory")
    _check_representable(relative_offset, "build directory offset")
    if not relative_offset.strip():
        msg = "build directory offset is empty"
        raise InvalidPathError(msg)
    if os.path.isabs(relative_offset):
        msg = f"build directory offset must be relative, got {relative_offset!r}"
        raise InvalidPathError(msg)
    return Path(os.path.normpath(os.path.join(base, relative_offset)))


def compute_subproject_build_dir(root_build_dir: Path, project_name: str) -> Path:
    """Return ``root_build_dir / project_name``.

    *project_name* must be a single plain path component so the result is
    always a direct child of *root_build_dir*.
    """
    _check_representable(project_name, "project name")
    if (
        not project_name
        or project_name in (".", "..")
        or "/" in project_name
        or (os.sep != "/" and os.sep in project_name)
    ):
        msg = f"project name is not a single path component: {project_name!r}"
        raise InvalidPathError(msg)
    return root_build_dir / project_name


def normalize_project_path(name: str) -> str:
    """Turn ``app`` or ``:app`` into the canonical Gradle path ``:app``."""
    stripped = name.strip()
    if not stripped or stripped == ROOT_PROJECT_PATH:
        return ROOT_PROJECT_PATH
    return stripped if stripped.startswith(":") else f":{stripped}"


def project_simple_name(path: str) -> str:
    """Last segment of a project path (``:feature:login`` -> ``login``)."""
    return normalize_project_path(path).rsplit(":", 1)[-1]


def lexical_path(path: Path | str) -> Path:
    """*path* made absolute with ``.`` and ``..`` collapsed, symlinks untouched."""
    return Path(os.path.normpath(os.path.abspath(path)))


def is_same_or_ancestor(candidate: Path, path: Path) -> bool:
    """True when *candidate* equals *path* or contains it.

    Both sides are compared after lexical normalization, so ``/a/b/../c``
    and ``/a/c`` are the same directory.
    """
    candidate, path = lexical_path(candidate), lexical_path(path)
    return candidate == path or candidate in path.parents
