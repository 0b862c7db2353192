"""Filesystem operations: build-tree deletion and settings-script discovery.

Pure path arithmetic lives in :mod:`buildplan.domain.paths`. This module
handles the actual I/O.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# Settings scripts checked in order; Kotlin DSL first.
SETTINGS_SCRIPTS: tuple[str, ...] = ("settings.gradle.kts", "settings.gradle")

# Kotlin/Groovy call form, arguments may span lines:  include(":app", ":core")
# Groovy command form, one line:                      include ':app', ':core'
_INCLUDE_RE = re.compile(
    r"^\s*include\b\s*(?:\((?P<call>[^)]*)\)|(?P<bare>[^\n]*))",
    re.MULTILINE,
)
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


def delete_tree(path: Path) -> bool:
    """Delete *path* and everything under it.

    Returns True if something was removed, False if *path* did not exist.
    A symlink is unlinked; its target is left alone. ``OSError`` from the
    removal propagates to the caller.
    """
    if path.is_symlink():
        path.unlink()
        logger.debug("Unlinked build dir symlink %s", path)
        return True
    if not path.exists():
        return False
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.debug("Deleted %s", path)
    return True


# ---------------------------------------------------------------------------
# Settings-script discovery
# ---------------------------------------------------------------------------


def find_settings_script(project_root: Path) -> Path | None:
    """Return the first settings script present under *project_root*."""
    for name in SETTINGS_SCRIPTS:
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def extract_includes(content: str) -> list[str]:
    """Extract project paths from ``include`` lines, in declaration order.

    Examples:
        >>> extract_includes('include(":app")\\ninclude ":core", ":ui"')
        [':app', ':core', ':ui']
    """
    found: list[str] = []
    for match in _INCLUDE_RE.finditer(content):
        args = match.group("call")
        if args is None:
            args = match.group("bare")
        for name in _QUOTED_RE.findall(args):
            if name not in found:
                found.append(name)
    return found


def discover_subprojects(project_root: Path) -> list[str]:
    """Subproject paths declared by the settings script, or [] if none."""
    script = find_settings_script(project_root)
    if script is None:
        return []
    return extract_includes(script.read_text(encoding="utf-8"))
