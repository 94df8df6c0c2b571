from __future__ import annotations

import asyncio
import os
from typing import List, Sequence

from ..core.errors import DirectoryUnavailable
from ..core.logging_config import get_logger
from .models import DiscoveredProject, ProjectConfig
from .paths import FILE_EXTENSION, native_path

log = get_logger(__name__)


def project_root(project: ProjectConfig, workspace_root: str, separator: str = os.sep) -> str:
    return os.path.join(workspace_root, native_path(project.path, separator))


def _list_locales(root: str) -> List[str]:
    try:
        names = sorted(os.listdir(root))
    except OSError as e:
        raise DirectoryUnavailable(root, e.strerror or e) from e
    return [
        name[: -len(FILE_EXTENSION)]
        for name in names
        if name.endswith(FILE_EXTENSION) and os.path.isfile(os.path.join(root, name))
    ]


async def discover(
    projects: Sequence[ProjectConfig],
    workspace_root: str,
    separator: str = os.sep,
) -> List[DiscoveredProject]:
    """List the locale files found directly under each project root.

    A root that cannot be listed contributes no locales; the other projects
    are still discovered.
    """
    result: List[DiscoveredProject] = []
    for project in projects:
        root = project_root(project, workspace_root, separator)
        found = DiscoveredProject(name=project.name, root=root)
        try:
            found.locales = await asyncio.to_thread(_list_locales, root)
        except DirectoryUnavailable as e:
            log.warning("Cannot list locales for project %s: %s", project.name, e)
            found.error = str(e)
        else:
            log.debug("Project %s: %d locale(s) found", project.name, len(found.locales))
        result.append(found)
    return result
