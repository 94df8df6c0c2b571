"""Map translation file paths to ``(project, locale)`` identities."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import ProjectConfig

FILE_EXTENSION = ".json"


@dataclass(frozen=True)
class PathIdentity:
    path: str
    project: Optional[str]
    locale: str


def native_path(path: str, separator: str) -> str:
    """Rewrite a configured (possibly ``/``-separated) path for ``separator``."""
    path = path.replace("/", separator).replace("\\", separator)
    return path.strip(separator)


def locale_pattern(project_path: str, separator: str) -> re.Pattern[str]:
    # re.escape doubles backslashes and leaves "/" alone
    return re.compile(
        f"^{re.escape(project_path)}{re.escape(separator)}(.+){re.escape(FILE_EXTENSION)}$"
    )


def _under(relative: str, project_path: str, separator: str) -> bool:
    return relative == project_path or relative.startswith(project_path + separator)


def resolve(
    path: str,
    projects: Sequence[ProjectConfig],
    workspace_root: str,
    separator: str = os.sep,
) -> PathIdentity:
    """Resolve ``path`` against the configured projects.

    ``project`` is None when the file lies outside every project root and
    ``locale`` is empty when the file is not a ``.json`` translation file.
    """
    root = workspace_root.rstrip(separator) + separator
    relative = path[len(root):] if path.startswith(root) else path

    for project in projects:
        project_path = native_path(project.path, separator)
        if _under(relative, project_path, separator):
            match = locale_pattern(project_path, separator).match(relative)
            return PathIdentity(
                path=path,
                project=project.name,
                locale=match.group(1) if match else "",
            )
    return PathIdentity(path=path, project=None, locale="")
