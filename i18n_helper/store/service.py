"""Localization store lifecycle: discovery, initial load, watching, lookup."""

from __future__ import annotations

import asyncio
import os
from typing import List, Optional, Sequence, Tuple

from ..core.errors import ConfigurationMissing
from ..core.logging_config import get_logger
from .discovery import discover, project_root
from .ingest import IngestionPipeline
from .lookup import lookup
from .models import DiscoveredProject, Entry, ProjectConfig
from .paths import FILE_EXTENSION
from .store import TranslationStore
from .watcher import ChangeWatcher

log = get_logger(__name__)


class LocalizationService:
    """One live translation cache for one workspace.

    Create a new instance to pick up a changed configuration; ``stop`` the
    old one first.
    """

    def __init__(
        self,
        projects: Sequence[ProjectConfig],
        workspace_root: str,
        separator: str = os.sep,
        flatten: bool = False,
        poll_interval: float = 1.0,
    ) -> None:
        self.projects = list(projects)
        self.workspace_root = str(workspace_root)
        self.separator = separator
        self.flatten = flatten
        self.store = TranslationStore()
        self.pipeline = IngestionPipeline(self.store, self.projects, self.workspace_root, separator)
        self.watcher = ChangeWatcher(
            [project_root(p, self.workspace_root, separator) for p in self.projects],
            self._on_event,
            interval=poll_interval,
        )
        self.discovered: List[DiscoveredProject] = []
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        if self._started:
            return
        if not self.projects:
            raise ConfigurationMissing()

        log.info("[i18n-helper] is now active!")
        self.discovered = await discover(self.projects, self.workspace_root, self.separator)

        paths: List[str] = []
        for found in self.discovered:
            self.store.register(found.name, found.locales)
            paths.extend(os.path.join(found.root, loc + FILE_EXTENSION) for loc in found.locales)

        # nested namespaces (sub/en.json) only show up in the recursive scan
        seen = set(paths)
        paths.extend(p for p in await self.watcher.prime() if p not in seen)

        results = await asyncio.gather(*(self.pipeline.ingest(p) for p in paths))
        log.info("Initial load: %d of %d file(s) loaded", sum(results), len(paths))

        await self.watcher.start()
        self._started = True

    async def stop(self, clear: bool = False) -> None:
        await self.watcher.stop()
        self._started = False
        if clear:
            self.store.clear()

    async def _on_event(self, kind: str, path: str) -> None:
        await self.pipeline.ingest(path)

    def lookup(self, token: str, flatten: Optional[bool] = None) -> List[Entry]:
        mode = self.flatten if flatten is None else flatten
        return lookup(token, self.projects, self.store, mode)

    def projects_summary(self) -> List[Tuple[str, List[str], Optional[str]]]:
        """``(name, loaded locales, discovery error)`` per configured project."""
        errors = {found.name: found.error for found in self.discovered}
        return [
            (p.name, self.store.loaded_locales(p.name), errors.get(p.name))
            for p in self.projects
        ]
