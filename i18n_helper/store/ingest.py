from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any, Sequence

from ..core.errors import FileReadFailure, ParseFailure
from ..core.logging_config import get_logger
from .models import ProjectConfig
from .paths import resolve
from .store import TranslationStore
from .tree import build_tree

log = get_logger(__name__)


def _read(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise FileReadFailure(path, e.strerror or e) from e


def _parse(path: str, raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8-sig"))
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise ParseFailure(path, e) from e


class IngestionPipeline:
    """Load one translation file into the store.

    Failures are logged and leave the target slot as it was.
    """

    def __init__(
        self,
        store: TranslationStore,
        projects: Sequence[ProjectConfig],
        workspace_root: str,
        separator: str = os.sep,
    ) -> None:
        self.store = store
        self.projects = list(projects)
        self.workspace_root = workspace_root
        self.separator = separator

    async def ingest(self, path: str) -> bool:
        identity = resolve(path, self.projects, self.workspace_root, self.separator)
        if identity.project is None or not identity.locale:
            log.debug("Ignoring %s (no project/locale)", path)
            return False

        ticket = self.store.reserve()
        try:
            raw = await asyncio.to_thread(_read, path)
            data = _parse(path, raw)
        except FileReadFailure as e:
            log.warning("Failed to read %s: %s", path, e.reason)
            return False
        except ParseFailure as e:
            log.warning("Failed to parse %s: %s", path, e.reason)
            return False

        if not self.store.commit(identity.project, identity.locale, build_tree(data), ticket):
            return False
        log.info("%s %s loaded", identity.project, identity.locale)
        return True
