"""In-memory translation store: project -> locale -> slot."""

from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterable, List, Optional

from .models import Slot
from .tree import TranslationTree

log = logging.getLogger(__name__)


class TranslationStore:
    """Shared mapping of loaded translation trees.

    Every mutation runs on the event loop thread and swaps a whole immutable
    :class:`Slot`, so readers never see a partial tree. Writers reserve a
    ticket before doing I/O; a commit carrying a ticket older than the slot's
    current version is dropped.
    """

    def __init__(self) -> None:
        self._slots: Dict[str, Dict[str, Optional[Slot]]] = {}
        self._tickets = itertools.count(1)

    def register(self, project: str, locales: Iterable[str] = ()) -> None:
        """Declare known locales so lookups enumerate them in this order."""
        slots = self._slots.setdefault(project, {})
        for locale in locales:
            slots.setdefault(locale, None)

    def reserve(self) -> int:
        return next(self._tickets)

    def commit(self, project: str, locale: str, tree: TranslationTree, ticket: int) -> bool:
        slots = self._slots.setdefault(project, {})
        current = slots.get(locale)
        if current is not None and current.version > ticket:
            log.debug(
                "Dropping stale load for %s %s (ticket %s < version %s)",
                project, locale, ticket, current.version,
            )
            return False
        slots[locale] = Slot(tree=tree, version=ticket)
        return True

    def get(self, project: str, locale: str) -> Optional[TranslationTree]:
        slot = self._slots.get(project, {}).get(locale)
        return slot.tree if slot is not None else None

    def version(self, project: str, locale: str) -> int:
        slot = self._slots.get(project, {}).get(locale)
        return slot.version if slot is not None else 0

    def locales(self, project: str) -> List[str]:
        return list(self._slots.get(project, {}))

    def loaded_locales(self, project: str) -> List[str]:
        return [loc for loc, slot in self._slots.get(project, {}).items() if slot is not None]

    def projects(self) -> List[str]:
        return list(self._slots)

    def clear(self) -> None:
        self._slots.clear()

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        project, locale = item
        return self.get(project, locale) is not None
