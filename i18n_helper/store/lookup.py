"""Read-side queries against a :class:`TranslationStore`."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from .models import Entry, ProjectConfig
from .store import TranslationStore
from .tree import walk

# a single-quoted string containing at least one dot
_TOKEN_RE = re.compile(r"'(.*?\..*?)'")

HOVER_RADIUS = 50


def key_path(token: str, flatten: bool) -> List[str]:
    return [token] if flatten else token.split(".")


def lookup(
    token: str,
    projects: Sequence[ProjectConfig],
    store: TranslationStore,
    flatten: bool = False,
) -> List[Entry]:
    """Resolve ``token`` in every loaded locale of every project.

    Only truthy values are returned, ordered by project then locale.
    """
    keys = key_path(token, flatten)
    entries: List[Entry] = []
    for project in projects:
        for locale in store.locales(project.name):
            value = walk(store.get(project.name, locale), keys)
            if value:
                entries.append(Entry(project.name, locale, value))
    return entries


def extract_token(text: str, position: Optional[int] = None, radius: int = HOVER_RADIUS) -> Optional[str]:
    """Find the first quoted dotted key near ``position`` in ``text``."""
    if position is not None:
        text = text[max(position - radius, 0):position + radius]
    match = _TOKEN_RE.search(text)
    return match.group(1) if match else None


def group_by_project(entries: Sequence[Entry]) -> Dict[str, List[Entry]]:
    grouped: Dict[str, List[Entry]] = {}
    for entry in entries:
        grouped.setdefault(entry.project, []).append(entry)
    return grouped


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_table(entries: Sequence[Entry]) -> str:
    """Plain-text table: a header per project, then one ``[locale]  value`` row per entry."""
    blocks = []
    for project, rows in group_by_project(entries).items():
        width = max(len(r.locale) for r in rows) + 2
        lines = [project, "-" * max(len(project), 3)]
        lines.extend(f"{'[' + r.locale + ']':<{width}}  {_display(r.value)}" for r in rows)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
