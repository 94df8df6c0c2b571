"""Shared fixtures: a throwaway workspace with translation projects."""
import json
from pathlib import Path

import pytest

from i18n_helper.store.models import ProjectConfig


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path):
    """Workspace with one project ``app`` holding ``en`` and ``fr``."""
    write_json(tmp_path / "i18n" / "app" / "en.json", {"greet": {"hello": "Hi"}})
    write_json(tmp_path / "i18n" / "app" / "fr.json", {"greet": {"hello": "Salut"}})
    return tmp_path


@pytest.fixture
def projects():
    return [ProjectConfig(name="app", path="i18n/app")]
