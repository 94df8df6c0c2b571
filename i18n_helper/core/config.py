from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, List

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..store.models import ProjectConfig

ENV_FILE_NAME = ".env"
env_path = Path(__file__).parent.parent.parent / ENV_FILE_NAME


class Settings(BaseSettings):
    BOT_TOKEN: str = ""
    OWNER_IDS: Annotated[List[int], NoDecode] = []
    DEFAULT_LANG: str = "en"
    DEBUG: bool = False

    WORKSPACE_ROOT: Path = Path.cwd()
    I18N_PROJECTS: Annotated[List[ProjectConfig], NoDecode] = []
    I18N_FLATTEN: bool = False
    WATCH_INTERVAL: float = 1.0

    @field_validator("OWNER_IDS", mode="before")
    @classmethod
    def parse_owner_ids(cls, v):  # type: ignore
        if v in (None, "", []):
            return []
        if isinstance(v, list):
            return [int(x) for x in v]
        if isinstance(v, str):
            return [int(x.strip()) for x in v.split(",") if x.strip()]
        return []

    @field_validator("I18N_PROJECTS", mode="before")
    @classmethod
    def parse_projects(cls, v):  # type: ignore
        # JSON list of {"name": ..., "path": ...}
        if v in (None, ""):
            return []
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("WATCH_INTERVAL")
    @classmethod
    def positive_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("WATCH_INTERVAL must be positive")
        return v

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def workspace_root(self) -> str:
        return str(self.WORKSPACE_ROOT.expanduser().resolve())


def load_settings() -> Settings:
    # Re-read .env so a reload picks up edits
    load_dotenv(env_path, override=True)
    return Settings()


settings = load_settings()

