from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .tree import Scalar, TranslationTree


class ProjectConfig(BaseModel):
    """One configured project: a name and a root relative to the workspace."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str

    @field_validator("name", "path")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


@dataclass(frozen=True)
class Slot:
    tree: TranslationTree
    version: int


@dataclass
class DiscoveredProject:
    name: str
    root: str
    locales: List[str] = field(default_factory=list)
    error: Optional[str] = None


class Entry(NamedTuple):
    project: str
    locale: str
    value: Scalar
