"""Error types raised by the localization store."""

from __future__ import annotations

from pathlib import Path


class I18nHelperError(Exception):
    """Base class for localization store errors."""


class ConfigurationMissing(I18nHelperError):
    """No projects are configured; the store cannot start."""

    def __init__(self, message: str = "`I18N_PROJECTS` not found!") -> None:
        super().__init__(message)


class _PathError(I18nHelperError):
    def __init__(self, path: str | Path, reason: object = None) -> None:
        self.path = str(path)
        self.reason = reason
        msg = self.path if reason is None else f"{self.path}: {reason}"
        super().__init__(msg)


class DirectoryUnavailable(_PathError):
    """A project root could not be listed."""


class FileReadFailure(_PathError):
    """A translation file could not be read."""


class ParseFailure(_PathError):
    """A translation file is not valid JSON."""
