from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Any, Dict

from telegram import Update


log = logging.getLogger(__name__)


class I18N:
    """Messages the bot itself replies with (not the watched translations)."""

    _messages: Dict[str, Dict[str, str]] = {}

    @classmethod
    def load_locales(cls) -> None:
        for entry in resources.files("i18n_helper.locales").iterdir():
            if not entry.name.endswith(".json"):
                continue
            lang = entry.name[: -len(".json")]
            try:
                cls._messages[lang] = json.loads(entry.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:  # pragma: no cover
                log.warning("Failed to load locale %s: %s", lang, e)

    @staticmethod
    def pick_lang(update: Update | None, fallback: str = "en") -> str:
        lc = update and update.effective_user and update.effective_user.language_code
        if lc:
            lc = lc.split("-")[0]
            if lc in I18N._messages:
                return lc
        return fallback if fallback in I18N._messages else "en"


def t(lang: str, key: str, /, **kwargs: Any) -> str:
    msg = I18N._messages.get(lang, {}).get(key)
    if msg is None:
        # fallback to English
        msg = I18N._messages.get("en", {}).get(key, key)
    try:
        return msg.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return msg
