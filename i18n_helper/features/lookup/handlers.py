from __future__ import annotations

import asyncio
import html
from typing import Callable, Optional

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import Application, ContextTypes

from ...core.config import Settings, load_settings, settings
from ...core.error_handler import notify_owners
from ...core.errors import ConfigurationMissing
from ...core.i18n import I18N, t
from ...core.logging_config import get_logger
from ...core.permissions import require_owner
from ...store.lookup import extract_token, render_table
from ...store.service import LocalizationService

log = get_logger(__name__)

SERVICE_KEY = "l10n"
LOCK_KEY = "l10n_lock"
MAX_MESSAGE = 4000


def build_service(cfg: Settings) -> LocalizationService:
    return LocalizationService(
        cfg.I18N_PROJECTS,
        cfg.workspace_root,
        flatten=cfg.I18N_FLATTEN,
        poll_interval=cfg.WATCH_INTERVAL,
    )


def get_service(app: Application) -> Optional[LocalizationService]:
    return app.bot_data.get(SERVICE_KEY)


def _lifecycle_lock(app: Application) -> asyncio.Lock:
    # serialises start/stop/reload across concurrent updates
    return app.bot_data.setdefault(LOCK_KEY, asyncio.Lock())


async def _start(app: Application, cfg: Settings) -> Optional[LocalizationService]:
    service = build_service(cfg)
    try:
        await service.start()
    except ConfigurationMissing as e:
        log.error("%s", e)
        await notify_owners(app.bot, html.escape(str(e)))
        await _stop(app)
        return None
    previous = app.bot_data.get(SERVICE_KEY)
    app.bot_data[SERVICE_KEY] = service
    if previous is not None:
        await previous.stop(clear=True)
    return service


async def _stop(app: Application) -> None:
    service = app.bot_data.pop(SERVICE_KEY, None)
    if service is not None:
        await service.stop(clear=True)


async def start_service(app: Application, cfg: Settings = settings) -> Optional[LocalizationService]:
    """Create and start the translation cache; store it in ``bot_data``.

    A service already stored there is stopped once the new one is running.
    """
    async with _lifecycle_lock(app):
        return await _start(app, cfg)


async def stop_service(app: Application) -> None:
    async with _lifecycle_lock(app):
        await _stop(app)


async def restart_service(
    app: Application, load: Callable[[], Settings] = load_settings
) -> Optional[LocalizationService]:
    """Stop the running service and start one from freshly loaded settings.

    Raises ``ValueError`` (after stopping) when the new settings are invalid.
    """
    async with _lifecycle_lock(app):
        await _stop(app)
        cfg = load()
        return await _start(app, cfg)


def _format_result(lang: str, key: str, service: LocalizationService) -> Optional[str]:
    entries = service.lookup(key)
    if not entries:
        return None
    text = t(lang, "tr.header", key=html.escape(key)) + "\n<pre>" + html.escape(render_table(entries)) + "</pre>"
    if len(text) > MAX_MESSAGE:
        text = text[: MAX_MESSAGE - 7] + "…</pre>"
    return text


async def translate(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    msg = update.effective_message
    if not msg:
        return
    lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
    service = get_service(context.application)
    if service is None:
        await msg.reply_text(t(lang, "tr.not_configured"))
        return
    if not context.args:
        await msg.reply_text(t(lang, "tr.usage"))
        return

    key = " ".join(context.args).strip().strip("'\"")
    text = _format_result(lang, key, service)
    if text is None:
        text = t(lang, "tr.none", key=html.escape(key))
    await msg.reply_text(text, parse_mode=ParseMode.HTML)


async def on_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    msg = update.effective_message
    if not msg or not msg.text:
        return
    service = get_service(context.application)
    if service is None:
        return
    key = extract_token(msg.text)
    if not key:
        return
    text = _format_result(I18N.pick_lang(update, fallback=settings.DEFAULT_LANG), key, service)
    if text:
        await msg.reply_text(text, parse_mode=ParseMode.HTML)


async def projects(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    msg = update.effective_message
    if not msg:
        return
    lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
    service = get_service(context.application)
    if service is None:
        await msg.reply_text(t(lang, "tr.not_configured"))
        return
    lines = [t(lang, "projects.header")]
    for name, locales, error in service.projects_summary():
        shown = ", ".join(html.escape(loc) for loc in locales) or t(lang, "projects.empty")
        if error:
            shown += " " + t(lang, "projects.unavailable", error=html.escape(error))
        lines.append(t(lang, "projects.line", name=html.escape(name), locales=shown))
    await msg.reply_text("\n".join(lines), parse_mode=ParseMode.HTML)


@require_owner
async def reload(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    msg = update.effective_message
    lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
    try:
        service = await restart_service(context.application)
    except ValueError as e:
        log.error("Reload failed: %s", e)
        if msg:
            await msg.reply_text(t(lang, "reload.failed", error=html.escape(str(e))), parse_mode=ParseMode.HTML)
        return
    if msg:
        if service is None:
            await msg.reply_text(t(lang, "tr.not_configured"))
        else:
            await msg.reply_text(t(lang, "reload.done", count=len(service.projects)))
