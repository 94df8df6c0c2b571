"""Error handling with owner notifications."""

from __future__ import annotations

import asyncio
import html
import json
import logging
import traceback
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from telegram import Bot, Update
from telegram.error import RetryAfter, TelegramError, TimedOut
from telegram.ext import Application, ContextTypes

from .config import settings
from .i18n import I18N, t

log = logging.getLogger(__name__)

# Error texts that are not worth reporting
IGNORE_ERRORS = (
    "Message is not modified",
    "Message to delete not found",
    "Chat not found",
)

T = TypeVar("T")


class ErrorHandler:
    """Centralized error handling with owner notifications."""

    @staticmethod
    async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log the error, report it to the owners and apologise to the user."""
        error = context.error
        if not error:
            return
        log.error("Exception while handling an update:", exc_info=error)

        if any(ignore in str(error) for ignore in IGNORE_ERRORS):
            log.debug("Ignoring known error: %s", error)
            return

        try:
            tb_string = "".join(traceback.format_exception(None, error, error.__traceback__))
            update_str = ""
            if isinstance(update, Update):
                update_str = json.dumps(update.to_dict(), indent=2, ensure_ascii=False)

            text = ErrorHandler.format_error_message(error, tb_string, update_str)
            await notify_owners(context.bot, text)

            if isinstance(update, Update) and update.effective_message:
                lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
                await ErrorHandler.send_with_retry(
                    update.effective_message.reply_text,
                    t(lang, "errors.generic"),
                    retry_label="reply_text",
                )
        except Exception as e:
            log.error("Error in error handler: %s", e)

    @staticmethod
    def format_error_message(error: BaseException, tb_string: str, update_str: str = "") -> str:
        # Truncate traceback if too long
        if len(tb_string) > 2000:
            tb_string = tb_string[-2000:]

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        parts = [
            "<b>🚨 i18n helper error</b>",
            f"<b>Time:</b> {timestamp}",
            f"<b>Error:</b> <code>{html.escape(str(error))}</code>",
            "",
            "<b>Traceback:</b>",
            f"<pre>{html.escape(tb_string)}</pre>",
        ]
        if update_str and len(update_str) < 500:  # Only include if not too long
            parts.extend(["", "<b>Update data:</b>", f"<pre>{html.escape(update_str)}</pre>"])
        return "\n".join(parts)

    @staticmethod
    async def send_with_retry(
        func: Callable[..., Awaitable[T]],
        *args: Any,
        retry_label: str = "send_message",
        max_attempts: int = 3,
        **kwargs: Any,
    ) -> T | None:
        """Best-effort wrapper around Telegram API calls with backoff."""
        attempt = 0
        while attempt < max_attempts:
            try:
                return await func(*args, **kwargs)
            except RetryAfter as exc:
                attempt += 1
                retry_after = exc.retry_after
                seconds = retry_after.total_seconds() if hasattr(retry_after, "total_seconds") else retry_after
                wait_time = int(seconds) + 1
                log.warning(
                    "Flood control on %s, retrying in %ss (attempt %s/%s)",
                    retry_label, wait_time, attempt, max_attempts,
                )
                await asyncio.sleep(wait_time)
            except TimedOut:
                attempt += 1
                wait_time = 2 ** attempt
                log.warning(
                    "Timeout on %s, retrying in %ss (attempt %s/%s)",
                    retry_label, wait_time, attempt, max_attempts,
                )
                await asyncio.sleep(wait_time)
            except TelegramError as exc:
                log.error("Telegram error on %s: %s", retry_label, exc)
                break
        return None


async def notify_owners(bot: Bot, text: str) -> None:
    """Send ``text`` (HTML) to every configured owner."""
    for owner_id in settings.OWNER_IDS:
        await ErrorHandler.send_with_retry(
            bot.send_message,
            chat_id=owner_id,
            text=text[:4000],
            parse_mode="HTML",
            retry_label=f"notify_owner_{owner_id}",
        )


def setup_error_handlers(application: Application) -> None:
    application.add_error_handler(ErrorHandler.handle_error)
    log.info("Error handlers configured")
