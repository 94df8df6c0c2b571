from __future__ import annotations

from typing import List

from telegram import BotCommand, Update
from telegram.constants import ParseMode
from telegram.ext import Application, ApplicationBuilder, CommandHandler, ContextTypes

from .core.config import settings
from .core.error_handler import setup_error_handlers
from .core.i18n import I18N, t
from .core.logging_config import get_logger, setup_logging
from .features.lookup import register as register_lookup
from .features.lookup.handlers import start_service, stop_service

log = get_logger(__name__)


async def on_startup(app: Application) -> None:
    await set_bot_commands(app)
    await start_service(app)


async def on_shutdown(app: Application) -> None:
    await stop_service(app)


async def set_bot_commands(app: Application) -> None:
    cmds: List[BotCommand] = [
        BotCommand("tr", "Look up a translation key"),
        BotCommand("projects", "List projects and locales"),
        BotCommand("help", "Show help"),
        BotCommand("reload", "Reload configuration (owners)"),
    ]
    await app.bot.set_my_commands(cmds)


def make_app() -> Application:
    I18N.load_locales()

    app = (
        ApplicationBuilder()
        .token(settings.BOT_TOKEN)
        .concurrent_updates(True)
        .post_init(on_startup)
        .post_shutdown(on_shutdown)
        .build()
    )

    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("help", help_))
    register_lookup(app)

    setup_error_handlers(app)

    return app


async def start(update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
    lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
    user = update.effective_user
    text = t(lang, "start.welcome", first_name=(user.first_name if user else "") or "")
    await update.effective_message.reply_text(text, parse_mode=ParseMode.HTML)


async def help_(update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
    lang = I18N.pick_lang(update, fallback=settings.DEFAULT_LANG)
    await update.effective_message.reply_text(t(lang, "help.text"))


def main() -> None:
    setup_logging(log_file=True, debug=settings.DEBUG)
    log.info(
        "Bot starting: %d project(s) under %s",
        len(settings.I18N_PROJECTS),
        settings.workspace_root,
    )
    app = make_app()
    app.run_polling(allowed_updates=["message"], drop_pending_updates=True)


if __name__ == "__main__":
    main()
