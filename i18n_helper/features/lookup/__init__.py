from __future__ import annotations

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from .handlers import on_text, projects, reload, translate


def register(app: Application) -> None:
    app.add_handler(CommandHandler("tr", translate))
    app.add_handler(CommandHandler("projects", projects))
    app.add_handler(CommandHandler("reload", reload))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, on_text))
