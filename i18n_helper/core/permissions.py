from __future__ import annotations

from typing import Awaitable, Callable, Optional

from telegram import Update
from telegram.ext import ContextTypes

from .config import settings


def is_owner(user_id: Optional[int]) -> bool:
    return bool(user_id and user_id in settings.OWNER_IDS)


def require_owner(func: Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]):
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if user and is_owner(user.id):
            return await func(update, context)
        # silently ignore everyone else
    return wrapper
