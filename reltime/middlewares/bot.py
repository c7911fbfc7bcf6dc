from typing import Callable, Dict, Any, Awaitable, Optional
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from reltime.services.formatter import RelativeTimeFormatter


class RelativeTimeBotMiddleware(BaseMiddleware):
    """
    Middleware for injecting a relative time function into handlers

    Register it after the middleware that fills the user's language, e.g.
    data["lang"]; the language is looked up when the function is called.
    """

    def __init__(
        self,
        formatter: Optional[RelativeTimeFormatter] = None,
        data_key: str = "rtf",
        lang_key: str = "lang",
    ):
        self.formatter = formatter or RelativeTimeFormatter()
        self.data_key = data_key
        self.lang_key = lang_key

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        """Process middleware"""
        data[self.data_key] = lambda date: self.formatter.format(date, data.get(self.lang_key))
        return await handler(event, data)
