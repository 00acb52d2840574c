"""Middleware for request lifecycle, access control and error logging."""
import logging
from typing import Callable, Dict, Any, Awaitable, Optional

from aiogram import BaseMiddleware
from aiogram.types import Message, CallbackQuery, TelegramObject
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sprout.config import config
from sprout.lifecycle import RequestLifecycle
from sprout.modules.errors import ErrorCache, MODULE_NAME as ERRORS_MODULE
from sprout.modules.loader import ModuleLoader

logger = logging.getLogger(__name__)

UNHANDLED_EXCEPTION_CODE = "unhandled_exception"


class LifecycleMiddleware(BaseMiddleware):
    """Runs every update inside its own RequestLifecycle.

    Handlers receive the lifecycle as ``lifecycle`` and the error cache
    (if the module is loaded) as ``error_cache``.
    """

    def __init__(
        self,
        loader: ModuleLoader,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self.loader = loader
        self.session_factory = session_factory

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        async with RequestLifecycle(self.loader, self.session_factory) as lifecycle:
            data["lifecycle"] = lifecycle
            data["error_cache"] = lifecycle.get_module(ERRORS_MODULE)
            return await handler(event, data)


class AccessCheckMiddleware(BaseMiddleware):
    """Middleware to only let administrators talk to the bot in private chats."""

    async def __call__(
        self,
        handler: Callable[[Message | CallbackQuery, Dict[str, Any]], Awaitable[Any]],
        event: Message | CallbackQuery,
        data: Dict[str, Any]
    ) -> Any:
        """Check access and call handler if authorized."""
        if isinstance(event, Message):
            chat = event.chat
        elif isinstance(event, CallbackQuery):
            chat = event.message.chat if event.message else None
        else:
            # Unknown event type, deny
            return None

        user_id = event.from_user.id if event.from_user else None
        if not chat or not user_id:
            return None

        logger.info(
            "event=%s user_id=%d chat_id=%d chat_type=%s",
            type(event).__name__,
            user_id,
            chat.id,
            chat.type,
        )

        if chat.type != "private" or user_id not in config.ADMIN_IDS:
            logger.warning(
                "Rejected: chat_type=%s chat_id=%d user_id=%d",
                chat.type,
                chat.id,
                user_id,
            )
            return None

        data["is_admin"] = True
        return await handler(event, data)


class ErrorLoggingMiddleware(BaseMiddleware):
    """Middleware to catch and log unhandled exceptions in handlers.

    The exception is logged with full traceback, recorded in the request's
    error cache and re-raised so that aiogram's default behaviour is
    preserved.
    """

    async def __call__(
        self,
        handler: Callable[[Message | CallbackQuery, Dict[str, Any]], Awaitable[Any]],
        event: Message | CallbackQuery,
        data: Dict[str, Any],
    ) -> Any:
        try:
            return await handler(event, data)
        except Exception as exc:
            user_id = event.from_user.id if event.from_user else 0
            event_type = type(event).__name__
            logger.exception(
                "Unhandled error in %s handler for user %d: %s",
                event_type, user_id, exc,
            )
            error_cache: Optional[ErrorCache] = data.get("error_cache")
            if error_cache is not None:
                error_cache.log_error(
                    UNHANDLED_EXCEPTION_CODE,
                    str(exc) or type(exc).__name__,
                    {"event": event_type, "user_id": user_id, "exception": type(exc).__name__},
                )
            raise
