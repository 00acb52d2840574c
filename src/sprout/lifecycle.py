"""Request scope: boots the modules on entry, shuts them down on exit.

    async with RequestLifecycle(loader, AsyncSessionLocal) as lifecycle:
        cache = lifecycle.get_module("sprout_errors")
        ...

``init`` fires when the scope is entered and ``shutdown`` fires on every
exit path, including exceptions raised inside the block.
"""
import logging
from types import TracebackType
from typing import Dict, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sprout.hooks import HookRegistry, ACTION_INIT, ACTION_SHUTDOWN
from sprout.modules.base import Module
from sprout.modules.loader import ModuleLoader

logger = logging.getLogger(__name__)


class RequestLifecycle:
    """One request's hooks, database session and loaded modules."""

    def __init__(
        self,
        loader: ModuleLoader,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self.loader = loader
        self.session_factory = session_factory
        self.hooks = HookRegistry()
        self.db: Optional[AsyncSession] = None
        self.modules: Dict[str, Module] = {}

    def get_module(self, name: str) -> Optional[Module]:
        return self.modules.get(name)

    async def __aenter__(self) -> "RequestLifecycle":
        self.db = self.session_factory()
        try:
            self.modules = self.loader.boot(self.hooks, self.db)
            await self.hooks.do_action(ACTION_INIT)
        except Exception:
            await self.db.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await self.hooks.do_action(ACTION_SHUTDOWN)
        except Exception as shutdown_exc:
            if exc is None:
                raise
            # The request exception takes precedence over a failed flush
            logger.exception("Shutdown failed while handling %r: %s", exc, shutdown_exc)
        finally:
            if self.db is not None:
                await self.db.close()
