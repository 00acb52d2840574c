"""Error cache module.

Collects errors logged during a request and saves them to the
``sprout_logged_errors`` option when the request shuts down. The history
loaded at ``init`` plus anything logged since is available through
``get_cache()``; the next request sees the saved result.
"""
import copy
import logging
import time
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sprout.database.options import get_option, update_option
from sprout.errors import ErrorCode, SproutError
from sprout.hooks import HookRegistry, ACTION_SHUTDOWN
from sprout.modules.base import Module

logger = logging.getLogger(__name__)

MODULE_NAME = "sprout_errors"
OPTION_NAME = "sprout_logged_errors"
SHUTDOWN_PRIORITY = 999

ErrorRecord = Dict[str, Any]


class ErrorCache(Module):
    """Request-scoped cache of logged errors.

    Once ``clear_cache()`` has been called the cache is frozen: nothing
    can be added to it for the rest of the request.
    """

    def __init__(
        self,
        hooks: HookRegistry,
        db: AsyncSession,
        max_entries: Optional[int] = None,
    ) -> None:
        super().__init__(hooks, db)
        self.max_entries = max_entries
        self.frozen = False
        self._cache: List[ErrorRecord] = []

    async def load_module(self) -> None:
        stored = await get_option(self.db, OPTION_NAME)
        if isinstance(stored, list):
            self._cache = stored
        elif stored is not None:
            logger.warning(
                "Ignoring malformed %s option of type %s",
                OPTION_NAME,
                type(stored).__name__,
            )

        self.hooks.add_action(ACTION_SHUTDOWN, self.update_cache, SHUTDOWN_PRIORITY)

    async def update_cache(self) -> bool:
        """Save the cache to the option store.

        Returns:
            False if the store did not write the value, True otherwise.
        """
        entries = self._cache
        if self.max_entries is not None:
            entries = entries[-self.max_entries:]

        return await update_option(self.db, OPTION_NAME, entries, autoload=False)

    def log_error(
        self,
        code: ErrorCode,
        message: str,
        data: Any = None,
    ) -> SproutError:
        """Record an error and return it as a SproutError.

        The error is always returned, but it is only added to the cache
        while the cache is not frozen.
        """
        if not self.frozen:
            now = int(time.time())
            self._cache.append({
                "hash": f"{code}{now}",
                "code": code,
                "message": message,
                "data": data,
                "time": now,
            })

        return SproutError(code, message, data)

    def get_cache(self) -> List[ErrorRecord]:
        """Return the errors loaded at ``init`` plus those logged so far.

        Errors logged after this call are not included; they are saved at
        ``shutdown`` and show up in the next request.
        """
        return copy.deepcopy(self._cache)

    def get_cache_item(self, code: ErrorCode) -> Optional[ErrorRecord]:
        """Return the first cached error with the given code, or None."""
        for item in self._cache:
            if isinstance(item, dict) and item.get("code") == code:
                return copy.deepcopy(item)
        return None

    async def clear_cache(self) -> bool:
        """Freeze the cache and empty the stored option.

        On success the shutdown save is unregistered. The cache stays
        frozen even if emptying the option fails.
        """
        self.frozen = True

        if not await update_option(self.db, OPTION_NAME, []):
            logger.warning("Option %s was not emptied", OPTION_NAME)
            return False

        self.hooks.remove_action(ACTION_SHUTDOWN, self.update_cache)
        return True

    def get_module_name(self) -> str:
        """Name the loader and configuration know this module by."""
        return MODULE_NAME
