"""Action hooks fired at named points of a request lifecycle.

Callbacks run in ascending priority order; callbacks with the same
priority run in the order they were added. Both plain and async
callables are accepted.
"""
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10

# Lifecycle points fired by RequestLifecycle
ACTION_INIT = "init"
ACTION_SHUTDOWN = "shutdown"


class HookRegistry:
    """Per-request registry of action callbacks."""

    def __init__(self) -> None:
        self._actions: Dict[str, List[Tuple[int, Callable[..., Any]]]] = {}

    def add_action(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """Register *callback* on action *name*."""
        callbacks = self._actions.setdefault(name, [])
        callbacks.append((priority, callback))
        # Stable sort keeps registration order within a priority
        callbacks.sort(key=lambda item: item[0])

    def remove_action(
        self,
        name: str,
        callback: Callable[..., Any],
        priority: Optional[int] = None,
    ) -> bool:
        """Remove *callback* from action *name*.

        If *priority* is None every registration of the callback is removed.
        Returns True if anything was removed.
        """
        callbacks = self._actions.get(name, [])
        kept = [
            (prio, cb) for prio, cb in callbacks
            if not (cb == callback and (priority is None or prio == priority))
        ]
        removed = len(kept) != len(callbacks)
        if removed:
            self._actions[name] = kept
        return removed

    def has_action(self, name: str, callback: Optional[Callable[..., Any]] = None) -> bool:
        callbacks = self._actions.get(name, [])
        if callback is None:
            return bool(callbacks)
        return any(cb == callback for _, cb in callbacks)

    async def do_action(self, name: str, *args: Any) -> None:
        """Run every callback registered on *name*.

        Callbacks removed while the action is running are skipped if they
        have not run yet. Exceptions propagate to the caller.
        """
        pending = list(self._actions.get(name, []))
        logger.debug("do_action %s (%d callbacks)", name, len(pending))
        for entry in pending:
            if entry not in self._actions.get(name, []):
                continue
            _, callback = entry
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
