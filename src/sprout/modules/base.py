"""Module contract consumed by the module loader."""
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from sprout.hooks import HookRegistry, DEFAULT_PRIORITY, ACTION_INIT


class Module(ABC):
    """Base class for Sprout modules.

    A module is created once per request with that request's hook
    registry and database session. The loader registers ``load_module``
    on ``get_starting_action()`` at ``get_priority()``.
    """

    def __init__(self, hooks: HookRegistry, db: AsyncSession) -> None:
        self.hooks = hooks
        self.db = db

    @abstractmethod
    def get_module_name(self) -> str:
        """Unique module name, also used to disable it from configuration."""

    def should_load(self) -> bool:
        """High-level switch deciding whether the module loads at all."""
        return True

    @abstractmethod
    async def load_module(self) -> None:
        """Start the module's chain of events."""

    def get_starting_action(self) -> str:
        """Action on which the loader runs ``load_module``."""
        return ACTION_INIT

    def get_priority(self) -> int:
        """Priority of ``load_module`` on the starting action."""
        return DEFAULT_PRIORITY
