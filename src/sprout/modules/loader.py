"""Module loader: builds the modules of one request and schedules them."""
import logging
from typing import Callable, Dict, Iterable, List, Set

from sqlalchemy.ext.asyncio import AsyncSession

from sprout.hooks import HookRegistry
from sprout.modules.base import Module

logger = logging.getLogger(__name__)

ModuleFactory = Callable[[HookRegistry, AsyncSession], Module]


class ModuleLoader:
    """Creates module instances and hooks them onto their starting action."""

    def __init__(
        self,
        factories: Iterable[ModuleFactory],
        disabled: Iterable[str] = (),
    ) -> None:
        self._factories: List[ModuleFactory] = list(factories)
        self._disabled = set(disabled)

    def boot(self, hooks: HookRegistry, db: AsyncSession) -> Dict[str, Module]:
        """Instantiate every module for this request.

        Returns the loaded modules keyed by name. Modules that are disabled
        or whose ``should_load()`` is false are skipped.

        Raises:
            ValueError: two modules share a name.
        """
        modules: Dict[str, Module] = {}
        seen: Set[str] = set()
        for factory in self._factories:
            module = factory(hooks, db)
            name = module.get_module_name()
            if name in seen:
                raise ValueError(f"Duplicate module name: {name}")
            seen.add(name)
            if name in self._disabled:
                logger.debug("Module %s disabled by configuration", name)
                continue
            if not module.should_load():
                logger.debug("Module %s chose not to load", name)
                continue

            hooks.add_action(
                module.get_starting_action(),
                module.load_module,
                module.get_priority(),
            )
            modules[name] = module
        return modules
