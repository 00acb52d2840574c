"""Key-value option store.

Modules keep small pieces of state (settings, caches) here instead of
owning tables. Values are stored as JSON, so anything ``json`` can
serialise round-trips.
"""
import copy
import logging
from typing import Any, Optional

from sqlalchemy import select, delete as sa_delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sprout.database.models import Option

logger = logging.getLogger(__name__)


async def _get_option_row(db: AsyncSession, name: str) -> Optional[Option]:
    result = await db.execute(
        select(Option).where(Option.option_name == name)
    )
    return result.scalar_one_or_none()


async def get_option(db: AsyncSession, name: str, default: Any = None) -> Any:
    """Return the stored value of an option, or *default* if it doesn't exist.

    The value is a copy; mutating it does not touch the session state.
    """
    option = await _get_option_row(db, name)
    if option is None:
        return default
    return copy.deepcopy(option.option_value)


async def update_option(
    db: AsyncSession,
    name: str,
    value: Any,
    autoload: Optional[bool] = None,
) -> bool:
    """Create or update an option.

    Args:
        db: Database session
        name: Option name
        value: New value (JSON-serialisable)
        autoload: New autoload flag. None keeps the stored flag
            (new options are autoloaded).

    Returns:
        True if the value was written, False if it was unchanged
        or the write failed.
    """
    try:
        option = await _get_option_row(db, name)
        if option is None:
            db.add(Option(
                option_name=name,
                option_value=copy.deepcopy(value),
                autoload=True if autoload is None else autoload,
            ))
        else:
            if option.option_value == value:
                return False
            option.option_value = copy.deepcopy(value)
            if autoload is not None:
                option.autoload = autoload
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to update option %s", name)
        return False

    logger.debug("Updated option %s", name)
    return True


async def delete_option(db: AsyncSession, name: str) -> bool:
    """Delete an option. Returns True if a row was removed."""
    try:
        result = await db.execute(
            sa_delete(Option).where(Option.option_name == name)
        )
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to delete option %s", name)
        return False
    return result.rowcount > 0
