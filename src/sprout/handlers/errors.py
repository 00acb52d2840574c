"""Admin handlers for the logged error history (private chat only).

/errors        - show the most recent logged errors
/error <code>  - show the first logged error with a code
/clear_errors  - empty the history for good
"""
import logging
from typing import Optional

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from sprout.formatters import format_error_list, format_error_record
from sprout.modules.errors import ErrorCache

logger = logging.getLogger(__name__)

router = Router()

# Telegram message limit is ~4096 chars
MAX_MESSAGE_LEN = 3800


@router.message(Command("errors"))
async def cmd_errors(message: Message, error_cache: Optional[ErrorCache] = None) -> None:
    """Show the most recent logged errors."""
    if error_cache is None:
        await message.answer("⚠️ Error logging is disabled.")
        return

    records = error_cache.get_cache()
    if not records:
        await message.answer("📜 <b>Errors</b>\n\nNo errors logged.")
        return

    text = format_error_list(records)
    if len(text) > MAX_MESSAGE_LEN:
        # Cut between lines so no HTML entity is split
        text = text[:text.rfind("\n", 0, MAX_MESSAGE_LEN)] + "\n...(truncated)"

    await message.answer(f"📜 <b>Last errors</b> ({len(records)} total):\n\n{text}")


@router.message(Command("error"))
async def cmd_error(
    message: Message,
    command: CommandObject,
    error_cache: Optional[ErrorCache] = None,
) -> None:
    """Show one logged error by code."""
    if error_cache is None:
        await message.answer("⚠️ Error logging is disabled.")
        return

    code = (command.args or "").strip()
    if not code:
        await message.answer("Usage: /error &lt;code&gt;")
        return

    record = error_cache.get_cache_item(code)
    if record is None and code.isdigit():
        # Codes may have been logged as integers
        record = error_cache.get_cache_item(int(code))
    if record is None:
        await message.answer("❌ No logged error with this code.")
        return

    await message.answer(format_error_record(record, with_data=True))


@router.message(Command("clear_errors"))
async def cmd_clear_errors(message: Message, error_cache: Optional[ErrorCache] = None) -> None:
    """Empty the logged error history."""
    if error_cache is None:
        await message.answer("⚠️ Error logging is disabled.")
        return

    if await error_cache.clear_cache():
        logger.info("Error history cleared by user %d", message.from_user.id)
        await message.answer("✅ Error history cleared.")
    else:
        await message.answer(
            "❌ Could not clear the error history. "
            "No new errors will be logged until the next request."
        )
