"""Main entry point for the bot."""
import asyncio
import logging
import sys
from functools import partial

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand, BotCommandScopeAllPrivateChats

from sprout.config import config
from sprout.database import AsyncSessionLocal, init_db
from sprout.middlewares import (
    AccessCheckMiddleware,
    ErrorLoggingMiddleware,
    LifecycleMiddleware,
)
from sprout.modules import ErrorCache, ModuleLoader

# Import handlers
from sprout.handlers import errors

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)

logger = logging.getLogger(__name__)


def build_module_loader() -> ModuleLoader:
    """Create the loader for every module the host ships with."""
    return ModuleLoader(
        [partial(ErrorCache, max_entries=config.ERRORS_MAX_ENTRIES)],
        disabled=config.DISABLED_MODULES,
    )


async def setup_bot_commands(bot: Bot) -> None:
    """Register bot commands for the Telegram menu button (admin chats only)."""
    private_commands = [
        BotCommand(command="errors", description="Last logged errors"),
        BotCommand(command="error", description="Show an error by code"),
        BotCommand(command="clear_errors", description="Clear the error history"),
    ]
    await bot.set_my_commands(private_commands, scope=BotCommandScopeAllPrivateChats())

    logger.info("Bot commands registered successfully")


async def main() -> None:
    """Main function to start the bot."""
    # Validate configuration
    try:
        config.validate()
        logger.info("Configuration validated successfully")
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    # Initialize database
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Database initialization error: %s", e)
        sys.exit(1)

    # Create bot instance
    bot = Bot(
        token=config.BOT_TOKEN,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML)
    )

    # Register bot commands for menu button
    try:
        await setup_bot_commands(bot)
    except Exception as e:
        logger.warning("Failed to set bot commands: %s", e)

    # Create dispatcher
    dp = Dispatcher()

    # Register middleware
    # Request lifecycle (outermost, every update gets its own modules)
    dp.update.outer_middleware(LifecycleMiddleware(build_module_loader(), AsyncSessionLocal))

    # Error logging middleware (catches all unhandled handler exceptions)
    dp.message.outer_middleware(ErrorLoggingMiddleware())
    dp.callback_query.outer_middleware(ErrorLoggingMiddleware())

    # Access check middleware
    dp.message.middleware(AccessCheckMiddleware())
    dp.callback_query.middleware(AccessCheckMiddleware())

    # Register routers (handlers)
    dp.include_router(errors.router)

    logger.info("Starting bot...")

    # Start polling
    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        sys.exit(1)
