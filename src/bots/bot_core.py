from telegram import BotCommand, Update
from telegram.ext import Application, ContextTypes
import logging

from questions import QuestionsMiddleware

logger = logging.getLogger(__name__)

class BotCore:
    """
    Core bot implementation with common functionality.
    
    This class handles:
    1. Bot initialization
    2. Installing the questions middleware ahead of every other handler
    3. Basic error handling
    """
    
    def __init__(self, token: str, middleware: QuestionsMiddleware, concurrent_updates: bool = False):
        """
        Initialize the bot core.
        
        Args:
            token: Telegram bot token
            middleware: Questions middleware shared by the bot's handlers
            concurrent_updates: Whether PTB may process updates concurrently
        """
        logger.info("Initializing bot core...")
        builder = Application.builder().token(token).concurrent_updates(concurrent_updates)
        builder.post_init(self._register_bot_commands)
        self.application = builder.build()
        self.middleware = middleware
        self.application.add_handler(middleware.handler, group=-1)
        self.application.add_error_handler(self._on_error)
        logger.info("Bot core initialized")
    
    def run(self):
        """Run the bot"""
        logger.info("Starting bot...")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)

    def stop(self):
        """Stop the bot"""
        logger.info("Stopping bot...")
        self.application.stop()

    @staticmethod
    async def _on_error(update: object, context: ContextTypes.DEFAULT_TYPE):
        """Log errors raised by handlers and question callbacks."""
        logger.error("Error while handling update %s", update, exc_info=context.error)

    async def _register_bot_commands(self, application: Application):
        """Register bot commands once the application is ready."""

        bot_commands = [
            BotCommand("start", "Say hello"),
            BotCommand("survey", "Answer a few questions"),
            BotCommand("cancel", "Cancel the current questions"),
        ]

        await application.bot.set_my_commands(commands=bot_commands)
