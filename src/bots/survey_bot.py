from bots.bot_core import BotCore
from command_handlers.cancel_handler import CancelHandler
from command_handlers.start_handler import StartHandler
from command_handlers.survey_handler import SurveyHandler
from config.settings import Settings
from questions import CancelRule, QuestionContext, questions

import logging

logger = logging.getLogger(__name__)

CANCELLED = "Okay, questions cancelled."

class SurveyBot:
    """
    Demo bot that collects a short survey through pending questions.
    
    This bot is responsible for:
    1. Installing the questions middleware with a global cancel command
    2. Setting up command handlers (/start, /survey, /cancel)
    3. Managing the bot lifecycle
    """
    
    def __init__(self, settings: Settings):
        """
        Initialize the survey bot.
        
        Args:
            settings: Bot settings
        """
        logger.info("Initializing survey bot...")
        self.middleware = questions(
            cancel=CancelRule(
                has="message:text",
                hears=settings.cancel_command,
                on_cancel=self._on_cancel,
            )
        )
        self.core = BotCore(
            token=settings.telegram_bot_token,
            middleware=self.middleware,
            concurrent_updates=settings.concurrent_updates,
        )
        self._setup_command_handlers()
        logger.info("Survey bot initialized")

    @staticmethod
    async def _on_cancel(ctx: QuestionContext):
        await ctx.message.reply_text(CANCELLED)
    
    def _setup_command_handlers(self):
        """Setup handlers specific to the survey bot."""
        logger.info("Setting up command handlers...")
        self.core.application.add_handler(StartHandler.get_handler())
        self.core.application.add_handler(SurveyHandler(self.middleware).get_handler())
        self.core.application.add_handler(CancelHandler.get_handler())
        logger.info("Command handlers set up")

    def run(self):
        """Run the bot"""
        logger.info("Starting survey bot...")
        self.core.run()
    
    def stop(self):
        """Stop the bot"""
        logger.info("Stopping survey bot...")
        self.core.stop()
