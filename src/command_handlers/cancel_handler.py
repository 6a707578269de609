from telegram import Update
from telegram.ext import CommandHandler, ContextTypes
import logging

logger = logging.getLogger(__name__)

NOTHING_TO_CANCEL = "There is nothing to cancel."

class CancelHandler:
    """Handler for the /cancel command when no questions are pending.

    Pending questions are cancelled by the questions middleware before this handler
    is reached, so only the idle case ends up here.
    """
    
    @staticmethod
    def get_handler() -> CommandHandler:
        """Get the cancel command handler.
        
        Returns:
            CommandHandler: The cancel command handler
        """
        return CommandHandler("cancel", CancelHandler._cancel_command)
    
    @staticmethod
    async def _cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle the /cancel command.
        
        Args:
            update: The update object
            context: The context object
        """
        logger.info(f"Cancel command received from user {update.effective_user.id} with nothing pending")
        await update.message.reply_text(NOTHING_TO_CANCEL)
