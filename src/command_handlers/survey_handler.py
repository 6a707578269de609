import logging

from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from models.models import SurveyAnswers
from questions import QuestionContext, QuestionsMiddleware

logger = logging.getLogger(__name__)

ASK_NAME = "What's your name?"
ASK_AGE = "Nice to meet you, {name}! How old are you?"
ASK_AGE_AGAIN = "Please answer with a number."
ASK_COLOURS = "Name your favourite colours, one per message. Send \"done\" when you're finished."
COLOUR_NOTED = "Noted {colour}."
SURVEY_DONE = "Thanks! {summary}"
DONE_WORD = "done"


def _is_plain_text(ctx: QuestionContext) -> bool:
    text = ctx.text or ""
    return bool(text.strip()) and not text.startswith("/")


class SurveyHandler:
    """Handler for the /survey command.

    Asks for a name, an age and a list of colours using the questions middleware.
    Each answer handler sends the prompt for the question that follows it.
    """

    def __init__(self, middleware: QuestionsMiddleware):
        self.middleware = middleware

    def get_handler(self) -> CommandHandler:
        return CommandHandler("survey", self.start_survey)

    async def start_survey(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.info(f"Survey started by user {update.effective_user.id}")
        ctx = self.middleware.context_for(update, context)
        answers = SurveyAnswers()

        async def save_name(ctx: QuestionContext):
            answers.name = ctx.text.strip()
            await ctx.message.reply_text(ASK_AGE.format(name=answers.name))

        async def check_age(ctx: QuestionContext) -> bool:
            if (ctx.text or "").strip().isdigit():
                return True
            await ctx.message.reply_text(ASK_AGE_AGAIN)
            return False

        async def save_age(ctx: QuestionContext):
            answers.age = int(ctx.text.strip())
            await ctx.message.reply_text(ASK_COLOURS)

        async def save_colour(ctx: QuestionContext):
            colour = ctx.text.strip()
            answers.colours.append(colour)
            await ctx.message.reply_text(COLOUR_NOTED.format(colour=colour))

        async def finished(ctx: QuestionContext) -> bool:
            if (ctx.text or "").strip().lower() != DONE_WORD:
                return False
            await ctx.message.reply_text(SURVEY_DONE.format(summary=answers.summary))
            logger.info(f"Survey finished by user {update.effective_user.id}")
            return True

        await ctx.ask([
            ctx.question("message:text")
            .do_before(lambda ctx: ctx.message.reply_text(ASK_NAME))
            .filter(_is_plain_text)
            .then_do(save_name),
            ctx.question("message:text")
            .filter(check_age)
            .then_do(save_age),
            ctx.question("message:text")
            .filter(_is_plain_text)
            .then_do(save_colour)
            .repeat_until(finished),
        ])
