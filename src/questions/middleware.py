import asyncio
import logging
import weakref
from typing import Any, Iterable, Optional, Union

from telegram import Update
from telegram.ext import ApplicationHandlerStop, BaseHandler, CallbackContext

from models.enums import Decision
from questions.context import QuestionContext
from questions.decision import check_context, run_callback
from questions.options import QuestionsOptions
from questions.question import Question
from questions.store import QuestionStore, QuestionStoring

logger = logging.getLogger(__name__)


class QuestionsMiddleware:
    """
    Drives pending questions for every conversation the bot takes part in.

    Register ``handler`` in a group that runs before the bot's other handlers:

        middleware = questions(QuestionsOptions(cancel=CancelRule(has="message:text", hears="/cancel")))
        application.add_handler(middleware.handler, group=-1)

    Updates that answer, cancel or stop a pending question end there; every other
    update continues to the handlers in later groups.
    """

    def __init__(self, options: Optional[QuestionsOptions] = None, store: Optional[QuestionStoring] = None):
        self.options = options or QuestionsOptions()
        self.store = store if store is not None else QuestionStore()
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    @property
    def handler(self) -> "QuestionsHandler":
        return QuestionsHandler(self)

    def context_for(self, update: Update, context: CallbackContext) -> QuestionContext:
        return QuestionContext(update, context, self)

    async def ask(self, ctx: QuestionContext, questions: Union[Question, Iterable[Question]]) -> None:
        """
        Start asking ``questions`` in the conversation of ``ctx``.

        The first question's pre-step runs before this returns; the pre-steps of the
        questions after it run when they are first answered. Anything already pending
        for the conversation is discarded.

        Raises:
            ValueError: No questions were given
        """
        queue = [questions] if isinstance(questions, Question) else list(questions)
        if not queue:
            raise ValueError("ask() needs at least one question")

        first = queue[0]
        if first.pre_step and not first.pre_step_done:
            await run_callback(first.pre_step, ctx)
            first.pre_step_done = True

        self.store.install(ctx.key, queue)
        logger.debug("Asking %d question(s) for %s", len(queue), ctx.key)

    def cancel_questions(self, ctx: QuestionContext) -> bool:
        cancelled = self.store.clear(ctx.key)
        if cancelled:
            logger.info("Pending questions for %s cancelled", ctx.key)
        return cancelled

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def process(self, update: Update, context: CallbackContext) -> Decision:
        """Run ``update`` through its conversation's pending questions, one update per conversation at a time."""
        ctx = self.context_for(update, context)
        lock = self._lock_for(ctx.key)
        async with lock:
            decision = await check_context(ctx, self.store, self.options)
        logger.debug("Update %s for %s: %s", update.update_id, ctx.key, decision.value)
        return decision

    async def callback(self, update: Update, context: CallbackContext) -> None:
        decision = await self.process(update, context)
        if decision.consumed:
            raise ApplicationHandlerStop


class QuestionsHandler(BaseHandler):
    """PTB handler that hands every update to a QuestionsMiddleware."""

    def __init__(self, middleware: QuestionsMiddleware):
        super().__init__(middleware.callback, block=True)
        self.middleware = middleware

    def check_update(self, update: object) -> bool:
        return isinstance(update, Update)


def questions(options: Optional[QuestionsOptions] = None, store: Optional[QuestionStoring] = None, **kwargs: Any) -> QuestionsMiddleware:
    """
    Build a QuestionsMiddleware.

    Options can be given as a QuestionsOptions or as its fields:

        questions(cancel=CancelRule(has="message:text", hears="/cancel"))
    """
    if options is None and kwargs:
        options = QuestionsOptions(**kwargs)
    elif kwargs:
        fields = {name: getattr(options, name) for name in QuestionsOptions.model_fields}
        options = QuestionsOptions(**{**fields, **kwargs})
    return QuestionsMiddleware(options=options, store=store)
