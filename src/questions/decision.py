"""
Decides what a single update means for the conversation it belongs to.

The checks run in a fixed order and the first one that applies wins:

1. nothing pending for the conversation: pass through
2. global cancel rule: drop everything pending
3. global admission filter: pass through when it rejects the update
4. update does not match the head question: pass through
5. question cancel predicate: drop everything pending
6. repeat-until predicate: retire the head question without handling the update
7. question filter: pass through when it rejects the update
8. first-time pre-step, then the answer handler; retire the head question once it
   has been answered as many times as it repeats

Callback errors are not caught. Every mutation happens after the callback that
decided it has returned, so a failing callback leaves the pending questions as
they were.
"""
import inspect
import logging
from typing import Optional

from models.enums import Decision
from questions.options import CancelRule, QuestionsOptions
from questions.question import Question
from questions.store import QuestionStoring

logger = logging.getLogger(__name__)


class MissingAnswerHandlerError(RuntimeError):
    """Raised when an accepted answer reaches a question that has no handler."""

    def __init__(self, question: Question):
        super().__init__(f"{question!r} has no answer handler; configure one with then_do()")
        self.question = question


async def run_callback(func, ctx):
    result = func(ctx)
    if inspect.isawaitable(result):
        result = await result
    return result


async def _global_cancel_fires(rule: CancelRule, ctx) -> bool:
    if not ctx.has(rule.has):
        return False
    if rule.hears is not None:
        return ctx.has_text(rule.hears)
    if rule.filter:
        return bool(await run_callback(rule.filter, ctx))
    return True


def _retire(store: QuestionStoring, key: str, question: Question) -> None:
    # A callback may have re-registered the conversation; the newer questions win.
    if store.peek_head(key) is question:
        store.advance(key)


async def check_context(ctx, store: QuestionStoring, options: Optional[QuestionsOptions] = None) -> Decision:
    """
    Run one update through the pending questions of ``ctx.key``.

    Args:
        ctx: QuestionContext for the update
        store: Pending questions
        options: Global cancel rule and admission filter

    Returns:
        Decision: What happened; ``Decision.consumed`` tells whether the update was used up

    Raises:
        MissingAnswerHandlerError: An accepted answer reached a question without a handler
    """
    key = ctx.key
    question = store.peek_head(key)
    if question is None:
        return Decision.PASSED

    if options and options.cancel and await _global_cancel_fires(options.cancel, ctx):
        if options.cancel.on_cancel:
            await run_callback(options.cancel.on_cancel, ctx)
        store.clear(key)
        logger.info("Pending questions for %s cancelled by the global cancel rule", key)
        return Decision.GLOBAL_CANCELLED

    if options and options.filter and not await run_callback(options.filter, ctx):
        logger.debug("Update for %s rejected by the global filter", key)
        return Decision.PASSED

    if not ctx.has(question.matcher):
        return Decision.PASSED

    if question.cancel_predicate and await run_callback(question.cancel_predicate, ctx):
        store.clear(key)
        logger.info("Pending questions for %s cancelled by %r", key, question)
        return Decision.CANCELLED

    if (
        question.is_infinite
        and question.repeat_until_predicate
        and await run_callback(question.repeat_until_predicate, ctx)
    ):
        _retire(store, key, question)
        logger.debug("Stopped repeating %r for %s", question, key)
        return Decision.REPEAT_STOPPED

    if question.validation_filter and not await run_callback(question.validation_filter, ctx):
        logger.debug("Answer for %s rejected by the question filter", key)
        return Decision.FILTERED

    if not question.pre_step_done and question.pre_step:
        await run_callback(question.pre_step, ctx)
        question.pre_step_done = True

    if question.answer_handler is None:
        raise MissingAnswerHandlerError(question)
    await run_callback(question.answer_handler, ctx)
    question.answered_count += 1

    if question.is_exhausted:
        _retire(store, key, question)
        logger.debug("Retired %r for %s", question, key)
        return Decision.ADVANCED

    return Decision.ANSWERED
