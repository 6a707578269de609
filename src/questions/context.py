from typing import TYPE_CHECKING, Iterable, Optional, Union

from telegram import Message, Update
from telegram.ext import CallbackContext

from questions.queries import Pattern, Query, matches_any, matches_text, normalize_matcher, normalize_patterns, update_text
from questions.question import Question

if TYPE_CHECKING:
    from questions.middleware import QuestionsMiddleware


def default_storage_key(update: Update, context: CallbackContext) -> str:
    """Key a conversation by bot, user and chat."""
    user_id = update.effective_user.id if update.effective_user else None
    chat_id = update.effective_chat.id if update.effective_chat else None
    return f"{context.bot.id}-{user_id}-{chat_id}"


class QuestionContext:
    """
    The update being handled, as seen by question callbacks.

    Carries the PTB update and callback context along with helpers bound to the
    update's conversation: ``ask``, ``question`` and ``cancel_questions``.
    """

    def __init__(self, update: Update, context: CallbackContext, middleware: "QuestionsMiddleware"):
        self.update = update
        self.context = context
        self._middleware = middleware
        self._key: Optional[str] = None

    @property
    def key(self) -> str:
        if self._key is None:
            get_storage_key = self._middleware.options.get_storage_key
            self._key = get_storage_key(self) if get_storage_key else default_storage_key(self.update, self.context)
        return self._key

    @property
    def message(self) -> Optional[Message]:
        return self.update.effective_message

    @property
    def text(self) -> Optional[str]:
        """Text or caption of the effective message."""
        return update_text(self.update)

    def has(self, queries) -> bool:
        """Whether the update matches any of the given queries."""
        if not isinstance(queries, tuple):
            queries = normalize_matcher(queries)
        return matches_any(self.update, queries)

    def has_text(self, patterns: Union[Pattern, Iterable[Pattern]]) -> bool:
        return matches_text(self.update, normalize_patterns(patterns))

    def question(self, matcher: Union[Query, Iterable[Query]]) -> Question:
        return Question(matcher)

    async def ask(self, questions: Union[Question, Iterable[Question]]) -> None:
        """Ask one question, or several in order, in this conversation."""
        await self._middleware.ask(self, questions)

    def cancel_questions(self) -> bool:
        """Drop every pending question of this conversation. Returns whether any were pending."""
        return self._middleware.cancel_questions(self)
