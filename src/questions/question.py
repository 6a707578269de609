import math
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

from models.enums import Repeat
from questions.queries import Query, normalize_matcher

Callback = Callable[..., Union[Any, Awaitable[Any]]]
Predicate = Callable[..., Union[bool, Awaitable[bool]]]


class Question:
    """
    One step of a multi-step prompt.

    Configured with chainable setters, each of which overwrites its previous value
    and returns the same instance:

        question = (
            Question("message:text")
            .do_before(lambda ctx: ctx.message.reply_text("How old are you?"))
            .filter(lambda ctx: ctx.text.isdigit())
            .then_do(save_age)
        )

    Every callback receives the QuestionContext of the update being handled and may
    be either a plain function or a coroutine function.

    ``pre_step_done`` and ``answered_count`` are the runtime progress of this instance;
    they are never reset, so a reused instance keeps its progress across registrations.
    """

    def __init__(self, matcher: Union[Query, Tuple[Query, ...], list]):
        self._matcher = normalize_matcher(matcher)
        self.pre_step: Optional[Callback] = None
        self.answer_handler: Optional[Callback] = None
        self.validation_filter: Optional[Predicate] = None
        self.cancel_predicate: Optional[Predicate] = None
        self.repeat_count: Union[int, Repeat] = 1
        self.repeat_until_predicate: Optional[Predicate] = None

        self.pre_step_done = False
        self.answered_count = 0

    @property
    def matcher(self) -> Tuple[Query, ...]:
        return self._matcher

    @property
    def is_infinite(self) -> bool:
        return self.repeat_count == Repeat.INFINITE

    @property
    def is_exhausted(self) -> bool:
        """True once a finite question has been answered as many times as it repeats."""
        return not self.is_infinite and self.answered_count >= self.repeat_count

    def do_before(self, func: Optional[Callback]) -> "Question":
        """Run ``func`` once before waiting for the first answer, typically to send the prompt."""
        self.pre_step = func
        return self

    def then_do(self, func: Optional[Callback]) -> "Question":
        """Handle a matching, accepted answer."""
        self.answer_handler = func
        return self

    def filter(self, func: Optional[Predicate]) -> "Question":
        """
        Accept an answer only when ``func`` returns true.

        Rejected updates leave the question waiting and continue to the bot's other handlers.
        """
        self.validation_filter = func
        return self

    def cancel(self, func: Optional[Predicate]) -> "Question":
        """Drop this question and every question queued behind it when ``func`` returns true."""
        self.cancel_predicate = func
        return self

    def repeat(self, n: Union[int, float, Repeat]) -> "Question":
        """
        Ask this question ``n`` times before moving on.

        ``math.inf`` or ``Repeat.INFINITE`` keep asking until the conversation is cancelled.

        Raises:
            ValueError: ``n`` is less than 1
        """
        if n == Repeat.INFINITE or (isinstance(n, float) and math.isinf(n) and n > 0):
            self.repeat_count = Repeat.INFINITE
        elif n < 1:
            raise ValueError(f"A question must be asked at least once, got repeat({n!r})")
        else:
            self.repeat_count = int(n)
        return self

    def repeat_until(self, func: Optional[Predicate]) -> "Question":
        """
        Keep asking until ``func`` returns true for an answer.

        The update that satisfies ``func`` retires the question instead of being handled.
        """
        self.repeat_count = Repeat.INFINITE
        self.repeat_until_predicate = func
        return self

    def __repr__(self) -> str:
        return (
            f"Question(matcher={self._matcher!r}, repeat={self.repeat_count!r}, "
            f"answered={self.answered_count})"
        )
