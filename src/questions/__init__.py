"""
Sequential questions for python-telegram-bot.

This package lets a handler ask a user one or more questions and have the answers
routed to callbacks, one conversation (bot, user, chat) at a time:
- question: the chainable Question builder
- store: pending questions per conversation
- decision: what one update means for the pending questions
- middleware: the PTB handler, ask() and cancel_questions()
"""
from models.enums import Decision, Repeat
from questions.context import QuestionContext
from questions.decision import MissingAnswerHandlerError, check_context
from questions.middleware import QuestionsHandler, QuestionsMiddleware, questions
from questions.options import CancelRule, QuestionsOptions
from questions.question import Question
from questions.store import QuestionStore, QuestionStoring

__all__ = [
    "CancelRule",
    "Decision",
    "MissingAnswerHandlerError",
    "Question",
    "QuestionContext",
    "QuestionStore",
    "QuestionStoring",
    "QuestionsHandler",
    "QuestionsMiddleware",
    "QuestionsOptions",
    "Repeat",
    "check_context",
    "questions",
]
