import asyncio
import inspect
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import CallbackQuery, Chat, Message, Update, User as TgUser
from telegram.ext import CallbackContext

from questions import QuestionStore, questions

BOT_ID = 42


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test to run inside a simple asyncio event loop"
    )


@pytest.hookimpl
def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        marker = pyfuncitem.get_closest_marker("asyncio")
        if marker is not None:
            testargs = {
                arg: pyfuncitem.funcargs[arg]
                for arg in pyfuncitem._fixtureinfo.argnames
            }
            loop = asyncio.new_event_loop()
            try:
                asyncio.set_event_loop(loop)
                loop.run_until_complete(pyfuncitem.obj(**testargs))
            finally:
                asyncio.set_event_loop(None)
                loop.close()
            return True


class UpdateFactory:
    """Builds real PTB updates; every message is bound to the same mocked bot."""

    def __init__(self, bot):
        self.bot = bot
        self._next_id = 0

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    def message(self, text=None, *, user_id=1, chat_id=1, caption=None, photo=()):
        message = Message(
            message_id=self._id(),
            date=datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc),
            chat=Chat(id=chat_id, type=Chat.PRIVATE),
            from_user=TgUser(id=user_id, first_name="Tester", is_bot=False),
            text=text,
            caption=caption,
            photo=photo,
        )
        message.set_bot(self.bot)
        return Update(update_id=self._id(), message=message)

    def callback(self, data, *, user_id=1, chat_id=1):
        message = Message(
            message_id=self._id(),
            date=datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc),
            chat=Chat(id=chat_id, type=Chat.PRIVATE),
            text="Pick one",
        )
        query = CallbackQuery(
            id=str(self._id()),
            from_user=TgUser(id=user_id, first_name="Tester", is_bot=False),
            chat_instance="instance",
            data=data,
            message=message,
        )
        query.set_bot(self.bot)
        return Update(update_id=self._id(), callback_query=query)


@pytest.fixture
def bot() -> AsyncMock:
    bot = AsyncMock()
    bot.id = BOT_ID
    bot.defaults = None
    return bot


@pytest.fixture
def context(bot) -> MagicMock:
    context = MagicMock(spec=CallbackContext)
    context.bot = bot
    return context


@pytest.fixture
def updates(bot) -> UpdateFactory:
    return UpdateFactory(bot)


@pytest.fixture
def store() -> QuestionStore:
    return QuestionStore()


@pytest.fixture
def middleware(store):
    return questions(store=store)


@pytest.fixture
def sent_texts(bot):
    """Texts the bot has sent so far, in order."""
    return lambda: [call.kwargs["text"] for call in bot.send_message.await_args_list]
