import pytest

from command_handlers.survey_handler import (
    ASK_AGE,
    ASK_AGE_AGAIN,
    ASK_COLOURS,
    ASK_NAME,
    COLOUR_NOTED,
    SURVEY_DONE,
    SurveyHandler,
)
from models.enums import Decision

KEY = "42-1-1"


class TestSurveyHandler:
    @pytest.fixture(autouse=True)
    def _setup(self, middleware, store, context, updates, sent_texts):
        self.middleware = middleware
        self.store = store
        self.context = context
        self.updates = updates
        self.sent_texts = sent_texts
        self.handler = SurveyHandler(middleware)

    async def send(self, text):
        return await self.middleware.process(self.updates.message(text), self.context)

    @pytest.mark.asyncio
    async def test_survey_asks_for_name_immediately(self):
        await self.handler.start_survey(self.updates.message("/survey"), self.context)

        assert self.sent_texts() == [ASK_NAME]
        assert KEY in self.store

    @pytest.mark.asyncio
    async def test_full_survey(self):
        await self.handler.start_survey(self.updates.message("/survey"), self.context)

        assert await self.send("Jane") == Decision.ADVANCED
        assert await self.send("thirty") == Decision.FILTERED
        assert await self.send("30") == Decision.ADVANCED
        assert await self.send("red") == Decision.ANSWERED
        assert await self.send("blue") == Decision.ANSWERED
        assert await self.send("Done") == Decision.REPEAT_STOPPED

        assert self.sent_texts() == [
            ASK_NAME,
            ASK_AGE.format(name="Jane"),
            ASK_AGE_AGAIN,
            ASK_COLOURS,
            COLOUR_NOTED.format(colour="red"),
            COLOUR_NOTED.format(colour="blue"),
            SURVEY_DONE.format(summary="Jane, 30 years old. Favourite colours: red, blue."),
        ]
        assert KEY not in self.store

    @pytest.mark.asyncio
    async def test_commands_are_not_taken_as_names(self):
        await self.handler.start_survey(self.updates.message("/survey"), self.context)

        assert await self.send("/start") == Decision.FILTERED
        assert self.sent_texts() == [ASK_NAME]

    @pytest.mark.asyncio
    async def test_restarting_the_survey_starts_over(self):
        await self.handler.start_survey(self.updates.message("/survey"), self.context)
        await self.send("Jane")

        await self.handler.start_survey(self.updates.message("/survey"), self.context)
        assert await self.send("John") == Decision.ADVANCED

        assert self.sent_texts()[-1] == ASK_AGE.format(name="John")
