from typing import Any, Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from questions.queries import normalize_matcher, normalize_patterns


class CancelRule(BaseModel):
    """
    Global cancellation for every pending question.

    When an update matches ``has``, the rule fires if ``hears`` matches its text, else if
    ``filter`` returns true, else (neither configured) on the match alone.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    has: Tuple[Any, ...]
    hears: Optional[Tuple[Any, ...]] = None
    filter: Optional[Callable[..., Any]] = None
    on_cancel: Optional[Callable[..., Any]] = None

    @field_validator("has", mode="before")
    @classmethod
    def _normalize_has(cls, value):
        try:
            return normalize_matcher(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    @field_validator("hears", mode="before")
    @classmethod
    def _normalize_hears(cls, value):
        if value is None:
            return None
        try:
            return normalize_patterns(value)
        except TypeError as e:
            raise ValueError(str(e)) from e


class QuestionsOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    cancel: Optional[CancelRule] = None
    # Derives the conversation key from a QuestionContext.
    get_storage_key: Optional[Callable[..., str]] = None
    # Admission check run before any per-question logic; falsy passes the update through.
    filter: Optional[Callable[..., Any]] = None
