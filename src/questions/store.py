import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from questions.question import Question

logger = logging.getLogger(__name__)


class QuestionStoring(ABC):
    """
    Pending questions per conversation key.

    Each key maps to an ordered queue; the first entry is the question currently being asked.
    """

    @abstractmethod
    def install(self, key: str, questions: Sequence[Question]) -> None:
        """Replace whatever is pending for ``key`` with ``questions``."""
        pass

    @abstractmethod
    def peek_head(self, key: str) -> Optional[Question]:
        pass

    @abstractmethod
    def advance(self, key: str) -> None:
        """Retire the head question; the key disappears when it was the last one."""
        pass

    @abstractmethod
    def clear(self, key: str) -> bool:
        """Drop every pending question for ``key``. Returns whether anything was pending."""
        pass

    @abstractmethod
    def __contains__(self, key: str) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class QuestionStore(QuestionStoring):
    """In-memory store, lives as long as the process."""

    def __init__(self):
        self._pending: Dict[str, List[Question]] = {}

    def install(self, key: str, questions: Sequence[Question]) -> None:
        if key in self._pending:
            logger.debug("Replacing %d pending question(s) for %s", len(self._pending[key]), key)
        self._pending[key] = list(questions)

    def peek_head(self, key: str) -> Optional[Question]:
        queue = self._pending.get(key)
        return queue[0] if queue else None

    def advance(self, key: str) -> None:
        queue = self._pending.get(key)
        if queue is None:
            return
        if len(queue) > 1:
            queue.pop(0)
        else:
            del self._pending[key]

    def clear(self, key: str) -> bool:
        return self._pending.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
