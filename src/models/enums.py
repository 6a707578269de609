from enum import Enum


class Repeat(str, Enum):
    INFINITE = "infinite"


class Decision(str, Enum):
    """Outcome of running one update through the pending questions of a conversation."""
    PASSED = "passed"
    FILTERED = "filtered"
    GLOBAL_CANCELLED = "global_cancelled"
    CANCELLED = "cancelled"
    REPEAT_STOPPED = "repeat_stopped"
    ANSWERED = "answered"
    ADVANCED = "advanced"

    @property
    def consumed(self) -> bool:
        """Whether the update was used up and should not reach later handlers."""
        return self not in (Decision.PASSED, Decision.FILTERED)
