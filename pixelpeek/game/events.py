from enum import Enum
from typing import Callable
from pydantic import BaseModel
from pixelpeek.game.models import MatchVerdict, Round


class EventKind(str, Enum):
    ROUND_LOADING = "round_loading"
    ROUND_STARTED = "round_started"
    LOAD_FAILED = "load_failed"
    GUESS_EVALUATED = "guess_evaluated"
    HINT_UPDATED = "hint_updated"
    ROUND_ENDED = "round_ended"        # Won or lost
    ROUND_SKIPPED = "round_skipped"


class RoundEvent(BaseModel):
    kind: EventKind
    round: Round                        # Snapshot after the transition
    guess: str | None = None
    verdict: MatchVerdict | None = None
    high_score: int = 0
    new_high_score: bool = False
    error: str | None = None


RoundObserver = Callable[[RoundEvent], None]
