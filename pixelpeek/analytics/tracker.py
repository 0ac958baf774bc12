import logging
from collections import deque
from datetime import datetime
from typing import Deque, Dict
from pixelpeek.analytics.statistics import GameStatistics
from pixelpeek.game.events import EventKind, RoundEvent
from pixelpeek.game.models import RoundResult
from pixelpeek.game.rules import round_result
from pixelpeek.storage.json_store import JsonStorage

logger = logging.getLogger(__name__)

# In-memory history kept for the session; everything is also logged and persisted
MAX_TRACKED = 500


class AnalyticsTracker:
    """
    Round observer that logs gameplay events and keeps aggregate statistics.
    Read-only with respect to the game: it never feeds anything back.
    """

    def __init__(self, storage: JsonStorage | None = None, max_tracked: int = MAX_TRACKED):
        self.storage = storage
        self.statistics = storage.load_statistics() if storage else GameStatistics()
        self.events: Deque[Dict] = deque(maxlen=max_tracked)
        self.results: Deque[RoundResult] = deque(maxlen=max_tracked)

    def __call__(self, event: RoundEvent):
        rd = event.round
        if event.kind == EventKind.ROUND_STARTED:
            self._track("round_started", category=rd.category, round_id=rd.round_id)
        elif event.kind == EventKind.LOAD_FAILED:
            self._track("load_failed", error=event.error)
        elif event.kind == EventKind.GUESS_EVALUATED and event.verdict:
            self._track(
                "guess_attempt",
                guess=event.guess,
                correct=event.verdict.is_valid,
                strategy=event.verdict.strategy.value,
                confidence=round(event.verdict.confidence, 3),
                attempts=rd.attempts
            )
        elif event.kind == EventKind.HINT_UPDATED:
            self._track("hint_used", hint_level=rd.hint_level, category=rd.category)
        elif event.kind in (EventKind.ROUND_ENDED, EventKind.ROUND_SKIPPED):
            strategy = event.verdict.strategy if event.verdict and event.verdict.is_valid else None
            self._finish(round_result(rd, strategy))

    def _finish(self, result: RoundResult):
        self.results.append(result)
        self.statistics = self.statistics.record(result)
        self._track(
            "round_completed",
            outcome=result.outcome.value,
            score=result.score,
            hint_level=result.hint_level,
            label=result.label
        )

        if self.storage:
            try:
                self.storage.save_round(result)
                self.storage.save_statistics(self.statistics)
            except (OSError, ValueError) as e:
                logger.error(f"Could not persist round {result.round_id}: {e}")

    def _track(self, name: str, **data):
        self.events.append({"event": name, "timestamp": datetime.now().isoformat(), **data})
        logger.info(f"{name}: {data}")
