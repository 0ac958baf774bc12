import json
import logging
from pathlib import Path
from typing import List
from pixelpeek.analytics.statistics import GameStatistics
from pixelpeek.game.models import RoundResult

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "pixelpeek_highscore"


class JsonStorage:
    """
    Handles persistence of the high score, statistics and round results to JSON files.
    """

    def __init__(self, base_path: str = "results"):
        self.base_path = Path(base_path)
        self.rounds_path = self.base_path / "rounds"
        self.state_path = self.base_path / "state.json"
        self.stats_path = self.base_path / "statistics.json"

        # Ensure directories exist
        self.rounds_path.mkdir(parents=True, exist_ok=True)

    def get(self, key: str, default=None):
        return self._load_state().get(key, default)

    def set(self, key: str, value):
        state = self._load_state()
        state[key] = value
        with open(self.state_path, 'w') as f:
            json.dump(state, f, indent=2)

    def load_high_score(self) -> int:
        try:
            return int(self.get(HIGH_SCORE_KEY, 0))
        except (TypeError, ValueError):
            return 0

    def save_high_score(self, score: int):
        self.set(HIGH_SCORE_KEY, int(score))

    def save_round(self, result: RoundResult):
        filename = f"round_{result.timestamp.strftime('%Y%m%d_%H%M%S')}_{result.round_id[:8]}.json"
        with open(self.rounds_path / filename, 'w') as f:
            f.write(result.model_dump_json(indent=2))

    def load_all_rounds(self) -> List[RoundResult]:
        rounds = []
        for file in sorted(self.rounds_path.glob("*.json")):
            with open(file, 'r') as f:
                rounds.append(RoundResult.model_validate(json.load(f)))
        return rounds

    def save_statistics(self, stats: GameStatistics):
        with open(self.stats_path, 'w') as f:
            f.write(stats.model_dump_json(indent=2))

    def load_statistics(self) -> GameStatistics:
        if not self.stats_path.exists():
            return GameStatistics()
        try:
            with open(self.stats_path, 'r') as f:
                return GameStatistics.model_validate(json.load(f))
        except ValueError as e:
            logger.warning(f"Ignoring unreadable statistics file {self.stats_path}: {e}")
            return GameStatistics()

    def _load_state(self) -> dict:
        if not self.state_path.exists():
            return {}
        try:
            with open(self.state_path, 'r') as f:
                state = json.load(f)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable state file {self.state_path}: {e}")
            return {}
        return state if isinstance(state, dict) else {}
