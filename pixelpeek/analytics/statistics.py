from pydantic import BaseModel
from pixelpeek.game.models import RoundOutcome, RoundResult


class GameStatistics(BaseModel):
    games_played: int = 0        # Won + lost; skips are tracked separately
    games_won: int = 0
    games_skipped: int = 0
    total_score: int = 0
    average_score: int = 0
    success_rate: int = 0        # Percent of played games that were won

    def record(self, result: RoundResult) -> "GameStatistics":
        """
        Returns updated statistics with one more finished round folded in.
        """
        if result.outcome == RoundOutcome.SKIPPED:
            return self.model_copy(update={"games_skipped": self.games_skipped + 1})

        played = self.games_played + 1
        won = self.games_won + (1 if result.outcome == RoundOutcome.WON else 0)
        total = self.total_score + result.score
        return self.model_copy(update={
            "games_played": played,
            "games_won": won,
            "total_score": total,
            "average_score": round(total / played),
            "success_rate": round(100 * won / played)
        })
