import logging
from typing import List
from pydantic import BaseModel, Field
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from pixelpeek.game.engine import RoundStateMachine
from pixelpeek.game.events import EventKind, RoundEvent
from pixelpeek.game.models import GameConfig, MatchStrategy, RoundOutcome, RoundSeed
from pixelpeek.hints.base import HintGenerator
from pixelpeek.matching.engine import MatchEngine
from pixelpeek.sources.bank import ScriptedSource

logger = logging.getLogger(__name__)


class ReplayCase(BaseModel):
    description: str
    label: str
    guesses: list[str]
    category: str | None = None


class ReplayOutcome(BaseModel):
    label: str
    outcome: RoundOutcome | None = None   # None if the guesses ran out before the round ended
    attempts: int
    score: int
    strategy: MatchStrategy | None = None
    strategies: list[MatchStrategy] = Field(default_factory=list)
    hints: list[str] = Field(default_factory=list)


class ReplayRunner:
    """
    Plays scripted guesses through the real round state machine.
    Useful for checking how the match thresholds behave on known cases.
    """

    def __init__(self, matcher: MatchEngine, hints: HintGenerator, config: GameConfig | None = None):
        self.matcher = matcher
        self.hints = hints
        self.config = config or GameConfig()

    async def run_case(self, case: ReplayCase) -> ReplayOutcome:
        seed = RoundSeed(description=case.description, label=case.label, category=case.category)
        machine = RoundStateMachine(
            matcher=self.matcher,
            hints=self.hints,
            source=ScriptedSource([seed]),
            config=self.config
        )
        strategies = []

        def collect(event: RoundEvent):
            if event.kind == EventKind.GUESS_EVALUATED and event.verdict:
                strategies.append(event.verdict.strategy)

        machine.subscribe(collect)
        await machine.start_round()

        for guess in case.guesses:
            rd = await machine.submit_guess(guess)
            if rd.revealed:
                break

        rd = machine.round
        return ReplayOutcome(
            label=case.label,
            outcome=rd.outcome,
            attempts=rd.attempts,
            score=rd.score if rd.outcome == RoundOutcome.WON else 0,
            strategy=strategies[-1] if rd.outcome == RoundOutcome.WON else None,
            strategies=strategies,
            hints=[h for h in list(rd.hint_history) + [rd.hint] if h]
        )

    async def run_all(self, cases: List[ReplayCase]) -> List[ReplayOutcome]:
        results = []

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
        ) as progress:
            task = progress.add_task("[cyan]Replaying rounds...", total=len(cases))

            for case in cases:
                progress.update(task, description=f"[cyan]Round: {case.label}")
                try:
                    results.append(await self.run_case(case))
                except Exception as e:
                    logger.error(f"Failed to replay round for {case.label!r}: {e}")
                progress.advance(task)

        return results
