import asyncio
import logging
from typing import List
from pixelpeek.config import HintSettings
from pixelpeek.game.events import EventKind, RoundEvent, RoundObserver
from pixelpeek.game.models import GameConfig, MatchVerdict, Round, RoundPhase
from pixelpeek.game.rules import (
    activate_round,
    apply_correct_guess,
    apply_hint,
    apply_wrong_guess,
    new_round,
    skip_round
)
from pixelpeek.hints.base import HintGenerator
from pixelpeek.matching.engine import MatchEngine
from pixelpeek.sources.base import ImageSource
from pixelpeek.storage.json_store import JsonStorage

logger = logging.getLogger(__name__)


class RoundStateMachine:
    """
    Drives one round at a time: LOADING -> ACTIVE -> REVEALED.

    All state lives in an immutable Round that is replaced on every transition.
    Only one guess may be under evaluation at a time; extra submissions are dropped.
    Results of remote calls that arrive after their round moved on are discarded.
    """

    def __init__(
        self,
        matcher: MatchEngine,
        hints: HintGenerator,
        source: ImageSource,
        config: GameConfig | None = None,
        hint_settings: HintSettings | None = None,
        storage: JsonStorage | None = None,
        observers: List[RoundObserver] | None = None
    ):
        self.matcher = matcher
        self.hints = hints
        self.source = source
        self.config = config or GameConfig()
        self.hint_settings = hint_settings or HintSettings()
        self.storage = storage
        self.observers = list(observers or [])

        self.round = new_round(self.config)
        self.high_score = storage.load_high_score() if storage else 0
        self._evaluating = False

    @property
    def is_evaluating(self) -> bool:
        return self._evaluating

    def subscribe(self, observer: RoundObserver):
        self.observers.append(observer)

    async def start_round(self, category: str | None = None) -> Round:
        """
        Replaces the current round with a LOADING one and asks the source for content.
        On failure the round stays in LOADING.
        """
        loading = new_round(self.config)
        self.round = loading
        self._emit(EventKind.ROUND_LOADING)

        try:
            seed = await self.source.next_round(category)
            ready = activate_round(loading, seed, self.hint_settings.opening_hint)
        except Exception as e:
            logger.error(f"Failed to load round: {e}")
            if self.round.round_id == loading.round_id:
                self._emit(EventKind.LOAD_FAILED, error=str(e))
            return self.round

        if self.round.round_id != loading.round_id:
            logger.debug(f"Discarding content for superseded round {loading.round_id}")
            return self.round

        self.round = ready
        self._emit(EventKind.ROUND_STARTED)
        return self.round

    async def submit_guess(self, guess: str) -> Round:
        guess = (guess or "").strip()
        if not guess or not self.round.is_active:
            return self.round
        if self._evaluating:
            logger.debug(f"Ignoring guess {guess!r}: another guess is being evaluated")
            return self.round

        self._evaluating = True
        try:
            current = self.round
            verdict = await self.matcher.evaluate(guess, current.label, current.description)

            if not self._is_live(current):
                logger.debug(f"Discarding verdict for round {current.round_id}: round moved on")
                return self.round

            if verdict.is_valid:
                self._apply_win(current, guess, verdict)
                return self.round

            missed = apply_wrong_guess(current, guess, self.config)
            self.round = missed
            self._emit(EventKind.GUESS_EVALUATED, guess=guess, verdict=verdict)
            if missed.revealed:
                self._emit(EventKind.ROUND_ENDED, guess=guess, verdict=verdict)
                return self.round
        finally:
            self._evaluating = False

        # The attempt is already charged; the hint is fetched outside the single-flight window
        await self._refresh_hint(missed, guess)
        return self.round

    async def skip(self, category: str | None = None) -> Round:
        """
        Abandons the current round (ACTIVE or REVEALED) and loads a new one.
        """
        if self.round.phase == RoundPhase.LOADING:
            return self.round
        if self.round.is_active:
            self.round = skip_round(self.round)
            self._emit(EventKind.ROUND_SKIPPED)
        return await self.start_round(category)

    async def next_round(self, category: str | None = None) -> Round:
        """Leaves a REVEALED round for a new one."""
        if self.round.phase != RoundPhase.REVEALED:
            return self.round
        return await self.start_round(category)

    def _apply_win(self, current: Round, guess: str, verdict: MatchVerdict):
        won = apply_correct_guess(current)
        self.round = won

        new_high_score = won.score > self.high_score
        if new_high_score:
            self.high_score = won.score
            if self.storage:
                try:
                    self.storage.save_high_score(won.score)
                except (OSError, ValueError) as e:
                    logger.error(f"Could not persist high score: {e}")

        self._emit(EventKind.GUESS_EVALUATED, guess=guess, verdict=verdict, new_high_score=new_high_score)
        self._emit(EventKind.ROUND_ENDED, guess=guess, verdict=verdict, new_high_score=new_high_score)

    async def _refresh_hint(self, missed: Round, guess: str):
        hint = await self._generate_hint(missed, guess)

        # A later guess, a reveal or a skip makes this hint stale
        if not self._is_live(missed) or self.round.attempts != missed.attempts:
            logger.debug(f"Discarding stale hint for round {missed.round_id} attempt {missed.attempts}")
            return

        self.round = apply_hint(self.round, hint)
        self._emit(EventKind.HINT_UPDATED, guess=guess)

    async def _generate_hint(self, rd: Round, guess: str) -> str:
        """
        Contextual hint first, then a progressive one, then the static fallback for the level.
        """
        settings = self.hint_settings
        level = rd.hint_level

        try:
            hint = await asyncio.wait_for(
                self.hints.generate_contextual_hint(guess, rd.label, rd.description, level),
                timeout=settings.timeout_seconds
            )
            if hint and len(hint.strip()) >= settings.min_contextual_length:
                return hint.strip()
        except Exception as e:
            logger.warning(f"Contextual hint failed at level {level}: {e!r}")

        try:
            hint = await asyncio.wait_for(
                self.hints.generate_hint(rd.description, level, list(rd.hint_history), rd.label),
                timeout=settings.timeout_seconds
            )
            if hint and hint.strip():
                return hint.strip()
        except Exception as e:
            logger.warning(f"Hint generation failed at level {level}: {e!r}")

        return settings.fallback_for(level)

    def _is_live(self, rd: Round) -> bool:
        return self.round.round_id == rd.round_id and self.round.is_active

    def _emit(self, kind: EventKind, **kwargs):
        event = RoundEvent(kind=kind, round=self.round, high_score=self.high_score, **kwargs)
        for observer in self.observers:
            try:
                observer(event)
            except Exception:
                logger.exception(f"Round observer failed on {kind.value}")
