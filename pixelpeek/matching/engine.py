import asyncio
import logging
from pixelpeek.config import MatchThresholds
from pixelpeek.game.models import MatchStrategy, MatchVerdict
from pixelpeek.judges.base import JudgeVerdict, SemanticJudge
from pixelpeek.matching.similarity import (
    fuzzy_similarity,
    jaccard_similarity,
    length_ratio,
    normalize,
    tokenize
)

logger = logging.getLogger(__name__)


class LexicalScores:
    """Scores from the cheap strategies, kept for the final rejection."""

    def __init__(self, fuzzy: float = 0.0, jaccard: float = 0.0):
        self.fuzzy = fuzzy
        self.jaccard = jaccard

    @property
    def best(self) -> float:
        return max(self.fuzzy, self.jaccard)


class MatchEngine:
    """
    Decides whether a free-text guess names the hidden answer.

    Deterministic strategies run first, in order, and return on the first hit.
    The semantic judge is only consulted when all of them reject.
    """

    def __init__(
        self,
        judge: SemanticJudge | None = None,
        thresholds: MatchThresholds | None = None,
        judge_timeout: float = 10.0
    ):
        self.judge = judge
        self.thresholds = thresholds or MatchThresholds()
        self.judge_timeout = judge_timeout

    async def evaluate(self, guess: str, answer: str, description: str = "") -> MatchVerdict:
        norm_guess = normalize(guess)
        norm_answer = normalize(answer)

        if not norm_guess:
            return MatchVerdict(
                is_valid=False,
                confidence=0.0,
                strategy=MatchStrategy.REJECTED,
                reasoning="Empty guess"
            )

        verdict, scores = self.match_lexical(norm_guess, norm_answer)
        if verdict:
            self._log(guess, answer, verdict)
            return verdict

        verdict = await self._judge_semantically(guess, answer, description)
        if verdict:
            self._log(guess, answer, verdict)
            return verdict

        verdict = MatchVerdict(
            is_valid=False,
            confidence=min(1.0, max(0.0, scores.best)),
            strategy=MatchStrategy.REJECTED,
            reasoning="Guess does not match answer"
        )
        self._log(guess, answer, verdict)
        return verdict

    def match_lexical(self, norm_guess: str, norm_answer: str) -> tuple[MatchVerdict | None, LexicalScores]:
        """
        Runs exact, substring, fuzzy and Jaccard checks on already normalized text.
        """
        t = self.thresholds
        scores = LexicalScores()

        # 1. Exact
        if norm_guess == norm_answer:
            return MatchVerdict(
                is_valid=True, confidence=1.0,
                strategy=MatchStrategy.EXACT, reasoning="Exact match"
            ), scores

        # 2. Substring, only when the overlap covers most of the longer string
        if norm_guess in norm_answer or norm_answer in norm_guess:
            ratio = length_ratio(len(norm_guess), len(norm_answer))
            if ratio >= t.substring_ratio:
                return MatchVerdict(
                    is_valid=True, confidence=ratio,
                    strategy=MatchStrategy.SUBSTRING, reasoning="Strong substring match"
                ), scores

        # 3. Levenshtein
        scores.fuzzy = fuzzy_similarity(norm_guess, norm_answer)
        if scores.fuzzy >= t.fuzzy:
            return MatchVerdict(
                is_valid=True, confidence=scores.fuzzy,
                strategy=MatchStrategy.FUZZY, reasoning="High fuzzy match score"
            ), scores

        # 4. Word overlap with similar word counts
        guess_tokens = tokenize(norm_guess)
        answer_tokens = tokenize(norm_answer)
        scores.jaccard = jaccard_similarity(guess_tokens, answer_tokens)
        token_count_match = length_ratio(len(guess_tokens), len(answer_tokens))
        if scores.jaccard >= t.jaccard and token_count_match >= t.token_count_ratio:
            return MatchVerdict(
                is_valid=True, confidence=scores.jaccard,
                strategy=MatchStrategy.JACCARD, reasoning="Exact word overlap match"
            ), scores

        return None, scores

    async def _judge_semantically(self, guess: str, answer: str, description: str) -> MatchVerdict | None:
        if self.judge is None:
            return None

        try:
            result = await asyncio.wait_for(
                self.judge.judge(guess, answer, description),
                timeout=self.judge_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Semantic judge timed out after {self.judge_timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Semantic judge failed: {e}")
            return None

        if not isinstance(result, JudgeVerdict):
            logger.warning(f"Semantic judge returned {type(result).__name__}, expected a verdict")
            return None

        confidence = min(1.0, max(0.0, result.confidence))
        if result.is_valid and confidence >= self.thresholds.semantic_confidence:
            return MatchVerdict(
                is_valid=True,
                confidence=confidence,
                strategy=MatchStrategy.SEMANTIC,
                reasoning=result.reasoning or "Semantic judge accepted"
            )

        logger.debug(f"Semantic judge declined: valid={result.is_valid} confidence={confidence:.2f}")
        return None

    def _log(self, guess: str, answer: str, verdict: MatchVerdict):
        logger.info(
            f"Guess {guess!r} vs {answer!r}: {verdict.strategy.value} "
            f"(valid={verdict.is_valid}, confidence={verdict.confidence:.2f})"
        )
