from pixelpeek.game.models import MatchStrategy, RoundOutcome
from pixelpeek.hints.static import StaticHintGenerator
from pixelpeek.matching.engine import MatchEngine
from pixelpeek.session.runner import ReplayCase, ReplayRunner


def make_runner():
    return ReplayRunner(MatchEngine(), StaticHintGenerator())


async def test_replay_winning_case():
    case = ReplayCase(description="Orange sky over the sea", label="sunset", guesses=["dusk", "Sunset!!"])
    outcome = await make_runner().run_case(case)
    assert outcome.outcome == RoundOutcome.WON
    assert outcome.attempts == 1
    assert outcome.score == 85
    assert outcome.strategy == MatchStrategy.EXACT
    assert outcome.strategies == [MatchStrategy.REJECTED, MatchStrategy.EXACT]


async def test_replay_lost_and_unfinished_cases():
    cases = [
        ReplayCase(description="Tall striped tower on a rocky coast", label="lighthouse",
                   guesses=["tower", "castle", "church", "boat", "rock", "lighthouse"]),
        ReplayCase(description="Snow-capped peak", label="mountain", guesses=["hill"]),
    ]
    lost, unfinished = await make_runner().run_all(cases)

    assert lost.outcome == RoundOutcome.LOST
    assert lost.attempts == 5
    assert lost.score == 0
    assert len(lost.strategies) == 5
    assert len(lost.hints) == 5

    assert unfinished.outcome is None
    assert unfinished.attempts == 1
