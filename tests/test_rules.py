import pytest
from pydantic import ValidationError
from pixelpeek.game.models import GameConfig, MatchStrategy, RoundOutcome, RoundPhase, RoundSeed
from pixelpeek.game.rules import (
    activate_round,
    apply_correct_guess,
    apply_hint,
    apply_wrong_guess,
    new_round,
    round_result,
    skip_round
)

SEED = RoundSeed(description="Tall striped tower on a rocky coast", label="lighthouse")


def active_round(config=None):
    return activate_round(new_round(config or GameConfig()), SEED, "opening")


def test_new_round_uses_configured_start_values():
    rd = new_round(GameConfig(initial_score=50, initial_blur=12))
    assert rd.phase == RoundPhase.LOADING
    assert rd.score == 50
    assert rd.blur == 12


def test_activate_requires_loading_and_complete_seed():
    with pytest.raises(ValueError):
        activate_round(new_round(GameConfig()), RoundSeed(description="", label="lighthouse"))
    with pytest.raises(ValueError):
        activate_round(active_round(), SEED)


def test_rounds_are_immutable():
    rd = active_round()
    with pytest.raises(ValidationError):
        rd.score = 0


def test_wrong_guess_does_not_mutate_the_original():
    rd = active_round()
    missed = apply_wrong_guess(rd, "tower", GameConfig())
    assert rd.attempts == 0
    assert missed.attempts == 1
    assert missed.hint_history == ("opening",)


def test_score_and_blur_never_go_negative():
    config = GameConfig(max_attempts=10, score_decrement=60, blur_decrement=15)
    rd = active_round(config)
    for _ in range(3):
        rd = apply_wrong_guess(rd, "x", config)
    assert rd.score == 0
    assert rd.blur == 0
    assert not rd.revealed


def test_hint_level_is_capped():
    config = GameConfig(max_attempts=10)
    rd = active_round(config)
    for _ in range(7):
        rd = apply_wrong_guess(rd, "x", config)
    assert rd.hint_level == 4


def test_empty_hint_is_not_archived():
    rd = activate_round(new_round(GameConfig()), SEED, "")
    missed = apply_wrong_guess(rd, "tower", GameConfig())
    assert missed.hint_history == ()
    assert apply_hint(missed, "next").hint == "next"


def test_hint_still_on_screen_is_archived_once():
    config = GameConfig()
    rd = apply_wrong_guess(active_round(), "tower", config)
    rd = apply_wrong_guess(rd, "castle", config)
    assert rd.hint_history == ("opening",)
    assert rd.hint_level == 2

    rd = apply_wrong_guess(apply_hint(rd, "coastal"), "church", config)
    assert rd.hint_history == ("opening", "coastal")


def test_correct_guess_keeps_score():
    rd = apply_wrong_guess(active_round(), "tower", GameConfig())
    won = apply_correct_guess(rd)
    assert won.score == 85
    assert won.blur == 0
    assert won.revealed
    assert won.outcome == RoundOutcome.WON


def test_round_result():
    rd = active_round()
    with pytest.raises(ValueError):
        round_result(rd)

    result = round_result(apply_correct_guess(rd), MatchStrategy.EXACT)
    assert result.outcome == RoundOutcome.WON
    assert result.score == 100
    assert result.winning_strategy == MatchStrategy.EXACT

    skipped = round_result(skip_round(rd))
    assert skipped.outcome == RoundOutcome.SKIPPED
    assert skipped.score == 0
