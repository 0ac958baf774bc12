from pixelpeek.game.models import (
    GameConfig,
    MatchStrategy,
    Round,
    RoundOutcome,
    RoundPhase,
    RoundResult,
    RoundSeed
)


def new_round(config: GameConfig) -> Round:
    """
    A fresh round waiting for its description/label pair.
    """
    return Round(
        phase=RoundPhase.LOADING,
        score=config.initial_score,
        blur=config.initial_blur
    )


def activate_round(rd: Round, seed: RoundSeed, opening_hint: str = "") -> Round:
    """
    LOADING -> ACTIVE. Refuses seeds with an empty description or label.
    """
    if rd.phase != RoundPhase.LOADING:
        raise ValueError(f"Round {rd.round_id} is {rd.phase.value}, not LOADING")
    if not seed.is_complete:
        raise ValueError("Round seed needs a non-empty description and label")

    return rd.model_copy(update={
        "phase": RoundPhase.ACTIVE,
        "description": seed.description,
        "label": seed.label,
        "category": seed.category,
        "image_url": seed.image_url,
        "hint": opening_hint
    })


def apply_correct_guess(rd: Round) -> Round:
    return rd.model_copy(update={
        "phase": RoundPhase.REVEALED,
        "revealed": True,
        "blur": 0,
        "outcome": RoundOutcome.WON
    })


def apply_wrong_guess(rd: Round, guess: str, config: GameConfig) -> Round:
    """
    Charges one attempt. Ends the round when attempts run out; otherwise
    moves the hint level up and archives the hint that was on screen.
    """
    attempts = rd.attempts + 1
    update = {
        "attempts": attempts,
        "score": max(0, rd.score - config.score_decrement),
        "blur": max(0, rd.blur - config.blur_decrement),
        "guesses": rd.guesses + (guess,)
    }

    if attempts >= config.max_attempts:
        update.update({
            "phase": RoundPhase.REVEALED,
            "score": 0,
            "blur": 0,
            "revealed": True,
            "outcome": RoundOutcome.LOST
        })
        return rd.model_copy(update=update)

    update["hint_level"] = min(rd.hint_level + 1, config.max_hint_level)
    # The previous hint may not have landed yet, leaving the same one on screen
    if rd.hint and rd.hint_history[-1:] != (rd.hint,):
        update["hint_history"] = rd.hint_history + (rd.hint,)
    return rd.model_copy(update=update)


def apply_hint(rd: Round, hint: str) -> Round:
    return rd.model_copy(update={"hint": hint})


def skip_round(rd: Round) -> Round:
    """Marks the round as abandoned. Score and reveal state are left as they were."""
    return rd.model_copy(update={"outcome": RoundOutcome.SKIPPED})


def round_result(rd: Round, winning_strategy: MatchStrategy | None = None) -> RoundResult:
    if rd.outcome is None:
        raise ValueError(f"Round {rd.round_id} has no outcome yet")
    return RoundResult(
        round_id=rd.round_id,
        label=rd.label,
        category=rd.category,
        outcome=rd.outcome,
        score=rd.score if rd.outcome == RoundOutcome.WON else 0,
        attempts=rd.attempts,
        hint_level=rd.hint_level,
        winning_strategy=winning_strategy
    )
