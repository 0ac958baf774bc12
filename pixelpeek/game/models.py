import uuid
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class GameConfig(BaseModel):
    max_attempts: int = 5        # Wrong guesses allowed before the answer is revealed
    initial_score: int = 100
    score_decrement: int = 15    # Penalty per wrong guess
    initial_blur: int = 20
    blur_decrement: int = 4      # Blur removed per wrong guess
    max_hint_level: int = 4      # Levels 0..4, five tiers in total


class RoundPhase(str, Enum):
    LOADING = "LOADING"
    ACTIVE = "ACTIVE"
    REVEALED = "REVEALED"


class RoundOutcome(str, Enum):
    WON = "WON"
    LOST = "LOST"
    SKIPPED = "SKIPPED"


class MatchStrategy(str, Enum):
    EXACT = "EXACT"
    SUBSTRING = "SUBSTRING"
    FUZZY = "FUZZY"
    JACCARD = "JACCARD"
    SEMANTIC = "SEMANTIC"
    REJECTED = "REJECTED"


class MatchVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    strategy: MatchStrategy
    reasoning: str = ""


class RoundSeed(BaseModel):
    """What an image source hands over for one round."""
    description: str
    label: str
    category: str | None = None
    image_url: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.description.strip()) and bool(self.label.strip())


class Round(BaseModel):
    model_config = ConfigDict(frozen=True)

    round_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    phase: RoundPhase = RoundPhase.LOADING
    description: str = ""
    label: str = ""                       # Hidden answer
    category: str | None = None
    image_url: str | None = None
    attempts: int = 0
    score: int = 100
    blur: int = 20
    hint_level: int = 0
    hint: str = ""                        # Hint currently on screen
    hint_history: tuple[str, ...] = ()    # Every hint shown before the current one
    guesses: tuple[str, ...] = ()         # Wrong guesses, in order
    revealed: bool = False
    outcome: RoundOutcome | None = None

    @property
    def is_active(self) -> bool:
        return self.phase == RoundPhase.ACTIVE


class RoundResult(BaseModel):
    round_id: str
    label: str
    category: str | None = None
    outcome: RoundOutcome
    score: int
    attempts: int
    hint_level: int
    winning_strategy: MatchStrategy | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
