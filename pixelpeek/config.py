import json
import logging
from pathlib import Path
from pydantic import BaseModel, Field, ValidationError
from pixelpeek.errors import ConfigError
from pixelpeek.game.models import GameConfig

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    "nature", "animals", "technology", "food", "architecture",
    "people", "art", "sports", "travel", "abstract", "space", "cars",
    "flowers", "mountains", "ocean", "forest", "city", "buildings",
    "sunset", "sunrise",
]

DEFAULT_FALLBACK_HINTS = [
    "Look at the colors and shapes...",
    "Think about where you'd find this...",
    "Consider what it's used for...",
    "Focus on its key features...",
    "This should be obvious now!",
]


class MatchThresholds(BaseModel):
    substring_ratio: float = 0.7     # Shorter/longer length for a substring hit
    fuzzy: float = 0.95
    jaccard: float = 0.95
    token_count_ratio: float = 0.6
    semantic_confidence: float = 0.85


class JudgeSettings(BaseModel):
    provider: str = "google"         # openai | anthropic | google | ollama | mock
    model_id: str = "gemini-2.0-flash"
    timeout_seconds: float = 10.0


class HintSettings(BaseModel):
    provider: str | None = None      # None: reuse the judge provider; "static": offline hints
    model_id: str | None = None
    timeout_seconds: float = 10.0
    min_contextual_length: int = 5   # Shorter contextual hints fall back to progressive ones
    opening_hint: str = "Image loaded. Begin guessing..."
    fallback_hints: list[str] = Field(default_factory=lambda: list(DEFAULT_FALLBACK_HINTS))

    def fallback_for(self, level: int) -> str:
        return self.fallback_hints[min(max(level, 0), len(self.fallback_hints) - 1)]


class SourceSettings(BaseModel):
    kind: str = "bank"               # bank | unsplash
    rounds_file: str = "data/rounds_en.json"
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    timeout_seconds: float = 8.0
    max_retries: int = 3


class AppConfig(BaseModel):
    game: GameConfig = Field(default_factory=GameConfig)
    thresholds: MatchThresholds = Field(default_factory=MatchThresholds)
    judge: JudgeSettings = Field(default_factory=JudgeSettings)
    hints: HintSettings = Field(default_factory=HintSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    results_dir: str = "results"


def load_config(path: str | None) -> AppConfig:
    """
    Reads an AppConfig from a JSON file. A missing file yields the defaults.
    """
    if not path or not Path(path).exists():
        if path:
            logger.info(f"Config file {path} not found, using defaults")
        return AppConfig()

    try:
        with open(path, "r") as f:
            data = json.load(f)
        return AppConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
