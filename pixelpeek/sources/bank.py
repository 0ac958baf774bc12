import json
import random
from pixelpeek.errors import SourceError
from pixelpeek.game.models import RoundSeed
from pixelpeek.sources.base import ImageSource


class RoundBank(ImageSource):
    """
    Serves rounds from a fixed list of description/label pairs.
    """

    def __init__(self, seeds: list[RoundSeed], rng: random.Random | None = None):
        self.seeds = [s for s in seeds if s.is_complete]
        self.rng = rng or random.Random()
        # Pre-index by category for quick filtering
        self._by_category = {}
        for s in self.seeds:
            if s.category:
                self._by_category.setdefault(s.category.lower(), []).append(s)

    @classmethod
    def from_file(cls, filepath: str, rng: random.Random | None = None):
        try:
            with open(filepath, "r") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SourceError(f"Could not read round bank {filepath}: {e}") from e
        return cls([RoundSeed.model_validate(e) for e in entries], rng=rng)

    @property
    def categories(self) -> list[str]:
        return sorted(self._by_category)

    async def next_round(self, category: str | None = None) -> RoundSeed:
        pool = self.seeds
        if category:
            pool = self._by_category.get(category.lower(), [])
        if not pool:
            raise SourceError(f"No rounds available for category {category!r}")
        return self.rng.choice(pool)


class ScriptedSource(ImageSource):
    """
    Hands out seeds in order, cycling when exhausted.
    """

    def __init__(self, seeds: list[RoundSeed]):
        if not seeds:
            raise ValueError("ScriptedSource needs at least one seed")
        self.seeds = seeds
        self.calls = 0

    async def next_round(self, category: str | None = None) -> RoundSeed:
        seed = self.seeds[self.calls % len(self.seeds)]
        self.calls += 1
        return seed
