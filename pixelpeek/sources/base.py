from abc import ABC, abstractmethod
from pixelpeek.game.models import RoundSeed


class ImageSource(ABC):
    """
    Supplies the description/label pair for each round.
    Raise SourceError (or anything else) when nothing can be loaded.
    """

    @abstractmethod
    async def next_round(self, category: str | None = None) -> RoundSeed:
        pass
