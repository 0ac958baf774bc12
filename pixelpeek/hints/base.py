from abc import ABC, abstractmethod


class HintGenerator(ABC):
    """
    Produces hint text for a round. Both calls may raise or time out;
    the round state machine substitutes a static hint when they do.
    """

    @abstractmethod
    async def generate_hint(
        self,
        description: str,
        level: int,
        history: list[str],
        label: str,
    ) -> str:
        """
        Progressive hint keyed only by level and the hints already shown.
        """
        pass

    @abstractmethod
    async def generate_contextual_hint(
        self,
        guess: str,
        label: str,
        description: str,
        level: int,
    ) -> str | None:
        """
        Hint that reacts to a specific wrong guess, or None when there is nothing useful to say.
        """
        pass
