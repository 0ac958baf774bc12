from abc import ABC, abstractmethod
from pydantic import BaseModel, Field


class JudgeVerdict(BaseModel):
    is_valid: bool = Field(alias="isValid")
    confidence: float
    reasoning: str = ""

    model_config = {"populate_by_name": True}


class SemanticJudge(ABC):
    """
    Remote semantic check consulted when every lexical strategy has rejected a guess.
    Implementations may raise; the match engine treats any failure as a non-match.
    """

    @abstractmethod
    async def judge(self, guess: str, answer: str, description: str) -> JudgeVerdict:
        pass
