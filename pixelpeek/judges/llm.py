from pydantic import ValidationError
from pixelpeek.errors import JudgeError
from pixelpeek.judges.base import JudgeVerdict, SemanticJudge
from pixelpeek.llm.adapters import LLMClient, extract_json
from pixelpeek.prompts.templates import JUDGE_SYSTEM_PROMPT, JUDGE_USER_TEMPLATE


class LLMJudge(SemanticJudge):
    """
    Asks a hosted language model whether the guess and the answer name the same thing.
    """

    def __init__(self, client: LLMClient):
        self.client = client

    async def judge(self, guess: str, answer: str, description: str) -> JudgeVerdict:
        user_prompt = JUDGE_USER_TEMPLATE.format(
            description=description or "unknown",
            answer=answer,
            guess=guess.strip()
        )
        response_text = await self.client.complete(JUDGE_SYSTEM_PROMPT, user_prompt, json_mode=True)
        data = extract_json(response_text)
        if not data:
            raise JudgeError(f"Judge returned no JSON: {response_text[:200]!r}")

        try:
            return JudgeVerdict.model_validate(data)
        except ValidationError as e:
            raise JudgeError(f"Malformed judge response: {e}") from e
