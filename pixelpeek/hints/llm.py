from pixelpeek.errors import HintGenerationError
from pixelpeek.hints.base import HintGenerator
from pixelpeek.llm.adapters import LLMClient
from pixelpeek.prompts.templates import (
    CONTEXTUAL_HINT_USER_TEMPLATE,
    HINT_SYSTEM_PROMPT,
    HINT_USER_TEMPLATE,
    format_hint_history
)


MAX_HINT_CHARS = 200


def clean_hint(text: str) -> str:
    """
    Keeps the first non-empty line, without surrounding quotes, capped in length.
    """
    for line in (text or "").splitlines():
        line = line.strip().strip("\"'").strip()
        if line:
            return line[:MAX_HINT_CHARS]
    return ""


class LLMHintGenerator(HintGenerator):
    def __init__(self, client: LLMClient):
        self.client = client

    async def generate_hint(self, description: str, level: int, history: list[str], label: str) -> str:
        user_prompt = HINT_USER_TEMPLATE.format(
            description=description or "image",
            label=label or "concept",
            level=level,
            history=format_hint_history(history)
        )
        hint = clean_hint(await self.client.complete(HINT_SYSTEM_PROMPT, user_prompt))
        if len(hint) < 3:
            raise HintGenerationError(f"Empty hint response at level {level}")
        return hint

    async def generate_contextual_hint(self, guess: str, label: str, description: str, level: int) -> str | None:
        user_prompt = CONTEXTUAL_HINT_USER_TEMPLATE.format(
            guess=guess,
            label=label,
            description=description or "image",
            level=level
        )
        hint = clean_hint(await self.client.complete(HINT_SYSTEM_PROMPT, user_prompt))
        return hint or None
