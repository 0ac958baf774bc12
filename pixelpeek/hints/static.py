from pixelpeek.hints.base import HintGenerator
from pixelpeek.matching.similarity import normalize, tokenize

# Words that carry no information as a scene clue
STOPWORDS = {
    "a", "an", "the", "of", "in", "on", "at", "with", "and", "or", "to",
    "for", "by", "is", "are", "from", "near", "under", "over", "its", "his", "her",
}


def mask_label(label: str) -> str:
    """'golden retriever' -> 'g_____ r________'"""
    return " ".join(w[0] + "_" * (len(w) - 1) for w in tokenize(normalize(label)))


class StaticHintGenerator(HintGenerator):
    """
    Offline hints derived from the description and label.
    Each level gives away a little more about the answer.
    """

    async def generate_hint(self, description: str, level: int, history: list[str], label: str) -> str:
        candidates = self._hints_for(description, label)
        level = min(max(level, 0), len(candidates) - 1)
        for hint in candidates[level:]:
            if hint not in history:
                return hint
        return candidates[level]

    async def generate_contextual_hint(self, guess: str, label: str, description: str, level: int) -> str | None:
        guess_words = set(tokenize(normalize(guess)))
        label_words = tokenize(normalize(label))
        shared = [w for w in label_words if w in guess_words]
        if shared:
            return f"\"{shared[0]}\" is part of it, but not the whole answer."
        if guess_words and len(label_words) > 1 and len(guess_words) == 1:
            return f"Close in spirit? The answer takes {len(label_words)} words."
        return None

    def _hints_for(self, description: str, label: str) -> list[str]:
        label_words = tokenize(normalize(label))
        clues = [
            w for w in tokenize(normalize(description))
            if w not in STOPWORDS and w not in label_words
        ]
        letters = sum(len(w) for w in label_words)
        first = label_words[0][0].upper() if label_words else "?"

        if clues:
            scene = f"Look for: {', '.join(clues[:3])}."
        else:
            scene = "Look at the colors and shapes..."

        return [
            scene,
            f"The answer is {len(label_words)} word{'s' if len(label_words) != 1 else ''} long.",
            f"It starts with '{first}'.",
            f"It has {letters} letters in total.",
            f"It looks like: {mask_label(label)}",
        ]
