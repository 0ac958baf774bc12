import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9 ]")


def normalize(text: str) -> str:
    """
    Lower-cases, drops everything outside [a-z0-9 ] and collapses whitespace.
    """
    text = _WHITESPACE.sub(" ", str(text).lower())
    text = _DISALLOWED.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    return [t for t in text.split(" ") if t]


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance with unit insertion, deletion and substitution costs.
    Keeps a single row sized to the shorter string.
    """
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost   # substitution
            ))
        previous = current
    return previous[-1]


def fuzzy_similarity(a: str, b: str) -> float:
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max_len


def jaccard_similarity(tokens_a: list[str], tokens_b: list[str]) -> float:
    set_a, set_b = set(tokens_a), set(tokens_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def length_ratio(a: int, b: int) -> float:
    """min/max of two sizes, 0 when both are empty."""
    longest = max(a, b)
    if longest == 0:
        return 0.0
    return min(a, b) / longest
