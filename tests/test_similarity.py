from pixelpeek.matching.similarity import (
    fuzzy_similarity,
    jaccard_similarity,
    length_ratio,
    levenshtein_distance,
    normalize,
    tokenize
)


def test_normalize_strips_case_punctuation_and_spacing():
    assert normalize("  Sunset!! ") == "sunset"
    assert normalize("Golden   Retriever\t") == "golden retriever"
    assert normalize("Hello,\nWorld") == "hello world"
    assert normalize("Crème brûlée") == "crme brle"
    assert normalize("!!!") == ""


def test_tokenize_ignores_empty_tokens():
    assert tokenize("golden retriever") == ["golden", "retriever"]
    assert tokenize("") == []


def test_levenshtein_distance():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("sitting", "kitten") == 3
    assert levenshtein_distance("cat", "bat") == 1
    assert levenshtein_distance("same", "same") == 0


def test_levenshtein_empty_strings():
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("", "") == 0


def test_fuzzy_similarity():
    assert fuzzy_similarity("cat", "bat") < 0.95
    assert fuzzy_similarity("lighthouse", "lighthouse") == 1.0
    assert fuzzy_similarity("", "") == 0.0


def test_jaccard_similarity():
    assert jaccard_similarity(["a", "b"], ["b", "c"]) == 1 / 3
    assert jaccard_similarity(["golden", "retriever"], ["retriever", "golden"]) == 1.0
    # Empty union must not divide by zero
    assert jaccard_similarity([], []) == 0.0


def test_length_ratio():
    assert length_ratio(3, 16) == 3 / 16
    assert length_ratio(16, 3) == 3 / 16
    assert length_ratio(0, 0) == 0.0
