from pixelpeek.hints.static import StaticHintGenerator, mask_label

DESCRIPTION = "A golden retriever lying on green grass"
LABEL = "golden retriever"


def test_mask_label():
    assert mask_label("Golden Retriever") == "g_____ r________"
    assert mask_label("fox") == "f__"


async def test_hints_get_more_specific():
    hints = StaticHintGenerator()
    assert await hints.generate_hint(DESCRIPTION, 0, [], LABEL) == "Look for: lying, green, grass."
    assert await hints.generate_hint(DESCRIPTION, 1, [], LABEL) == "The answer is 2 words long."
    assert await hints.generate_hint(DESCRIPTION, 2, [], LABEL) == "It starts with 'G'."
    assert await hints.generate_hint(DESCRIPTION, 3, [], LABEL) == "It has 15 letters in total."
    assert await hints.generate_hint(DESCRIPTION, 4, [], LABEL) == "It looks like: g_____ r________"
    assert await hints.generate_hint(DESCRIPTION, 9, [], LABEL) == "It looks like: g_____ r________"


async def test_hints_skip_ones_already_shown():
    hints = StaticHintGenerator()
    shown = ["Look for: lying, green, grass."]
    assert await hints.generate_hint(DESCRIPTION, 0, shown, LABEL) == "The answer is 2 words long."


async def test_hint_without_scene_words():
    hints = StaticHintGenerator()
    assert await hints.generate_hint("the fox", 0, [], "fox") == "Look at the colors and shapes..."
    assert await hints.generate_hint("the fox", 1, [], "fox") == "The answer is 1 word long."


async def test_contextual_hints():
    hints = StaticHintGenerator()
    assert await hints.generate_contextual_hint("golden lab", LABEL, DESCRIPTION, 1) == \
        "\"golden\" is part of it, but not the whole answer."
    assert await hints.generate_contextual_hint("dog", LABEL, DESCRIPTION, 1) == \
        "Close in spirit? The answer takes 2 words."
    assert await hints.generate_contextual_hint("dog", "cat", "", 1) is None
