import asyncio
import json
import random
import aiohttp
import pytest
from pixelpeek.errors import SourceError
from pixelpeek.game.models import RoundSeed
from pixelpeek.sources.bank import RoundBank, ScriptedSource
from pixelpeek.sources.unsplash import UnsplashSource, seed_from_photo


def write_bank(tmp_path):
    entries = [
        {"description": "Orange sky over the sea", "label": "sunset", "category": "sunset"},
        {"description": "Small orange animal in snow", "label": "fox", "category": "animals"},
        {"description": "Tabby asleep on a windowsill", "label": "cat", "category": "Animals"},
        {"description": "", "label": "broken entry", "category": "animals"},
    ]
    path = tmp_path / "rounds.json"
    path.write_text(json.dumps(entries))
    return str(path)


async def test_round_bank_from_file(tmp_path):
    bank = RoundBank.from_file(write_bank(tmp_path), rng=random.Random(7))
    assert len(bank.seeds) == 3
    assert bank.categories == ["animals", "sunset"]

    seed = await bank.next_round()
    assert seed.is_complete

    for _ in range(10):
        seed = await bank.next_round("ANIMALS")
        assert seed.label in ("fox", "cat")


async def test_round_bank_unknown_category(tmp_path):
    bank = RoundBank.from_file(write_bank(tmp_path))
    with pytest.raises(SourceError):
        await bank.next_round("space")


def test_round_bank_missing_file(tmp_path):
    with pytest.raises(SourceError):
        RoundBank.from_file(str(tmp_path / "nope.json"))


async def test_scripted_source_cycles():
    a = RoundSeed(description="d1", label="a")
    b = RoundSeed(description="d2", label="b")
    source = ScriptedSource([a, b])
    assert [(await source.next_round()).label for _ in range(3)] == ["a", "b", "a"]
    assert source.calls == 3


def test_seed_from_photo():
    photo = {
        "urls": {"regular": "https://images.example/1.jpg"},
        "alt_description": "red fox in snow",
        "description": None,
        "tags": [{"title": "fox"}, {"title": "winter"}],
    }
    seed = seed_from_photo(photo, "animals")
    assert seed.label == "red fox in snow"
    assert seed.description == "red fox in snow (tags: fox, winter)"
    assert seed.category == "animals"
    assert seed.image_url == "https://images.example/1.jpg"


def test_seed_from_photo_rejects_unusable_photos():
    with pytest.raises(SourceError):
        seed_from_photo({"alt_description": "a fox"}, "animals")
    with pytest.raises(SourceError):
        seed_from_photo({"urls": {"regular": "u"}, "alt_description": "Photo"}, "animals")


async def test_unsplash_requires_access_key(monkeypatch):
    monkeypatch.delenv("UNSPLASH_ACCESS_KEY", raising=False)
    source = UnsplashSource(["nature"])
    with pytest.raises(SourceError):
        await source.next_round()


class FlakyUnsplash(UnsplashSource):
    """Replays canned photo payloads or errors instead of calling the API."""

    def __init__(self, outcomes, **kwargs):
        super().__init__(["nature"], access_key="test-key", backoff_seconds=0, **kwargs)
        self.outcomes = list(outcomes)
        self.fetched = []

    async def _fetch(self, category):
        self.fetched.append(category)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return seed_from_photo(outcome, category)


FOX_PHOTO = {"urls": {"regular": "https://images.example/fox.jpg"}, "alt_description": "red fox"}


async def test_unsplash_retries_until_a_usable_photo():
    source = FlakyUnsplash([
        aiohttp.ClientError("connection reset"),
        {"urls": {"regular": "https://images.example/x.jpg"}, "alt_description": "photo"},
        FOX_PHOTO,
    ])
    seed = await source.next_round("animals")
    assert source.fetched == ["animals", "animals", "animals"]
    assert seed.label == "red fox"
    assert seed.category == "animals"


async def test_unsplash_gives_up_after_max_retries():
    source = FlakyUnsplash([asyncio.TimeoutError()] * 5, max_retries=2)
    with pytest.raises(SourceError):
        await source.next_round()
    assert source.fetched == ["nature", "nature"]
