import asyncio
import logging
import os
import random
import aiohttp
from pixelpeek.errors import SourceError
from pixelpeek.game.models import RoundSeed
from pixelpeek.matching.similarity import normalize
from pixelpeek.sources.base import ImageSource

logger = logging.getLogger(__name__)

# Labels that name nothing a player could guess
GENERIC_LABELS = {"image", "photo", "picture"}


def seed_from_photo(data: dict, category: str) -> RoundSeed:
    """
    Maps an Unsplash photo payload to a round. Raises SourceError for unusable photos.
    """
    image_url = (data.get("urls") or {}).get("regular")
    if not image_url:
        raise SourceError("Invalid Unsplash response: no image url")

    label = (data.get("alt_description") or data.get("description") or category).strip()
    if normalize(label) in GENERIC_LABELS:
        raise SourceError(f"Generic label {label!r}")

    tags = [t.get("title", "") if isinstance(t, dict) else str(t) for t in data.get("tags") or []]
    description = data.get("description") or label
    if tags:
        description = f"{description} (tags: {', '.join(t for t in tags if t)})"

    return RoundSeed(
        description=description,
        label=label,
        category=category,
        image_url=image_url
    )


class UnsplashSource(ImageSource):
    def __init__(
        self,
        categories: list[str],
        access_key: str = None,
        timeout: float = 8.0,
        max_retries: int = 3,
        backoff_seconds: float = 1.0
    ):
        self.categories = categories
        self.access_key = access_key or os.getenv("UNSPLASH_ACCESS_KEY")
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.url = "https://api.unsplash.com/photos/random"

    async def next_round(self, category: str | None = None) -> RoundSeed:
        if not self.access_key:
            raise SourceError("UNSPLASH_ACCESS_KEY is not set")

        category = category or random.choice(self.categories)
        last_error = None

        for attempt in range(self.max_retries):
            try:
                return await self._fetch(category)
            except (aiohttp.ClientError, asyncio.TimeoutError, SourceError) as e:
                last_error = e
                logger.warning(f"Unsplash fetch {attempt + 1}/{self.max_retries} for {category!r} failed: {e}")
                if attempt < self.max_retries - 1:
                    # Exponential backoff
                    await asyncio.sleep(self.backoff_seconds * (2 ** attempt))

        raise SourceError(f"Failed to fetch image for {category!r}: {last_error}")

    async def _fetch(self, category: str) -> RoundSeed:
        params = {
            "query": category,
            "orientation": "squarish",
            "client_id": self.access_key
        }
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(self.url, params=params) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    raise SourceError(f"Unsplash API error: {resp.status} - {text[:200]}")
                data = await resp.json()
        return seed_from_photo(data, category)
