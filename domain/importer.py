"""Import a random window of recipes from the sample corpus."""

import logging
import random
from typing import Awaitable, Callable, Iterable

import httpx

from domain.errors import DecodeError
from domain.http_client import TIMEOUT, http_client_factory, request_json
from domain.models import Recipe, SamplePage


IMPORT_URL = "https://dummyjson.com/recipes"
DEFAULT_COUNT = 3


logger = logging.getLogger(__name__)


def choose_skip(total: int, count: int, rng: random.Random | None = None) -> int:
    """Uniform offset in `[0, max(0, total - count)]`."""
    rng = random.Random() if rng is None else rng
    max_skip = max(0, total - count)
    return rng.randint(0, max_skip)


def unique_new_recipes(
    page: SamplePage,
    existing: Iterable[Recipe],
) -> list[Recipe]:
    """Samples whose names are new, compared case-insensitively.

    Also drops repeats within the page itself, keeping the first.
    """
    seen = {r.name.lower() for r in existing}
    fresh: list[Recipe] = []
    for sample in page.samples:
        key = sample.name.lower()
        if key in seen:
            continue
        seen.add(key)
        fresh.append(sample.to_recipe())
    return fresh


class SampleImporter:
    def __init__(
        self,
        *,
        url: str = IMPORT_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
        rng: random.Random | None = None,
    ) -> None:
        self.url = url
        self.client = http_client_factory(timeout=timeout) if client is None else client
        self.rng = random.Random() if rng is None else rng

    async def fetch_page(self, *, limit: int, skip: int = 0) -> SamplePage:
        data = await request_json(
            self.client, "GET", self.url, params={"limit": limit, "skip": skip}
        )
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a sample page, got {data!r}")
        return SamplePage.from_dict(data)

    async def corpus_size(self) -> int:
        data = await request_json(self.client, "GET", self.url, params={"limit": 0})
        try:
            return int(data["total"])
        except (KeyError, TypeError, ValueError) as err:
            raise DecodeError(f"No total in {data!r}") from err

    async def import_random_samples[T](
        self,
        count: int = DEFAULT_COUNT,
        *,
        existing: Iterable[Recipe],
        create: Callable[[Recipe], Awaitable[T]],
    ) -> list[T]:
        """Pick a random window of `count` samples and create the new ones.

        Creates run one after another, in corpus order. A failure part way
        leaves the earlier creates in place.
        """
        if count < 1:
            raise ValueError("Import count must be positive.")

        total = await self.corpus_size()
        if total <= 0:
            logger.info("Sample corpus is empty, nothing to import.")
            return []

        skip = choose_skip(total, count, self.rng)
        page = await self.fetch_page(limit=count, skip=skip)
        fresh = unique_new_recipes(page, existing)
        logger.info(
            "Importing %d of %d samples (skip=%d, total=%d).",
            len(fresh),
            len(page.samples),
            skip,
            total,
        )

        results: list[T] = []
        for recipe in fresh:
            results.append(await create(recipe))
        return results

    async def close(self) -> None:
        await self.client.aclose()
