from pathlib import Path
from typing import Any, AsyncIterator

import pytest
import pytest_asyncio
from databases import Database

from domain.importer import SampleImporter
from domain.meals import RandomMealFetcher
from domain.repository import LocalRecipeCache
from domain.sync import RecipeSyncEngine
from domain.vault import RemoteVaultClient
from fakes import MEAL, FakeCorpus, FakeVault, meal_client


@pytest.fixture
def vault() -> FakeVault:
    return FakeVault()


@pytest.fixture
def corpus() -> FakeCorpus:
    return FakeCorpus()


@pytest_asyncio.fixture
async def cache(tmp_path: Path) -> AsyncIterator[LocalRecipeCache]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}")
    cache = LocalRecipeCache(db)
    await cache.connect()
    yield cache
    await cache.disconnect()


@pytest.fixture
def meal_payload() -> dict[str, Any]:
    return {"meals": [dict(MEAL)]}


@pytest.fixture
def engine(
    vault: FakeVault,
    corpus: FakeCorpus,
    cache: LocalRecipeCache,
    meal_payload: dict[str, Any],
) -> RecipeSyncEngine:
    return RecipeSyncEngine(
        vault=RemoteVaultClient(client=vault.client()),
        cache=cache,
        importer=SampleImporter(url="https://corpus.test/recipes", client=corpus.client()),
        meals=RandomMealFetcher(
            url="https://meals.test/random.php", client=meal_client(meal_payload)
        ),
    )
