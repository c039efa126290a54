"""The recipe sync engine.

Owns the published recipe list. Every write goes to the vault first and falls
back to a local-only write when the vault call fails, so the list always
reflects what the user did. The local cache is re-saved after every mutation.

Mutations are serialized behind a single writer lock. Random meal lookups do
not take it.
"""

import asyncio
import logging
from typing import Any, Iterable, Self

from domain.errors import (
    DecodeError,
    EmptyResultError,
    NetworkError,
    PersistenceError,
)
from domain.importer import DEFAULT_COUNT, SampleImporter
from domain.meals import RandomMealFetcher
from domain.models import Meal, Recipe
from domain.repository import LocalRecipeCache
from domain.vault import RemoteVaultClient


logger = logging.getLogger(__name__)


class Synced:
    """The vault accepted the write; `recipe` is what it returned."""

    def __init__(self, recipe: Recipe) -> None:
        self.recipe = recipe

    def __repr__(self) -> str:
        return f"Synced({self.recipe!r})"


class LocalOnly:
    """The vault write failed or was skipped; `recipe` was stored locally."""

    def __init__(self, recipe: Recipe, error: Exception | None = None) -> None:
        self.recipe = recipe
        self.error = error

    def __repr__(self) -> str:
        return f"LocalOnly({self.recipe!r})"


type WriteResult = Synced | LocalOnly


class ErrorInfo:
    def __init__(self, *, kind: str, message: str) -> None:
        self.kind = kind
        self.message = message

    @classmethod
    def from_exception(cls, err: Exception) -> Self:
        return cls(kind=type(err).__name__, message=str(err))

    def __repr__(self) -> str:
        return f"<ErrorInfo(kind={self.kind}, message={self.message})>"


class RecipeSyncEngine:
    def __init__(
        self,
        *,
        vault: RemoteVaultClient,
        cache: LocalRecipeCache,
        importer: SampleImporter,
        meals: RandomMealFetcher,
        import_count: int = DEFAULT_COUNT,
    ) -> None:
        self.vault = vault
        self.cache = cache
        self.importer = importer
        self.meals = meals
        self.import_count = import_count
        self._recipes: list[Recipe] = []
        self._writer = asyncio.Lock()
        self.is_loading = False
        self.last_error: ErrorInfo | None = None
        self.random_meal: Meal | None = None

    async def __aenter__(self) -> Self:
        await self.cache.connect()
        await self.fetch_all()
        return self

    async def __aexit__(self, *args: Any, **kwargs: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.vault.close()
        await self.importer.close()
        await self.meals.close()
        await self.cache.disconnect()

    @property
    def recipes(self) -> tuple[Recipe, ...]:
        """Copies of the current recipes, in insertion order."""
        return tuple(r.copy() for r in self._recipes)

    def clear_error(self) -> None:
        self.last_error = None

    def _record_error(self, err: Exception) -> None:
        self.last_error = ErrorInfo.from_exception(err)

    async def _persist(self) -> None:
        try:
            await self.cache.save(self._recipes)
        except PersistenceError as err:
            logger.error("Local save failed: %s", err, exc_info=True)
            self._record_error(err)

    async def fetch_all(self) -> None:
        """Reload the list from the local cache. The vault is not consulted."""
        self.is_loading = True
        try:
            async with self._writer:
                self._recipes = await self.cache.load()
        except PersistenceError as err:
            logger.error("Could not load recipes: %s", err, exc_info=True)
            self._record_error(err)
        finally:
            self.is_loading = False

    async def _create(self, candidate: Recipe) -> WriteResult:
        result: WriteResult
        try:
            saved = await self.vault.create(candidate)
        except (NetworkError, DecodeError) as err:
            logger.warning("Keeping %r local only: %s", candidate, err)
            result = LocalOnly(candidate, err)
        else:
            result = Synced(saved)
        self._recipes.append(result.recipe.copy())
        await self._persist()
        return result

    async def create(self, candidate: Recipe) -> WriteResult:
        async with self._writer:
            return await self._create(candidate)

    async def update(self, candidate: Recipe) -> WriteResult:
        async with self._writer:
            if candidate.id is None:
                # No stable key to match on, so nothing is replaced.
                logger.warning("Cannot update local-only %r.", candidate)
                await self._persist()
                return LocalOnly(candidate)

            result: WriteResult
            try:
                updated = await self.vault.update(candidate)
            except (NetworkError, DecodeError) as err:
                logger.warning("Updating %r locally only: %s", candidate, err)
                result = LocalOnly(candidate, err)
            else:
                result = Synced(updated)

            for i, recipe in enumerate(self._recipes):
                if recipe.id == candidate.id:
                    self._recipes[i] = result.recipe.copy()
                    break
            await self._persist()
            return result

    async def delete(self, positions: Iterable[int]) -> None:
        """Delete the recipes at `positions` in the current list.

        Positions are resolved to recipes before anything is removed, so their
        order and any shifting during removal do not matter.
        """
        async with self._writer:
            targets: list[Recipe] = []
            for i in sorted(set(positions)):
                if not 0 <= i < len(self._recipes):
                    raise IndexError(f"No recipe at position {i}.")
                targets.append(self._recipes[i])
            await self._delete(targets)

    async def delete_ids(self, ids: Iterable[str]) -> None:
        async with self._writer:
            wanted = set(ids)
            await self._delete([r for r in self._recipes if r.id in wanted])

    async def _delete(self, targets: list[Recipe]) -> None:
        for recipe in targets:
            if recipe.id is not None:
                try:
                    await self.vault.delete(recipe.id)
                except NetworkError as err:
                    logger.warning("Vault delete of %r failed: %s", recipe, err)
            for i, r in enumerate(self._recipes):
                if r is recipe:
                    del self._recipes[i]
                    break
            await self._persist()

    async def import_random_samples(
        self, count: int | None = None
    ) -> list[WriteResult]:
        """Create up to `count` new recipes from a random corpus window.

        Holds the writer for the whole import. Corpus failures are recorded
        and re-raised; recipes created before the failure are kept.
        """
        self.is_loading = True
        try:
            async with self._writer:
                return await self.importer.import_random_samples(
                    self.import_count if count is None else count,
                    existing=self.recipes,
                    create=self._create,
                )
        except (NetworkError, DecodeError) as err:
            logger.error("Sample import failed: %s", err)
            self._record_error(err)
            raise
        finally:
            self.is_loading = False

    async def fetch_random_meal(self) -> Meal | None:
        """Publish a random meal. On failure the previous meal stays."""
        self.is_loading = True
        try:
            meal = await self.meals.fetch_one()
        except (EmptyResultError, NetworkError, DecodeError) as err:
            logger.warning("No random meal: %s", err)
            self._record_error(err)
            return None
        finally:
            self.is_loading = False
        self.random_meal = meal
        return meal

    def reset_random_meal(self) -> None:
        self.random_meal = None

    async def save_random_meal(self) -> WriteResult | None:
        if self.random_meal is None:
            return None
        return await self.create(self.random_meal.to_recipe())
