import logging

import httpx

from domain.errors import DecodeError
from domain.http_client import TIMEOUT, http_client_factory, request_json, send
from domain.models import Recipe


BASE_URL = "https://api.restful-api.dev"


logger = logging.getLogger(__name__)


def vault_client_factory(
    base_url: str = BASE_URL,
    *,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    return http_client_factory(base_url, timeout=timeout)


class RemoteVaultClient:
    """CRUD adapter for the recipe vault. Each call is attempted once."""

    def __init__(self, *, client: httpx.AsyncClient | None = None) -> None:
        self.client = vault_client_factory() if client is None else client

    async def list_all(self) -> list[Recipe]:
        data = await request_json(self.client, "GET", "/objects")
        if not isinstance(data, list):
            raise DecodeError(f"Expected a list of recipes, got {data!r}")
        return [Recipe.from_dict(r) for r in data]

    async def create(self, recipe: Recipe) -> Recipe:
        data = await request_json(
            self.client, "POST", "/objects", json=recipe.to_dict()
        )
        saved = Recipe.from_dict(data)
        logger.info("Created %r in vault.", saved)
        return saved

    async def update(self, recipe: Recipe) -> Recipe:
        if recipe.id is None:
            raise ValueError("Cannot update a recipe without an id.")
        data = await request_json(
            self.client, "PUT", f"/objects/{recipe.id}", json=recipe.to_dict()
        )
        return Recipe.from_dict(data)

    async def delete(self, id: str) -> None:
        await send(self.client, "DELETE", f"/objects/{id}")

    async def close(self) -> None:
        await self.client.aclose()
