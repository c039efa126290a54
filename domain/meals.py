import httpx

from domain.errors import DecodeError, EmptyResultError
from domain.http_client import TIMEOUT, http_client_factory, request_json
from domain.models import Meal


RANDOM_MEAL_URL = "https://www.themealdb.com/api/json/v1/1/random.php"


class RandomMealFetcher:
    def __init__(
        self,
        *,
        url: str = RANDOM_MEAL_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
    ) -> None:
        self.url = url
        self.client = http_client_factory(timeout=timeout) if client is None else client

    async def fetch_one(self) -> Meal:
        data = await request_json(self.client, "GET", self.url)
        if not isinstance(data, dict) or "meals" not in data:
            raise DecodeError(f"Expected a meals wrapper, got {data!r}")
        meals = data["meals"]
        if meals is None:
            meals = []
        if not isinstance(meals, list):
            raise DecodeError(f"Expected a list of meals, got {meals!r}")
        if not meals:
            raise EmptyResultError("No meal returned.")
        return Meal.from_dict(meals[0])

    async def close(self) -> None:
        await self.client.aclose()
