import json
import logging

from databases import Database

from domain.errors import DecodeError, PersistenceError
from domain.models import Recipe


CACHE_KEY = "savedRecipes"


CREATE_STORE_TABLE = """
CREATE TABLE IF NOT EXISTS Store (key VARCHAR(256) PRIMARY KEY, value TEXT)
"""


GET_VALUE = "SELECT value FROM Store WHERE key = :key"


PUT_VALUE = """
INSERT INTO Store(key, value) VALUES (:key, :value)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


DELETE_VALUE = "DELETE FROM Store WHERE key = :key"


logger = logging.getLogger(__name__)


class LocalRecipeCache:
    """The full local recipe list, stored as one JSON document under a key."""

    def __init__(self, db: Database, *, key: str = CACHE_KEY) -> None:
        self.db = db
        self.key = key

    async def connect(self) -> None:
        if not self.db.is_connected:
            await self.db.connect()
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_STORE_TABLE
        )

    async def disconnect(self) -> None:
        if self.db.is_connected:
            await self.db.disconnect()

    async def load(self) -> list[Recipe]:
        try:
            row = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                GET_VALUE, values={"key": self.key}
            )
        except Exception as err:
            raise PersistenceError(f"Could not read {self.key}.") from err

        if row is None:
            return []

        try:
            data = json.loads(row["value"] or "")
            if not isinstance(data, list):
                raise DecodeError(f"Expected a list, got {type(data).__name__}")
            return [Recipe.from_dict(r) for r in data]
        except (ValueError, DecodeError) as err:
            logger.warning("Discarding corrupt %s: %s", self.key, err)
            return []

    async def save(self, recipes: list[Recipe]) -> None:
        value = json.dumps([r.to_dict() for r in recipes])
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                PUT_VALUE, values={"key": self.key, "value": value}
            )
        except Exception as err:
            raise PersistenceError(f"Could not write {self.key}.") from err
        logger.debug("Saved %d recipes under %s.", len(recipes), self.key)

    async def clear(self) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                DELETE_VALUE, values={"key": self.key}
            )
        except Exception as err:
            raise PersistenceError(f"Could not clear {self.key}.") from err
