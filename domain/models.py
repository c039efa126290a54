from typing import Any, Self

from domain.errors import DecodeError


class Recipe:
    def __init__(
        self,
        *,
        id: str | None = None,
        name: str,
        description: str = "",
    ) -> None:
        self.id = id
        self.name = name
        self.description = description

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """Decode the vault representation.

        `name` is required. A missing `data` object or `data.description`
        decodes as an empty description.
        """
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a recipe object, got {data!r}")
        name = data.get("name")
        if not isinstance(name, str):
            raise DecodeError(f"Recipe has no valid name: {data!r}")
        id = data.get("id")
        if id is not None and not isinstance(id, str):
            raise DecodeError(f"Recipe id must be a string: {data!r}")
        inner = data.get("data") or {}
        description = inner.get("description") if isinstance(inner, dict) else None
        return cls(
            id=id,
            name=name,
            description=description if isinstance(description, str) else "",
        )

    @property
    def is_local_only(self) -> bool:
        return self.id is None

    def copy(self) -> Self:
        return type(self)(id=self.id, name=self.name, description=self.description)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.id is not None:
            d["id"] = self.id
        d["name"] = self.name
        d["data"] = {"description": self.description}
        return d

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return (self.id, self.name, self.description) == (
            other.id,
            other.name,
            other.description,
        )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, name={self.name})>"


class Meal:
    def __init__(
        self,
        *,
        id: str,
        name: str,
        instructions: str,
        thumbnail_url: str,
    ) -> None:
        self.id = id
        self.name = name
        self.instructions = instructions
        self.thumbnail_url = thumbnail_url

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a meal object, got {data!r}")
        id = data.get("idMeal")
        name = data.get("strMeal")
        if not isinstance(id, (str, int)) or isinstance(id, bool):
            raise DecodeError(f"Meal has no valid id: {data!r}")
        if not isinstance(name, str):
            raise DecodeError(f"Meal has no valid name: {data!r}")
        return cls(
            id=str(id),
            name=name,
            instructions=data.get("strInstructions") or "",
            thumbnail_url=data.get("strMealThumb") or "",
        )

    def to_recipe(self) -> Recipe:
        return Recipe(name=self.name, description=self.instructions)

    def __repr__(self) -> str:
        return f"<Meal(id={self.id}, name={self.name})>"


class Sample:
    def __init__(self, *, name: str, instructions: list[str]) -> None:
        self.name = name
        self.instructions = instructions

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        try:
            name = data["name"]
            instructions = data.get("instructions") or []
        except (KeyError, TypeError, AttributeError) as err:
            raise DecodeError(f"Malformed sample: {data!r}") from err
        if not isinstance(name, str) or not isinstance(instructions, list):
            raise DecodeError(f"Malformed sample: {data!r}")
        return cls(name=name, instructions=[str(step) for step in instructions])

    def to_recipe(self) -> Recipe:
        return Recipe(name=self.name, description="\n".join(self.instructions))

    def __repr__(self) -> str:
        return f"<Sample(name={self.name})>"


class SamplePage:
    """One page of the sample corpus."""

    def __init__(
        self,
        *,
        samples: list[Sample],
        total: int,
        skip: int = 0,
        limit: int = 0,
    ) -> None:
        self.samples = samples
        self.total = total
        self.skip = skip
        self.limit = limit

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        try:
            raw = data.get("recipes") or []
            total = int(data["total"])
            skip = int(data.get("skip") or 0)
            limit = int(data.get("limit") or 0)
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise DecodeError(f"Malformed sample page: {data!r}") from err
        if not isinstance(raw, list):
            raise DecodeError(f"Expected a list of samples, got {raw!r}")
        return cls(
            samples=[Sample.from_dict(s) for s in raw],
            total=total,
            skip=skip,
            limit=limit,
        )
