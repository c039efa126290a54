from enum import Enum
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RECIPES_", env_file=".env")

    env: Env = Env.local
    vault_url: str = "https://api.restful-api.dev"
    import_url: str = "https://dummyjson.com/recipes"
    meal_url: str = "https://www.themealdb.com/api/json/v1/1/random.php"
    request_timeout: float = 30.0
    db_url: str = "sqlite+aiosqlite:///recipes.db"
    cache_key: str = "savedRecipes"
    import_count: int = 3
    log_level: str = "INFO"


def setup_logging(config: Config | None = None) -> None:
    config = Config() if config is None else config
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
