"""Build an engine from configuration."""

from databases import Database

import config
from domain.importer import SampleImporter
from domain.meals import RandomMealFetcher
from domain.repository import LocalRecipeCache
from domain.sync import RecipeSyncEngine
from domain.vault import RemoteVaultClient, vault_client_factory


def build_engine(
    cfg: config.Config | None = None,
    *,
    db: Database | None = None,
) -> RecipeSyncEngine:
    cfg = config.Config() if cfg is None else cfg
    db = Database(cfg.db_url) if db is None else db
    return RecipeSyncEngine(
        vault=RemoteVaultClient(
            client=vault_client_factory(cfg.vault_url, timeout=cfg.request_timeout)
        ),
        cache=LocalRecipeCache(db, key=cfg.cache_key),
        importer=SampleImporter(url=cfg.import_url, timeout=cfg.request_timeout),
        meals=RandomMealFetcher(url=cfg.meal_url, timeout=cfg.request_timeout),
        import_count=cfg.import_count,
    )


async def open_engine(cfg: config.Config | None = None) -> RecipeSyncEngine:
    """Build an engine, connect its cache and load the saved recipes."""
    engine = build_engine(cfg)
    await engine.cache.connect()
    await engine.fetch_all()
    return engine
