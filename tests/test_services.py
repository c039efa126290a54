import logging
from pathlib import Path

import pytest

import config
from domain.models import Recipe
from domain.services import build_engine, open_engine


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RECIPES_IMPORT_COUNT", "5")
    monkeypatch.setenv("RECIPES_VAULT_URL", "https://vault.test")

    cfg = config.Config()

    assert cfg.import_count == 5
    assert cfg.vault_url == "https://vault.test"
    assert cfg.request_timeout == 30.0


@pytest.mark.asyncio
async def test_build_engine(tmp_path: Path) -> None:
    cfg = config.Config(
        db_url=f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}",
        import_count=4,
        request_timeout=5.0,
    )

    async with build_engine(cfg) as engine:
        assert engine.recipes == ()
        assert engine.import_count == 4
        assert engine.vault.client.timeout.read == 5.0
        await engine.cache.save([Recipe(name="Soup")])

    engine = await open_engine(cfg)
    try:
        assert engine.recipes == (Recipe(name="Soup"),)
    finally:
        await engine.aclose()


@pytest.mark.asyncio
async def test_open_engine_leaves_logging_alone(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    cfg = config.Config(db_url=f"sqlite+aiosqlite:///{tmp_path / 'recipes.db'}")

    engine = await open_engine(cfg)
    await engine.aclose()

    assert calls == []


def test_setup_logging_uses_configured_level(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    config.setup_logging(config.Config(log_level="debug"))

    assert len(calls) == 1
    assert calls[0]["level"] == "DEBUG"
