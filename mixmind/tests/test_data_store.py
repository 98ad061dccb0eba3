from __future__ import annotations

from pathlib import Path

from mixmind.catalog.config import CatalogConfig
from mixmind.catalog.data_store import load_catalog
from mixmind.catalog.models import (
    BarPayload,
    Difficulty,
    ItemCategory,
    RecipePayload,
    SpiritPayload,
    UserPayload,
)


def _by_id():
    return {item.id: item for item in load_catalog()}


def test_loads_bundled_catalog():
    items = load_catalog()
    assert len(items) == 43
    assert len({i.id for i in items}) == 43
    assert {i.category for i in items} == set(ItemCategory)


def test_payloads_match_categories():
    items = _by_id()
    old_fashioned = items["old-fashioned"]
    assert isinstance(old_fashioned.payload, RecipePayload)
    assert old_fashioned.payload.base_spirit == "whiskey"
    assert "bitters" in old_fashioned.payload.ingredients
    assert old_fashioned.difficulty == Difficulty.easy
    assert old_fashioned.tags == ["classic", "whiskey", "simple", "stirred"]

    macallan = items["macallan-18"]
    assert isinstance(macallan.payload, SpiritPayload)
    assert macallan.payload.age_years == 18
    assert macallan.difficulty is None

    assert isinstance(items["sarah-chen"].payload, UserPayload)
    assert items["sarah-chen"].payload.verified
    assert isinstance(items["the-alchemist"].payload, BarPayload)


def test_flags_parsed():
    items = _by_id()
    assert items["virgin-mojito"].payload.mocktail
    assert items["aperol-spritz"].payload.low_alcohol
    assert not items["margarita"].payload.mocktail


def test_updated_at_parsed():
    items = _by_id()
    assert items["summer-spritz-social"].updated_at.year == 2025


def _write_csv(path: Path, body: str) -> CatalogConfig:
    path.write_text(body)
    return CatalogConfig(catalog_path=path)


def test_invalid_rows_skipped(tmp_path: Path):
    cfg = _write_csv(
        tmp_path / "catalog.csv",
        "id,title,category,tags,difficulty,abv,popularity\n"
        "ok,Fine Drink,recipe,a|b,easy,10,50\n"
        "bad-category,Broken,cocktail,,,,\n"
        "bad-abv,Too Strong,recipe,,,250,\n"
        "bad-difficulty,Weird,recipe,,extreme,,\n",
    )
    items = load_catalog(cfg)
    assert [i.id for i in items] == ["ok"]
    assert items[0].tags == ["a", "b"]


def test_custom_separator(tmp_path: Path):
    path = tmp_path / "catalog.csv"
    path.write_text("id,title,category,tags\nx,X,game,party;cards\n")
    items = load_catalog(CatalogConfig(catalog_path=path, list_separator=";"))
    assert items[0].tags == ["party", "cards"]
