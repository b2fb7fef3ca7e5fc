import pytest

from leadfinder.core.sectors import SECTORS, map_sector_to_type


def test_known_sectors():
    assert map_sector_to_type("Retail") == "store"
    assert map_sector_to_type("Electronics") == "electronics_store"
    assert map_sector_to_type("Grocery") == "grocery_or_supermarket"
    assert map_sector_to_type("Home Decor") == "home_goods_store"
    assert "Fashion" in SECTORS


@pytest.mark.parametrize("sector", ["Spaceships", "", "unknown", None])
def test_unknown_sectors_default_to_store(sector):
    assert map_sector_to_type(sector) == "store"
