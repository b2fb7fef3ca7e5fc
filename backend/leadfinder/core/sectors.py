"""Mapping from the sector labels offered in the UI to Places API types."""

DEFAULT_PLACE_TYPE = "store"

_SECTOR_TYPES = {
    "All": "store",
    "Retail": "store",
    "Electronics": "electronics_store",
    "Grocery": "grocery_or_supermarket",
    "Fashion": "clothing_store",
    "Home Decor": "home_goods_store",
    "Restaurant": "restaurant",
    "Furniture": "furniture_store",
    "Hardware": "hardware_store",
    "Pharmacy": "pharmacy",
    "Books": "book_store",
    "Jewelry": "jewelry_store",
}

SECTORS = tuple(_SECTOR_TYPES)


def map_sector_to_type(sector: str) -> str:
    return _SECTOR_TYPES.get((sector or "").strip(), DEFAULT_PLACE_TYPE)
