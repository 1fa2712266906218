# file: backend/favorites.py

import logging
from typing import Any, List

from pydantic import ValidationError

from backend.models import FavoriteLocation
from backend.store import KeyValueStore
from backend.utils import get_current_time

FAVORITES_KEY = "favorites"


def _parse(entries: Any) -> List[FavoriteLocation]:
    try:
        return [FavoriteLocation(**entry) for entry in entries or []]
    except (TypeError, ValidationError) as e:
        logging.warning(f"Discarding malformed favorites: {e}")
        return []


def get_favorites(store: KeyValueStore) -> List[FavoriteLocation]:
    return _parse(store.get(FAVORITES_KEY, []))


def add_favorite(store: KeyValueStore, code: str, name: str, country: str) -> List[FavoriteLocation]:
    """Add a location once; re-adding an existing code is a no-op."""

    def append(entries):
        favorites = _parse(entries)
        if not any(favorite.code == code for favorite in favorites):
            favorites.append(FavoriteLocation(code=code, name=name, country=country, added_at=get_current_time()))
        return [favorite.model_dump() for favorite in favorites]

    return _parse(store.update(FAVORITES_KEY, append, []))


def remove_favorite(store: KeyValueStore, code: str) -> List[FavoriteLocation]:
    def drop(entries):
        return [favorite.model_dump() for favorite in _parse(entries) if favorite.code != code]

    return _parse(store.update(FAVORITES_KEY, drop, []))


def is_favorite(store: KeyValueStore, code: str) -> bool:
    return any(favorite.code == code for favorite in get_favorites(store))
