"""Favorites list with whole-blob persistence."""

from __future__ import annotations

import json
import logging

from ..utils.logging import log_event
from .errors import FavoritesDecodeError
from .store import BlobStore
from .types import ArticleSummary, FavoriteArticle

FAVORITES_KEY = "SavedFavorites"


class FavoritesManager:
    """Holds the user's saved articles, deduplicated by title.

    The full list is read from the store once, on construction, and written
    back in full after every add or remove.
    """

    def __init__(
        self,
        store: BlobStore,
        key: str = FAVORITES_KEY,
        logger: logging.Logger | None = None,
    ):
        self._store = store
        self._key = key
        self._logger = logger or logging.getLogger("lume_feed.favorites")
        self._favorites: list[FavoriteArticle] = self._load()

    @property
    def favorites(self) -> list[FavoriteArticle]:
        return list(self._favorites)

    def __len__(self) -> int:
        return len(self._favorites)

    def contains(self, title: str) -> bool:
        return any(fav.title == title for fav in self._favorites)

    def add(self, article: ArticleSummary) -> bool:
        """Save an article unless one with the same title is already saved.

        Returns:
            True if the article was added
        """
        if self.contains(article.title):
            return False
        favorite = article.as_favorite()
        self._favorites.append(favorite)
        self.save()
        log_event(
            self._logger,
            "Favorite added",
            event="favorite_added",
            favorite_id=favorite.id,
            title=favorite.title,
        )
        return True

    def remove(self, favorite_id: str) -> bool:
        """Remove a favorite by id. The list is rewritten even if nothing matched."""
        before = len(self._favorites)
        self._favorites = [fav for fav in self._favorites if fav.id != favorite_id]
        self.save()
        removed = len(self._favorites) < before
        log_event(
            self._logger,
            "Favorite removed" if removed else "Favorite not found",
            event="favorite_removed",
            favorite_id=favorite_id,
            removed=removed,
        )
        return removed

    def save(self) -> None:
        payload = json.dumps([fav.to_dict() for fav in self._favorites], ensure_ascii=False)
        self._store.set(self._key, payload)

    def _load(self) -> list[FavoriteArticle]:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError("favorites blob is not a list")
            return [FavoriteArticle.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError) as exc:
            raise FavoritesDecodeError(f"Could not decode saved favorites: {exc}") from exc
