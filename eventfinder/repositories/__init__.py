"""
Repositories package

Each repository encapsulates the store operations for one model:
- favorites_repository.py

Usage:
    from eventfinder.repositories.favorites_repository import FavoritesRepository
    favorites = FavoritesRepository(db).list()
"""

from .favorites_repository import FavoritesRepository

__all__ = ["FavoritesRepository"]
