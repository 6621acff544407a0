"""
Models package

All database models live in separate files and are re-exported here:
    from eventfinder.models import Favorite
"""

from .favorite import Favorite

__all__ = [
    "Favorite",
]
