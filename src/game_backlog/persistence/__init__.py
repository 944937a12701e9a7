"""
Persistence collaborators for the game library.
"""

from game_backlog.persistence.base import LibraryRepository
from game_backlog.persistence.memory import InMemoryLibraryRepository

__all__ = [
    "InMemoryLibraryRepository",
    "LibraryRepository",
]
