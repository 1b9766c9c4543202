"""Repository exports."""

from .base import RepositoryBase
from .characters_repo import CharactersRepository

__all__ = [
    "CharactersRepository",
    "RepositoryBase",
]
