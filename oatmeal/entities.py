"""
Entity Catalog
===============
Tile-type indices and the table that gives each one its look and behavior.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

from .engine import Color


# =============================================================================
# TILE INDICES
# =============================================================================
# New entries are appended; existing indices never change.

EMPTY = 0
HERO = 1
WALL = 2
WATER = 3
DOOR = 4


@dataclass(frozen=True)
class EntityDescriptor:
    """Display and movement attributes for one tile type."""
    name: str
    symbol: str
    color: Color
    blocks: bool = False


class EntityCatalog:
    """
    Read-only lookup table from tile index to descriptor.

    Each level builds its own catalog together with its grid, so every
    index that can appear in the grid resolves here.
    """

    def __init__(self, descriptors: Iterable[EntityDescriptor]):
        self._entries: Dict[int, EntityDescriptor] = dict(enumerate(descriptors))

    def lookup(self, tile: int) -> EntityDescriptor:
        """Return the descriptor for a tile index."""
        try:
            return self._entries[tile]
        except KeyError:
            raise LookupError(f'unknown tile index: {tile!r}') from None

    def __contains__(self, tile: int) -> bool:
        return tile in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def make_catalog() -> EntityCatalog:
    """Build the canonical catalog used by the dungeon."""
    return EntityCatalog([
        EntityDescriptor('Empty', ' ', Color.BLACK),
        EntityDescriptor('Hero', '@', Color.WHITE),
        EntityDescriptor('Wall', '#', Color.WHITE, blocks=True),
        EntityDescriptor('Water', '~', Color.BLUE, blocks=True),
        EntityDescriptor('Door', '+', Color.YELLOW),
    ])
