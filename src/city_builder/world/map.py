from dataclasses import dataclass, replace
from typing import Iterator, List, Tuple

from city_builder.core.errors import OutOfBounds
from .buildings import BuildingType, ZoneType


@dataclass(frozen=True)
class Tile:
    x: int
    y: int
    building: BuildingType = BuildingType.EMPTY
    zone: ZoneType = ZoneType.NONE
    level: int = 1
    upgrades: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.building is BuildingType.EMPTY

    def cleared(self) -> "Tile":
        """Same position, back to bare grass."""
        return Tile(self.x, self.y)


class Grid:
    """Fixed-size square lattice of tiles.

    Never mutated in place: with_tile() returns a new grid that shares
    every untouched row with this one.
    """

    def __init__(self, size: int, rows: Tuple[Tuple[Tile, ...], ...]) -> None:
        self._size = size
        self._rows = rows

    @property
    def size(self) -> int:
        return self._size

    @property
    def rows(self) -> Tuple[Tuple[Tile, ...], ...]:
        return self._rows

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self._size)
        return self._rows[y][x]

    def with_tile(self, tile: Tile) -> "Grid":
        if not self.in_bounds(tile.x, tile.y):
            raise OutOfBounds(tile.x, tile.y, self._size)
        row = list(self._rows[tile.y])
        row[tile.x] = tile
        rows = self._rows[:tile.y] + (tuple(row),) + self._rows[tile.y + 1:]
        return Grid(self._size, rows)

    def with_building(self, x: int, y: int, building: BuildingType) -> "Grid":
        """Put a fresh level-1 building on a tile, keeping its zone."""
        tile = self.tile_at(x, y)
        return self.with_tile(replace(tile, building=building, level=1, upgrades=()))

    def tiles(self) -> Iterator[Tile]:
        """Row-major iteration over every tile."""
        for row in self._rows:
            yield from row

    def neighbors(self, x: int, y: int, radius: int = 1) -> List[Tile]:
        """Tiles in the inclusive square box around (x, y), excluding the centre."""
        res = []
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx == 0 and dy == 0:
                    continue
                if self.in_bounds(x + dx, y + dy):
                    res.append(self._rows[y + dy][x + dx])
        return res

    def has_nearby(self, x: int, y: int, building: BuildingType, radius: int) -> bool:
        """Square-box scan that stops at the first match."""
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                nx, ny = x + dx, y + dy
                if self.in_bounds(nx, ny) and self._rows[ny][nx].building is building:
                    return True
        return False

    def count(self, *buildings: BuildingType) -> int:
        return sum(1 for t in self.tiles() if t.building in buildings)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._size == other._size and self._rows == other._rows

    def __hash__(self) -> int:
        return hash((self._size, self._rows))

    def __repr__(self) -> str:
        return f"Grid(size={self._size})"


def create_grid(size: int) -> Grid:
    if size < 1:
        raise ValueError(f"Grid size must be positive, got {size}")
    rows = tuple(
        tuple(Tile(x, y) for x in range(size))
        for y in range(size)
    )
    return Grid(size, rows)


def tile_at(grid: Grid, x: int, y: int) -> Tile:
    return grid.tile_at(x, y)
