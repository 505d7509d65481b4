from array import array
from typing import Iterator, List, Tuple

from maze_stepper.core.errors import InvalidDimensions, InvalidPosition, NotAdjacent

Position = Tuple[int, int]  # (row, col)


class Grid:
    # Bitmask Constants
    NORTH = 0b00000001
    EAST  = 0b00000010
    SOUTH = 0b00000100
    WEST  = 0b00001000

    # Generator flag
    VISITED = 0b00010000

    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    # Direction Helpers
    DR = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
    DC = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
    OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)
        self.width = width
        self.height = height
        # 1 byte per cell, walls in the low nibble
        self.cells = array('B', [self.ALL_WALLS] * (width * height))

    def __repr__(self):
        return f"Grid({self.width}x{self.height}, open_edges={self.open_edge_count()})"

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.height and 0 <= col < self.width

    def check_position(self, pos) -> Position:
        """Returns `pos` as a (row, col) tuple, raising InvalidPosition unless it names a cell."""
        try:
            pos = tuple(pos)
        except TypeError:
            raise InvalidPosition(pos, self.width, self.height) from None
        if len(pos) != 2 or not self.in_bounds(pos):
            raise InvalidPosition(pos, self.width, self.height)
        return pos

    def get_index(self, row: int, col: int) -> int:
        if 0 <= row < self.height and 0 <= col < self.width:
            return row * self.width + col
        raise InvalidPosition((row, col), self.width, self.height)

    def positions(self) -> Iterator[Position]:
        """Row-major iteration over every cell position."""
        for row in range(self.height):
            for col in range(self.width):
                yield (row, col)

    def reset(self):
        """Closes every edge and clears the visited flags. Dimensions are kept."""
        for i in range(len(self.cells)):
            self.cells[i] = self.ALL_WALLS

    # --- Walls ---

    def direction_between(self, a: Position, b: Position) -> int:
        """Direction bit pointing from `a` to the grid-adjacent cell `b`."""
        self.get_index(*a)
        self.get_index(*b)
        dr = b[0] - a[0]
        dc = b[1] - a[1]
        if dr == -1 and dc == 0:
            return self.NORTH
        if dr == 1 and dc == 0:
            return self.SOUTH
        if dr == 0 and dc == 1:
            return self.EAST
        if dr == 0 and dc == -1:
            return self.WEST
        raise NotAdjacent(a, b)

    def carve_path(self, row: int, col: int, dir_bit: int):
        """
        Removes the wall between cell (row, col) and the neighbor in 'dir_bit'.
        Also removes the OPPOSITE wall from the neighbor.
        """
        idx1 = self.get_index(row, col)
        r2 = row + self.DR[dir_bit]
        c2 = col + self.DC[dir_bit]

        if not (0 <= r2 < self.height and 0 <= c2 < self.width):
            return  # Border walls stay closed

        idx2 = r2 * self.width + c2
        self.cells[idx1] &= ~dir_bit
        self.cells[idx2] &= ~self.OPPOSITE[dir_bit]

    def open_edge(self, a: Position, b: Position):
        dir_bit = self.direction_between(a, b)
        self.carve_path(a[0], a[1], dir_bit)

    def is_open(self, a: Position, b: Position) -> bool:
        dir_bit = self.direction_between(a, b)
        return not self.has_wall(a[0], a[1], dir_bit)

    def has_wall(self, row: int, col: int, dir_bit: int) -> bool:
        return (self.cells[self.get_index(row, col)] & dir_bit) != 0

    def wall_mask(self, pos: Position) -> int:
        return self.cells[self.get_index(*pos)] & self.ALL_WALLS

    def open_edge_count(self) -> int:
        # Each interior edge is counted once, from its north/west side
        count = 0
        for row in range(self.height):
            for col in range(self.width):
                val = self.cells[row * self.width + col]
                if row < self.height - 1 and not (val & self.SOUTH):
                    count += 1
                if col < self.width - 1 and not (val & self.EAST):
                    count += 1
        return count

    # --- Visited flag ---

    def set_visited(self, row: int, col: int, visited: bool = True):
        idx = self.get_index(row, col)
        if visited:
            self.cells[idx] |= self.VISITED
        else:
            self.cells[idx] &= ~self.VISITED

    def is_visited(self, row: int, col: int) -> bool:
        return (self.cells[self.get_index(row, col)] & self.VISITED) != 0

    # --- Adjacency ---

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nrow, ncol, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check walls (that's for pathfinding).
        """
        # North
        if row > 0:
            yield (row - 1, col, self.NORTH)
        # South
        if row < self.height - 1:
            yield (row + 1, col, self.SOUTH)
        # East
        if col < self.width - 1:
            yield (row, col + 1, self.EAST)
        # West
        if col > 0:
            yield (row, col - 1, self.WEST)

    def neighbors(self, pos: Position) -> List[Position]:
        self.get_index(*pos)
        return [(r, c) for r, c, _ in self.get_neighbors(*pos)]

    def get_open_neighbors(self, row: int, col: int) -> Iterator[Position]:
        """
        Yields (nrow, ncol) for neighbors that are NOT blocked by a wall.
        """
        val = self.cells[self.get_index(row, col)]

        if not (val & self.NORTH) and row > 0:
            yield (row - 1, col)
        if not (val & self.SOUTH) and row < self.height - 1:
            yield (row + 1, col)
        if not (val & self.EAST) and col < self.width - 1:
            yield (row, col + 1)
        if not (val & self.WEST) and col > 0:
            yield (row, col - 1)
