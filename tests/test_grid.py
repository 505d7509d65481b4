import unittest
import sys
import os

# Add project root to path so we can import maze_stepper
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.errors import InvalidDimensions, InvalidPosition, MazeError, NotAdjacent
from maze_stepper.core.grid import Grid


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 7
        grid = Grid(w, h)
        self.assertEqual(len(grid.cells), w * h)
        # All cells should have all walls (value 15)
        for val in grid.cells:
            self.assertEqual(val, Grid.ALL_WALLS)
        self.assertEqual(grid.open_edge_count(), 0)

    def test_invalid_dimensions(self):
        for w, h in [(0, 5), (5, 0), (0, 0), (-1, 3)]:
            with self.assertRaises(InvalidDimensions):
                Grid(w, h)
        with self.assertRaises(MazeError):
            Grid(0, 1)

    def test_check_position(self):
        grid = Grid(4, 3)
        self.assertEqual(grid.check_position([2, 3]), (2, 3))
        self.assertTrue(grid.in_bounds((0, 0)))
        self.assertFalse(grid.in_bounds((3, 0)))
        for bad in ((3, 0), (0, 4), (-1, 0), (1, 2, 3), None):
            with self.assertRaises(InvalidPosition):
                grid.check_position(bad)

    def test_coordinates(self):
        grid = Grid(5, 4)
        self.assertEqual(grid.get_index(2, 3), 13)  # 2 * 5 + 3

        with self.assertRaises(InvalidPosition):
            grid.get_index(-1, 0)
        with self.assertRaises(InvalidPosition):
            grid.get_index(4, 0)
        # Still an IndexError for callers that expect one
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)

    def test_open_edge_symmetric(self):
        grid = Grid(2, 2)
        grid.open_edge((0, 0), (0, 1))

        self.assertTrue(grid.is_open((0, 0), (0, 1)))
        self.assertTrue(grid.is_open((0, 1), (0, 0)))
        self.assertFalse(grid.has_wall(0, 0, Grid.EAST))
        self.assertFalse(grid.has_wall(0, 1, Grid.WEST))

        # Others remain
        self.assertTrue(grid.has_wall(0, 0, Grid.NORTH))
        self.assertTrue(grid.has_wall(0, 1, Grid.EAST))
        self.assertFalse(grid.is_open((0, 0), (1, 0)))
        self.assertEqual(grid.open_edge_count(), 1)

    def test_open_edge_is_idempotent(self):
        grid = Grid(3, 3)
        grid.open_edge((1, 1), (2, 1))
        before = grid.cells.tobytes()
        grid.open_edge((1, 1), (2, 1))
        grid.open_edge((2, 1), (1, 1))
        self.assertEqual(grid.cells.tobytes(), before)
        self.assertEqual(grid.open_edge_count(), 1)

    def test_not_adjacent(self):
        grid = Grid(3, 3)
        with self.assertRaises(NotAdjacent):
            grid.open_edge((0, 0), (1, 1))
        with self.assertRaises(NotAdjacent):
            grid.open_edge((0, 0), (0, 0))
        with self.assertRaises(NotAdjacent):
            grid.is_open((0, 0), (0, 2))
        with self.assertRaises(InvalidPosition):
            grid.open_edge((0, 2), (0, 3))
        self.assertEqual(grid.open_edge_count(), 0)

    def test_border_is_never_carved(self):
        grid = Grid(2, 2)
        grid.carve_path(0, 0, Grid.NORTH)
        grid.carve_path(1, 1, Grid.EAST)
        self.assertEqual(grid.cells[0], Grid.ALL_WALLS)
        self.assertEqual(grid.cells[3], Grid.ALL_WALLS)

    def test_visited_flags(self):
        grid = Grid(3, 3)
        self.assertFalse(grid.is_visited(1, 1))
        grid.set_visited(1, 1)
        self.assertTrue(grid.is_visited(1, 1))
        # Visited bit does not disturb walls
        self.assertEqual(grid.wall_mask((1, 1)), Grid.ALL_WALLS)
        grid.set_visited(1, 1, False)
        self.assertFalse(grid.is_visited(1, 1))

    def test_neighbors(self):
        grid = Grid(3, 3)
        # Center cell (1,1) should have 4 neighbors, N S E W order
        self.assertEqual(grid.neighbors((1, 1)), [(0, 1), (2, 1), (1, 2), (1, 0)])

        # Corner cell (0,0) should have 2 neighbors (South, East)
        corner_neighbors = list(grid.get_neighbors(0, 0))
        self.assertEqual(len(corner_neighbors), 2)
        self.assertIn((1, 0, Grid.SOUTH), corner_neighbors)
        self.assertIn((0, 1, Grid.EAST), corner_neighbors)

        # Grid adjacency ignores walls, graph adjacency does not
        self.assertEqual(list(grid.get_open_neighbors(1, 1)), [])
        grid.open_edge((1, 1), (1, 2))
        self.assertEqual(list(grid.get_open_neighbors(1, 1)), [(1, 2)])

    def test_single_row_neighbors(self):
        grid = Grid(4, 1)
        self.assertEqual(grid.neighbors((0, 0)), [(0, 1)])
        self.assertEqual(grid.neighbors((0, 2)), [(0, 3), (0, 1)])
        self.assertEqual(Grid(1, 1).neighbors((0, 0)), [])

    def test_reset(self):
        grid = Grid(4, 3)
        grid.open_edge((0, 0), (0, 1))
        grid.open_edge((1, 2), (2, 2))
        grid.set_visited(2, 3)
        grid.reset()
        self.assertEqual((grid.width, grid.height), (4, 3))
        self.assertEqual(grid.cells.tobytes(), Grid(4, 3).cells.tobytes())

        once = grid.cells.tobytes()
        grid.reset()
        grid.reset()
        self.assertEqual(grid.cells.tobytes(), once)

    def test_positions_row_major(self):
        grid = Grid(2, 2)
        self.assertEqual(list(grid.positions()), [(0, 0), (0, 1), (1, 0), (1, 1)])


if __name__ == '__main__':
    unittest.main()
