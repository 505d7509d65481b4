from collections import deque
from typing import Dict, Optional

from maze_stepper.core.grid import Grid, Position


def popcount_walls(val: int) -> int:
    c = 0
    if val & Grid.NORTH: c += 1
    if val & Grid.EAST: c += 1
    if val & Grid.SOUTH: c += 1
    if val & Grid.WEST: c += 1
    return c


class MazeAnalyzer:
    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        intersections = 0  # 0, 1 walls
        corridors = 0  # 2 walls

        # Border walls are counted as walls, so a corner cell with one exit is a dead end
        for i in range(grid.width * grid.height):
            walls = popcount_walls(grid.cells[i])
            if walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            elif walls <= 1: intersections += 1

        total = grid.width * grid.height
        return {
            "open_edges": grid.open_edge_count(),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }

    @staticmethod
    def bfs_distances(grid: Grid, source: Position) -> Dict[Position, int]:
        """Edge counts from `source` to every reachable cell, respecting walls."""
        grid.get_index(*source)
        dist = {source: 0}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for neighbor in grid.get_open_neighbors(*current):
                if neighbor not in dist:
                    dist[neighbor] = dist[current] + 1
                    queue.append(neighbor)
        return dist

    @staticmethod
    def shortest_distance(grid: Grid, start: Position, end: Position) -> Optional[int]:
        return MazeAnalyzer.bfs_distances(grid, start).get(end)

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """True when the open edges form a spanning tree over all cells."""
        total = grid.width * grid.height
        if grid.open_edge_count() != total - 1:
            return False
        return len(MazeAnalyzer.bfs_distances(grid, (0, 0))) == total
