import heapq
import logging
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from maze_stepper.algo.base import Steppable, StepResult
from maze_stepper.core.grid import Grid, Position

logger = logging.getLogger(__name__)


class SolverState(Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"
    FOUND = "found"
    UNREACHABLE = "unreachable"


class AStar(Steppable):
    """
    A* over the open-edge graph of a grid, one frontier pop per step.

    The frontier is a heap of (f, g, position) entries, so ties on f go to the
    smaller g and then to the row-major smaller position. Entries are never
    removed from the heap when a cheaper route is found; the outdated entry is
    skipped when it surfaces after its position has been closed.
    """

    def __init__(self, grid: Grid, start: Position, end: Position):
        super().__init__(grid)
        self.start = grid.check_position(start)
        self.end = grid.check_position(end)
        self.state = SolverState.UNSTARTED
        self.path: List[Position] = []
        self.current: Optional[Position] = None
        self._reset_search()

    def _reset_search(self):
        # Priority Queue: (f_score, g_score, (row, col))
        self.open_set: List[Tuple[int, int, Position]] = []
        self.g_score: Dict[Position, int] = {}
        self.came_from: Dict[Position, Position] = {}
        self.closed: Set[Position] = set()

    def heuristic(self, a: Position, b: Position) -> int:
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    @property
    def visited_count(self) -> int:
        """Number of cells discovered so far."""
        return len(self.g_score)

    @property
    def frontier_positions(self) -> FrozenSet[Position]:
        return frozenset(pos for _, _, pos in self.open_set if pos not in self.closed)

    def is_done(self) -> bool:
        return self.state in (SolverState.FOUND, SolverState.UNREACHABLE)

    def reset(self):
        self._reset_search()
        self.path = []
        self.current = None
        self.step_count = 0
        self.state = SolverState.UNSTARTED

    def step(self) -> StepResult:
        if self.state == SolverState.FOUND:
            return StepResult.path_found(self.path)
        if self.state == SolverState.UNREACHABLE:
            return StepResult.unreachable()

        if self.state == SolverState.UNSTARTED:
            self.g_score[self.start] = 0
            heapq.heappush(self.open_set, (self.heuristic(self.start, self.end), 0, self.start))
            self.state = SolverState.RUNNING
            logger.debug(f"A* started {self.start} -> {self.end}")

        self.step_count += 1

        if not self.open_set:
            self.state = SolverState.UNREACHABLE
            self.current = None
            logger.debug(f"A* exhausted the frontier after {self.step_count} steps")
            return StepResult.unreachable()

        _, curr_g, current = heapq.heappop(self.open_set)
        self.current = current

        if current == self.end:
            self.reconstruct_path()
            self.state = SolverState.FOUND
            logger.debug(f"A* reached {self.end}, path length {len(self.path)}")
            return StepResult.path_found(self.path)

        if current in self.closed:
            # Outdated duplicate entry
            return StepResult.continued()
        self.closed.add(current)

        for neighbor in self.grid.get_open_neighbors(*current):
            if neighbor in self.closed:
                continue
            new_g = curr_g + 1
            old_g = self.g_score.get(neighbor)
            if old_g is None or new_g < old_g:
                self.g_score[neighbor] = new_g
                self.came_from[neighbor] = current
                priority = new_g + self.heuristic(neighbor, self.end)
                heapq.heappush(self.open_set, (priority, new_g, neighbor))

        return StepResult.continued()

    def reconstruct_path(self):
        curr = self.end
        path = [curr]
        while curr != self.start:
            curr = self.came_from[curr]
            path.append(curr)
        path.reverse()
        self.path = path
