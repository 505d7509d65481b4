import logging
from enum import Enum
from typing import List, Optional, Tuple

from maze_stepper.algo.base import Steppable, StepResult
from maze_stepper.core.grid import Grid, Position
from maze_stepper.core.rng import RandomSource

logger = logging.getLogger(__name__)


class GeneratorState(Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"
    DONE = "done"


class RecursiveBacktracker(Steppable):
    """
    Randomized depth-first backtracking, one carve or one backtrack per step.
    The recursion is kept on an explicit stack so generation can stop between
    any two steps.
    """

    def __init__(self, grid: Grid, seed: Optional[int] = None, rng: Optional[RandomSource] = None,
                 start: Position = (0, 0)):
        super().__init__(grid)
        self.rng = rng if rng is not None else RandomSource(seed)
        self.start = grid.check_position(start)
        self.state = GeneratorState.UNSTARTED
        self.stack: List[Position] = []
        self.visited_count = 0

    @property
    def current(self) -> Optional[Position]:
        return self.stack[-1] if self.stack else None

    def is_done(self) -> bool:
        return self.state == GeneratorState.DONE

    def reset(self):
        self.grid.reset()
        self.stack.clear()
        self.visited_count = 0
        self.step_count = 0
        self.state = GeneratorState.UNSTARTED

    def step(self) -> StepResult:
        if self.state == GeneratorState.DONE:
            return StepResult.generation_finished()

        self.step_count += 1

        if self.state == GeneratorState.UNSTARTED:
            self.grid.set_visited(*self.start)
            self.visited_count = 1
            self.stack.append(self.start)
            self.state = GeneratorState.RUNNING
            logger.debug(f"Generation started at {self.start}")
            if self.visited_count == self.grid.width * self.grid.height:
                # Single cell: nothing to carve
                self.stack.clear()
                return self._finish()
            return StepResult.continued()

        cr, cc = self.stack[-1]

        # Find unvisited neighbors
        neighbors: List[Tuple[int, int]] = []
        for nr, nc, _ in self.grid.get_neighbors(cr, cc):
            if not self.grid.is_visited(nr, nc):
                neighbors.append((nr, nc))

        if neighbors:
            nxt = neighbors[self.rng.next_choice(len(neighbors))]
            self.grid.open_edge((cr, cc), nxt)
            self.grid.set_visited(*nxt)
            self.visited_count += 1
            self.stack.append(nxt)
            return StepResult.continued()

        # Backtrack
        self.stack.pop()
        if not self.stack:
            return self._finish()
        return StepResult.continued()

    def _finish(self) -> StepResult:
        self.state = GeneratorState.DONE
        logger.debug(f"Generation finished after {self.step_count} steps ({self.visited_count} cells)")
        return StepResult.generation_finished()
