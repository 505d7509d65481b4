import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from maze_stepper.algo.base import StepResult, StepStatus
from maze_stepper.algo.dfs import RecursiveBacktracker
from maze_stepper.algo.solvers import AStar
from maze_stepper.core.config import MazeConfig
from maze_stepper.core.errors import GridNotReady
from maze_stepper.core.grid import Grid, Position
from maze_stepper.core.rng import RandomSource

logger = logging.getLogger(__name__)


class RunPhase(Enum):
    GENERATING_PAUSED = "generating_paused"
    GENERATING_RUNNING = "generating_running"
    GENERATION_DONE = "generation_done"
    SOLVING_RUNNING = "solving_running"
    SOLVING_PAUSED = "solving_paused"
    SOLVING_DONE = "solving_done"


_PAUSE = {
    RunPhase.GENERATING_RUNNING: RunPhase.GENERATING_PAUSED,
    RunPhase.SOLVING_RUNNING: RunPhase.SOLVING_PAUSED,
}
_RESUME = {paused: running for running, paused in _PAUSE.items()}


@dataclass(frozen=True)
class MazeSnapshot:
    """Read-only view of everything a renderer needs for one frame."""
    width: int
    height: int
    walls: Tuple[int, ...]  # row-major wall bitmasks
    visited: FrozenSet[Position]
    current: Optional[Position]
    stack: Tuple[Position, ...]
    closed: FrozenSet[Position]
    frontier: FrozenSet[Position]
    path: Tuple[Position, ...]
    start: Position
    end: Position
    phase: RunPhase

    def wall_mask(self, pos: Position) -> int:
        return self.walls[pos[0] * self.width + pos[1]]


class MazeController:
    """
    Sequences generation and solving over one grid.

    The grid is only mutated by the generator while the phase is one of the
    GENERATING_* values; the solver is created once generation is done and
    only reads walls.
    """

    def __init__(self, config: Optional[MazeConfig] = None):
        self.config = (config or MazeConfig()).validate()
        self.grid = Grid(self.config.width, self.config.height)
        self.rng = RandomSource(self.config.seed)
        self.generator = RecursiveBacktracker(self.grid, rng=self.rng, start=self.config.start)
        self.solver: Optional[AStar] = None
        self.phase = self._initial_phase()

    def _initial_phase(self) -> RunPhase:
        return RunPhase.GENERATING_RUNNING if self.config.autostart else RunPhase.GENERATING_PAUSED

    @property
    def is_paused(self) -> bool:
        return self.phase in _RESUME

    @property
    def path(self) -> Tuple[Position, ...]:
        return tuple(self.solver.path) if self.solver else ()

    def _set_phase(self, phase: RunPhase):
        if phase != self.phase:
            logger.debug(f"Phase {self.phase.name} -> {phase.name}")
            self.phase = phase

    # --- Commands ---

    def step(self) -> StepResult:
        if self.is_paused:
            return StepResult.paused()

        if self.phase == RunPhase.GENERATING_RUNNING:
            result = self.generator.step()
            if result.status == StepStatus.GENERATION_FINISHED:
                self._set_phase(RunPhase.GENERATION_DONE)
                logger.info(f"Maze generated: {self.grid.width}x{self.grid.height}, "
                            f"{self.generator.step_count} steps")
                if self.config.auto_solve:
                    self.start_solving()
            return result

        if self.phase == RunPhase.SOLVING_RUNNING:
            result = self.solver.step()
            if result.status == StepStatus.PATH_FOUND:
                self._set_phase(RunPhase.SOLVING_DONE)
                logger.info(f"Path found: {len(result.path)} cells, {self.solver.step_count} steps")
            elif result.status == StepStatus.UNREACHABLE:
                self._set_phase(RunPhase.SOLVING_DONE)
                logger.warning(f"No path from {self.solver.start} to {self.solver.end}")
            return result

        return StepResult.idle()

    def advance(self, n: int) -> StepResult:
        """Runs up to n steps, stopping early at the first result that is not CONTINUED."""
        result = StepResult.idle()
        for _ in range(n):
            result = self.step()
            if result.status != StepStatus.CONTINUED:
                break
        return result

    def single_step(self) -> StepResult:
        """Performs one step even while paused, leaving the phase paused afterwards."""
        if not self.is_paused:
            return self.step()
        paused = self.phase
        self.phase = _RESUME[paused]
        result = self.step()
        if self.phase in _PAUSE:
            self.phase = _PAUSE[self.phase]
        return result

    def pause(self) -> bool:
        if self.phase in _PAUSE:
            self._set_phase(_PAUSE[self.phase])
            return True
        return False

    def resume(self) -> bool:
        if self.phase in _RESUME:
            self._set_phase(_RESUME[self.phase])
            return True
        return False

    def toggle_pause(self) -> bool:
        return self.resume() if self.is_paused else self.pause()

    def start_solving(self, start: Optional[Position] = None, end: Optional[Position] = None):
        if self.phase != RunPhase.GENERATION_DONE:
            raise GridNotReady(f"Cannot solve while phase is {self.phase.name}")
        start = start if start is not None else self.config.start
        end = end if end is not None else self.config.resolved_end
        self.solver = AStar(self.grid, start, end)
        self._set_phase(RunPhase.SOLVING_RUNNING)
        logger.info(f"Solving from {start} to {end}")

    def reset(self, seed: Optional[int] = None):
        """
        Returns to the start of generation with a cleared grid.
        The random source is reseeded with `seed`, else the configured seed,
        else fresh entropy.
        """
        if seed is None:
            seed = self.config.seed
        self.rng.reseed(seed)
        self.generator.reset()
        self.solver = None
        self._set_phase(self._initial_phase())
        logger.info(f"Reset (seed={seed})")

    # --- Read-only views ---

    def snapshot(self) -> MazeSnapshot:
        grid = self.grid
        visited = frozenset(pos for pos in grid.positions() if grid.is_visited(*pos))
        solver = self.solver
        return MazeSnapshot(
            width=grid.width,
            height=grid.height,
            walls=tuple(val & Grid.ALL_WALLS for val in grid.cells),
            visited=visited,
            current=solver.current if solver else self.generator.current,
            stack=tuple(self.generator.stack),
            closed=frozenset(solver.closed) if solver else frozenset(),
            frontier=solver.frontier_positions if solver else frozenset(),
            path=self.path,
            start=solver.start if solver else self.config.start,
            end=solver.end if solver else self.config.resolved_end,
            phase=self.phase,
        )
