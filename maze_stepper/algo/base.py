from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from maze_stepper.core.grid import Grid, Position


class StepStatus(Enum):
    CONTINUED = "continued"
    GENERATION_FINISHED = "generation_finished"
    PATH_FOUND = "path_found"
    UNREACHABLE = "unreachable"
    PAUSED = "paused"
    IDLE = "idle"


@dataclass(frozen=True)
class StepResult:
    status: StepStatus
    path: Tuple[Position, ...] = ()

    @classmethod
    def continued(cls):
        return cls(StepStatus.CONTINUED)

    @classmethod
    def generation_finished(cls):
        return cls(StepStatus.GENERATION_FINISHED)

    @classmethod
    def path_found(cls, path):
        return cls(StepStatus.PATH_FOUND, tuple(path))

    @classmethod
    def unreachable(cls):
        return cls(StepStatus.UNREACHABLE)

    @classmethod
    def paused(cls):
        return cls(StepStatus.PAUSED)

    @classmethod
    def idle(cls):
        return cls(StepStatus.IDLE)

    @property
    def is_terminal(self) -> bool:
        return self.status in (StepStatus.GENERATION_FINISHED, StepStatus.PATH_FOUND, StepStatus.UNREACHABLE)


class Steppable(ABC):
    """
    A process that advances by one bounded unit of work per step() call,
    so the caller can render between steps.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.step_count = 0

    @abstractmethod
    def step(self) -> StepResult:
        pass

    @abstractmethod
    def is_done(self) -> bool:
        pass

    @abstractmethod
    def reset(self):
        pass

    def run(self) -> Iterator[StepResult]:
        """Yields every step result until the process is done, including the final one."""
        while True:
            result = self.step()
            yield result
            if self.is_done():
                return

    def run_all(self) -> StepResult:
        """Helper to run the process to completion."""
        result = None
        for result in self.run():
            pass
        return result
