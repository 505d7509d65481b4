from dataclasses import dataclass
from typing import Optional, Tuple

from maze_stepper.core.errors import InvalidDimensions, InvalidPosition

Position = Tuple[int, int]


@dataclass
class MazeConfig:
    width: int = 20
    height: int = 20
    seed: Optional[int] = None
    start: Position = (0, 0)
    end: Optional[Position] = None  # None -> opposite corner of start default
    autostart: bool = False
    auto_solve: bool = False

    @property
    def resolved_end(self) -> Position:
        if self.end is None:
            return (self.height - 1, self.width - 1)
        return self.end

    def validate(self):
        if not isinstance(self.width, int) or not isinstance(self.height, int) \
                or self.width <= 0 or self.height <= 0:
            raise InvalidDimensions(self.width, self.height)
        self.start = self._check_position(self.start)
        if self.end is not None:
            self.end = self._check_position(self.end)
        return self

    def _check_position(self, pos) -> Position:
        try:
            pos = tuple(pos)
        except TypeError:
            raise InvalidPosition(pos, self.width, self.height) from None
        if len(pos) != 2 or not (0 <= pos[0] < self.height and 0 <= pos[1] < self.width):
            raise InvalidPosition(pos, self.width, self.height)
        return pos

    @classmethod
    def from_args(cls, args) -> "MazeConfig":
        """Builds a config from an argparse namespace, ignoring absent options."""
        config = cls(
            width=args.width,
            height=args.height,
            seed=getattr(args, "seed", None),
            autostart=getattr(args, "autostart", False),
            auto_solve=getattr(args, "auto_solve", False),
        )
        if getattr(args, "start", None) is not None:
            config.start = tuple(args.start)
        if getattr(args, "end", None) is not None:
            config.end = tuple(args.end)
        return config.validate()
