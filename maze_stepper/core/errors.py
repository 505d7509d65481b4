class MazeError(Exception):
    """Base class for every rejected maze operation."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, width, height):
        super().__init__(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height


class NotAdjacent(MazeError, ValueError):
    def __init__(self, a, b):
        super().__init__(f"Cells {a} and {b} are not adjacent")
        self.a = a
        self.b = b


class InvalidPosition(MazeError, IndexError):
    def __init__(self, pos, width, height):
        super().__init__(f"Position {pos} out of bounds for {width}x{height} grid")
        self.pos = pos


class GridNotReady(MazeError, RuntimeError):
    """Solving was requested before generation finished."""
