from typing import Iterable, Optional

from maze_stepper.core.grid import Grid, Position


def render_ascii(grid: Grid, path: Iterable[Position] = (), start: Optional[Position] = None,
                 end: Optional[Position] = None) -> str:
    """
    Draws the grid as text. Each cell is three characters wide:

        +---+---+
        | S   . |
        +---+   +
        |     E |
        +---+---+
    """
    on_path = set(path)

    def marker(pos):
        if pos == start: return "S"
        if pos == end: return "E"
        if pos in on_path: return "."
        return " "

    lines = ["+" + "---+" * grid.width]
    for row in range(grid.height):
        body = "|"
        floor = "+"
        for col in range(grid.width):
            body += f" {marker((row, col))} "
            body += "|" if grid.has_wall(row, col, Grid.EAST) else " "
            floor += "---+" if grid.has_wall(row, col, Grid.SOUTH) else "   +"
        lines.append(body)
        lines.append(floor)
    return "\n".join(lines)
