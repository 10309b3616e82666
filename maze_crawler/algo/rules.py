from typing import List
from maze_crawler.core.grid import Grid


def _is_path(grid: Grid, x: int, y: int) -> bool:
    # Cells past the edge are never path
    if not grid.in_bounds(x, y):
        return False
    return grid.cells[y * grid.width + x] in Grid.PATH_KINDS


def is_legal(grid: Grid, x: int, y: int, direction: str) -> bool:
    """
    True if the wall next to (x, y) in 'direction' can become FLOOR without
    widening a corridor or touching an existing path.

    The neighbor must be a WALL, and the three cells around it that are not
    (x, y) itself (straight ahead and both sides) must hold no FLOOR, START or END.
    """
    nx, ny = grid.step(x, y, direction)
    if not grid.in_bounds(nx, ny) or grid.cells[ny * grid.width + nx] != Grid.WALL:
        return False

    ahead_x, ahead_y = grid.step(nx, ny, direction)
    if _is_path(grid, ahead_x, ahead_y):
        return False
    for side in Grid.PERPENDICULAR[direction]:
        sx, sy = grid.step(nx, ny, side)
        if _is_path(grid, sx, sy):
            return False
    return True


def legal_directions(grid: Grid, x: int, y: int) -> List[str]:
    """Legal directions from (x, y), always in UP, DOWN, LEFT, RIGHT order."""
    return [d for d in Grid.DIRECTIONS if is_legal(grid, x, y, d)]
