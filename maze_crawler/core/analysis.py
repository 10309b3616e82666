from collections import deque
from typing import Dict, List, Optional
from maze_crawler.core.grid import Grid, Position
from maze_crawler.algo.rules import legal_directions

class MazeInspector:
    @staticmethod
    def open_exits(grid: Grid, x: int, y: int) -> int:
        return sum(1 for nx, ny, _ in grid.get_neighbors(x, y) if grid.is_passable(nx, ny))

    @staticmethod
    def trace_path(grid: Grid, start: Position, end: Position) -> List[Position]:
        """
        Shortest path from start to end through FLOOR/START/END cells (BFS).
        Returns [] if end is unreachable.
        """
        if start == end:
            return [start]

        parents: Dict[Position, Optional[Position]] = {start: None}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current == end:
                break
            for nx, ny, _ in grid.get_neighbors(*current):
                if (nx, ny) not in parents and grid.is_passable(nx, ny):
                    parents[(nx, ny)] = current
                    queue.append((nx, ny))

        if end not in parents:
            return []

        path = []
        curr: Optional[Position] = end
        while curr is not None:
            path.append(curr)
            curr = parents[curr]
        path.reverse()
        return path

    @staticmethod
    def find_wide_blocks(grid: Grid) -> List[Position]:
        """Top-left corner of every 2x2 block made only of path cells."""
        blocks = []
        for y in range(grid.height - 1):
            for x in range(grid.width - 1):
                if (grid.is_passable(x, y) and grid.is_passable(x + 1, y)
                        and grid.is_passable(x, y + 1) and grid.is_passable(x + 1, y + 1)):
                    blocks.append((x, y))
        return blocks

    @staticmethod
    def carvable_cells(grid: Grid) -> List[Position]:
        """FLOOR cells that still have a legal direction. Empty once filling is complete."""
        cells = []
        for y in range(grid.height):
            for x in range(grid.width):
                if grid.cells[y * grid.width + x] == Grid.FLOOR and legal_directions(grid, x, y):
                    cells.append((x, y))
        return cells

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0
        corridors = 0
        junctions = 0  # 3 or 4 exits

        for y in range(grid.height):
            for x in range(grid.width):
                if not grid.is_passable(x, y):
                    continue
                exits = MazeInspector.open_exits(grid, x, y)
                if exits <= 1: dead_ends += 1
                elif exits == 2: corridors += 1
                else: junctions += 1

        start = grid.start or grid.find(Grid.START)
        end = grid.end or grid.find(Grid.END)
        solution = MazeInspector.trace_path(grid, start, end) if start and end else []

        interior = max(0, (grid.width - 2) * (grid.height - 2))
        path_cells = dead_ends + corridors + junctions
        return {
            "width": grid.width,
            "height": grid.height,
            "path_cells": path_cells,
            "walls": grid.count(Grid.WALL),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "solution_length": len(solution),
            "fill_percent": (path_cells / interior) * 100 if interior > 0 else 0
        }
