import heapq
import random
from typing import Iterator, List
from maze_crawler.core.grid import Grid
from maze_crawler.algo.base import Generator
from maze_crawler.algo.rules import legal_directions

class DeadEndFiller(Generator):
    """
    Grows branches off every FLOOR cell until the grid reaches a fixed point.

    Each pass visits FLOOR cells in row-major order, including cells carved
    earlier in the same pass that come later in that order. A cell with at
    least one legal direction picks one at random and carves it on a coin flip.
    The cell counts as progress even when the coin says no, so a pass that
    finds anything carvable is always followed by another pass. The loop stops
    once a whole pass finds nothing to carve.

    A FLOOR cell with no legal direction never gets one back (walls only turn
    into path), so such cells are dropped instead of being rescanned. This
    visits the same cells in the same order as a full-grid scan.
    """
    COIN_ODDS = 0.5

    def __init__(self, grid: Grid, rng: random.Random = None):
        super().__init__(grid, rng)
        self.passes = 0
        self.carved = 0

    def run(self) -> Iterator[str]:
        grid = self.grid
        width = grid.width
        # Indices of FLOOR cells that may still have a legal direction
        live: List[int] = [i for i, c in enumerate(grid.cells) if c == Grid.FLOOR]

        while True:
            self.passes += 1
            moved = False
            heapq.heapify(live)
            next_live: List[int] = []

            while live:
                idx = heapq.heappop(live)
                x, y = idx % width, idx // width

                directions = legal_directions(grid, x, y)
                if not directions:
                    continue

                direction = self.rng.choice(directions)
                if self.rng.random() < self.COIN_ODDS:
                    nx, ny = grid.step(x, y, direction)
                    grid.carve(nx, ny)
                    self.carved += 1
                    new_idx = ny * width + nx
                    # Later in row-major order: still reached by this pass
                    if new_idx > idx:
                        heapq.heappush(live, new_idx)
                    else:
                        next_live.append(new_idx)

                next_live.append(idx)
                moved = True
                self.step_count += 1

                if self.step_count % 100 == 0:
                    yield f"Filling dead ends... Pass: {self.passes} Carved: {self.carved}"

            if not moved:
                break
            live = next_live

        yield "Done"
