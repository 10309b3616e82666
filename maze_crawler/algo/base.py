import random
from abc import ABC, abstractmethod
from typing import Iterator
from maze_crawler.core.grid import Grid

class Generator(ABC):
    def __init__(self, grid: Grid, rng: random.Random = None):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random()
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual grid modifications happen in-place on self.grid.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
