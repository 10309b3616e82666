from typing import Iterator
from maze_crawler.core.grid import Grid
from maze_crawler.core.events import EventReader, EVT_START, EVT_CARVE, EVT_END

class EventAdapter:
    """
    Adapts an EventReader stream to look like a Generator for the Renderer.
    Applies changes to the Grid as it iterates.
    """
    def __init__(self, grid: Grid, reader: EventReader):
        self.grid = grid
        self.reader = reader
        self.event_count = 0

    @staticmethod
    def blank_grid(width: int, height: int) -> Grid:
        # Logs only record carving, so the border is drawn up front
        grid = Grid(width, height)
        grid.draw_border()
        return grid

    def run(self) -> Iterator[str]:
        for type_code, (x, y) in self.reader.stream_events():
            self.event_count += 1

            if type_code == EVT_START:
                self.grid.mark_start(x, y)
            elif type_code == EVT_CARVE:
                self.grid.carve(x, y)
            elif type_code == EVT_END:
                self.grid.mark_end(x, y)

            yield f"Replay: {self.event_count} events"

        yield "Done"

    def run_all(self):
        for _ in self.run():
            pass
