from array import array
from dataclasses import dataclass
from typing import List, Optional
from maze_crawler.core.grid import Grid, Position

HELP_TEXT = (
    "----Valid Commands----\n"
    "Function commands:\n"
    "\tHelp: prints this listing\n"
    "\tRestart: erases the map and places player back at start\n"
    "\tQuit: terminates the program\n"
    "Movement commands:\n"
    "\tUp or W: moves the player up one space\n"
    "\tDown or S: moves the player down one space\n"
    "\tLeft or A: moves the player left one space\n"
    "\tRight or D: moves the player right one space\n"
    "\nCommands are not case-sensitive."
)

MAP_KEY = "Key:\n'*' = player | '1' = wall | 'S' = starting point | 'E' = exit"

MOVE_COMMANDS = {
    "up": Grid.UP, "w": Grid.UP,
    "down": Grid.DOWN, "s": Grid.DOWN,
    "left": Grid.LEFT, "a": Grid.LEFT,
    "right": Grid.RIGHT, "d": Grid.RIGHT,
}

@dataclass
class CommandResult:
    message: Optional[str] = None
    moved: bool = False  # turn is over, redraw the map
    won: bool = False
    quit: bool = False

class GameSession:
    """
    Player state for one maze: position plus the fog-of-war map.
    The map holds 0 for cells the player has not seen yet.
    """
    UNKNOWN = 0
    PLAYER = ord('*')

    def __init__(self, grid: Grid):
        if grid.start is None:
            raise ValueError("Maze has no start position")
        self.grid = grid
        self.player: Position = grid.start
        self.won = False
        self.map = array('B')
        self.reset()

    @staticmethod
    def visible_kind(kind: int) -> int:
        # The border is just wall to the player
        return Grid.WALL if kind == Grid.BORDER else kind

    def reset(self):
        self.map = array('B', [Grid.WALL if c == Grid.BORDER else self.UNKNOWN for c in self.grid.cells])
        self.player = self.grid.start
        # A single-cell maze holds END on the start cell
        self.won = self.grid.end == self.grid.start

    def reveal(self):
        """Uncovers the player's cell and its four neighbors."""
        px, py = self.player
        cells = [(px, py)] + [(nx, ny) for nx, ny, _ in self.grid.get_neighbors(px, py)]
        for x, y in cells:
            idx = y * self.grid.width + x
            self.map[idx] = self.visible_kind(self.grid.cells[idx])

    def is_revealed(self, x: int, y: int) -> bool:
        return self.map[self.grid.get_index(x, y)] != self.UNKNOWN

    def move(self, direction: str) -> CommandResult:
        px, py = self.player
        nx, ny = self.grid.step(px, py, direction)
        target = self.grid.get(nx, ny)

        if target in (Grid.FLOOR, Grid.START):
            self.player = (nx, ny)
            return CommandResult(moved=True)
        if target == Grid.END:
            # Reaching the exit ends the game where the player stands
            self.won = True
            return CommandResult(moved=True, won=True)
        return CommandResult(message="Cannot move into wall.")

    def handle(self, command: str) -> CommandResult:
        command = command.strip().lower()

        if command in MOVE_COMMANDS:
            return self.move(MOVE_COMMANDS[command])
        if command == "help":
            return CommandResult(message=HELP_TEXT)
        if command == "restart":
            self.reset()
            return CommandResult(moved=True)
        if command == "quit":
            return CommandResult(quit=True)
        return CommandResult(message="Unrecognized command. Type 'help' for help.")

    def render_map(self) -> List[str]:
        lines = []
        width = self.grid.width
        px, py = self.player
        for y in range(self.grid.height):
            chars = []
            for x in range(width):
                if (x, y) == (px, py):
                    chars.append('*')
                    continue
                value = self.map[y * width + x]
                chars.append(' ' if value in (self.UNKNOWN, Grid.FLOOR) else chr(value))
            lines.append("".join(chars))
        return lines

    def render_full(self) -> List[str]:
        """The whole maze as the player would see it with the fog lifted."""
        lines = []
        for row in self.grid.rows():
            lines.append("".join(' ' if c == Grid.FLOOR else chr(self.visible_kind(c)) for c in row))
        return lines
