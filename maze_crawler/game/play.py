import logging
from typing import Callable
from maze_crawler.core.grid import Grid
from maze_crawler.game.session import GameSession, MAP_KEY

logger = logging.getLogger(__name__)

# ANSI escapes for clearing screen and scrollback
CLEAR_CONSOLE = "\033[H\033[2J\033[3J"
BELL = "\a"
PROMPT = "Type command ('help' for help): "

WIN_BANNER = (
    "************************************************************\n"
    "* __   __   ___    _   _    __        __  ___   _   _   _  *\n"
    "* \\ \\ / /  / _ \\  | | | |   \\ \\      / / |_ _| | \\ | | | | *\n"
    "*  \\ V /  | | | | | | | |    \\ \\ /\\ / /   | |  |  \\| | | | *\n"
    "*   | |   | |_| | | |_| |     \\ V  V /    | |  | |\\  | |_| *\n"
    "*   |_|    \\___/   \\___/       \\_/\\_/    |___| |_| \\_| (_) *\n"
    "************************************************************"
)

def _print_lines(output: Callable[[str], None], title: str, lines):
    output(title)
    for line in lines:
        output(line)

def play(grid: Grid, input_fn: Callable[[str], str] = input, output: Callable[[str], None] = print,
         clear_screen: bool = True) -> bool:
    """
    Runs the text game until the player wins or quits.
    Returns True if the player reached the exit.
    """
    session = GameSession(grid)
    clear = (lambda: output(CLEAR_CONSOLE)) if clear_screen else (lambda: None)
    turns = 0

    output(BELL)
    while not session.won:
        clear()
        session.reveal()
        _print_lines(output, "Current map:", session.render_map())
        output("\n" + MAP_KEY + "\n")

        while True:
            result = session.handle(input_fn(PROMPT))
            if result.message:
                output(result.message)
            if result.quit:
                clear()
                logger.info(f"Player quit after {turns} moves")
                return False
            if result.moved:
                turns += 1
                break

    logger.info(f"Player won in {turns} moves")
    clear()
    output(BELL * 3)
    output(WIN_BANNER)
    input_fn("\n\n\n\n\n----press ENTER----\n\n")
    clear()
    _print_lines(output, "Complete map:", session.render_full())
    input_fn("\n\n\n\n\n----press ENTER----\n\n")
    clear()
    return True
