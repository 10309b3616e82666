import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_crawler.core.grid import Grid
from maze_crawler.game.session import GameSession, HELP_TEXT
from maze_crawler.game.play import play, WIN_BANNER

# S at (1, 3), E at (4, 1)
CORRIDOR = [
    "BBBBBB",
    "B110EB",
    "B1101B",
    "BS001B",
    "BBBBBB",
]

class ScriptedInput:
    def __init__(self, commands):
        self.commands = list(commands)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.commands:
            raise EOFError
        return self.commands.pop(0)

class TestGameSession(unittest.TestCase):
    def setUp(self):
        self.grid = Grid.from_rows(CORRIDOR)
        self.session = GameSession(self.grid)

    def test_fixture(self):
        self.assertEqual(self.grid.start, (1, 3))
        self.assertEqual(self.grid.end, (4, 1))

    def test_initial_fog(self):
        lines = self.session.render_map()
        self.assertEqual(lines[0], "111111")
        self.assertEqual(lines[2], "1    1")
        # Player drawn even before the first reveal
        self.assertEqual(lines[3], "1*   1")

    def test_reveal_neighbors(self):
        self.session.reveal()
        lines = self.session.render_map()
        self.assertEqual(lines[2], "11   1")
        self.assertEqual(lines[3], "1*   1")
        self.assertTrue(self.session.is_revealed(2, 3))
        self.assertFalse(self.session.is_revealed(3, 3))

    def test_move_and_block(self):
        result = self.session.handle("RIGHT")
        self.assertTrue(result.moved)
        self.assertEqual(self.session.player, (2, 3))

        result = self.session.handle("w")
        self.assertFalse(result.moved)
        self.assertEqual(result.message, "Cannot move into wall.")
        self.assertEqual(self.session.player, (2, 3))

    def test_start_is_walkable(self):
        self.session.handle("d")
        result = self.session.handle("a")
        self.assertTrue(result.moved)
        self.assertEqual(self.session.player, (1, 3))

    def test_win_does_not_move(self):
        for command in ["d", "d", "w", "w"]:
            self.assertTrue(self.session.handle(command).moved)
        self.assertEqual(self.session.player, (3, 1))

        result = self.session.handle("right")
        self.assertTrue(result.won)
        self.assertTrue(self.session.won)
        self.assertEqual(self.session.player, (3, 1))

    def test_border_shows_as_wall(self):
        result = self.session.handle("left")
        self.assertEqual(result.message, "Cannot move into wall.")
        self.session.reveal()
        self.assertEqual(self.session.render_map()[3][0], "1")

    def test_help_and_unknown(self):
        self.assertEqual(self.session.handle(" Help ").message, HELP_TEXT)
        result = self.session.handle("jump")
        self.assertEqual(result.message, "Unrecognized command. Type 'help' for help.")
        self.assertFalse(result.moved)

    def test_restart(self):
        self.session.handle("d")
        self.session.reveal()
        result = self.session.handle("restart")
        self.assertTrue(result.moved)
        self.assertEqual(self.session.player, (1, 3))
        self.assertFalse(self.session.is_revealed(2, 3))

    def test_quit(self):
        self.assertTrue(self.session.handle("QUIT").quit)

    def test_single_cell_maze_starts_won(self):
        grid = Grid.from_rows(["BBB", "BEB", "BBB"])
        grid.start = (1, 1)
        session = GameSession(grid)
        self.assertTrue(session.won)
        session.handle("restart")
        self.assertTrue(session.won)

    def test_full_map(self):
        self.assertEqual(self.session.render_full(), [
            "111111",
            "111 E1",
            "111 11",
            "1S  11",
            "111111",
        ])

class TestPlayLoop(unittest.TestCase):
    def test_play_to_win(self):
        grid = Grid.from_rows(CORRIDOR)
        out = []
        scripted = ScriptedInput(["up", "d", "d", "w", "w", "d", "", ""])
        won = play(grid, input_fn=scripted, output=out.append, clear_screen=False)

        self.assertTrue(won)
        self.assertIn("Cannot move into wall.", out)
        self.assertIn(WIN_BANNER, out)
        self.assertIn("Complete map:", out)
        self.assertEqual(scripted.commands, [])

    def test_quit(self):
        grid = Grid.from_rows(CORRIDOR)
        out = []
        won = play(grid, input_fn=ScriptedInput(["help", "quit"]), output=out.append, clear_screen=False)
        self.assertFalse(won)
        self.assertIn(HELP_TEXT, out)
        self.assertNotIn(WIN_BANNER, out)

    def test_eof_propagates(self):
        grid = Grid.from_rows(CORRIDOR)
        with self.assertRaises(EOFError):
            play(grid, input_fn=ScriptedInput([]), output=lambda s: None, clear_screen=False)

    def test_single_cell_maze(self):
        grid = Grid.from_rows(["BBB", "BEB", "BBB"])
        grid.start = (1, 1)
        out = []
        scripted = ScriptedInput(["", ""])
        self.assertTrue(play(grid, input_fn=scripted, output=out.append, clear_screen=False))
        self.assertIn(WIN_BANNER, out)
        self.assertNotIn("Current map:", out)
        self.assertEqual(scripted.commands, [])

if __name__ == '__main__':
    unittest.main()
