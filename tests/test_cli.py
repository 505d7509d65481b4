import io
import unittest
import sys
import os
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.grid import Grid
from maze_stepper.main import main
from maze_stepper.viz.ascii_render import render_ascii


class TestAsciiRender(unittest.TestCase):
    def test_two_cells(self):
        grid = Grid(2, 1)
        grid.open_edge((0, 0), (0, 1))
        text = render_ascii(grid, start=(0, 0), end=(0, 1))
        self.assertEqual(text, "+---+---+\n| S   E |\n+---+---+")

    def test_path_markers(self):
        grid = Grid(1, 3)
        grid.open_edge((0, 0), (1, 0))
        grid.open_edge((1, 0), (2, 0))
        text = render_ascii(grid, path=[(0, 0), (1, 0), (2, 0)], start=(0, 0), end=(2, 0))
        self.assertEqual(text.splitlines(), [
            "+---+",
            "| S |",
            "+   +",
            "| . |",
            "+   +",
            "| E |",
            "+---+",
        ])


class TestCli(unittest.TestCase):
    def test_generate(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["generate", "--width", "5", "--height", "5", "--seed", "42"])
        self.assertEqual(code, 0)
        text = out.getvalue()
        self.assertIn("S", text)
        self.assertIn("Path Length:", text)

    def test_generate_rejects_bad_size(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["generate", "--width", "0", "--height", "5"])
        self.assertEqual(code, 2)

    def test_delay_must_not_be_negative(self):
        err = io.StringIO()
        with redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
            main(["run", "--delay", "-0.5"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("must be >= 0", err.getvalue())

    def test_no_command(self):
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main([]), 0)


if __name__ == '__main__':
    unittest.main()
