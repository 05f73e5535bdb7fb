import contextlib
import io
import os
import tempfile
import unittest
from unittest.mock import patch

import main
from sudokulink.io.event_log import ENDPOINT_ENV

LINK = "puzzle=0034301221034300&answer=&work=&seed=4&gentime=500&elapsed=30000&size=2"


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        env = patch.dict(os.environ)
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop(ENDPOINT_ENV, None)

    def run_main(self, *argv: str) -> str:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            main.main(["--cache-dir", self._tmp.name, *argv])
        return stdout.getvalue()

    def link_of(self, output: str) -> str:
        return output.strip().splitlines()[-1].removeprefix("Link: ")

    def test_setup_prints_shareable_link(self) -> None:
        output = self.run_main("setup", "5")
        self.assertIn("Puzzle #5", output)
        link = self.link_of(output)
        self.assertTrue(link.startswith("#puzzle="))
        self.assertIn("&seed=5&", link)
        self.assertTrue(link.endswith("&size=2"))

    def test_show_keeps_link(self) -> None:
        output = self.run_main("--hash", "#" + LINK)
        self.assertEqual(self.link_of(output), "#" + LINK)
        self.assertIn("Puzzle #4", output)

    def test_set_records_answer(self) -> None:
        output = self.run_main("--hash", LINK, "set", "0", "1")
        self.assertIn("answer=1000000000000000", self.link_of(output))

    def test_check_reports_outcome(self) -> None:
        output = self.run_main("--hash", LINK, "check")
        self.assertIn("Check: OK", output)

    def test_next_moves_to_following_seed(self) -> None:
        output = self.run_main("--no-local-storage", "--hash", LINK, "next")
        self.assertIn("&seed=5&", self.link_of(output))

    def test_editing_a_given_cell_is_rejected(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self.run_main("--hash", LINK, "set", "2", "1")
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
