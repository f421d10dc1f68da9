import logging

import pytest

from puzzlecube.cube import Face
from puzzlecube.puzzlecube_cli import puzzlecube_cli


@pytest.fixture
def cli():
    return puzzlecube_cli()


class TestCli:
    def test_prompt(self, cli):
        assert cli.prompt == "PUZZLECUBE 3x3> "

    def test_apply_and_reset(self, cli, capsys):
        cli.onecmd("apply R U R' U'")
        cli.onecmd("is_solved")
        assert capsys.readouterr().out.strip() == "Not solved"
        cli.onecmd("reset")
        cli.onecmd("is_solved")
        assert capsys.readouterr().out.strip() == "Solved"

    def test_apply_bad_notation(self, cli, capsys):
        cli.onecmd("apply R Q")
        assert "Line 1, col 3" in capsys.readouterr().out
        assert cli.cube.is_solved()

    def test_check(self, cli, capsys):
        cli.onecmd("check Rw")
        out = capsys.readouterr().out
        assert out.startswith("2 action(s)")
        assert cli.cube.is_solved()

    def test_resize(self, cli):
        cli.onecmd("resize 5")
        assert cli.cube.size == 5
        assert cli.prompt == "PUZZLECUBE 5x5> "
        cli.onecmd("resize 12")
        cli.onecmd("resize five")
        assert cli.cube.size == 5

    def test_rotations(self, cli, capsys):
        cli.onecmd("rotate_face front")
        cli.onecmd("rotate_face Front -1")
        cli.onecmd("rotate_slice y 1 1 2")
        cli.onecmd("rotate_slice y 1 1 2")
        cli.onecmd("rotate_cube z")
        cli.onecmd("is_solved")
        assert capsys.readouterr().out.strip() == "Solved"

    def test_focus(self, cli):
        cli.onecmd("rotate_face Top")
        before = cli.cube.state
        cli.onecmd("focus Top")
        assert sorted(cli.cube.state[Face.Front.index]) == sorted(before[Face.Top.index])
        cli.onecmd("focus Bottom")
        assert cli.cube.state == before

    def test_errors_keep_running(self, cli, caplog):
        with caplog.at_level(logging.ERROR, logger="puzzlecube_cli"):
            assert not cli.onecmd("rotate_slice x 2 1")
            assert not cli.onecmd("rotate_face Middle")
            assert not cli.onecmd("rotate_slice w 1 1")
        assert "InvalidSliceRange" in caplog.text
        assert "IndexOutOfRange" in caplog.text

    def test_failing_apply_keeps_cube(self, caplog):
        cli = puzzlecube_cli(2)
        with caplog.at_level(logging.ERROR, logger="puzzlecube_cli"):
            cli.onecmd("apply R r")
        assert "InvalidSliceRange" in caplog.text
        assert cli.cube.is_solved()
        assert cli.cube.seq_num == 0

    def test_print_cube(self, cli, capsys):
        cli.onecmd("print_cube")
        assert capsys.readouterr().out.startswith("Left\n  1 1 1\n")

    def test_complete_face(self, cli):
        assert cli.complete_focus("B", "focus B", 6, 7) == ["Back", "Bottom"]
        assert cli.complete_rotate_face("", "rotate_face ", 12, 12) == [
            face.name for face in Face
        ]

    def test_debug_level(self, cli):
        cli.onecmd("debug_level warning")
        assert logging.getLogger("puzzlecube").level == logging.WARNING
        assert cli.complete_debug_level("in", "", 0, 0) == ["info"]

    def test_quit(self, cli):
        assert cli.onecmd("quit")
