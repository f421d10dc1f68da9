#!/usr/bin/env python3
# ========================================
# Copyright 2021 22nd Solutions, LLC
# Copyright 2024 Martin TOUZOT
#
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the "Software"),
# to deal in the Software without restriction, including without limitation
# the rights to use, copy, modify, merge, publish, distribute, sublicense,
# and/or sell copies of the Software, and to permit persons to whom the
# Software is furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included
# in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES
# OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
# DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR
# OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE
# USE OR OTHER DEALINGS IN THE SOFTWARE.
#
# ========================================
"""
Create a command line interface to play with a puzzle cube.

Usage :
    puzzlecube-cli

Documented commands (type help <topic>):
========================================
apply  debug_level  help       print_cube  reset   rotate_cube   rotate_slice
check  focus        is_solved  quit        resize  rotate_face
"""
import cmd
import logging

from puzzlecube.actions import RotateCube, RotateFace, RotateSlice
from puzzlecube.algorithm import compile_notation
from puzzlecube.cube import (
    MAX_CUBE_SIZE,
    MIN_CUBE_SIZE,
    Axis,
    Face,
    PuzzleCubeError,
)
from puzzlecube.puzzle import PuzzleCube

# Setup logger
logging.basicConfig()
logger = logging.getLogger("puzzlecube_cli")

FACE_NAMES = [face.name for face in Face]
AXIS_NAMES = [axis.value for axis in Axis]


# ------------------------------------------------
# Main Command line interface for puzzle cubes
# ------------------------------------------------
class puzzlecube_cli(cmd.Cmd):
    """Define the main command line interface (CLI) for puzzle cubes."""

    def __init__(self, size: int = 3, **kwargs):
        """Initialize a CLI holding a solved cube."""
        cmd.Cmd.__init__(self, **kwargs)
        self.cube = PuzzleCube(size)
        self.set_prompt()

    def set_prompt(self) -> None:
        """Show the cube size in the prompt."""
        size = self.cube.size
        self.prompt = f"PUZZLECUBE {size}x{size}> "

    def emptyline(self) -> bool:
        """Do nothing on an empty line."""
        return False

    def onecmd(self, line: str) -> bool:
        """Run one command, reporting cube errors instead of exiting."""
        try:
            return cmd.Cmd.onecmd(self, line)
        except (PuzzleCubeError, ValueError) as err:
            logger.error(f"{type(err).__name__}: {err}")
            return False

    def complete_face_names(self, text: str) -> list[str]:
        """List all face names, possibly starting with `text`."""
        return [f for f in FACE_NAMES if f.lower().startswith(text.lower())]

    def parse_turns(self, args: list[str], index: int) -> int:
        """Read an optional quarter turn count, defaults to 1."""
        if len(args) > index:
            return int(args[index])
        return 1

    def do_reset(self, args):
        """Reset the cube to its solved state."""
        self.cube.reset()

    def do_resize(self, args):
        """
        Replace the cube by a solved cube of another size.

        Usage:
            resize N
        """
        try:
            size = int(args)
        except ValueError:
            logger.error(f"Size must be an integer, got {args!r}")
            return
        if size < MIN_CUBE_SIZE or size > MAX_CUBE_SIZE:
            logger.error(f"Size must be in range [{MIN_CUBE_SIZE}, {MAX_CUBE_SIZE}]")
            return
        self.cube.resize(size)
        self.set_prompt()

    def do_check(self, args):
        """
        Check a notation without applying it.

        Usage:
            check R U R' U'
        """
        match, actions = compile_notation(args)
        if match.succeeded():
            print(f"{len(actions)} action(s)")
            for action in actions:
                print(f"  {action}")
        else:
            print(match.message)

    def do_apply(self, args):
        """
        Apply moves written in cubing notation.

        Usage:
            apply R U R' U'
        """
        match = self.cube.apply_moves(args)
        if match.failed():
            print(match.message)

    def complete_rotate_face(self, text, line, begidx, endidx):
        """List all face names, possibly starting with `text`."""
        return self.complete_face_names(text)

    def do_rotate_face(self, args):
        """
        Turn a face clockwise, negative turns go counter clockwise.

        Usage:
            rotate_face [Left | Front | Right | Back | Top | Bottom] [turns]
        """
        args = args.split()
        if len(args) == 0:
            logger.error("A face is required")
            return
        self.cube.apply(RotateFace(args[0], self.parse_turns(args, 1)))

    def do_rotate_slice(self, args):
        """
        Turn internal layers of an axis.

        Usage:
            rotate_slice [X | Y | Z] start size [turns]
        """
        args = args.split()
        if len(args) < 3:
            logger.error("An axis, a start layer and a size are required")
            return
        self.cube.apply(
            RotateSlice(
                Axis(args[0].upper()), int(args[1]), int(args[2]), self.parse_turns(args, 3)
            )
        )

    def do_rotate_cube(self, args):
        """
        Turn the whole cube around an axis.

        Usage:
            rotate_cube [X | Y | Z] [turns]
        """
        args = args.split()
        if len(args) == 0 or args[0].upper() not in AXIS_NAMES:
            logger.error(f"Axis must be one of {AXIS_NAMES}")
            return
        self.cube.apply(RotateCube(axis=Axis(args[0].upper()), turns=self.parse_turns(args, 1)))

    def complete_focus(self, text, line, begidx, endidx):
        """List all face names, possibly starting with `text`."""
        return self.complete_face_names(text)

    def do_focus(self, args):
        """
        Bring a face to the front.

        Usage:
            focus [Left | Front | Right | Back | Top | Bottom]
        """
        self.cube.apply(RotateCube(focus_face=args.strip()))

    def do_print_cube(self, args):
        """Print the current state of the cube."""
        print(self.cube)

    def do_is_solved(self, args):
        """Tell whether the cube is solved."""
        print("Solved" if self.cube.is_solved() else "Not solved")

    def complete_debug_level(self, text, line, begidx, endidx):
        """List all debug level, possibly starting with `text`."""
        completions = list()
        levels = ["debug", "info", "warning", "error"]

        if not text:
            completions = levels
        else:
            completions = [f for f in levels if f.startswith(text)]

        return completions

    def do_debug_level(self, args):
        """
        Set the level of debug info to provide across all the components.

        Usage:
            debug_level [debug | info | warning | error ]
        """
        modules = ["puzzlecube", "puzzlecube_cli"]

        level = None
        if "debug" in args:
            level = logging.DEBUG
        elif "info" in args:
            level = logging.INFO
        elif "warning" in args:
            level = logging.WARNING
        elif "error" in args:
            level = logging.ERROR

        if level:
            for name in modules:
                logging.getLogger(name).setLevel(level)

    def do_quit(self, args) -> bool:
        """Exit the puzzle cube command line interface.

        :returns: True once exit
        :rtype: bool
        """
        return True

    def help_quit(self):
        """Log help to quit the current CLI."""
        print("syntax: quit")


def main():
    """Start the puzzle cube command line interface and run the CLI loop."""
    print("Starting PUZZLECUBE Command line interface (CLI)")

    # Allocate the CLI
    cli = puzzlecube_cli()

    # Run the CLI loop
    cli.cmdloop()


if __name__ == "__main__":
    main()
