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
"""Holds a puzzle cube whose state changes as actions are applied."""

from __future__ import annotations
from typing import Iterable, Tuple, Union
import logging

from puzzlecube.actions import Action, apply_action, apply_actions
from puzzlecube.algorithm import MatchResult, compile_notation
from puzzlecube.cube import (
    DEFAULT_CUBE_SIZE,
    CubeState,
    Face,
    cell_at,
    create_solved_cube,
    freeze_cube,
    iter_faces,
    to_face,
    validate_cube,
)

logger = logging.getLogger("puzzlecube")


class PuzzleCube:
    """
    Define the PuzzleCube class.

    Hold the current state of an N x N x N cube. Each applied action
    replaces the state by a new one, earlier states stay valid.
    """

    def __init__(self, size: int = DEFAULT_CUBE_SIZE) -> None:
        """
        PuzzleCube class constructor.

        :param size: number of cells along an edge, defaults to 3
        :type size: int
        :returns: None
        :rtype: NoneType
        """
        self.state: CubeState = create_solved_cube(size)
        self.seq_num = 0

    @classmethod
    def from_state(cls, state: Iterable[Iterable[int]]) -> PuzzleCube:
        """Build a puzzle holding a copy of an existing state."""
        state = freeze_cube(state)
        size = validate_cube(state)
        cube = cls(size)
        cube.state = state
        return cube

    @property
    def size(self) -> int:
        """Number of cells along an edge."""
        return validate_cube(self.state)

    def initialize(self) -> None:
        """Reset the cube to its solved state, keeping its size."""
        logger.info("Resetting cube")
        self.state = create_solved_cube(self.size)
        self.seq_num = 0

    reset = initialize

    def resize(self, size: int) -> None:
        """
        Replace the cube by a solved cube of another size.

        :param size: number of cells along an edge
        :type size: int
        :raises InvalidCubeState: when size is below 2
        """
        logger.info(f"Resizing cube to {size}")
        self.state = create_solved_cube(size)
        self.seq_num = 0

    def apply(self, action: Action) -> None:
        """Apply one action to the cube."""
        self.state = apply_action(self.state, action)
        self.seq_num += 1

    def apply_actions(self, actions: Iterable[Action]) -> None:
        """
        Apply actions in order.

        The state only changes once every action succeeded, a failing
        action leaves the cube and its sequence number untouched.
        """
        actions = list(actions)
        self.state = apply_actions(self.state, actions)
        self.seq_num += len(actions)

    def apply_moves(self, notation: str) -> MatchResult:
        """
        Apply the moves of a notation to the cube.

        Nothing is applied when the notation does not parse, the returned
        match result tells why. Nothing is applied either when one of the
        moves fails on this cube size.

        :param notation: the moves, e.g. "R U R' U'"
        :type notation: str
        :returns: the match result of the notation
        :rtype: MatchResult
        """
        match, actions = compile_notation(notation)
        if match.failed():
            logger.warning(f"Ignoring moves {notation!r}: {match.short_message}")
            return match

        logger.info(f"Applying moves {notation}")
        self.apply_actions(actions)
        return match

    def face(self, face: Union[Face, int, str]) -> Tuple[int, ...]:
        """Return the grid of one face."""
        return self.state[to_face(face).index]

    def cell_at(self, face: Union[Face, int], row: int, col: int) -> int:
        """Return the value of one cell, see puzzlecube.cube.cell_at."""
        return cell_at(self.state, face, row, col)

    def is_solved(self) -> bool:
        """
        Check if the cube is solved.

        A cube is solved when every face holds a single value, whichever
        face is in front.

        :returns: True if the cube is solved, False otherwise
        :rtype: bool
        """
        for face, grid in iter_faces(self.state):
            if any(val != grid[0] for val in grid):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleCube):
            return NotImplemented
        return self.state == other.state

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return f'{{ "size" : {self.size}, "state" : {[list(grid) for grid in self.state]} }}'

    def __str__(self) -> str:
        """
        Print the cube as one block of rows per face.

        :returns: the faces and their rows of values
        :rtype: str
        """
        size = self.size
        out_str = ""
        for face, grid in iter_faces(self.state):
            out_str += f"{face.name}\n"
            for row in range(size):
                values = grid[row * size : (row + 1) * size]
                out_str += "  " + " ".join(str(val) for val in values) + "\n"
        return out_str
