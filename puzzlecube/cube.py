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
"""Defines the cube data model: faces, axes, cube state and traversal."""

from __future__ import annotations
from enum import Enum, IntEnum
from typing import (
    Callable,
    Dict,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)
import math
import logging

# -------------------------------------------------
# -------------------------------------------------
# Setup Logging capability
# -------------------------------------------------
# -------------------------------------------------
logging.basicConfig()
logger = logging.getLogger("puzzlecube")

DEFAULT_CUBE_SIZE = 3
MIN_CUBE_SIZE = 2
MAX_CUBE_SIZE = 9

CubeState = Tuple[Tuple[int, ...], ...]


# -------------------------------------------------
# Errors
# -------------------------------------------------
class PuzzleCubeError(Exception):
    """Base class of every error raised by puzzlecube."""


class InvalidCubeState(PuzzleCubeError, ValueError):
    """The cube state breaks one of the cube invariants."""


class IndexOutOfRange(PuzzleCubeError, IndexError):
    """A face, row or column does not exist on the cube."""


class InvalidSliceRange(PuzzleCubeError, ValueError):
    """The first layer of an internal slice is not an internal layer."""


class InvalidSliceSize(PuzzleCubeError, ValueError):
    """An internal slice reaches the outer layer of the cube."""


class InvalidSliceDirection(PuzzleCubeError, ValueError):
    """The axis or direction cannot be turned from the reference face."""


class NotationError(PuzzleCubeError, ValueError):
    """Actions were requested from a notation that did not parse."""


# -------------------------------------------------
# Enumerations
# -------------------------------------------------
class Face(IntEnum):
    """
    Define the six faces of the cube.

    The faces are laid out as a cross: Top above Front, Bottom below
    Front, and Left, Front, Right, Back as a horizontal band. The numeric
    value is also the cell value of that face on a solved cube.
    """

    Left = 1
    Front = 2
    Right = 3
    Back = 4
    Top = 5
    Bottom = 6

    @property
    def index(self) -> int:
        """Position of the face grid inside a cube state."""
        return self.value - 1


class Axis(Enum):
    """Define the three global rotation axes."""

    X = "X"
    Y = "Y"
    Z = "Z"


class RotationAmount(IntEnum):
    """Define the quarter turn counts, normalized modulo 4."""

    NoRotation = 0
    Clockwise = 1
    Halfway = 2
    # a half turn has no distinct reverse, this is an alias of Halfway
    HalfwayReverse = 2
    CounterClockwise = 3


class SliceDirection(Enum):
    """On-screen direction used when turning relative to a face."""

    Up = "Up"
    Down = "Down"
    Left = "Left"
    Right = "Right"

    def opposite(self) -> SliceDirection:
        """Return the direction pointing the other way."""
        return _OPPOSITE_DIRECTIONS[self]


_OPPOSITE_DIRECTIONS = {
    SliceDirection.Up: SliceDirection.Down,
    SliceDirection.Down: SliceDirection.Up,
    SliceDirection.Left: SliceDirection.Right,
    SliceDirection.Right: SliceDirection.Left,
}


class LoopStatus(Enum):
    """Returned by visitors to keep iterating or to stop early."""

    StopLooping = 0
    KeepLooping = 1


class BlockType(IntEnum):
    """Kind of cubie, given by its number of visible stickers."""

    Center = 1
    Edge = 2
    Corner = 3


class FaceAxis(NamedTuple):
    """Axis dragged by a face turn, the layer it drags and the turn sign."""

    axis: Axis
    last_layer: bool
    sign: int


# Faces left in place when an axis turns
UNTOUCHED_FACES: Dict[Axis, Tuple[Face, Face]] = {
    Axis.X: (Face.Top, Face.Bottom),
    Axis.Y: (Face.Left, Face.Right),
    Axis.Z: (Face.Front, Face.Back),
}

# Shared by face turns and by deep turns in the notation
FACE_AXES: Dict[Face, FaceAxis] = {
    Face.Left: FaceAxis(Axis.Y, False, -1),
    Face.Right: FaceAxis(Axis.Y, True, 1),
    Face.Front: FaceAxis(Axis.Z, True, 1),
    Face.Back: FaceAxis(Axis.Z, False, -1),
    Face.Top: FaceAxis(Axis.X, False, 1),
    Face.Bottom: FaceAxis(Axis.X, True, -1),
}


def normalize_turns(turns: int) -> RotationAmount:
    """
    Normalize any number of quarter turns into a RotationAmount.

    :param turns: quarter turns, negative values turn counter clockwise
    :type turns: int
    :returns: the equivalent amount in [0, 3]
    :rtype: RotationAmount
    """
    return RotationAmount(int(turns) % 4)


def to_face(face: Union[Face, int, str]) -> Face:
    """
    Convert a face id or a face name into a Face.

    :param face: a Face, its numeric id or its name (e.g. "Top")
    :type face: Union[Face, int, str]
    :returns: the matching Face
    :rtype: Face
    :raises IndexOutOfRange: when no face matches
    """
    if isinstance(face, Face):
        return face
    try:
        if isinstance(face, str):
            return Face[face.capitalize()]
        return Face(face)
    except (KeyError, ValueError):
        raise IndexOutOfRange(
            f"Face must be in range [1, 6] or a face name, got {face!r}"
        ) from None


# -------------------------------------------------
# Cube state helpers
# -------------------------------------------------
def create_solved_cube(size: int = DEFAULT_CUBE_SIZE) -> CubeState:
    """
    Create a solved cube, each face filled with its own face id.

    :param size: number of cells along an edge
    :type size: int
    :returns: the solved cube state
    :rtype: CubeState
    :raises InvalidCubeState: when size is below 2
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < MIN_CUBE_SIZE:
        raise InvalidCubeState(
            f"Cube size must be an integer of at least {MIN_CUBE_SIZE}, got {size!r}"
        )
    return tuple(tuple([face.value] * (size * size)) for face in Face)


def freeze_cube(state: Sequence[Sequence[int]]) -> CubeState:
    """Return an immutable copy of a cube state."""
    return tuple(tuple(grid) for grid in state)


def thaw_cube(state: Sequence[Sequence[int]]) -> List[List[int]]:
    """Return a mutable copy of a cube state."""
    return [list(grid) for grid in state]


def cube_size(state: Sequence[Sequence[int]]) -> int:
    """
    Derive the size of the cube from its first face.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :returns: number of cells along an edge
    :rtype: int
    :raises InvalidCubeState: when the first face is not a square grid
    """
    if len(state) == 0:
        raise InvalidCubeState("Cube has no faces")
    cells = len(state[0])
    size = math.isqrt(cells)
    if size * size != cells or size < MIN_CUBE_SIZE:
        raise InvalidCubeState(
            f"Face must hold a square grid of at least "
            f"{MIN_CUBE_SIZE * MIN_CUBE_SIZE} cells, found {cells}"
        )
    return size


def validate_cube(
    state: Sequence[Sequence[int]], expected_size: Optional[int] = None
) -> int:
    """
    Check every invariant of a cube state.

    The cube must have exactly 6 faces, every face the same square grid
    of size*size cells, every value an integer in [1, 6] and each value
    must appear exactly size*size times.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param expected_size: size the cube must have, derived when omitted
    :type expected_size: Optional[int]
    :returns: the size of the cube
    :rtype: int
    :raises InvalidCubeState: when an invariant does not hold
    """
    if len(state) != len(Face):
        raise InvalidCubeState(f"Cube must have exactly 6 faces, found {len(state)}")

    size = cube_size(state)
    if expected_size is not None and size != expected_size:
        raise InvalidCubeState(
            f"Cube size must be {expected_size}, found {size}"
        )

    cells = size * size
    counts = [0] * (len(Face) + 1)
    for face, grid in zip(Face, state):
        if len(grid) != cells:
            raise InvalidCubeState(
                f"{face.name} face must have {cells} cells, found {len(grid)}"
            )
        for value in grid:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCubeState(
                    f"{face.name} face holds a non integer value {value!r}"
                )
            if value < 1 or value > 6:
                raise InvalidCubeState(
                    f"{face.name} face value {value} must be in range [1, 6]"
                )
            counts[value] += 1

    for value in range(1, len(Face) + 1):
        if counts[value] != cells:
            raise InvalidCubeState(
                f"Value {value} must appear {cells} times, found {counts[value]}"
            )
    return size


def cell_at(state: Sequence[Sequence[int]], face: Union[Face, int], row: int, col: int) -> int:
    """
    Read the value of one cell.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param face: face holding the cell
    :type face: Union[Face, int]
    :param row: row of the cell, from the top of the face
    :type row: int
    :param col: column of the cell, from the left of the face
    :type col: int
    :returns: the cell value
    :rtype: int
    :raises IndexOutOfRange: when the face, row or column does not exist
    """
    size = validate_cube(state)
    face = to_face(face)
    if not 0 <= row < size:
        raise IndexOutOfRange(f"Row must be in range [0, {size - 1}], got {row}")
    if not 0 <= col < size:
        raise IndexOutOfRange(f"Column must be in range [0, {size - 1}], got {col}")
    return state[face.index][row * size + col]


# -------------------------------------------------
# Traversal
# -------------------------------------------------
FaceVisitor = Callable[[Face, Sequence[int]], Optional[LoopStatus]]
CellVisitor = Callable[[int, int, int], Optional[LoopStatus]]


def iter_faces(state: Sequence[Sequence[int]]) -> Iterator[Tuple[Face, Sequence[int]]]:
    """Yield (face, grid) pairs in face id order."""
    for face in Face:
        yield face, state[face.index]


def iter_cells(grid: Sequence[int], size: int) -> Iterator[Tuple[int, int, int]]:
    """Yield (row, col, value) triplets of a face grid in row-major order."""
    for row in range(size):
        for col in range(size):
            yield row, col, grid[row * size + col]


def for_each_face(state: Sequence[Sequence[int]], visitor: FaceVisitor) -> LoopStatus:
    """
    Call the visitor on every face, in face id order.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param visitor: called with (face, grid), returns StopLooping to stop
    :type visitor: FaceVisitor
    :returns: StopLooping when the visitor stopped the traversal
    :rtype: LoopStatus
    """
    for face, grid in iter_faces(state):
        if visitor(face, grid) == LoopStatus.StopLooping:
            return LoopStatus.StopLooping
    return LoopStatus.KeepLooping


def for_each_cell(grid: Sequence[int], size: int, visitor: CellVisitor) -> LoopStatus:
    """
    Call the visitor on every cell of a face grid, row by row.

    :param grid: the face grid
    :type grid: Sequence[int]
    :param size: number of cells along an edge
    :type size: int
    :param visitor: called with (row, col, value), returns StopLooping to stop
    :type visitor: CellVisitor
    :returns: StopLooping when the visitor stopped the traversal
    :rtype: LoopStatus
    """
    for row, col, value in iter_cells(grid, size):
        if visitor(row, col, value) == LoopStatus.StopLooping:
            return LoopStatus.StopLooping
    return LoopStatus.KeepLooping


class Block(NamedTuple):
    """One visible cubie with the sticker it shows on each face."""

    block_type: BlockType
    depth: int
    row: int
    col: int
    left: Optional[int]
    front: Optional[int]
    right: Optional[int]
    back: Optional[int]
    top: Optional[int]
    bottom: Optional[int]


def _extract_block(
    state: Sequence[Sequence[int]], size: int, depth: int, row: int, col: int
) -> Optional[Block]:
    last = size - 1
    left = state[Face.Left.index][row * size + last - depth] if col == 0 else None
    front = state[Face.Front.index][row * size + col] if depth == 0 else None
    right = state[Face.Right.index][row * size + depth] if col == last else None
    back = state[Face.Back.index][row * size + last - col] if depth == last else None
    top = state[Face.Top.index][size * (last - depth) + col] if row == 0 else None
    bottom = state[Face.Bottom.index][size * depth + col] if row == last else None

    stickers = [left, front, right, back, top, bottom]
    visible = len([val for val in stickers if val is not None])
    if visible == 0:
        return None
    return Block(BlockType(visible), depth, row, col, *stickers)


def iter_blocks(state: Sequence[Sequence[int]]) -> Iterator[Block]:
    """
    Yield every visible cubie in (depth, row, col) order.

    Depth goes from the Front face to the Back face. Interior cubies show
    no sticker and are skipped.
    """
    size = validate_cube(state)
    for depth in range(size):
        for row in range(size):
            for col in range(size):
                block = _extract_block(state, size, depth, row, col)
                if block is not None:
                    yield block


def for_each_block(
    state: Sequence[Sequence[int]], visitor: Callable[[Block], Optional[LoopStatus]]
) -> LoopStatus:
    """Call the visitor on every visible cubie, see iter_blocks."""
    for block in iter_blocks(state):
        if visitor(block) == LoopStatus.StopLooping:
            return LoopStatus.StopLooping
    return LoopStatus.KeepLooping
