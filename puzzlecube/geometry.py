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
Rotation engine of the cube.

Every operation takes a cube state and returns a new, validated cube
state. The input state is never modified.

Cells move in groups of four segments. Under one clockwise quarter turn
the values of segment i move to segment i + 1. A face spins with the
four sides of each of its concentric rings, and an axis layer cycles
one strip of N cells on each of its four faces.
"""

from __future__ import annotations
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple, Union, assert_never
import logging

from puzzlecube.cube import (
    FACE_AXES,
    Axis,
    CubeState,
    Face,
    InvalidSliceDirection,
    InvalidSliceRange,
    InvalidSliceSize,
    SliceDirection,
    freeze_cube,
    normalize_turns,
    thaw_cube,
    to_face,
    validate_cube,
)

logger = logging.getLogger("puzzlecube")

# a cell of the cube: (face index, cell index)
Cell = Tuple[int, int]
Segment = List[Cell]


class FaceSlicing(NamedTuple):
    """How a face sees an axis: which way is forward, with which sign."""

    forward: SliceDirection
    sign: int
    mirrored: bool


# Axes reachable from each face. Forward is Left for the horizontal
# axis and Up for the vertical one, the reverse direction flips the sign.
FACE_SLICING: Dict[Face, Dict[Axis, FaceSlicing]] = {
    Face.Left: {
        Axis.X: FaceSlicing(SliceDirection.Left, 1, False),
        Axis.Z: FaceSlicing(SliceDirection.Up, 1, False),
    },
    Face.Front: {
        Axis.X: FaceSlicing(SliceDirection.Left, 1, False),
        Axis.Y: FaceSlicing(SliceDirection.Up, 1, False),
    },
    Face.Right: {
        Axis.X: FaceSlicing(SliceDirection.Left, 1, False),
        Axis.Z: FaceSlicing(SliceDirection.Up, -1, True),
    },
    Face.Back: {
        Axis.X: FaceSlicing(SliceDirection.Left, 1, False),
        Axis.Y: FaceSlicing(SliceDirection.Up, -1, True),
    },
    Face.Top: {
        Axis.Z: FaceSlicing(SliceDirection.Left, -1, False),
        Axis.Y: FaceSlicing(SliceDirection.Up, 1, False),
    },
    Face.Bottom: {
        Axis.Z: FaceSlicing(SliceDirection.Left, 1, True),
        Axis.Y: FaceSlicing(SliceDirection.Up, 1, False),
    },
}

# faces spun in place by a whole cube rotation, with their sign
CUBE_SPINS: Dict[Axis, Tuple[Tuple[Face, int], Tuple[Face, int]]] = {
    Axis.X: ((Face.Top, 1), (Face.Bottom, -1)),
    Axis.Y: ((Face.Right, 1), (Face.Left, -1)),
    Axis.Z: ((Face.Front, 1), (Face.Back, -1)),
}

# whole cube rotation bringing a face to the Front slot
FOCUS_ROTATIONS: Dict[Face, Optional[Tuple[Axis, int]]] = {
    Face.Left: (Axis.X, -1),
    Face.Front: None,
    Face.Right: (Axis.X, 1),
    Face.Back: (Axis.X, 2),
    Face.Top: (Axis.Y, -1),
    Face.Bottom: (Axis.Y, 1),
}


# -------------------------------------------------
# Index arithmetic
# -------------------------------------------------
def _cycle_four(faces: List[List[int]], segments: Sequence[Segment], turns: int) -> None:
    """Move the values of segments[i] into segments[i + turns], in place."""
    turns %= 4
    if turns == 0:
        return
    values = [[faces[face][ix] for face, ix in segment] for segment in segments]
    for loop1 in range(4):
        target = segments[(loop1 + turns) % 4]
        for (face, ix), value in zip(target, values[loop1]):
            faces[face][ix] = value


def _face_ring(face: Face, size: int, layer: int) -> Tuple[Segment, ...]:
    """Sides of a concentric ring of a face: top, right, bottom, left."""
    far = size - 1 - layer
    top: Segment = []
    right: Segment = []
    bottom: Segment = []
    left: Segment = []
    for loop1 in range(size - 1 - 2 * layer):
        top.append((face.index, layer * size + layer + loop1))
        right.append((face.index, (layer + loop1) * size + far))
        bottom.append((face.index, far * size + far - loop1))
        left.append((face.index, (far - loop1) * size + layer))
    return top, right, bottom, left


def _axis_layer(axis: Axis, size: int, layer: int) -> Tuple[Segment, ...]:
    """Strips of the four faces cut by one layer of an axis."""
    last = size - 1
    segments: Tuple[Segment, ...] = ([], [], [], [])
    for loop1 in range(size):
        if axis == Axis.X:
            cells = (
                (Face.Right.index, layer * size + loop1),
                (Face.Front.index, layer * size + loop1),
                (Face.Left.index, layer * size + loop1),
                (Face.Back.index, layer * size + loop1),
            )
        elif axis == Axis.Y:
            cells = (
                (Face.Front.index, loop1 * size + layer),
                (Face.Top.index, loop1 * size + layer),
                (Face.Back.index, (last - loop1) * size + last - layer),
                (Face.Bottom.index, loop1 * size + layer),
            )
        elif axis == Axis.Z:
            cells = (
                (Face.Top.index, layer * size + loop1),
                (Face.Right.index, loop1 * size + last - layer),
                (Face.Bottom.index, (last - layer) * size + last - loop1),
                (Face.Left.index, (last - loop1) * size + layer),
            )
        else:
            assert_never(axis)
        for segment, cell in zip(segments, cells):
            segment.append(cell)
    return segments


def _spin_face(faces: List[List[int]], face: Face, size: int, turns: int) -> None:
    """Spin the grid of a face clockwise, without dragging its neighbors."""
    for layer in range(size // 2):
        _cycle_four(faces, _face_ring(face, size, layer), turns)


def _turn_layers(
    faces: List[List[int]], axis: Axis, size: int, start: int, stop: int, turns: int
) -> None:
    for layer in range(start, stop):
        _cycle_four(faces, _axis_layer(axis, size, layer), turns)


def _check_slice(size: int, offset_start: int, offset_size: int) -> None:
    if offset_start < 1 or offset_start > size - 2:
        raise InvalidSliceRange(f"Offset must be in range [1, {size - 2}]")
    if offset_size < 1 or offset_start + offset_size > size - 1:
        raise InvalidSliceSize(
            f"Number of slices must be in range [1, {size - 1 - offset_start}]"
        )


def _face_slicing(
    ref_face: Face, direction: SliceDirection, axis: Optional[Axis] = None
) -> Tuple[Axis, int, bool]:
    """Find the axis and the sign of a turn seen from a face."""
    for face_axis, slicing in FACE_SLICING[ref_face].items():
        if axis is not None and face_axis != axis:
            continue
        if direction == slicing.forward:
            return face_axis, slicing.sign, slicing.mirrored
        if direction == slicing.forward.opposite():
            return face_axis, -slicing.sign, slicing.mirrored

    if axis is not None and axis not in FACE_SLICING[ref_face]:
        raise InvalidSliceDirection(
            f"Axis {axis.value} cannot be turned from the {ref_face.name} face"
        )
    raise InvalidSliceDirection(
        f"Direction {direction.value} cannot turn axis "
        f"{axis.value if axis else '?'} from the {ref_face.name} face"
    )


# -------------------------------------------------
# Rotations
# -------------------------------------------------
def rotate_face(
    state: Sequence[Sequence[int]], face: Union[Face, int], turns: int
) -> CubeState:
    """
    Turn a face and the ring of cells bordering it.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param face: the face to turn
    :type face: Union[Face, int]
    :param turns: clockwise quarter turns, seen from outside the face
    :type turns: int
    :returns: the new cube state
    :rtype: CubeState
    """
    size = validate_cube(state)
    face = to_face(face)
    amount = normalize_turns(turns)
    logger.debug(f"Rotating {face.name} face by {amount.name}")

    faces = thaw_cube(state)
    _spin_face(faces, face, size, amount)
    face_axis = FACE_AXES[face]
    layer = size - 1 if face_axis.last_layer else 0
    _turn_layers(faces, face_axis.axis, size, layer, layer + 1, face_axis.sign * amount)

    validate_cube(faces, size)
    return freeze_cube(faces)


def rotate_internal_slice(
    state: Sequence[Sequence[int]],
    axis: Axis,
    offset_start: int,
    offset_size: int,
    turns: int,
) -> CubeState:
    """
    Turn internal layers of an axis, leaving its untouched faces alone.

    Layers 0 and N-1 belong to face turns, so the slice must start in
    [1, N-2] and end before the last layer.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param axis: the axis of the layers
    :type axis: Axis
    :param offset_start: first layer of the slice
    :type offset_start: int
    :param offset_size: number of layers in the slice
    :type offset_size: int
    :param turns: clockwise quarter turns around the axis
    :type turns: int
    :returns: the new cube state
    :rtype: CubeState
    :raises InvalidSliceRange: when offset_start is not an internal layer
    :raises InvalidSliceSize: when the slice reaches the last layer
    """
    size = validate_cube(state)
    axis = Axis(axis)
    _check_slice(size, offset_start, offset_size)
    amount = normalize_turns(turns)
    logger.debug(
        f"Rotating {offset_size} slice(s) of axis {axis.value} "
        f"from layer {offset_start} by {amount.name}"
    )

    faces = thaw_cube(state)
    _turn_layers(faces, axis, size, offset_start, offset_start + offset_size, amount)

    validate_cube(faces, size)
    return freeze_cube(faces)


def rotate_slice_from_face(
    state: Sequence[Sequence[int]],
    ref_face: Union[Face, int],
    axis: Axis,
    slice_index: int,
    slice_size: int,
    direction: SliceDirection,
    turns: int,
) -> CubeState:
    """
    Turn internal layers the way they look from a face.

    The slice index counts from the left or the top of the reference
    face, and the direction is the way the layers move on screen.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param ref_face: face the user is looking at
    :type ref_face: Union[Face, int]
    :param axis: the axis of the layers
    :type axis: Axis
    :param slice_index: first layer, seen from the reference face
    :type slice_index: int
    :param slice_size: number of layers
    :type slice_size: int
    :param direction: on-screen direction of the turn
    :type direction: SliceDirection
    :param turns: quarter turns in that direction
    :type turns: int
    :returns: the new cube state
    :rtype: CubeState
    :raises InvalidSliceDirection: when the axis or the direction does not
        apply to the reference face
    """
    size = validate_cube(state)
    ref_face = to_face(ref_face)
    axis, sign, mirrored = _face_slicing(ref_face, SliceDirection(direction), Axis(axis))
    _check_slice(size, slice_index, slice_size)
    if mirrored:
        slice_index = size - slice_index - slice_size
    return rotate_internal_slice(state, axis, slice_index, slice_size, sign * turns)


def rotate_cube(state: Sequence[Sequence[int]], axis: Axis, turns: int) -> CubeState:
    """
    Turn the whole cube around an axis.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param axis: the rotation axis
    :type axis: Axis
    :param turns: clockwise quarter turns around the axis
    :type turns: int
    :returns: the new cube state
    :rtype: CubeState
    """
    size = validate_cube(state)
    axis = Axis(axis)
    amount = normalize_turns(turns)
    logger.debug(f"Rotating cube around axis {axis.value} by {amount.name}")

    faces = thaw_cube(state)
    _turn_layers(faces, axis, size, 0, size, amount)
    for face, sign in CUBE_SPINS[axis]:
        _spin_face(faces, face, size, sign * amount)

    validate_cube(faces, size)
    return freeze_cube(faces)


def rotate_cube_from_face(
    state: Sequence[Sequence[int]],
    ref_face: Union[Face, int],
    direction: SliceDirection,
    turns: int,
) -> CubeState:
    """Turn the whole cube the way it looks from a face."""
    validate_cube(state)
    axis, sign, _ = _face_slicing(to_face(ref_face), SliceDirection(direction))
    return rotate_cube(state, axis, sign * turns)


def refocus_cube(state: Sequence[Sequence[int]], focus_face: Union[Face, int]) -> CubeState:
    """
    Change the basis of the cube so focus_face becomes the Front face.

    The physical cube is unchanged, only the face labels move.

    :param state: the cube state
    :type state: Sequence[Sequence[int]]
    :param focus_face: the face to bring to the Front slot
    :type focus_face: Union[Face, int]
    :returns: the refocused cube state
    :rtype: CubeState
    """
    validate_cube(state)
    focus_face = to_face(focus_face)
    logger.debug(f"Refocusing cube on {focus_face.name} face")

    rotation = FOCUS_ROTATIONS[focus_face]
    if rotation is None:
        return freeze_cube(state)
    axis, turns = rotation
    return rotate_cube(state, axis, turns)
