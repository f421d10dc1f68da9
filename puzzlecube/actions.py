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
"""Actions applied to a cube, and the single entry point applying them."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union, assert_never

from puzzlecube.cube import (
    Axis,
    CubeState,
    Face,
    RotationAmount,
    cube_size,
    freeze_cube,
    normalize_turns,
    to_face,
)
from puzzlecube import geometry


@dataclass(frozen=True)
class RotateFace:
    """Turn one face and drag the ring of cells around it."""

    face: Face
    turns: RotationAmount = RotationAmount.Clockwise

    def __post_init__(self) -> None:
        object.__setattr__(self, "face", to_face(self.face))
        object.__setattr__(self, "turns", normalize_turns(self.turns))


@dataclass(frozen=True)
class RotateSlice:
    """
    Turn internal layers of an axis.

    A negative offset_index counts from the far end of the axis, so that
    a slice next to a far face can be described without knowing the
    size of the cube: -2 is the layer just before the last one.
    """

    axis: Axis
    offset_index: int = 1
    offset_size: int = 1
    turns: RotationAmount = RotationAmount.Clockwise

    def __post_init__(self) -> None:
        object.__setattr__(self, "axis", Axis(self.axis))
        object.__setattr__(self, "turns", normalize_turns(self.turns))

    def start_layer(self, size: int) -> int:
        """First layer of the slice on a cube of the given size."""
        if self.offset_index < 0:
            return size + self.offset_index
        return self.offset_index


@dataclass(frozen=True)
class RotateCube:
    """
    Reorient the whole cube.

    With focus_face, the face is brought to the Front slot. With axis,
    the cube turns around that axis by the given turns. Exactly one of
    the two must be given.
    """

    focus_face: Optional[Face] = None
    axis: Optional[Axis] = None
    turns: RotationAmount = RotationAmount.NoRotation

    def __post_init__(self) -> None:
        if (self.focus_face is None) == (self.axis is None):
            raise ValueError("RotateCube needs exactly one of focus_face or axis")
        if self.focus_face is not None:
            object.__setattr__(self, "focus_face", to_face(self.focus_face))
        else:
            object.__setattr__(self, "axis", Axis(self.axis))
        object.__setattr__(self, "turns", normalize_turns(self.turns))


Action = Union[RotateFace, RotateSlice, RotateCube]


def apply_action(state: Sequence[Sequence[int]], action: Action) -> CubeState:
    """
    Apply one action to a cube state.

    :param state: the cube state, left unchanged
    :type state: Sequence[Sequence[int]]
    :param action: the action to apply
    :type action: Action
    :returns: the new cube state
    :rtype: CubeState
    """
    if isinstance(action, RotateFace):
        return geometry.rotate_face(state, action.face, action.turns)
    elif isinstance(action, RotateSlice):
        return geometry.rotate_internal_slice(
            state,
            action.axis,
            action.start_layer(cube_size(state)),
            action.offset_size,
            action.turns,
        )
    elif isinstance(action, RotateCube):
        if action.focus_face is not None:
            return geometry.refocus_cube(state, action.focus_face)
        return geometry.rotate_cube(state, action.axis, action.turns)
    else:
        assert_never(action)


def apply_actions(state: Sequence[Sequence[int]], actions: Iterable[Action]) -> CubeState:
    """Apply actions one after the other, in order."""
    for action in actions:
        state = apply_action(state, action)
    return freeze_cube(state)
