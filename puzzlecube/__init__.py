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
"""Model of an N x N x N puzzle cube, its rotations and its notation."""

from puzzlecube.cube import (
    DEFAULT_CUBE_SIZE,
    MAX_CUBE_SIZE,
    MIN_CUBE_SIZE,
    Axis,
    Block,
    BlockType,
    CubeState,
    Face,
    IndexOutOfRange,
    InvalidCubeState,
    InvalidSliceDirection,
    InvalidSliceRange,
    InvalidSliceSize,
    LoopStatus,
    NotationError,
    PuzzleCubeError,
    RotationAmount,
    SliceDirection,
    cell_at,
    create_solved_cube,
    cube_size,
    for_each_block,
    for_each_cell,
    for_each_face,
    iter_blocks,
    iter_cells,
    iter_faces,
    validate_cube,
)
from puzzlecube.geometry import (
    refocus_cube,
    rotate_cube,
    rotate_cube_from_face,
    rotate_face,
    rotate_internal_slice,
    rotate_slice_from_face,
)
from puzzlecube.actions import (
    Action,
    RotateCube,
    RotateFace,
    RotateSlice,
    apply_action,
    apply_actions,
)
from puzzlecube.algorithm import (
    ActionSemantics,
    AlgorithmParser,
    MatchResult,
    NotationParseFailure,
    compile_notation,
)
from puzzlecube.puzzle import PuzzleCube
