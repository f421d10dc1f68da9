import pytest
from hypothesis import given, settings, strategies as st

from puzzlecube.actions import (
    RotateCube,
    RotateFace,
    RotateSlice,
    apply_action,
    apply_actions,
)
from puzzlecube.cube import (
    Axis,
    Face,
    InvalidSliceRange,
    RotationAmount,
    create_solved_cube,
    validate_cube,
)
from puzzlecube.geometry import (
    refocus_cube,
    rotate_cube,
    rotate_face,
    rotate_internal_slice,
)
from tests.utility import axes, faces, get_test_cube, turns


class TestActions:
    def test_turns_are_normalized(self):
        assert RotateFace(Face.Top, -1).turns is RotationAmount.CounterClockwise
        assert RotateFace(Face.Top, -1) == RotateFace(Face.Top, 3)
        assert RotateSlice(Axis.X, 1, 1, 6) == RotateSlice(Axis.X, 1, 1, 2)

    def test_face_from_id(self):
        assert RotateFace(5).face is Face.Top

    def test_defaults(self):
        assert RotateFace(Face.Left).turns is RotationAmount.Clockwise
        action = RotateSlice(Axis.Z)
        assert (action.offset_index, action.offset_size) == (1, 1)

    def test_actions_are_frozen(self):
        action = RotateFace(Face.Left)
        with pytest.raises(AttributeError):
            action.face = Face.Right

    def test_rotate_cube_needs_one_form(self):
        with pytest.raises(ValueError):
            RotateCube()
        with pytest.raises(ValueError):
            RotateCube(focus_face=Face.Top, axis=Axis.X)

    def test_start_layer(self):
        assert RotateSlice(Axis.Y, 2).start_layer(5) == 2
        assert RotateSlice(Axis.Y, -2).start_layer(5) == 3


class TestApplyAction:
    def test_rotate_face(self):
        cube = get_test_cube(3)
        action = RotateFace(Face.Front, RotationAmount.Halfway)
        assert apply_action(cube, action) == rotate_face(cube, Face.Front, 2)

    def test_rotate_slice(self):
        cube = get_test_cube(4)
        action = RotateSlice(Axis.Y, 1, 2, RotationAmount.CounterClockwise)
        assert apply_action(cube, action) == rotate_internal_slice(cube, Axis.Y, 1, 2, 3)

    def test_rotate_slice_from_far_side(self):
        cube = get_test_cube(5)
        action = RotateSlice(Axis.X, -3, 2)
        assert apply_action(cube, action) == rotate_internal_slice(cube, Axis.X, 2, 2, 1)

    def test_rotate_slice_out_of_range(self):
        with pytest.raises(InvalidSliceRange):
            apply_action(create_solved_cube(3), RotateSlice(Axis.X, -1))

    def test_refocus(self):
        cube = get_test_cube(3)
        action = RotateCube(focus_face=Face.Top)
        assert apply_action(cube, action) == refocus_cube(cube, Face.Top)

    def test_rotate_cube(self):
        cube = get_test_cube(3)
        action = RotateCube(axis=Axis.Z, turns=2)
        assert apply_action(cube, action) == rotate_cube(cube, Axis.Z, 2)

    def test_apply_actions_in_order(self):
        cube = create_solved_cube(3)
        one = [RotateFace(Face.Right), RotateFace(Face.Top)]
        two = list(reversed(one))
        assert apply_actions(cube, one) != apply_actions(cube, two)
        assert apply_actions(cube, one) == apply_action(apply_action(cube, one[0]), one[1])

    def test_apply_no_action(self):
        cube = [list(grid) for grid in create_solved_cube(2)]
        assert apply_actions(cube, []) == create_solved_cube(2)

    def test_old_state_unchanged(self):
        cube = create_solved_cube(3)
        apply_action(cube, RotateFace(Face.Left))
        assert cube == create_solved_cube(3)


@st.composite
def actions_for(draw, size):
    kind = draw(st.sampled_from(["face", "slice", "focus", "cube"]))
    if kind == "face" or (kind == "slice" and size < 3):
        return RotateFace(draw(faces), draw(turns))
    if kind == "slice":
        start = draw(st.integers(min_value=1, max_value=size - 2))
        count = draw(st.integers(min_value=1, max_value=size - 1 - start))
        if draw(st.booleans()):
            start = start - size
        return RotateSlice(draw(axes), start, count, draw(turns))
    if kind == "focus":
        return RotateCube(focus_face=draw(faces))
    return RotateCube(axis=draw(axes), turns=draw(turns))


class TestProperties:
    @settings(max_examples=50, deadline=None)
    @given(data=st.data(), size=st.integers(min_value=2, max_value=6))
    def test_actions_keep_invariants(self, data, size):
        cube = get_test_cube(size)
        for loop1 in range(data.draw(st.integers(min_value=1, max_value=8))):
            action = data.draw(actions_for(size))
            cube = apply_action(cube, action)
            assert validate_cube(cube) == size
