import pytest
from hypothesis import given, settings, strategies as st

from puzzlecube.actions import RotateCube, RotateFace, RotateSlice, apply_actions
from puzzlecube.algorithm import (
    FACE_LETTERS,
    ActionSemantics,
    AlgorithmParser,
    FaceNode,
    GroupNode,
    MoveNode,
    MultiLayerKind,
    MultiLayerNode,
    NotationParseFailure,
    SliceNode,
    WholeCubeNode,
    compile_notation,
    inner_layers,
)
from puzzlecube.cube import (
    Axis,
    Face,
    NotationError,
    RotationAmount,
    create_solved_cube,
)
from puzzlecube.geometry import rotate_cube
from tests.utility import as_cube, get_test_cube


def compile_ok(text):
    match, actions = compile_notation(text)
    assert match.succeeded(), match.message
    return actions


def apply_notation(cube, text):
    return apply_actions(cube, compile_ok(text))


class TestParser:
    @pytest.mark.parametrize(
        "text, target, modifier",
        [
            ("F", FaceNode("F"), ""),
            ("R'", FaceNode("R"), "'"),
            ("U2", FaceNode("U"), "2"),
            ("M", SliceNode("M"), ""),
            ("X'", WholeCubeNode("X"), "'"),
            ("y2", WholeCubeNode("y"), "2"),
            ("r", MultiLayerNode(MultiLayerKind.WideLetter, "r"), ""),
            ("Rw'", MultiLayerNode(MultiLayerKind.Wide, "R"), "'"),
            ("2Rw", MultiLayerNode(MultiLayerKind.DeepWide, "R", 2), ""),
            ("R_3", MultiLayerNode(MultiLayerKind.Subscript, "R", subscript=3), ""),
            ("R₃2", MultiLayerNode(MultiLayerKind.Subscript, "R", subscript=3), "2"),
            ("2R2", MultiLayerNode(MultiLayerKind.InnerSlice, "R", 2), "2"),
            ("2F_3'", MultiLayerNode(MultiLayerKind.InnerBlock, "F", 2, 3), "'"),
        ],
    )
    def test_single_move(self, text, target, modifier):
        match = AlgorithmParser().match(text)
        assert match.succeeded()
        assert match.tree.items == (MoveNode(target, modifier, 0),)

    def test_moves_and_positions(self):
        match = AlgorithmParser().match("R  U'\tF2 ")
        assert [item.position for item in match.tree.items] == [0, 3, 6]

    def test_group(self):
        match = AlgorithmParser().match("(R U)3 F")
        group, move = match.tree.items
        assert isinstance(group, GroupNode)
        assert group.repeat == 3
        assert [item.target for item in group.items] == [FaceNode("R"), FaceNode("U")]
        assert move.target == FaceNode("F")

    @pytest.mark.parametrize(
        "text, position",
        [
            ("", 0),
            (" R", 0),
            ("R Q", 2),
            ("RU", 1),
            ("R_9", 1),
            ("R'2", 2),
            ("(R U", 4),
            ("0R", 0),
        ],
    )
    def test_failure_position(self, text, position):
        match = AlgorithmParser().match(text)
        assert match.failed()
        assert match.tree is None
        assert match.failure.position == position

    def test_failure_description(self):
        match = AlgorithmParser().match("R Q")
        assert "face letter" in match.failure.expected
        assert match.short_message.startswith("Line 1, col 3: expected ")
        assert match.message.endswith("> R Q\n    ^")

    def test_failure_on_second_line(self):
        failure = AlgorithmParser().match("R\nU Q").failure
        assert (failure.line, failure.column) == (2, 3)

    def test_success_has_no_message(self):
        match = AlgorithmParser().match("R")
        assert match.message == ""
        assert match.failure is None


class TestSemantics:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("F", [RotateFace(Face.Front, RotationAmount.Clockwise)]),
            ("R'", [RotateFace(Face.Right, RotationAmount.CounterClockwise)]),
            ("U2", [RotateFace(Face.Top, RotationAmount.Halfway)]),
            (
                "Rw",
                [RotateFace(Face.Right), RotateSlice(Axis.Y, -2, 1, 1)],
            ),
            (
                "2Rw",
                [RotateFace(Face.Right), RotateSlice(Axis.Y, -3, 2, 1)],
            ),
            (
                "R_3",
                [RotateFace(Face.Right), RotateSlice(Axis.Y, -4, 3, 1)],
            ),
            ("M", [RotateSlice(Axis.Y, 1, 1, -1)]),
            ("X", [RotateCube(axis=Axis.Y, turns=1)]),
        ],
    )
    def test_round_trip(self, text, expected):
        assert compile_ok(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Lw'", [RotateFace(Face.Left, 3), RotateSlice(Axis.Y, 1, 1, 1)]),
            ("b2", [RotateFace(Face.Back, 2), RotateSlice(Axis.Z, 1, 1, 2)]),
            ("2L", [RotateSlice(Axis.Y, 1, 2, -1)]),
            ("2F_3", [RotateSlice(Axis.Z, -5, 3, 1)]),
            ("3D'", [RotateSlice(Axis.X, -4, 3, 1)]),
            ("E'", [RotateSlice(Axis.X, 1, 1, 1)]),
            ("S2", [RotateSlice(Axis.Z, 1, 1, 2)]),
            ("y'", [RotateCube(axis=Axis.X, turns=3)]),
            ("Z", [RotateCube(axis=Axis.Z, turns=1)]),
        ],
    )
    def test_other_moves(self, text, expected):
        assert compile_ok(text) == expected

    @pytest.mark.parametrize(
        "letter, upper", [("r", "R"), ("l", "L"), ("f", "F"), ("b", "B"), ("u", "U"), ("d", "D")]
    )
    def test_wide_letter_is_one_layer_wide(self, letter, upper):
        assert compile_ok(letter) == compile_ok(f"{upper}w") == compile_ok(f"1{upper}w")

    def test_subscripts(self):
        for depth in range(2, 9):
            assert compile_ok(f"U_{depth}") == compile_ok(f"U{chr(0x2080 + depth)}")
            assert compile_ok(f"U_{depth}") == compile_ok(f"{depth}Uw")

    def test_lower_case_cube_rotations(self):
        for letter in "xyz":
            assert compile_ok(letter) == compile_ok(letter.upper())

    def test_group_repeats(self):
        assert compile_ok("(R U)2 F") == compile_ok("R U R U F")
        assert compile_ok("(R (U F)2)") == compile_ok("R U F U F")

    def test_execute_failed_match(self):
        match = AlgorithmParser().match("Q")
        with pytest.raises(NotationError):
            ActionSemantics().execute(match)

    def test_compile_failure_is_not_raised(self):
        match, failure = compile_notation("R U Q")
        assert match.failed()
        assert isinstance(failure, NotationParseFailure)
        assert failure is match.failure

    def test_inner_layers(self):
        assert inner_layers(Face.Top, 1, 2, 1) == RotateSlice(Axis.X, 1, 2, 1)
        assert inner_layers(Face.Bottom, 2, 1, 1) == RotateSlice(Axis.X, -3, 1, -1)

    @settings(max_examples=50, deadline=None)
    @given(
        moves=st.lists(
            st.tuples(st.sampled_from(sorted(FACE_LETTERS)), st.sampled_from(["", "'", "2"])),
            min_size=1,
            max_size=10,
        )
    )
    def test_face_sequences(self, moves):
        amounts = {"": 1, "'": 3, "2": 2}
        text = " ".join(letter + modifier for letter, modifier in moves)
        expected = [
            RotateFace(FACE_LETTERS[letter], amounts[modifier]) for letter, modifier in moves
        ]
        assert compile_ok(text) == expected


class TestAppliedNotation:
    def test_sequence_order_six(self):
        cube = create_solved_cube(3)
        once = apply_notation(cube, "R U R' U'")
        assert once != cube
        assert apply_notation(cube, "(R U R' U')6") == cube

    def test_t_permutation_order_two(self):
        cube = create_solved_cube(3)
        t_perm = "R U R' U' R' F R2 U' R' U' R U R' F'"
        assert apply_notation(cube, t_perm) != cube
        assert apply_notation(cube, f"({t_perm})2") == cube

    def test_wide_turn_is_face_and_middle(self):
        cube = get_test_cube(3)
        assert apply_notation(cube, "Rw") == apply_notation(cube, "R M'")
        assert apply_notation(cube, "Lw") == apply_notation(cube, "L M")

    def test_wide_turn_on_four_by_four(self):
        cube = apply_notation(create_solved_cube(4), "r")
        assert cube == as_cube(
            [
                [1] * 16,
                [2, 2, 6, 6] * 4,
                [3] * 16,
                [5, 5, 4, 4] * 4,
                [5, 5, 2, 2] * 4,
                [6, 6, 4, 4] * 4,
            ]
        )

    def test_deep_turn_is_rotation_and_face(self):
        cube = get_test_cube(5)
        assert apply_notation(cube, "3Rw") == apply_notation(cube, "x L")

    def test_cube_rotation_letter(self):
        cube = get_test_cube(3)
        assert apply_notation(cube, "X") == rotate_cube(cube, Axis.Y, 1)
        assert apply_notation(cube, "X") == apply_notation(cube, "R M' L'")
