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
Compile cubing notation into cube actions.

Compiling runs in two stages. AlgorithmParser matches the text against
the grammar below and builds a parse tree, ActionSemantics walks the
tree and produces actions. Letters are only ever resolved through the
lookup tables of this module.

Grammar (ordered choice, first match wins)::

    expression = item (space+ item)* space*
    item       = group | move
    group      = "(" space* expression ")" repeat?
    repeat     = "2".."9"
    move       = target ("'" | "2")?
    target     = multiLayer | face | slice | wholeCube
    multiLayer = digit face "w" | digit face subscript | digit face
               | face subscript | face "w" | wideFace
    subscript  = "_" "2".."8" | "₂".."₈"
    digit      = "1".."9"

Examples: ``R U R' U'``, ``Rw2``, ``2R``, ``3Fw'``, ``r``, ``R_3``,
``M2``, ``x'``, ``(R U R' U')3``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple, Union, assert_never
import logging

from puzzlecube.actions import Action, RotateCube, RotateFace, RotateSlice
from puzzlecube.cube import FACE_AXES, Axis, Face, NotationError, RotationAmount

logger = logging.getLogger("puzzlecube")

# -------------------------------------------------
# Letter tables
# -------------------------------------------------
FACE_LETTERS: Dict[str, Face] = {
    "F": Face.Front,
    "U": Face.Top,
    "R": Face.Right,
    "B": Face.Back,
    "L": Face.Left,
    "D": Face.Bottom,
}

# dedicated lower case letters for wide turns of depth 2
WIDE_FACE_LETTERS: Dict[str, Face] = {
    "f": Face.Front,
    "u": Face.Top,
    "r": Face.Right,
    "b": Face.Back,
    "l": Face.Left,
    "d": Face.Bottom,
}

# middle layers: axis and sign, M follows L, E follows D, S follows F
SLICE_LETTERS: Dict[str, Tuple[Axis, int]] = {
    "M": (Axis.Y, -1),
    "E": (Axis.X, -1),
    "S": (Axis.Z, 1),
}

# whole cube: X follows R, Y follows U, Z follows F
WHOLE_CUBE_LETTERS: Dict[str, Tuple[Axis, int]] = {
    "X": (Axis.Y, 1),
    "Y": (Axis.X, 1),
    "Z": (Axis.Z, 1),
    "x": (Axis.Y, 1),
    "y": (Axis.X, 1),
    "z": (Axis.Z, 1),
}

MODIFIERS: Dict[str, RotationAmount] = {
    "": RotationAmount.Clockwise,
    "'": RotationAmount.CounterClockwise,
    "2": RotationAmount.Halfway,
}

SUBSCRIPTS: Dict[str, int] = {
    **{f"_{depth}": depth for depth in range(2, 9)},
    **{chr(0x2080 + depth): depth for depth in range(2, 9)},
}

DIGITS: Dict[str, int] = {str(depth): depth for depth in range(1, 10)}

GROUP_REPEATS: Dict[str, int] = {str(count): count for count in range(2, 10)}


# -------------------------------------------------
# Parse tree
# -------------------------------------------------
class MultiLayerKind(Enum):
    """Shape of a multi-layer move."""

    WideLetter = "r"
    Wide = "Rw"
    DeepWide = "2Rw"
    Subscript = "R_3"
    InnerSlice = "2R"
    InnerBlock = "2R_3"


@dataclass(frozen=True)
class FaceNode:
    letter: str


@dataclass(frozen=True)
class SliceNode:
    letter: str


@dataclass(frozen=True)
class WholeCubeNode:
    letter: str


@dataclass(frozen=True)
class MultiLayerNode:
    """A face letter with a depth, see MultiLayerKind for the shapes."""

    kind: MultiLayerKind
    letter: str
    digit: Optional[int] = None
    subscript: Optional[int] = None


MoveTarget = Union[FaceNode, SliceNode, WholeCubeNode, MultiLayerNode]


@dataclass(frozen=True)
class MoveNode:
    target: MoveTarget
    modifier: str
    position: int


@dataclass(frozen=True)
class GroupNode:
    items: Tuple[ItemNode, ...]
    repeat: int
    position: int


ItemNode = Union[MoveNode, GroupNode]


@dataclass(frozen=True)
class AlgorithmNode:
    items: Tuple[ItemNode, ...]


# -------------------------------------------------
# Match results
# -------------------------------------------------
@dataclass(frozen=True)
class NotationParseFailure:
    """
    Describe where and why a notation did not match the grammar.

    This is a value returned by the parser, never raised.
    """

    text: str
    position: int
    expected: Tuple[str, ...]

    @property
    def line(self) -> int:
        return self.text.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        return self.position - (self.text.rfind("\n", 0, self.position) + 1) + 1

    @property
    def short_message(self) -> str:
        """One line description of the failure."""
        return (
            f"Line {self.line}, col {self.column}: "
            f"expected {', '.join(self.expected)}"
        )

    @property
    def message(self) -> str:
        """Description of the failure with the text and a caret."""
        line_text = self.text.split("\n")[self.line - 1]
        return "{}\n> {}\n  {}^".format(
            self.short_message, line_text, " " * (self.column - 1)
        )


@dataclass(frozen=True)
class MatchResult:
    """Result of matching a notation against the grammar."""

    text: str
    tree: Optional[AlgorithmNode] = None
    failure: Optional[NotationParseFailure] = None

    def succeeded(self) -> bool:
        return self.tree is not None

    def failed(self) -> bool:
        return self.tree is None

    @property
    def message(self) -> str:
        if self.failure is None:
            return ""
        return self.failure.message

    @property
    def short_message(self) -> str:
        if self.failure is None:
            return ""
        return self.failure.short_message


# -------------------------------------------------
# Grammar
# -------------------------------------------------
@dataclass
class _Input:
    """Text under parsing and the furthest failure seen so far."""

    text: str
    furthest: int = 0
    expected: Set[str] = field(default_factory=set)

    def expect(self, pos: int, description: str) -> None:
        if pos > self.furthest:
            self.furthest = pos
            self.expected = set()
        if pos == self.furthest:
            self.expected.add(description)

    def take(self, pos: int, table: Dict[str, object], description: str) -> Optional[str]:
        """Return the key of table found at pos, longest keys first."""
        for key in sorted(table, key=len, reverse=True):
            if key and self.text.startswith(key, pos):
                return key
        self.expect(pos, description)
        return None

    def literal(self, pos: int, token: str) -> bool:
        if self.text.startswith(token, pos):
            return True
        self.expect(pos, f'"{token}"')
        return False

    def skip_spaces(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos].isspace():
            pos += 1
        if pos < len(self.text):
            self.expect(pos, "space")
        return pos


class AlgorithmParser:
    """
    Match notation text against the move grammar.

    Every rule method takes the position where it starts and returns
    the node it built and the position after it, or None.
    """

    def match(self, text: str) -> MatchResult:
        """
        Match a whole notation.

        :param text: the notation, e.g. "R U R' U'"
        :type text: str
        :returns: the parse tree on success, the failure otherwise
        :rtype: MatchResult
        """
        source = _Input(text)
        parsed = self._expression(source, 0)
        if parsed is not None:
            items, pos = parsed
            if pos == len(text):
                return MatchResult(text, tree=AlgorithmNode(items))
            source.expect(pos, "end of input")

        failure = NotationParseFailure(
            text, source.furthest, tuple(sorted(source.expected))
        )
        return MatchResult(text, failure=failure)

    def _expression(
        self, source: _Input, pos: int
    ) -> Optional[Tuple[Tuple[ItemNode, ...], int]]:
        first = self._item(source, pos)
        if first is None:
            return None
        item, pos = first
        items = [item]
        while True:
            after_spaces = source.skip_spaces(pos)
            if after_spaces == pos:
                break
            nxt = self._item(source, after_spaces)
            if nxt is None:
                break
            item, pos = nxt
            items.append(item)
        return tuple(items), source.skip_spaces(pos)

    def _item(self, source: _Input, pos: int) -> Optional[Tuple[ItemNode, int]]:
        group = self._group(source, pos)
        if group is not None:
            return group
        return self._move(source, pos)

    def _group(self, source: _Input, pos: int) -> Optional[Tuple[GroupNode, int]]:
        if not source.literal(pos, "("):
            return None
        inner = self._expression(source, source.skip_spaces(pos + 1))
        if inner is None:
            return None
        items, end = inner
        if not source.literal(end, ")"):
            return None
        end += 1
        repeat = 1
        count = source.take(end, GROUP_REPEATS, "repeat count")
        if count is not None:
            repeat = GROUP_REPEATS[count]
            end += len(count)
        return GroupNode(items, repeat, pos), end

    def _move(self, source: _Input, pos: int) -> Optional[Tuple[MoveNode, int]]:
        target = None
        for rule in (self._multi_layer, self._face, self._slice, self._whole_cube):
            target = rule(source, pos)
            if target is not None:
                break
        if target is None:
            return None
        node, end = target
        modifier = source.take(end, MODIFIERS, "modifier")
        if modifier is None:
            modifier = ""
        return MoveNode(node, modifier, pos), end + len(modifier)

    def _face(self, source: _Input, pos: int) -> Optional[Tuple[FaceNode, int]]:
        letter = source.take(pos, FACE_LETTERS, "face letter")
        if letter is None:
            return None
        return FaceNode(letter), pos + 1

    def _slice(self, source: _Input, pos: int) -> Optional[Tuple[SliceNode, int]]:
        letter = source.take(pos, SLICE_LETTERS, "slice letter")
        if letter is None:
            return None
        return SliceNode(letter), pos + 1

    def _whole_cube(self, source: _Input, pos: int) -> Optional[Tuple[WholeCubeNode, int]]:
        letter = source.take(pos, WHOLE_CUBE_LETTERS, "cube rotation letter")
        if letter is None:
            return None
        return WholeCubeNode(letter), pos + 1

    def _multi_layer(
        self, source: _Input, pos: int
    ) -> Optional[Tuple[MultiLayerNode, int]]:
        # digit face ("w" | subscript)?
        digit = source.take(pos, DIGITS, "layer count")
        if digit is not None:
            letter = source.take(pos + 1, FACE_LETTERS, "face letter")
            if letter is not None:
                end = pos + 2
                if source.literal(end, "w"):
                    return (
                        MultiLayerNode(MultiLayerKind.DeepWide, letter, DIGITS[digit]),
                        end + 1,
                    )
                subscript = source.take(end, SUBSCRIPTS, "subscript")
                if subscript is not None:
                    return (
                        MultiLayerNode(
                            MultiLayerKind.InnerBlock,
                            letter,
                            DIGITS[digit],
                            SUBSCRIPTS[subscript],
                        ),
                        end + len(subscript),
                    )
                return MultiLayerNode(MultiLayerKind.InnerSlice, letter, DIGITS[digit]), end

        # face ("w" | subscript)
        letter = source.take(pos, FACE_LETTERS, "face letter")
        if letter is not None:
            end = pos + 1
            subscript = source.take(end, SUBSCRIPTS, "subscript")
            if subscript is not None:
                return (
                    MultiLayerNode(
                        MultiLayerKind.Subscript, letter, subscript=SUBSCRIPTS[subscript]
                    ),
                    end + len(subscript),
                )
            if source.literal(end, "w"):
                return MultiLayerNode(MultiLayerKind.Wide, letter), end + 1

        letter = source.take(pos, WIDE_FACE_LETTERS, "wide face letter")
        if letter is not None:
            return MultiLayerNode(MultiLayerKind.WideLetter, letter), pos + 1
        return None


# -------------------------------------------------
# Semantics
# -------------------------------------------------
class ActionSemantics:
    """Translate a parse tree into the list of actions it describes."""

    def execute(self, match: MatchResult) -> List[Action]:
        """
        Produce the actions of a successful match.

        :param match: result of AlgorithmParser.match
        :type match: MatchResult
        :returns: the actions, in the order they must be applied
        :rtype: List[Action]
        :raises NotationError: when the match failed
        """
        if match.tree is None:
            raise NotationError(f"Cannot execute a failed match: {match.short_message}")
        return self._items(match.tree.items)

    def _items(self, items: Tuple[ItemNode, ...]) -> List[Action]:
        actions: List[Action] = []
        for item in items:
            if isinstance(item, GroupNode):
                group = self._items(item.items)
                for loop1 in range(item.repeat):
                    actions.extend(group)
            elif isinstance(item, MoveNode):
                actions.extend(self._move(item))
            else:
                assert_never(item)
        return actions

    def _move(self, move: MoveNode) -> List[Action]:
        amount = MODIFIERS[move.modifier]
        target = move.target
        if isinstance(target, FaceNode):
            return [RotateFace(FACE_LETTERS[target.letter], amount)]
        elif isinstance(target, SliceNode):
            axis, sign = SLICE_LETTERS[target.letter]
            return [RotateSlice(axis, 1, 1, sign * amount)]
        elif isinstance(target, WholeCubeNode):
            axis, sign = WHOLE_CUBE_LETTERS[target.letter]
            return [RotateCube(axis=axis, turns=sign * amount)]
        elif isinstance(target, MultiLayerNode):
            return self._multi_layer(target, amount)
        else:
            assert_never(target)

    def _multi_layer(self, node: MultiLayerNode, amount: int) -> List[Action]:
        if node.kind == MultiLayerKind.WideLetter:
            face = WIDE_FACE_LETTERS[node.letter]
        else:
            face = FACE_LETTERS[node.letter]

        # (first inner layer, number of inner layers, with the face itself)
        if node.kind in (MultiLayerKind.WideLetter, MultiLayerKind.Wide):
            start, depth, with_face = 1, 1, True
        elif node.kind == MultiLayerKind.DeepWide:
            start, depth, with_face = 1, node.digit, True
        elif node.kind == MultiLayerKind.Subscript:
            start, depth, with_face = 1, node.subscript, True
        elif node.kind == MultiLayerKind.InnerSlice:
            start, depth, with_face = 1, node.digit, False
        elif node.kind == MultiLayerKind.InnerBlock:
            start, depth, with_face = node.digit, node.subscript, False
        else:
            assert_never(node.kind)

        actions: List[Action] = []
        if with_face:
            actions.append(RotateFace(face, amount))
        actions.append(inner_layers(face, start, depth, amount))
        return actions


def inner_layers(face: Face, start: int, depth: int, turns: int) -> RotateSlice:
    """
    Build the slice turning inner layers behind a face, like the face does.

    :param face: the face the layers are counted from
    :type face: Face
    :param start: first inner layer, 1 is right behind the face
    :type start: int
    :param depth: number of layers
    :type depth: int
    :param turns: quarter turns, seen from the face
    :type turns: int
    :returns: the slice action
    :rtype: RotateSlice
    """
    face_axis = FACE_AXES[face]
    if face_axis.last_layer:
        offset = -(start + depth)
    else:
        offset = start
    return RotateSlice(face_axis.axis, offset, depth, face_axis.sign * turns)


_parser = AlgorithmParser()
_semantics = ActionSemantics()


def compile_notation(
    text: str,
) -> Tuple[MatchResult, Union[List[Action], NotationParseFailure]]:
    """
    Compile a notation into actions.

    A notation that does not match the grammar is not an error: the match
    result reports it and the failure is returned in place of actions.

    :param text: the notation, e.g. "R U R' U'"
    :type text: str
    :returns: the match result and the actions or the parse failure
    :rtype: Tuple[MatchResult, Union[List[Action], NotationParseFailure]]
    """
    match = _parser.match(text)
    if match.failure is not None:
        logger.info(f"Cannot compile {text!r}: {match.short_message}")
        return match, match.failure
    return match, _semantics.execute(match)
