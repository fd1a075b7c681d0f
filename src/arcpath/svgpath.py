"""Handling path descriptions (simplified SVG path strings)"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Dict, Iterator, List, Optional, Tuple, Union

from arcpath.common import PATH_WHITESPACE, Point

if TYPE_CHECKING:
    from arcpath.path import VectorPath  # pylint: disable=unused-import

logger = logging.getLogger(__name__)


def format_number(value: float) -> str:
    """Format a coordinate for a path description."""
    return f"{value:.12g}"


def format_point(point: Point) -> str:
    """Format a point as coordinate pair "x,y" (no spaces around the comma)."""
    return f"{format_number(point[0])},{format_number(point[1])}"


###############################################################################
# SvgPathScanner
###############################################################################


@dataclass(frozen=True)
class InstructionMatch:
    """Result of a successful instruction recognition.

    Attributes:
        letter: the instruction letter (M, L, H, V, C, Q or Z)
        consumed: number of characters spent on the instruction
        operands: the parsed operands in textual order (numbers for H/V, points otherwise)
    """

    letter: str
    consumed: int
    operands: Tuple[Union[float, Point], ...] = ()


class SvgPathScanner:
    """
    Scanner for simplified path descriptions.

    The simplified dialect is a subset of SVG path data:
        - all coordinates are absolute
        - every instruction repeats its letter
        - coordinate pairs are written "x,y" without spaces around the comma
    Instructions (letter : operands):
        M : p           moveto
        L : p           lineto
        H : x           horizontal lineto
        V : y           vertical lineto
        C : c0 c1 p     cubic bezier to
        Q : c0 p        quadratic bezier to
        Z :             close path

    The scanner is lenient: characters that do not start a recognizable
    instruction are skipped one at a time, they never raise an error.
    """

    # Definition of a number:
    NUMBER_PATTERN: ClassVar[re.Pattern] = re.compile(r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")

    # Instructions in the order they are tried; "p" is a coordinate pair, "n" a single number
    INSTRUCTIONS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("M", "p"),
        ("L", "p"),
        ("H", "n"),
        ("V", "n"),
        ("C", "ppp"),
        ("Q", "pp"),
        ("Z", ""),
    )

    @staticmethod
    def match_character(text: str, pos: int, needle: str) -> Optional[int]:
        """Return 1 if the character at _pos_ is _needle_, else None."""
        if pos < len(text) and text[pos] == needle:
            return 1
        return None

    @staticmethod
    def match_whitespace(text: str, pos: int) -> int:
        """Return the number of contiguous whitespace characters at _pos_ (may be 0)."""
        end = pos
        while end < len(text) and text[end] in PATH_WHITESPACE:
            end += 1
        return end - pos

    @classmethod
    def match_number(cls, text: str, pos: int) -> Optional[Tuple[int, float]]:
        """Match the longest number at _pos_.

        Returns:
            Optional[Tuple[int, float]]: (consumed characters, value) or None
        """
        match = cls.NUMBER_PATTERN.match(text, pos)
        if match is None:
            return None
        return match.end() - pos, float(match.group())

    @classmethod
    def match_coordinate_pair(cls, text: str, pos: int) -> Optional[Tuple[int, Point]]:
        """Match "x,y" at _pos_.

        Returns:
            Optional[Tuple[int, Point]]: (consumed characters, point) or None
        """
        x_match = cls.match_number(text, pos)
        if x_match is None:
            return None
        offset, x = x_match

        comma = cls.match_character(text, pos + offset, ",")
        if comma is None:
            return None
        offset += comma

        y_match = cls.match_number(text, pos + offset)
        if y_match is None:
            return None
        offset += y_match[0]

        return offset, (x, y_match[1])

    @classmethod
    def match_instruction(cls, text: str, pos: int, letter: str, operand_kinds: str) -> Optional[InstructionMatch]:
        """Match the instruction _letter_ followed by operands of the given kinds at _pos_.

        Each operand may be preceded by whitespace. All parts must match in
        sequence, each starting where the previous one ended.

        Args:
            text (str): the path description
            pos (int): cursor position
            letter (str): the instruction letter
            operand_kinds (str): one character per operand, "p" for a pair, "n" for a number

        Returns:
            Optional[InstructionMatch]: the match, or None without side effects
        """
        offset = cls.match_character(text, pos, letter)
        if offset is None:
            return None

        operands: List[Union[float, Point]] = []
        for kind in operand_kinds:
            offset += cls.match_whitespace(text, pos + offset)
            if kind == "p":
                operand_match = cls.match_coordinate_pair(text, pos + offset)
            else:
                operand_match = cls.match_number(text, pos + offset)
            if operand_match is None:
                return None
            offset += operand_match[0]
            operands.append(operand_match[1])

        return InstructionMatch(letter, offset, tuple(operands))

    @classmethod
    def match_at(cls, text: str, pos: int) -> Optional[InstructionMatch]:
        """Try all instructions in priority order at _pos_, return the first match."""
        for letter, operand_kinds in cls.INSTRUCTIONS:
            instruction = cls.match_instruction(text, pos, letter, operand_kinds)
            if instruction is not None:
                return instruction
        return None

    @classmethod
    def scan(cls, text: str) -> Iterator[InstructionMatch]:
        """Walk _text_ from left to right and yield each recognized instruction."""
        pos = 0
        while pos < len(text):
            instruction = cls.match_at(text, pos)
            if instruction is not None:
                yield instruction
                pos += instruction.consumed
                continue
            if text[pos] not in PATH_WHITESPACE:
                logger.debug("Skipping unrecognized character %r at offset %d", text[pos], pos)
            pos += 1

    @classmethod
    def apply(cls, text: str, path: VectorPath) -> int:
        """Scan _text_ and issue the corresponding builder calls on _path_.

        Note that the dialect lists control points before the end point
        whereas the path stores the end point first.

        Returns:
            int: number of recognized instructions
        """
        count = 0
        for instruction in cls.scan(text):
            letter = instruction.letter
            ops = instruction.operands
            if letter == "M":
                path.move_to(ops[0])
            elif letter == "L":
                path.line_to(ops[0])
            elif letter == "H":
                path.line_horizontal_to(ops[0])
            elif letter == "V":
                path.line_vertical_to(ops[0])
            elif letter == "C":
                path.cubic_curve_to(ops[2], ops[0], ops[1])
            elif letter == "Q":
                path.quadratic_curve_to(ops[1], ops[0])
            elif letter == "Z":
                path.close_path()
            count += 1
        return count


###############################################################################
# SvgPathNormalizer
###############################################################################


class SvgPathNormalizer:
    """
    Converts general SVG path data into the simplified dialect read by SvgPathScanner.
    Commands (command : number of values : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc
        QuadraticBezier:  4: Qq
        ClosePath:        0: Zz
    Smooth curves (Ss, Tt) and arcs (Aa) are not supported and are dropped.
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmLlHhVvCcSsQqTtAaZz"
    # Definition of a number:
    SVG_ARGS: ClassVar[str] = r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
    # Number of values per instruction:
    BATCH_SIZES: ClassVar[Dict[str, int]] = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "Q": 4}

    @classmethod
    def to_simplified(cls, path_string: str) -> str:
        """Take the given SVG _path_string_ and rewrite it using absolute coordinates,
        one letter per instruction and "x,y" coordinate pairs.
        Implicitly repeated pairs after a MoveTo become LineTo instructions.

        Args:
            path_string (str): SVG path string input

        Returns:
            str: path description in the simplified dialect
        """
        org_commands = re.findall(f"[{cls.SVG_CMDS}][^{cls.SVG_CMDS}]*", path_string)
        ret_commands: List[str] = []

        current: Point = (0.0, 0.0)
        start: Point = (0.0, 0.0)

        for command in org_commands:
            command_letter = command[0]
            upper = command_letter.upper()
            relative = command_letter.islower()
            args = [float(arg) for arg in re.findall(cls.SVG_ARGS, command[1:])]

            if upper == "Z":
                ret_commands.append("Z")
                current = start
                continue

            batch_size = cls.BATCH_SIZES.get(upper)
            if batch_size is None:
                logger.warning("Dropping unsupported path command '%s'", command_letter)
                continue
            if len(args) % batch_size:
                logger.warning("Ignoring incomplete arguments of path command '%s'", command_letter)

            for i in range(0, len(args) - batch_size + 1, batch_size):
                batch = args[i : i + batch_size]
                offset_x, offset_y = current if relative else (0.0, 0.0)

                if upper == "H":
                    current = (batch[0] + offset_x, current[1])
                    ret_commands.append(f"H {format_number(current[0])}")
                elif upper == "V":
                    current = (current[0], batch[0] + offset_y)
                    ret_commands.append(f"V {format_number(current[1])}")
                else:
                    points = [(batch[j] + offset_x, batch[j + 1] + offset_y) for j in range(0, batch_size, 2)]
                    letter = upper
                    if upper == "M":
                        if i == 0:
                            start = points[-1]
                        else:
                            letter = "L"
                    ret_commands.append(letter + " " + " ".join(format_point(point) for point in points))
                    current = points[-1]

        return " ".join(ret_commands)
