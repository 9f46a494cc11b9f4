"""Tetromino definitions and rotation.

Pieces are immutable values: a shape, four block offsets relative to the
piece origin and a rotation counter.  Rotating a piece returns a new
:class:`Piece`; whether the rotated candidate actually fits on the board is
decided by the engine, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import math
import random


class PieceType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "PieceType":
        """Return a uniformly chosen piece type."""

        return (rng or random).choice(list(cls))


@dataclass(frozen=True, order=True)
class Block:
    """A single cell, either relative to a piece origin or absolute."""

    col: int
    row: int

    def offset(self, dcol: int, drow: int) -> "Block":
        return Block(self.col + dcol, self.row + drow)


Blocks = Tuple[Block, ...]


def _blocks(*cells: Tuple[int, int]) -> Blocks:
    return tuple(Block(col, row) for col, row in cells)


# Spawn orientation of each shape as (col, row) offsets, row 0 at the bottom.
_BASE_SHAPES: Dict[PieceType, Blocks] = {
    PieceType.I: _blocks((0, 0), (1, 0), (2, 0), (3, 0)),
    PieceType.O: _blocks((0, 0), (1, 0), (0, 1), (1, 1)),
    PieceType.T: _blocks((0, 0), (1, 0), (2, 0), (1, 1)),
    PieceType.S: _blocks((1, 0), (2, 0), (0, 1), (1, 1)),
    PieceType.Z: _blocks((0, 0), (1, 0), (1, 1), (2, 1)),
    PieceType.J: _blocks((0, 0), (0, 1), (1, 1), (2, 1)),
    PieceType.L: _blocks((2, 0), (0, 1), (1, 1), (2, 1)),
}


def base_blocks(shape: PieceType) -> Blocks:
    """Return the spawn-orientation offsets for ``shape``."""

    return _BASE_SHAPES[shape]


def normalise(blocks: Iterable[Block]) -> Blocks:
    """Shift ``blocks`` so the minimum column and row are both zero."""

    blocks = tuple(blocks)
    min_col = min(b.col for b in blocks)
    min_row = min(b.row for b in blocks)
    return tuple(b.offset(-min_col, -min_row) for b in blocks)


def rotate_clockwise(blocks: Iterable[Block]) -> Blocks:
    """Return ``blocks`` rotated 90 degrees clockwise.

    The rotation pivots around the arithmetic mean of the block coordinates
    (not snapped to the grid).  Each offset ``(x, y)`` from the centre becomes
    ``(y, -x)``, is rounded back to integer coordinates and the result is
    normalised so that no offset is negative.
    """

    blocks = tuple(blocks)
    center_col = sum(b.col for b in blocks) / len(blocks)
    center_row = sum(b.row for b in blocks) / len(blocks)

    rotated: List[Block] = []
    for block in blocks:
        rel_col = block.col - center_col
        rel_row = block.row - center_row
        rotated.append(
            Block(
                col=_round_half_up(center_col + rel_row),
                row=_round_half_up(center_row - rel_col),
            )
        )
    return normalise(rotated)


def _round_half_up(value: float) -> int:
    # Ties must round the same direction on both sides of the centre, otherwise
    # the I piece collapses onto itself.  ``round`` rounds ties to even.
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class Piece:
    """A tetromino shape in a particular orientation."""

    shape: PieceType
    blocks: Blocks = field(default=())
    rotation: int = 0

    def __post_init__(self) -> None:
        if not self.blocks:
            object.__setattr__(self, "blocks", base_blocks(self.shape))

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "Piece":
        return cls(PieceType.random(rng))

    def rotated(self) -> "Piece":
        """Return the clockwise rotation candidate of this piece.

        The O piece keeps its blocks unchanged.  Only the rotation counter
        advances, wrapping after four turns.
        """

        if self.shape is PieceType.O:
            blocks = self.blocks
        else:
            blocks = rotate_clockwise(self.blocks)
        return Piece(self.shape, blocks, (self.rotation + 1) % 4)

    def cells(self, col: int, row: int) -> List[Block]:
        """Return the absolute cells covered with the origin at ``(col, row)``."""

        return [block.offset(col, row) for block in self.blocks]

    @property
    def width(self) -> int:
        return max(b.col for b in self.blocks) + 1

    @property
    def height(self) -> int:
        return max(b.row for b in self.blocks) + 1


__all__ = [
    "Block",
    "Blocks",
    "Piece",
    "PieceType",
    "base_blocks",
    "normalise",
    "rotate_clockwise",
]
