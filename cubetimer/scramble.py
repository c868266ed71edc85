from __future__ import annotations

"""Scramble generation for the 3x3 cube.

A scramble is 20-25 face turns. Consecutive turns never share a face, and a
turn on the same axis as the previous one is redrawn 70% of the time, which
keeps sequences like ``R L R`` rare without banning them outright.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

FACES = ("R", "L", "U", "D", "F", "B")
MODIFIERS = ("", "'", "2")

AXIS_OF: Dict[str, str] = {
    "R": "x",
    "L": "x",
    "U": "y",
    "D": "y",
    "F": "z",
    "B": "z",
}

MIN_LENGTH = 20
MAX_LENGTH = 25
SAME_AXIS_REJECT_P = 0.7


@dataclass(frozen=True)
class Move:
    face: str
    modifier: str = ""

    @property
    def axis(self) -> str:
        return AXIS_OF[self.face]

    def __str__(self) -> str:
        return f"{self.face}{self.modifier}"


def generate_scramble(rng: Optional[random.Random] = None) -> List[Move]:
    """Generate one random scramble.

    Args:
        rng: Optional random source. Defaults to the module-level ``random``,
            which ``seed_if_needed`` seeds from the SEED env var.

    Returns:
        A list of 20 to 25 moves.
    """
    r: Any = rng if rng is not None else random
    length = r.randint(MIN_LENGTH, MAX_LENGTH)
    moves: List[Move] = []
    last_face = ""
    last_axis = ""

    for _ in range(length):
        while True:
            face = r.choice(FACES)
            axis = AXIS_OF[face]
            if face == last_face:
                continue
            if axis == last_axis and r.random() < SAME_AXIS_REJECT_P:
                continue
            break
        moves.append(Move(face, r.choice(MODIFIERS)))
        last_face = face
        last_axis = axis

    return moves


def format_scramble(moves: Sequence[Move]) -> str:
    return " ".join(str(m) for m in moves)


def parse_scramble(text: str) -> List[Move]:
    """Parse ``"R U2 F' ..."`` back into moves."""
    moves: List[Move] = []
    for token in text.split():
        face, modifier = token[0], token[1:]
        if face not in AXIS_OF:
            raise ValueError(f"Unknown face in scramble token: {token!r}")
        if modifier not in MODIFIERS:
            raise ValueError(f"Unknown modifier in scramble token: {token!r}")
        moves.append(Move(face, modifier))
    return moves
