from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple


@dataclass(frozen=True)
class Point:
    """A position (or delta) in image space; *y* grows downward."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float


class RotationSense(Enum):
    CW = "cw"
    CCW = "ccw"
    NONE = "none"


class Quadrant(Enum):
    NE = "ne"
    SE = "se"
    SW = "sw"
    NW = "nw"


class ArrowSigns(NamedTuple):
    """One row of the quadrant × sense arrow table.

    *x_sign* / *y_sign* scale the arrow length into ``xadj`` / ``yadj``.
    *nudge_axis* is ``"x"`` (applied to ``dx``) or ``"y"`` (applied to
    ``dy``); *nudge_sign* scales the small tangential nudge.
    """

    x_sign: int
    y_sign: int
    nudge_axis: str
    nudge_sign: int


@dataclass(frozen=True)
class ArrowGeometry:
    """Rotation arrow: an anchor plus two segment deltas.

    *first* is ``(dx, yadj)`` and *second* is ``(xadj, dy)``; both start
    at *anchor*.
    """

    anchor: Point
    first: Point
    second: Point

    def segments(self) -> Tuple[Tuple[Point, Point], Tuple[Point, Point]]:
        """Absolute ``(start, end)`` pairs for both arrow strokes."""
        a = self.anchor
        return (
            (a, a.offset(self.first.x, self.first.y)),
            (a, a.offset(self.second.x, self.second.y)),
        )
