"""Geometry helpers for frame diagrams.

Two pieces of real math live here:

- :func:`polygon_vertices` — evenly spaced motor positions for N-armed
  frames (hex, octo).
- :func:`place_arrow` — the rotation-direction arrow drawn beside a
  motor circle at one of its diagonal quadrants.

Angles use *screen bearings*: 0° points up the image and angles grow
clockwise.  Image y grows downward, so the vertical term is subtracted.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from .models import ArrowGeometry, ArrowSigns, Circle, Point, Quadrant, RotationSense


NUDGE_RATIO = 0.12
"""Tangential nudge as a fraction of the arrow length."""


# ═══════════════════════════════════════════════════════════════════
# Points on a circle
# ═══════════════════════════════════════════════════════════════════


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def polar_point(center: Point, radius: float, degrees: float) -> Point:
    """Point at *radius* from *center* along screen bearing *degrees*."""
    rad = math.radians(degrees)
    return Point(center.x + radius * math.sin(rad), center.y - radius * math.cos(rad))


def bearing(center: Point, point: Point) -> float:
    """Screen bearing of *point* seen from *center*, in [0, 360)."""
    return math.degrees(math.atan2(point.x - center.x, center.y - point.y)) % 360.0


def rotate_point(point: Point, center: Point, degrees: float) -> Point:
    """Rotate *point* clockwise (on screen) about *center* by *degrees*."""
    return polar_point(center, distance(center, point), bearing(center, point) + degrees)


def polygon_vertices(
    center: Point,
    radius: float,
    count: int,
    offset: float = 0.0,
) -> List[Point]:
    """Vertices of a regular *count*-gon inscribed in a circle.

    Vertex ``n`` sits at bearing ``(n * 360 / count + offset) mod 360``, so
    with ``offset=0`` the first vertex is straight up.  ``count=0`` gives
    an empty list.
    """
    points: List[Point] = []
    for n in range(count):
        angle = (n * 360.0 / count + offset) % 360.0
        points.append(polar_point(center, radius, angle))
    return points


# ═══════════════════════════════════════════════════════════════════
# Rotation arrows
# ═══════════════════════════════════════════════════════════════════

# Unit offsets from the circle centre to the anchor, before scaling by r/√2.
QUADRANT_OFFSETS: Dict[Quadrant, Tuple[int, int]] = {
    Quadrant.NE: (1, -1),
    Quadrant.SE: (1, 1),
    Quadrant.SW: (-1, 1),
    Quadrant.NW: (-1, -1),
}

ARROW_SIGNS: Dict[Tuple[Quadrant, RotationSense], ArrowSigns] = {
    (Quadrant.NE, RotationSense.CW): ArrowSigns(-1, -1, "y", 1),
    (Quadrant.NE, RotationSense.CCW): ArrowSigns(1, 1, "x", -1),
    (Quadrant.SE, RotationSense.CW): ArrowSigns(1, -1, "x", -1),
    (Quadrant.SE, RotationSense.CCW): ArrowSigns(-1, 1, "y", -1),
    (Quadrant.SW, RotationSense.CW): ArrowSigns(1, 1, "y", -1),
    (Quadrant.SW, RotationSense.CCW): ArrowSigns(-1, -1, "x", 1),
    (Quadrant.NW, RotationSense.CW): ArrowSigns(-1, 1, "x", 1),
    (Quadrant.NW, RotationSense.CCW): ArrowSigns(1, -1, "y", 1),
}


def arrow_signs(quadrant: Quadrant, sense: RotationSense) -> ArrowSigns:
    """Row of :data:`ARROW_SIGNS` for *quadrant* and *sense*.

    Raises ``KeyError`` for ``RotationSense.NONE``, which has no arrow.
    """
    return ARROW_SIGNS[(quadrant, sense)]


def arrow_anchor(circle: Circle, quadrant: Quadrant) -> Point:
    """Corner of the circle's bounding square (scaled by 1/√2) at *quadrant*.

    The anchor is at distance ``radius / √2`` from the centre along the
    quadrant diagonal.
    """
    radj = circle.radius / math.sqrt(2)
    ux, uy = QUADRANT_OFFSETS[quadrant]
    return circle.center.offset(ux * radj, uy * radj)


def place_arrow(
    circle: Circle,
    sense: RotationSense,
    quadrant: Quadrant,
    arrow_length: float,
) -> Optional[ArrowGeometry]:
    """Rotation arrow for a motor circle, or ``None`` when *sense* is NONE.

    The arrow is an "L" whose corner is the anchor returned by
    :func:`arrow_anchor`.  Its two arms have length *arrow_length*; one of
    them is nudged sideways by ``NUDGE_RATIO * arrow_length`` so CW and
    CCW read as different chevrons.
    """
    if sense is RotationSense.NONE:
        return None

    signs = arrow_signs(quadrant, sense)
    adelta = arrow_length * NUDGE_RATIO
    xadj = signs.x_sign * arrow_length
    yadj = signs.y_sign * arrow_length
    dx = dy = 0.0
    if signs.nudge_axis == "x":
        dx = signs.nudge_sign * adelta
    else:
        dy = signs.nudge_sign * adelta

    return ArrowGeometry(
        anchor=arrow_anchor(circle, quadrant),
        first=Point(dx, yadj),
        second=Point(xadj, dy),
    )
