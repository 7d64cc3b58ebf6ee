"""Airframe catalog — declarative recipes for every supported frame.

Each :class:`AirframeSpec` lists the struts, motors, servos and body
paths of one airframe.  The drawing order is fixed by
:func:`~framediag.build.render_airframe`, so adding a frame means adding
data here and nothing else.

Symmetric hex and octo frames take their motor positions from
:func:`~framediag.geometry.polygon_vertices`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import TRANSLUCENT_WHITE
from .geometry import polygon_vertices
from .models import Point, Quadrant, RotationSense
from .render import CLOSE, PathItem


CW = RotationSense.CW
CCW = RotationSense.CCW
NOARROW = RotationSense.NONE

NE = Quadrant.NE
SE = Quadrant.SE
SW = Quadrant.SW
NW = Quadrant.NW


@dataclass(frozen=True)
class MotorSpec:
    position: Point
    label: str
    sense: RotationSense = CCW
    quadrant: Quadrant = NE
    fill: Optional[str] = None
    color: Optional[str] = None
    label_offset: Tuple[float, float] = (0, 0)


@dataclass(frozen=True)
class ServoSpec:
    origin: Point
    label: str
    color: str = "black"


@dataclass(frozen=True)
class PathSpec:
    points: Tuple[PathItem, ...]
    fill: Optional[str] = None
    round_caps: bool = False


@dataclass(frozen=True)
class AirframeSpec:
    """Everything needed to draw one airframe diagram.

    Attributes
    ----------
    name : str
        Catalog key.
    filename : str
        Output file name for the diagram.
    struts : tuple of (Point, Point)
        Body struts, stroked together as one rounded body.
    motors : tuple of MotorSpec
        Motors drawn on top of the body.
    under_motors : tuple of MotorSpec
        Lower motors of coaxial pairs, drawn before the body.
    servos, paths
        Servo markers and filled body outlines.
    heading_y : float
        Top of the heading arrow shaft.
    motor_radius, line_width : float, optional
        Overrides for the render config defaults.
    """

    name: str
    filename: str
    struts: Tuple[Tuple[Point, Point], ...] = ()
    motors: Tuple[MotorSpec, ...] = ()
    under_motors: Tuple[MotorSpec, ...] = ()
    servos: Tuple[ServoSpec, ...] = ()
    paths: Tuple[PathSpec, ...] = ()
    heading_y: float = 80
    motor_radius: Optional[float] = None
    line_width: Optional[float] = None

    def all_motors(self) -> Tuple[MotorSpec, ...]:
        return self.under_motors + self.motors


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════


def _p(x: float, y: float) -> Point:
    return Point(x, y)


def _strut(x1: float, y1: float, x2: float, y2: float) -> Tuple[Point, Point]:
    return (Point(x1, y1), Point(x2, y2))


def _outline(*coords: Tuple[float, float]) -> Tuple[PathItem, ...]:
    return tuple(Point(x, y) for x, y in coords) + (CLOSE,)


def _tee(top_y: float, tail_y: float, flat: bool, hub_y: float) -> List[Tuple[Point, Point]]:
    """Front cross-arm plus a tail boom, flat or veed from a hub."""
    if flat:
        return [_strut(40, top_y, 160, top_y), _strut(100, top_y, 100, tail_y)]
    return [
        _strut(100, hub_y, 40, top_y),
        _strut(100, hub_y, 160, top_y),
        _strut(100, hub_y, 100, tail_y),
    ]


def _opposed_struts(points: Sequence[Point]) -> Tuple[Tuple[Point, Point], ...]:
    """Struts joining each vertex of an even ring to its opposite."""
    half = len(points) // 2
    return tuple((points[i], points[i + half]) for i in range(half))


def _ring_motors(
    points: Sequence[Point],
    layout: Sequence[Tuple[str, RotationSense, Quadrant]],
) -> Tuple[MotorSpec, ...]:
    return tuple(
        MotorSpec(pos, label, sense, quadrant)
        for pos, (label, sense, quadrant) in zip(points, layout)
    )


# ═══════════════════════════════════════════════════════════════════
# Multirotors
# ═══════════════════════════════════════════════════════════════════


def _bicopter() -> AirframeSpec:
    return AirframeSpec(
        name="bicopter",
        filename="bicopter.svg",
        struts=(_strut(40, 100, 160, 100),),
        motors=(
            MotorSpec(_p(40, 100), "1", CW, NW),
            MotorSpec(_p(160, 100), "2", CCW, NE),
        ),
        servos=(ServoSpec(_p(64, 120), "S1"), ServoSpec(_p(108, 120), "S2")),
        heading_y=70,
    )


def _tri(flat_tail: bool) -> AirframeSpec:
    return AirframeSpec(
        name="tri",
        filename="tri.svg",
        struts=tuple(_tee(40, 160, flat_tail, hub_y=50)),
        motors=(
            MotorSpec(_p(100, 160), "1", CCW, NW),
            MotorSpec(_p(160, 40), "2", CCW, NW),
            MotorSpec(_p(40, 40), "3", CCW, NE),
        ),
        servos=(ServoSpec(_p(140, 140), "S1"),),
        heading_y=70,
    )


def _quad_x() -> AirframeSpec:
    return AirframeSpec(
        name="quad_x",
        filename="quad_x.svg",
        struts=(_strut(40, 40, 160, 160), _strut(40, 160, 160, 40)),
        motors=(
            MotorSpec(_p(160, 160), "1", CW, SE),
            MotorSpec(_p(160, 40), "2", CCW, NE),
            MotorSpec(_p(40, 160), "3", CCW, SW),
            MotorSpec(_p(40, 40), "4", CW, NW),
        ),
    )


def _quad_p() -> AirframeSpec:
    return AirframeSpec(
        name="quad_p",
        filename="quad_p.svg",
        struts=(_strut(40, 100, 160, 100), _strut(100, 40, 100, 160)),
        motors=(
            MotorSpec(_p(100, 160), "1", CW, SW),
            MotorSpec(_p(160, 100), "2", CCW, NE),
            MotorSpec(_p(100, 40), "4", CW, NE),
            MotorSpec(_p(40, 100), "3", CCW, SW),
        ),
    )


def _hex(name: str, offset: float, layout) -> AirframeSpec:
    points = polygon_vertices(_p(100, 100), 60, 6, offset)
    return AirframeSpec(
        name=name,
        filename=f"{name}.svg",
        struts=_opposed_struts(points),
        motors=_ring_motors(points, layout),
        motor_radius=24,
    )


def _octo(name: str, offset: float, layout) -> AirframeSpec:
    points = polygon_vertices(_p(100, 100), 70, 8, offset)
    return AirframeSpec(
        name=name,
        filename=f"{name}.svg",
        struts=_opposed_struts(points),
        motors=_ring_motors(points, layout),
        motor_radius=20,
        line_width=20,
    )


def _vtail(flat_tail: bool) -> AirframeSpec:
    return AirframeSpec(
        name="vtail_quad",
        filename="vtail_quad.svg",
        struts=tuple(_tee(40, 180, flat_tail, hub_y=50))
        + (_strut(100, 180, 140, 160), _strut(100, 180, 60, 160)),
        motors=(
            MotorSpec(_p(140, 160), "1", CCW, SE),
            MotorSpec(_p(160, 40), "2", CW, NE),
            MotorSpec(_p(60, 160), "3", CW, SW),
            MotorSpec(_p(40, 40), "4", CCW, NW),
        ),
    )


def _atail(flat_tail: bool) -> AirframeSpec:
    return AirframeSpec(
        name="atail_quad",
        filename="atail_quad.svg",
        struts=tuple(_tee(40, 140, flat_tail, hub_y=50))
        + (_strut(100, 140, 140, 160), _strut(100, 140, 60, 160)),
        motors=(
            MotorSpec(_p(60, 160), "1", CCW, SW),
            MotorSpec(_p(160, 40), "2", CCW, NE),
            MotorSpec(_p(140, 160), "3", CW, SE),
            MotorSpec(_p(40, 40), "4", CW, NW),
        ),
    )


def _y4(flat_y: bool) -> AirframeSpec:
    return AirframeSpec(
        name="y4",
        filename="y4.svg",
        under_motors=(
            MotorSpec(_p(100, 170), "3", CCW, SE, color="darkgreen", label_offset=(0, 14)),
        ),
        struts=tuple(_tee(40, 140, flat_y, hub_y=50)),
        motors=(
            MotorSpec(_p(160, 40), "2", CCW, NE),
            MotorSpec(_p(40, 40), "4", CW, NW),
            MotorSpec(_p(100, 140), "1", CW, NE, fill=TRANSLUCENT_WHITE, label_offset=(0, -10)),
        ),
        heading_y=60,
    )


def _y6(flat_y: bool) -> AirframeSpec:
    if flat_y:
        struts = (_strut(40, 50, 160, 50), _strut(100, 50, 100, 140))
    else:
        struts = (
            _strut(100, 60, 40, 50),
            _strut(100, 60, 160, 50),
            _strut(100, 60, 100, 140),
        )
    return AirframeSpec(
        name="y6",
        filename="y6.svg",
        under_motors=(
            MotorSpec(_p(100, 170), "4", CW, SW, color="darkgreen", label_offset=(0, 14)),
            MotorSpec(_p(30, 30), "6", CCW, NE, color="darkgreen", label_offset=(0, -10)),
            MotorSpec(_p(170, 30), "5", CCW, NW, color="darkgreen", label_offset=(0, -10)),
        ),
        struts=struts,
        motors=(
            MotorSpec(_p(145, 55), "2", CW, NW, fill=TRANSLUCENT_WHITE, label_offset=(0, 12)),
            MotorSpec(_p(55, 55), "3", CW, NE, fill=TRANSLUCENT_WHITE, label_offset=(0, 12)),
            MotorSpec(_p(100, 140), "1", CCW, NW, fill=TRANSLUCENT_WHITE, label_offset=(0, -10)),
        ),
        heading_y=60,
    )


def _octo_x8() -> AirframeSpec:
    return AirframeSpec(
        name="octo_x8",
        filename="octo_x8.svg",
        under_motors=(
            MotorSpec(_p(170, 170), "5", CCW, NE, color="darkgreen", label_offset=(8, 14)),
            MotorSpec(_p(170, 30), "6", CW, SE, color="darkgreen", label_offset=(8, -10)),
            MotorSpec(_p(30, 170), "7", CW, NW, color="darkgreen", label_offset=(-10, 14)),
            MotorSpec(_p(30, 30), "8", CCW, SW, color="darkgreen", label_offset=(-10, -10)),
        ),
        struts=(_strut(50, 50, 150, 150), _strut(50, 150, 150, 50)),
        motors=(
            MotorSpec(_p(150, 150), "1", CW, SW, fill=TRANSLUCENT_WHITE, label_offset=(0, -10)),
            MotorSpec(_p(150, 50), "2", CCW, NW, fill=TRANSLUCENT_WHITE, label_offset=(0, 12)),
            MotorSpec(_p(50, 150), "3", CCW, SE, fill=TRANSLUCENT_WHITE, label_offset=(0, -10)),
            MotorSpec(_p(50, 50), "4", CW, NE, fill=TRANSLUCENT_WHITE, label_offset=(0, 12)),
        ),
    )


# ═══════════════════════════════════════════════════════════════════
# Fixed wing
# ═══════════════════════════════════════════════════════════════════


def _airplane() -> AirframeSpec:
    return AirframeSpec(
        name="airplane",
        filename="airplane.svg",
        paths=(
            PathSpec(_outline(
                (85, 20), (80, 40), (20, 60), (20, 100), (70, 80),
                (80, 80), (90, 150), (50, 155), (50, 175),
                (150, 175), (150, 155), (110, 150), (120, 80), (130, 80),
                (180, 100), (180, 60), (120, 40), (115, 20),
            ), "silver", round_caps=True),
            PathSpec(_outline((20, 80), (20, 100), (70, 80), (70, 60)), "red"),
            PathSpec(_outline((180, 80), (180, 100), (130, 80), (130, 60)), "green"),
            PathSpec(_outline((50, 165), (50, 175), (150, 175), (150, 165)), "orange"),
            PathSpec(_outline((100, 140), (95, 150), (100, 175), (105, 150)), "black"),
        ),
        motors=(MotorSpec(_p(100, 15), "1/2", NOARROW, SE, label_offset=(-9, 0)),),
        servos=(
            ServoSpec(_p(30, 100), " 3", "red"),
            ServoSpec(_p(142, 100), " 4", "green"),
            ServoSpec(_p(64, 134), " 5", "black"),
            ServoSpec(_p(154, 168), " 6", "orange"),
        ),
        heading_y=50,
        motor_radius=14,
        line_width=1,
    )


def _flying_wing() -> AirframeSpec:
    return AirframeSpec(
        name="flying_wing",
        filename="flying_wing.svg",
        paths=(
            PathSpec(_outline(
                (80, 20), (20, 80), (20, 120), (70, 80), (130, 80),
                (180, 120), (180, 80), (120, 20),
            ), "silver"),
            PathSpec(_outline((20, 100), (20, 120), (70, 80), (70, 60)), "red"),
            PathSpec(_outline((180, 100), (180, 120), (130, 80), (130, 60)), "green"),
        ),
        servos=(
            ServoSpec(_p(30, 120), " 3", "red"),
            ServoSpec(_p(142, 120), " 4", "green"),
        ),
        motors=(MotorSpec(_p(100, 110), "1/2", NOARROW, SE, label_offset=(-16, 0)),),
        heading_y=30,
        line_width=1,
    )


# ═══════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════


def build_catalog(flat_tail: bool = True, flat_y: bool = False) -> Dict[str, AirframeSpec]:
    """All supported airframes keyed by name, in rendering order.

    *flat_tail* draws tri / V-tail / A-tail frames with a straight front
    arm instead of a veed one; *flat_y* does the same for Y4 / Y6.
    """
    specs = [
        _bicopter(),
        _tri(flat_tail),
        _quad_x(),
        _quad_p(),
        _hex("hex_p", 0, [
            ("5", CCW, NW), ("2", CW, NE), ("1", CCW, SE),
            ("6", CW, SW), ("3", CCW, SW), ("4", CW, NW),
        ]),
        _hex("hex_x", 30, [
            ("2", CCW, NE), ("5", CW, SE), ("1", CCW, SE),
            ("3", CW, SW), ("6", CCW, SW), ("4", CW, NW),
        ]),
        _octo("octo_flat_x", 22.5, [
            ("2", CCW, NE), ("6", CW, NE), ("3", CCW, SE), ("7", CW, SE),
            ("4", CCW, SW), ("8", CW, SW), ("1", CCW, NW), ("5", CW, NW),
        ]),
        _octo("octo_flat_p", 0, [
            ("2", CW, NE), ("6", CCW, NE), ("3", CW, SE), ("7", CCW, SE),
            ("4", CW, SW), ("8", CCW, SW), ("1", CW, NW), ("5", CCW, NW),
        ]),
        _vtail(flat_tail),
        _atail(flat_tail),
        _y4(flat_y),
        _y6(flat_y),
        _octo_x8(),
        _airplane(),
        _flying_wing(),
    ]
    return {spec.name: spec for spec in specs}


AIRFRAMES: Dict[str, AirframeSpec] = build_catalog()


def get_airframe(name: str, catalog: Optional[Dict[str, AirframeSpec]] = None) -> AirframeSpec:
    catalog = AIRFRAMES if catalog is None else catalog
    try:
        return catalog[name]
    except KeyError:
        known = ", ".join(sorted(catalog))
        raise KeyError(f"unknown airframe {name!r}; known airframes: {known}") from None
