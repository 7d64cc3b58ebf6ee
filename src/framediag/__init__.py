"""framediag — motor-layout diagrams for multirotor and fixed-wing frames.

Public API is organised into layers:

- **Core** — models and geometry (polygon vertices, rotation arrows)
- **Rendering** — SVG drawing session (requires matplotlib)
- **Catalog** — declarative airframe recipes
- **Building** — single and batch diagram builds
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import ArrowGeometry, ArrowSigns, Circle, Point, Quadrant, RotationSense
from .geometry import (
    ARROW_SIGNS,
    arrow_anchor,
    arrow_signs,
    distance,
    place_arrow,
    polar_point,
    polygon_vertices,
    rotate_point,
)

# ── Configuration & I/O ─────────────────────────────────────────────
from .config import DEFAULT_CONFIG, RenderConfig
from .io import WriteError, insert_attribution, write_svg

# ── Rendering (requires matplotlib) ────────────────────────────────
from .render import CLOSE, DiagramSession

# ── Catalog ─────────────────────────────────────────────────────────
from .catalog import (
    AIRFRAMES,
    AirframeSpec,
    MotorSpec,
    PathSpec,
    ServoSpec,
    build_catalog,
    get_airframe,
)

# ── Building ────────────────────────────────────────────────────────
from .build import BatchResult, render_airframe, render_catalog

__all__ = [
    # Core
    "ArrowGeometry",
    "ArrowSigns",
    "Circle",
    "Point",
    "Quadrant",
    "RotationSense",
    "ARROW_SIGNS",
    "arrow_anchor",
    "arrow_signs",
    "distance",
    "place_arrow",
    "polar_point",
    "polygon_vertices",
    "rotate_point",
    # Configuration & I/O
    "DEFAULT_CONFIG",
    "RenderConfig",
    "WriteError",
    "insert_attribution",
    "write_svg",
    # Rendering
    "CLOSE",
    "DiagramSession",
    # Catalog
    "AIRFRAMES",
    "AirframeSpec",
    "MotorSpec",
    "PathSpec",
    "ServoSpec",
    "build_catalog",
    "get_airframe",
    # Building
    "BatchResult",
    "render_airframe",
    "render_catalog",
]
