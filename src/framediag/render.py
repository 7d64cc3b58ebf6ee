"""SVG drawing session for a single frame diagram.

A :class:`DiagramSession` owns one matplotlib figure sized so that one
data unit is one SVG point on a fixed square canvas, with the y axis
inverted to match image coordinates.  It also owns the drawing state
(current stroke width, font size, motor radius, queued struts), which
lives only as long as the session.

Usage
-----
>>> with DiagramSession("quad_x.svg") as s:
...     s.draw_strut(Point(40, 40), Point(160, 160))
...     s.end_body()
...     s.draw_motor(Point(160, 160), "1", RotationSense.CW, Quadrant.SE)
...     s.draw_heading()

Requires matplotlib; imported lazily when a session is created.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from loguru import logger

from .config import DEFAULT_CONFIG, RenderConfig
from .geometry import place_arrow
from .io import PathLike, insert_attribution, write_svg
from .models import Circle, Point, Quadrant, RotationSense


CLOSE = "!"
"""Path marker that closes the current sub-path."""

PathItem = Union[Point, str]


def _ensure_mpl():
    """Lazy-import matplotlib; raise helpful error if missing."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return matplotlib, plt
    except ImportError as exc:
        raise RuntimeError(
            "matplotlib is required for rendering. "
            "Install with `pip install matplotlib`."
        ) from exc


class DiagramSession:
    """Drawing surface and state for one SVG diagram."""

    def __init__(self, output_path: PathLike, config: Optional[RenderConfig] = None) -> None:
        self.output_path = Path(output_path)
        self.config = config or DEFAULT_CONFIG
        self.line_width = self.config.line_width
        self.radius = self.config.motor_radius
        self.stroke_width = self.line_width
        self.font_size = self.config.motor_radius
        self._struts: List[Tuple[Point, Point]] = []
        self._zorder = 0
        self._closed = False
        self._written = False

        self._mpl, self._plt = _ensure_mpl()
        size = self.config.canvas_size
        self.figure = self._plt.figure(figsize=(size / 72.0, size / 72.0), dpi=72)
        self.figure.patch.set_visible(False)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_xlim(0, size)
        self.ax.set_ylim(size, 0)
        self.ax.axis("off")

    def __enter__(self) -> "DiagramSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.discard()

    def _next_z(self) -> int:
        self._zorder += 1
        return self._zorder

    # ── Primitives ──────────────────────────────────────────────────

    def draw_path(
        self,
        points: Sequence[PathItem],
        fill: Optional[str] = None,
        round_caps: bool = False,
    ) -> None:
        """Fill an arbitrary path; :data:`CLOSE` ends each sub-path."""
        from matplotlib.patches import PathPatch
        from matplotlib.path import Path as MplPath

        self.stroke_width = self.line_width
        verts: List[Tuple[float, float]] = []
        codes: List[int] = []
        first = True
        for item in points:
            if item == CLOSE:
                verts.append((0.0, 0.0))
                codes.append(MplPath.CLOSEPOLY)
                first = True
            elif first:
                verts.append(item.as_tuple())
                codes.append(MplPath.MOVETO)
                first = False
            else:
                verts.append(item.as_tuple())
                codes.append(MplPath.LINETO)
        if not verts:
            return

        patch = PathPatch(
            MplPath(verts, codes),
            facecolor=fill or self.config.body_color,
            edgecolor="none",
            linewidth=0,
            capstyle="round" if round_caps else "butt",
            zorder=self._next_z(),
        )
        self.ax.add_patch(patch)

    def draw_strut(self, start: Point, end: Point) -> None:
        """Queue a body strut; struts are stroked together by :meth:`end_body`."""
        self.stroke_width = self.line_width
        self._struts.append((start, end))

    def end_body(self) -> None:
        """Stroke queued struts with round caps and reset the queue."""
        from matplotlib.collections import LineCollection

        if not self._struts:
            return
        segments = [[a.as_tuple(), b.as_tuple()] for a, b in self._struts]
        self.ax.add_collection(LineCollection(
            segments,
            colors=self.config.body_color,
            linewidths=self.stroke_width,
            capstyle="round",
            joinstyle="round",
            zorder=self._next_z(),
        ))
        self._struts = []

    def draw_servo(self, origin: Point, label: str, color: str = "black") -> None:
        """Servo marker: an outlined square with its label inside."""
        from matplotlib.patches import Rectangle

        size = self.config.servo_size
        self.ax.add_patch(Rectangle(
            origin.as_tuple(),
            size,
            size,
            fill=False,
            edgecolor=color,
            linewidth=self.stroke_width,
            zorder=self._next_z(),
        ))
        self.font_size = self.config.servo_font_size
        self._text(origin.offset(4, 20), label)

    def draw_heading(self, y: float = 80) -> None:
        """Red arrow pointing up the canvas, shaft starting at *y*."""
        from matplotlib.lines import Line2D
        from matplotlib.patches import Polygon

        cx = self.config.canvas_size / 2
        color = self.config.heading_color
        self.stroke_width = 12
        self.ax.add_line(Line2D(
            [cx, cx],
            [y, y + 40],
            color=color,
            linewidth=self.stroke_width,
            solid_joinstyle="bevel",
            solid_capstyle="butt",
            zorder=self._next_z(),
        ))
        self.stroke_width = 1
        self.ax.add_patch(Polygon(
            [(cx, y - 5), (cx - 15, y + 10), (cx + 15, y + 10)],
            closed=True,
            facecolor=color,
            edgecolor="none",
            zorder=self._next_z(),
        ))

    def draw_motor(
        self,
        center: Point,
        label: str,
        sense: RotationSense = RotationSense.CCW,
        quadrant: Quadrant = Quadrant.NE,
        fill: Optional[str] = None,
        color: Optional[str] = None,
        label_offset: Tuple[float, float] = (0, 0),
    ) -> None:
        """Motor circle with optional rotation arrow and a centred label.

        *fill* paints the disc before the outline (e.g. translucent white
        over the body).  *label_offset* is ``(dx, dy)``.
        """
        from matplotlib.collections import LineCollection
        from matplotlib.patches import Circle as MplCircle

        col = color or self.config.motor_color
        r = self.radius
        self.font_size = r
        self.stroke_width = self.config.motor_line_width

        if fill:
            self.ax.add_patch(MplCircle(
                center.as_tuple(), r,
                facecolor=fill, edgecolor="none", zorder=self._next_z(),
            ))

        self.ax.add_patch(MplCircle(
            center.as_tuple(), r,
            fill=False, edgecolor=col, linewidth=self.stroke_width,
            joinstyle="miter", zorder=self._next_z(),
        ))

        arrow = place_arrow(Circle(center, r), sense, quadrant, r * self.config.arrow_ratio)
        if arrow is not None:
            self.ax.add_collection(LineCollection(
                [[a.as_tuple(), b.as_tuple()] for a, b in arrow.segments()],
                colors=col,
                linewidths=self.stroke_width,
                joinstyle="miter",
                zorder=self._next_z(),
            ))

        dx, dy = label_offset
        # Whole-unit quarter radius, so r=14 offsets the label by 3.
        quarter = r // 4
        self._text(center.offset(-quarter + dx, quarter + dy), label)

    def _text(self, at: Point, label: str) -> None:
        self.ax.text(
            at.x, at.y, label,
            fontsize=self.font_size,
            color="black",
            ha="left",
            va="baseline",
            zorder=self._next_z(),
        )

    # ── Output ──────────────────────────────────────────────────────

    def to_svg(self) -> str:
        """Serialise the figure to SVG text, attribution included."""
        buf = io.StringIO()
        with self._mpl.rc_context({"svg.fonttype": "none", "svg.hashsalt": "framediag"}):
            self.figure.savefig(buf, format="svg", metadata={"Date": None}, transparent=True)
        return insert_attribution(buf.getvalue(), self.config.attribution)

    def close(self) -> Path:
        """Write the diagram to :attr:`output_path` and release the figure.

        Closing again after a successful write is a no-op; closing a
        discarded session raises ``RuntimeError``.
        """
        if self._written:
            return self.output_path
        if self._closed:
            raise RuntimeError(f"diagram {self.output_path} was discarded before writing")
        try:
            self.end_body()
            write_svg(self.to_svg(), self.output_path)
            self._written = True
        finally:
            self.discard()
        logger.debug("closed diagram {}", self.output_path)
        return self.output_path

    def discard(self) -> None:
        """Release the figure without writing anything."""
        if not self._closed:
            self._plt.close(self.figure)
            self._closed = True
