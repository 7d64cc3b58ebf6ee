"""Diagram builds — turn catalog entries into SVG files.

:func:`render_airframe` draws one :class:`~catalog.AirframeSpec` in a
fresh :class:`~render.DiagramSession`; :func:`render_catalog` does that
for many airframes, keeping each render independent so one failed write
does not stop the rest.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from loguru import logger

from .catalog import AIRFRAMES, AirframeSpec, get_airframe
from .config import DEFAULT_CONFIG, RenderConfig
from .io import PathLike, WriteError
from .render import DiagramSession


@dataclass
class BatchResult:
    """Outcome of :func:`render_catalog`.

    Attributes
    ----------
    written : list of Path
        Diagrams written successfully, in rendering order.
    failed : dict[str, WriteError]
        Mapping of airframe name → the error that stopped it.
    """

    written: List[Path] = field(default_factory=list)
    failed: Dict[str, WriteError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def render_airframe(
    spec: AirframeSpec,
    output_path: PathLike,
    config: Optional[RenderConfig] = None,
) -> Path:
    """Draw *spec* and write it to *output_path*.

    Drawing order: body paths, under-motors, struts, motors, servos,
    heading arrow.
    """
    config = config or DEFAULT_CONFIG
    if spec.motor_radius is not None:
        config = replace(config, motor_radius=spec.motor_radius)
    if spec.line_width is not None:
        config = replace(config, line_width=spec.line_width)

    with DiagramSession(output_path, config) as session:
        for path in spec.paths:
            session.draw_path(path.points, path.fill, path.round_caps)
        for motor in spec.under_motors:
            _draw_motor(session, motor)
        for start, end in spec.struts:
            session.draw_strut(start, end)
        session.end_body()
        for motor in spec.motors:
            _draw_motor(session, motor)
        for servo in spec.servos:
            session.draw_servo(servo.origin, servo.label, servo.color)
        session.draw_heading(spec.heading_y)
    return session.output_path


def _draw_motor(session: DiagramSession, motor) -> None:
    session.draw_motor(
        motor.position,
        motor.label,
        motor.sense,
        motor.quadrant,
        fill=motor.fill,
        color=motor.color,
        label_offset=motor.label_offset,
    )


def render_catalog(
    output_dir: PathLike,
    names: Optional[Iterable[str]] = None,
    catalog: Optional[Dict[str, AirframeSpec]] = None,
    config: Optional[RenderConfig] = None,
) -> BatchResult:
    """Render airframes from *catalog* into *output_dir*.

    *names* selects airframes (all when ``None``); unknown names raise
    ``KeyError`` before anything is drawn.  Write failures are logged and
    collected in :attr:`BatchResult.failed`.
    """
    catalog = AIRFRAMES if catalog is None else catalog
    selected = list(catalog) if names is None else list(names)
    specs = [get_airframe(name, catalog) for name in selected]

    output_dir = Path(output_dir)
    result = BatchResult()
    for spec in specs:
        try:
            path = render_airframe(spec, output_dir / spec.filename, config)
        except WriteError as exc:
            logger.error("failed to render {}: {}", spec.name, exc)
            result.failed[spec.name] = exc
            continue
        logger.info("rendered {} -> {}", spec.name, path)
        result.written.append(path)
    return result
