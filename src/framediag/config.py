"""Rendering configuration and colour constants."""

from __future__ import annotations

from dataclasses import dataclass


BODY_GREY = "#bababa"
CIRCLE_GREEN = "#4CB944"
ARROW_RED = "#fa0700"
TRANSLUCENT_WHITE = "#ffffff88"

ATTRIBUTION = (
    "<!-- Public domain (CC-BY-SA if you or your laws insist), "
    "generated by framediag -->"
)


@dataclass
class RenderConfig:
    """All tuneable parameters for diagram rendering.

    Attributes
    ----------
    canvas_size : float
        Width and height of the square canvas, in device units (SVG pt).
    body_color : str
        Fill/stroke colour for struts and default body paths.
    motor_color : str
        Default outline and arrow colour for motor circles.
    heading_color : str
        Colour of the heading arrow.
    motor_radius : float
        Default motor circle radius; airframes may override it.
    line_width : float
        Default strut width; airframes may override it.
    motor_line_width : float
        Outline width for motor circles and their arrows.
    servo_size : float
        Side length of the servo marker square.
    servo_font_size : float
        Label size inside servo markers.
    arrow_ratio : float
        Rotation arrow arm length as a fraction of the motor radius.
    attribution : str
        Comment line injected after the first line of every SVG.
    """

    canvas_size: float = 200.0
    body_color: str = BODY_GREY
    motor_color: str = CIRCLE_GREEN
    heading_color: str = ARROW_RED
    motor_radius: float = 28.0
    line_width: float = 28.0
    motor_line_width: float = 3.0
    servo_size: float = 28.0
    servo_font_size: float = 16.0
    arrow_ratio: float = 0.6
    attribution: str = ATTRIBUTION


DEFAULT_CONFIG = RenderConfig()
