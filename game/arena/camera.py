"""
Viewport framing
"""

from __future__ import annotations

from dataclasses import dataclass

from .utils import clamp


@dataclass
class Camera:
    """World-space offset of the viewport's top-left corner"""
    x: float = 0.0
    y: float = 0.0


def _axis_origin(p: float, viewport: float, map_size: float) -> float:
    # A map no larger than the viewport is centred, whatever the player does
    if map_size <= viewport:
        return (map_size - viewport) / 2
    return clamp(p - viewport / 2, 0.0, map_size - viewport)


def compute_camera(
    px: float,
    py: float,
    viewport_w: float,
    viewport_h: float,
    map_w: float,
    map_h: float,
) -> Camera:
    """Centre the viewport on (px, py), kept inside the map on each axis"""
    return Camera(
        x=_axis_origin(px, viewport_w, map_w),
        y=_axis_origin(py, viewport_h, map_h),
    )
