"""Projection of ROIs drawn on flattened sphere images onto vertices."""

from .drawing import (
    CloseEvent,
    DrawingState,
    PolygonEvent,
    RestartEvent,
    RoiDrawingSession,
    draw_roi,
    polygon_to_mask,
)
from .lookup import SphereLookup, image_to_vertices, vertices_to_image
from .projection import (
    RoiMask,
    blend_roi,
    fill_holes,
    project_roi_image,
    vertex_mask_to_image,
)

__all__ = [
    "CloseEvent",
    "DrawingState",
    "PolygonEvent",
    "RestartEvent",
    "RoiDrawingSession",
    "RoiMask",
    "SphereLookup",
    "blend_roi",
    "draw_roi",
    "fill_holes",
    "image_to_vertices",
    "polygon_to_mask",
    "project_roi_image",
    "vertex_mask_to_image",
    "vertices_to_image",
]
