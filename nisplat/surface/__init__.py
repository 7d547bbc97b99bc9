"""Functions and classes to map surface data onto voxel grids."""

from .coordinates import (
    fs_to_grid,
    grid_affine,
    stack_layer_coordinates,
    stack_layer_data,
)
from .splatter import SurfaceSplatter
from .splatting import aggregate, splat_operator, surface_to_volume

__all__ = [
    "SurfaceSplatter",
    "aggregate",
    "fs_to_grid",
    "grid_affine",
    "splat_operator",
    "stack_layer_coordinates",
    "stack_layer_data",
    "surface_to_volume",
]
