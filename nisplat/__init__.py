"""
Surface-to-volume splatting for laminar cortical data.
------------------------------------------------------

Documentation is available in the docstrings.

Contents
--------

nisplat maps data sampled on the vertices of cortical layer surfaces
onto a regular voxel grid, and projects regions of interest drawn on
flattened sphere images back onto surface vertices.

Submodules
---------

image                   --- Export of splatted volumes as Nifti images
roi                     --- Projection of drawn ROI masks onto vertices
                            and the interactive drawing state machine
surface                 --- Splatting operator, voxel aggregation
                            and coordinate conversion
"""

from .version import __version__

__all__ = ["__version__", "image", "roi", "surface"]
