"""Projection of ROI masks between sphere images and surface vertices."""

from dataclasses import dataclass

import numpy as np
from scipy.ndimage import binary_fill_holes

from nisplat._constants import ROI_BACKGROUND_WEIGHT
from nisplat._utils import compose_err_msg, fill_doc
from nisplat._utils.exceptions import LookupMismatchError
from nisplat._utils.logger import log
from nisplat.roi.lookup import (
    check_lookups,
    image_to_vertices,
    vertices_to_image,
)


@dataclass
class RoiMask:
    """ROI projected onto surface vertices.

    Attributes
    ----------
    vertex_mask : :obj:`numpy.ndarray` of bool
        One entry per vertex of the lookups, left hemisphere first.

    roi_image : :obj:`numpy.ndarray`
        Binary image of the ROI as seen through the vertices, with the
        shape of the composite image.

    hemi : {"lh", "rh"}
        Hemisphere on which the ROI was drawn.
    """

    vertex_mask: np.ndarray
    roi_image: np.ndarray
    hemi: str


@fill_doc
def fill_holes(mask, verbose=1):
    """Fill the topological holes of a binary mask.

    Parameters
    ----------
    mask : array-like of shape (n_rows, n_columns)

    %(verbose)s

    Returns
    -------
    filled : :obj:`numpy.ndarray` of bool

    """
    mask = np.asarray(mask, dtype=bool)
    filled = binary_fill_holes(mask)
    if not np.array_equal(filled, mask):
        log(
            "There were holes in the ROI mask; they have been filled.",
            verbose=verbose,
        )
    return filled


def _composite_shape(lookups):
    return (
        lookups[0].image_shape[0],
        sum(lookup.image_shape[1] for lookup in lookups),
    )


def _column_slices(lookups):
    slices, start = [], 0
    for lookup in lookups:
        stop = start + lookup.image_shape[1]
        slices.append(slice(start, stop))
        start = stop
    return slices


def _vertex_offsets(lookups):
    """Position of each lookup's vertices in the concatenated vertex mask.

    Left hemisphere vertices come first whatever the display order.
    """
    ordered = sorted(lookups, key=lambda lookup: lookup.hemi)
    offsets, start = {}, 0
    for lookup in ordered:
        offsets[lookup.hemi] = start
        start += lookup.n_vertices
    return offsets, start


@fill_doc
def project_roi_image(roi_image, lookups, verbose=1):
    """Project a binary ROI image onto surface vertices.

    The ROI is the set of pixels equal to 1. Its holes are filled first.
    If any ROI pixel lies right of the first image, the ROI is taken to
    be drawn on the second hemisphere, otherwise on the first; only the
    part of the image showing that hemisphere is used.

    Parameters
    ----------
    roi_image : array-like of shape (n_rows, n_columns)
        ROI drawn over the images of the hemispheres of ``lookups``,
        placed side by side.

    %(lookups)s

    %(verbose)s

    Returns
    -------
    roi : :class:`RoiMask`

    """
    lookups = check_lookups(lookups)
    roi_image = np.asarray(roi_image)
    expected_shape = _composite_shape(lookups)
    if roi_image.shape != expected_shape:
        raise LookupMismatchError(
            compose_err_msg(
                "ROI image does not match the lookup images.",
                roi_image_shape=str(roi_image.shape),
                expected_shape=str(expected_shape),
            )
        )
    mask = fill_holes(roi_image == 1, verbose=verbose)

    slices = _column_slices(lookups)
    _, columns = np.nonzero(mask)
    index = 1 if np.any(columns >= slices[0].stop) else 0
    lookup = lookups[index]

    hemi_mask = image_to_vertices(mask[:, slices[index]], lookup) > 0
    hemi_image = vertices_to_image(hemi_mask, lookup, fill_value=False)

    roi_display = np.zeros(expected_shape, dtype=float)
    roi_display[:, slices[index]] = hemi_image

    offsets, n_vertices = _vertex_offsets(lookups)
    vertex_mask = np.zeros(n_vertices, dtype=bool)
    start = offsets[lookup.hemi]
    vertex_mask[start : start + lookup.n_vertices] = hemi_mask
    log(
        f"ROI drawn on {lookup.hemi} covers "
        f"{int(hemi_mask.sum())} of {lookup.n_vertices} vertices.",
        verbose=verbose,
        msg_level=2,
    )
    return RoiMask(
        vertex_mask=vertex_mask, roi_image=roi_display, hemi=lookup.hemi
    )


@fill_doc
def vertex_mask_to_image(vertex_mask, lookups, fill_value=0):
    """Render a vertex mask as the composite image of all hemispheres.

    Parameters
    ----------
    vertex_mask : array-like of shape (n_vertices,)
        One entry per vertex of the lookups, left hemisphere first.

    %(lookups)s

    fill_value : scalar, default=0
        Value of pixels outside the projected spheres.

    Returns
    -------
    image : :obj:`numpy.ndarray` of shape (n_rows, n_columns)

    """
    lookups = check_lookups(lookups)
    vertex_mask = np.asarray(vertex_mask)
    offsets, n_vertices = _vertex_offsets(lookups)
    if vertex_mask.shape != (n_vertices,):
        raise LookupMismatchError(
            f"Vertex mask of shape {vertex_mask.shape} does not match "
            f"the {n_vertices} vertices of the lookups."
        )
    image = np.full(_composite_shape(lookups), fill_value, dtype=float)
    for lookup, columns in zip(lookups, _column_slices(lookups)):
        start = offsets[lookup.hemi]
        values = vertex_mask[start : start + lookup.n_vertices]
        image[:, columns] = vertices_to_image(
            values, lookup, fill_value=fill_value
        )
    return image


def blend_roi(background, roi_image, background_weight=ROI_BACKGROUND_WEIGHT):
    """Darken the parts of an image that are outside an ROI.

    Parameters
    ----------
    background : array-like of shape (n_rows, n_columns) or \
                 (n_rows, n_columns, n_channels)
        Image on which the ROI was drawn.

    roi_image : array-like of shape (n_rows, n_columns)
        Binary ROI image.

    background_weight : :obj:`float`, default=0.25
        Intensity factor kept outside the ROI.

    Returns
    -------
    blended : :obj:`numpy.ndarray` of float, same shape as ``background``

    """
    background = np.asarray(background, dtype=float)
    roi_image = np.asarray(roi_image, dtype=float)
    if background.shape[:2] != roi_image.shape:
        raise LookupMismatchError(
            compose_err_msg(
                "Background does not match the ROI image.",
                background_shape=str(background.shape),
                roi_image_shape=str(roi_image.shape),
            )
        )
    factor = (1 - background_weight) * roi_image + background_weight
    if background.ndim == 3:
        factor = factor[..., np.newaxis]
    return background * factor
