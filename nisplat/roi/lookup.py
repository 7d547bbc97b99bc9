"""Correspondence between sphere projection images and surface vertices."""

import numpy as np

from nisplat._constants import HEMISPHERES
from nisplat._utils.exceptions import LookupMismatchError
from nisplat._utils.logger import compose_err_msg
from nisplat._utils.param_validation import check_params


class SphereLookup:
    """Pixel/vertex correspondence of one hemisphere's flattened image.

    Pixels are indexed in C order, that is ``row * n_columns + column``.

    Parameters
    ----------
    hemi : {"lh", "rh"}
        Hemisphere shown in the image.

    image_shape : 2-tuple of :obj:`int`
        Number of rows and columns of the image.

    vertex_to_pixel : array-like of shape (n_vertices,)
        Index of the pixel onto which each vertex projects.

    pixel_to_vertex : array-like of shape (n_rows * n_columns,)
        Index of the vertex shown at each pixel.

    extrapolation_mask : array-like of shape (n_rows * n_columns,) or None, \
                         default=None
        True for pixels outside the projected sphere. They are shown with
        a fill value instead of the value of their nearest vertex.

    n_vertices : :obj:`int` or None, default=None
        Number of vertices of the hemisphere. Defaults to the length of
        ``vertex_to_pixel``.

    """

    def __init__(
        self,
        hemi,
        image_shape,
        vertex_to_pixel,
        pixel_to_vertex,
        extrapolation_mask=None,
        n_vertices=None,
    ):
        check_params(locals())
        self.hemi = hemi
        self.image_shape = tuple(int(s) for s in image_shape)
        if len(self.image_shape) != 2:
            raise LookupMismatchError(
                f"'image_shape' must have 2 elements, got {image_shape}.",
                hemi=hemi,
            )
        self.vertex_to_pixel = np.asarray(vertex_to_pixel, dtype=np.intp)
        self.pixel_to_vertex = np.asarray(pixel_to_vertex, dtype=np.intp)
        n_pixels = self.n_pixels
        if extrapolation_mask is None:
            extrapolation_mask = np.zeros(n_pixels, dtype=bool)
        self.extrapolation_mask = np.asarray(
            extrapolation_mask, dtype=bool
        ).ravel()
        self.n_vertices = (
            len(self.vertex_to_pixel)
            if n_vertices is None
            else int(n_vertices)
        )
        self._check()

    @property
    def n_pixels(self):
        return self.image_shape[0] * self.image_shape[1]

    def _check(self):
        if self.vertex_to_pixel.shape != (self.n_vertices,):
            raise LookupMismatchError(
                f"'vertex_to_pixel' has shape {self.vertex_to_pixel.shape} "
                f"but the hemisphere has {self.n_vertices} vertices.",
                hemi=self.hemi,
            )
        for name, values in (
            ("pixel_to_vertex", self.pixel_to_vertex),
            ("extrapolation_mask", self.extrapolation_mask),
        ):
            if values.shape != (self.n_pixels,):
                raise LookupMismatchError(
                    f"'{name}' has shape {values.shape} "
                    f"but the image has {self.n_pixels} pixels.",
                    hemi=self.hemi,
                )
        if self.n_vertices and (
            self.vertex_to_pixel.min() < 0
            or self.vertex_to_pixel.max() >= self.n_pixels
        ):
            raise LookupMismatchError(
                "'vertex_to_pixel' refers to pixels outside the image.",
                hemi=self.hemi,
            )
        shown = self.pixel_to_vertex[~self.extrapolation_mask]
        if shown.size and (
            shown.min() < 0 or shown.max() >= self.n_vertices
        ):
            raise LookupMismatchError(
                "'pixel_to_vertex' refers to vertices that do not exist.",
                hemi=self.hemi,
            )

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(hemi={self.hemi!r}, "
            f"image_shape={self.image_shape}, n_vertices={self.n_vertices})"
        )


def check_lookups(lookups):
    """Return lookups as a list, checking they can be shown side by side.

    Parameters
    ----------
    lookups : :class:`SphereLookup` or sequence of :class:`SphereLookup`

    Returns
    -------
    lookups : :obj:`list` of :class:`SphereLookup`

    """
    if isinstance(lookups, SphereLookup):
        lookups = [lookups]
    lookups = list(lookups)
    if len(lookups) not in (1, 2):
        raise LookupMismatchError(
            f"Expected one or two lookups, got {len(lookups)}."
        )
    for lookup in lookups:
        if not isinstance(lookup, SphereLookup):
            raise TypeError(
                "'lookups' must contain SphereLookup objects. "
                f"Got: '{lookup.__class__.__name__}'"
            )
    if len(lookups) == 2:
        if {lookup.hemi for lookup in lookups} != set(HEMISPHERES):
            raise LookupMismatchError(
                "Two lookups must cover both hemispheres, "
                f"got {[lookup.hemi for lookup in lookups]}."
            )
        if lookups[0].image_shape[0] != lookups[1].image_shape[0]:
            raise LookupMismatchError(
                compose_err_msg(
                    "Images shown side by side must have the same height.",
                    **{
                        f"{lookup.hemi}_image_shape": str(lookup.image_shape)
                        for lookup in lookups
                    },
                )
            )
    return lookups


def image_to_vertices(image, lookup):
    """Sample an image at the pixel of each vertex.

    Parameters
    ----------
    image : array-like of shape lookup.image_shape

    lookup : :class:`SphereLookup`

    Returns
    -------
    values : :obj:`numpy.ndarray` of shape (lookup.n_vertices,)

    """
    image = np.asarray(image)
    if image.shape[:2] != lookup.image_shape:
        raise LookupMismatchError(
            compose_err_msg(
                "Image does not match the lookup.",
                image_shape=str(image.shape),
                lookup_image_shape=str(lookup.image_shape),
            ),
            hemi=lookup.hemi,
        )
    flat = image.reshape((lookup.n_pixels, *image.shape[2:]))
    return flat[lookup.vertex_to_pixel]


def vertices_to_image(values, lookup, fill_value=0):
    """Render vertex values as a flattened sphere image.

    Parameters
    ----------
    values : array-like of shape (lookup.n_vertices,)

    lookup : :class:`SphereLookup`

    fill_value : scalar, default=0
        Value of pixels outside the projected sphere.

    Returns
    -------
    image : :obj:`numpy.ndarray` of shape lookup.image_shape

    """
    check_params(locals())
    values = np.asarray(values)
    if values.shape != (lookup.n_vertices,):
        raise LookupMismatchError(
            f"Got {values.shape[0] if values.ndim else 0} vertex values "
            f"for a hemisphere with {lookup.n_vertices} vertices.",
            hemi=lookup.hemi,
        )
    dtype = np.result_type(values.dtype, np.min_scalar_type(fill_value))
    image = np.full(lookup.n_pixels, fill_value, dtype=dtype)
    shown = ~lookup.extrapolation_mask
    image[shown] = values[lookup.pixel_to_vertex[shown]]
    return image.reshape(lookup.image_shape)
