"""Conversion of surface vertex coordinates into grid voxel indices."""

import numpy as np

from nisplat._constants import FS_ORIGIN, FS_RESOLUTION, GRID_RESOLUTION


def _check_coordinates(coordinates, name="coordinates"):
    coordinates = np.asarray(coordinates, dtype=float)
    if coordinates.ndim == 1 and coordinates.size == 0:
        coordinates = coordinates.reshape((0, 3))
    if coordinates.ndim != 2 or coordinates.shape[1] != 3:
        raise ValueError(
            f"'{name}' must be an array of shape (n_points, 3). "
            f"Got shape {coordinates.shape}."
        )
    return coordinates


def fs_to_grid(
    coordinates,
    fs_resolution=FS_RESOLUTION,
    grid_resolution=GRID_RESOLUTION,
    origin=FS_ORIGIN,
):
    """Convert FreeSurfer surface coordinates into grid voxel indices.

    The coordinates are first shifted by ``origin`` so that they become
    1-based voxel indices of the conformed FreeSurfer volume, which has
    ``fs_resolution`` voxels per side. They are then rescaled to a grid
    covering the same field of view with ``grid_resolution`` voxels per
    side, keeping voxel centres aligned.

    Parameters
    ----------
    coordinates : array-like of shape (n_points, 3)
        Vertex coordinates in FreeSurfer surface RAS space (mm).

    fs_resolution : :obj:`int`, default=256
        Number of voxels per side of the conformed FreeSurfer volume.

    grid_resolution : :obj:`int`, default=320
        Number of voxels per side of the target grid.

    origin : 3-tuple of :obj:`float`, default=(128, 129, 128)
        Translation from surface RAS to conformed voxel indices.

    Returns
    -------
    grid_coordinates : :obj:`numpy.ndarray` of shape (n_points, 3)
        1-based voxel indices in the target grid, as floats.

    """
    coordinates = _check_coordinates(coordinates)
    origin = np.asarray(origin, dtype=float)
    if origin.shape != (3,):
        raise ValueError(
            f"'origin' must have 3 elements. Got shape {origin.shape}."
        )
    if fs_resolution <= 0 or grid_resolution <= 0:
        raise ValueError("Resolutions must be positive.")
    shifted = coordinates + origin
    return (shifted - 0.5) / fs_resolution * grid_resolution + 0.5


def stack_layer_coordinates(layers):
    """Concatenate the vertices of several layer surfaces.

    Parameters
    ----------
    layers : sequence of sequences of array-like of shape (n_vertices, 3)
        ``layers[i][h]`` holds the vertex coordinates of layer ``i`` in
        hemisphere ``h``. Hemispheres come in the same order in every
        layer (left then right).

    Returns
    -------
    coordinates : :obj:`numpy.ndarray` of shape (n_layers * n_vertices, 3)
        Layer-major ordering: all vertices of the first layer (left
        hemisphere first), then all vertices of the second layer, etc.
        This is the ordering expected by :func:`stack_layer_data`.

    """
    layers = list(layers)
    if not layers:
        return np.zeros((0, 3))
    n_hemis = len(layers[0])
    stacked = []
    for i, layer in enumerate(layers):
        layer = list(layer)
        if len(layer) != n_hemis:
            raise ValueError(
                f"Layer {i} has {len(layer)} hemispheres, "
                f"expected {n_hemis}."
            )
        stacked.extend(
            _check_coordinates(hemi, name=f"layers[{i}]") for hemi in layer
        )
    sizes = [
        sum(len(hemi) for hemi in stacked[i : i + n_hemis])
        for i in range(0, len(stacked), n_hemis)
    ]
    if len(set(sizes)) > 1:
        raise ValueError(
            "All layers must have the same number of vertices. "
            f"Got {sizes}."
        )
    return np.vstack(stacked)


def stack_layer_data(data):
    """Flatten layer data into one row of vertex values per dataset.

    Parameters
    ----------
    data : array-like of shape (n_datasets, n_layers, n_vertices) \
           or (n_layers, n_vertices)
        Values of each dataset on each layer. ``n_vertices`` counts the
        vertices of both hemispheres, left first.

    Returns
    -------
    data : :obj:`numpy.ndarray` of shape (n_datasets, n_layers * n_vertices)
        Values ordered as the coordinates returned by
        :func:`stack_layer_coordinates`.

    """
    data = np.asarray(data)
    if data.ndim == 2:
        data = data[np.newaxis]
    if data.ndim != 3:
        raise ValueError(
            "Layer data must have shape (n_datasets, n_layers, n_vertices). "
            f"Got shape {data.shape}."
        )
    return data.reshape((data.shape[0], -1))


def grid_affine(
    fs_resolution=FS_RESOLUTION,
    grid_resolution=GRID_RESOLUTION,
    origin=FS_ORIGIN,
):
    """Return the affine from 0-based grid array indices to surface RAS.

    This is the inverse of :func:`fs_to_grid`, shifted by one voxel
    because arrays are indexed from 0. It can be used as the affine of
    the images built from splatted volumes.

    Returns
    -------
    affine : :obj:`numpy.ndarray` of shape (4, 4)

    """
    origin = np.asarray(origin, dtype=float)
    voxel_size = fs_resolution / grid_resolution
    affine = np.eye(4)
    affine[:3, :3] *= voxel_size
    affine[:3, 3] = 0.5 * voxel_size + 0.5 - origin
    return affine
