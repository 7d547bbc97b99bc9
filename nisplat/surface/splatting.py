"""Splat vertex data onto a regular voxel grid.

Each point spreads over the 8 voxels of the unit cube enclosing it with
a linear "tent" kernel, 2 voxels wide along each axis. Summing the
kernels of all points gives, for every voxel, a weighted average of the
nearby point values, or a weighted vote among point labels.
"""

import itertools
import warnings

import numpy as np
from scipy import sparse

from nisplat._constants import GRID_RESOLUTION
from nisplat._utils import fill_doc
from nisplat._utils.logger import find_stack_level, log
from nisplat._utils.param_validation import (
    check_empty_value,
    check_grid_side,
    check_params,
    check_special_mode,
)
from nisplat.exceptions import EmptyGridWarning
from nisplat.surface.coordinates import _check_coordinates

# The 8 corners of the unit cube enclosing a point: +1 rounds up along
# that axis, -1 rounds down.
_CORNER_SIGNS = tuple(itertools.product((-1, 1), repeat=3))


def _corner_indices(coordinates, signs):
    """Round coordinates towards one corner of their enclosing cube.

    Returns
    -------
    rounded : :obj:`numpy.ndarray` of shape (n_points, 3), dtype int
        1-based voxel indices of the corner.

    weights : :obj:`numpy.ndarray` of shape (n_points,)
        Sum over axes of ``1 - |rounded - coordinate|``.

    """
    rounded = np.empty(coordinates.shape, dtype=np.int64)
    weights = np.zeros(len(coordinates))
    for axis, sign in enumerate(signs):
        values = coordinates[:, axis]
        if sign == 1:
            axis_rounded = np.ceil(values)
            residual = axis_rounded - values
        else:
            axis_rounded = np.floor(values)
            residual = values - axis_rounded
        rounded[:, axis] = axis_rounded
        weights += 1 - residual
    return rounded, weights


@fill_doc
def splat_operator(coordinates, grid_side=GRID_RESOLUTION, verbose=0):
    """Build the sparse matrix that splats point values onto a grid.

    Parameters
    ----------
    %(coordinates)s

    %(grid_side)s

    %(verbose0)s

    Returns
    -------
    operator : :obj:`scipy.sparse.csr_matrix` of shape \
               (n_points, grid_side ** 3)
        Row ``i`` holds the weights given by point ``i`` to the voxels
        around it, columns index voxels in C order. Each point touches at
        most 8 voxels. The weight of one corner is the sum over the three
        axes of ``1 - distance to the corner along that axis``, so it lies
        in (0, 3]. Corners that coincide (points with integer
        coordinates) add up. Corners outside ``[1, grid_side]`` along any
        axis are dropped.

    See Also
    --------
    nisplat.surface.aggregate
        Apply the operator to vertex data.

    """
    check_params(locals())
    grid_side = check_grid_side(grid_side)
    coordinates = _check_coordinates(coordinates)
    if not np.all(np.isfinite(coordinates)):
        raise ValueError("'coordinates' must only contain finite values.")

    n_points = len(coordinates)
    grid_shape = (grid_side,) * 3
    point_indices = np.arange(n_points)

    rows, columns, weights = [], [], []
    for signs in _CORNER_SIGNS:
        rounded, corner_weights = _corner_indices(coordinates, signs)
        inside = np.all((rounded >= 1) & (rounded <= grid_side), axis=1)
        voxel_indices = np.ravel_multi_index(
            tuple(rounded[inside].T - 1), grid_shape
        )
        rows.append(point_indices[inside])
        columns.append(voxel_indices)
        weights.append(corner_weights[inside])

    rows = np.concatenate(rows)
    columns = np.concatenate(columns)
    weights = np.concatenate(weights)
    log(
        f"Splatting {n_points} points onto a {grid_side}^3 grid "
        f"({len(weights)} corner weights).",
        verbose=verbose,
        msg_level=2,
    )
    # duplicate (point, voxel) pairs are summed by the conversion to CSR
    operator = sparse.coo_matrix(
        (weights, (rows, columns)),
        shape=(n_points, grid_side**3),
    ).tocsr()
    return operator


def _check_data(data, n_points):
    data = np.asarray(data)
    if data.ndim == 1:
        data = data[np.newaxis]
    if data.ndim != 2:
        raise ValueError(
            "'data' must be an array of shape (n_datasets, n_points). "
            f"Got shape {data.shape}."
        )
    if data.shape[1] != n_points:
        raise ValueError(
            f"'data' has values for {data.shape[1]} points "
            f"but the operator was built for {n_points} points."
        )
    return data


def _output_dtype(empty_value, special_mode):
    """Labels are integers unless the empty value is NaN or fractional."""
    if special_mode == 0 or not float(empty_value).is_integer():
        return np.float64
    for dtype in (np.int32, np.int64):
        info = np.iinfo(dtype)
        if info.min <= empty_value <= info.max:
            return dtype
    return np.float64


def _weighted_average(data, operator, empty_value):
    weight_sum = np.asarray(operator.sum(axis=0)).ravel()
    output = np.full((data.shape[0], operator.shape[1]), float(empty_value))
    touched = np.flatnonzero(weight_sum != 0)
    if touched.size == 0:
        return output, touched
    raw = operator[:, touched].T.dot(data.T.astype(float)).T
    output[:, touched] = raw / weight_sum[touched]
    return output, touched


def _winner_take_all(labels, operator, n_labels, empty_value):
    labels = labels.ravel()
    n_points = len(labels)
    in_range = np.isin(labels, np.arange(1, n_labels + 1))
    # one indicator channel per label, stored sparsely
    channels = sparse.csr_matrix(
        (
            np.ones(int(in_range.sum())),
            (labels[in_range].astype(np.int64) - 1, np.flatnonzero(in_range)),
        ),
        shape=(n_labels, n_points),
    )
    votes = channels.dot(operator)
    touched = np.flatnonzero(np.asarray(votes.sum(axis=0)).ravel() != 0)
    output = np.full(
        (1, operator.shape[1]),
        empty_value,
        dtype=_output_dtype(empty_value, n_labels),
    )
    if touched.size == 0:
        return output, touched
    votes = votes[:, touched].toarray()
    # argmax returns the first maximum: ties go to the lowest label
    output[0, touched] = np.argmax(votes, axis=0) + 1
    return output, touched


@fill_doc
def aggregate(
    data,
    operator,
    empty_value=0.0,
    special_mode=0,
    verbose=0,
):
    """Turn vertex data into voxel values with a splatting operator.

    Parameters
    ----------
    data : array-like of shape (n_datasets, n_points) or (n_points,)
        Values of each dataset at each point. With ``special_mode > 0``,
        a single dataset of integer labels.

    %(operator)s

    %(empty_value)s

    %(special_mode)s

    %(verbose0)s

    Returns
    -------
    voxel_values : :obj:`numpy.ndarray` of shape (n_datasets, n_voxels)
        Aggregated value of each voxel. Voxels with no weight hold
        ``empty_value``. In winner-take-all mode the array has a single
        row of labels, of integer type unless ``empty_value`` is NaN,
        infinite or fractional.

    """
    check_params(locals())
    empty_value = check_empty_value(empty_value)
    if not sparse.issparse(operator):
        raise TypeError(
            "'operator' must be a scipy sparse matrix. "
            f"Got: '{operator.__class__.__name__}'"
        )
    operator = sparse.csr_matrix(operator)
    data = _check_data(data, operator.shape[0])
    special_mode = check_special_mode(special_mode, n_datasets=len(data))

    if special_mode == 0:
        output, touched = _weighted_average(data, operator, empty_value)
    else:
        output, touched = _winner_take_all(
            data, operator, special_mode, empty_value
        )

    log(
        f"{touched.size} of {operator.shape[1]} voxels received data.",
        verbose=verbose,
        msg_level=2,
    )
    if touched.size == 0 and operator.shape[1] > 0:
        warnings.warn(
            "No point contributed to any voxel: "
            f"every voxel is set to {empty_value}.",
            EmptyGridWarning,
            stacklevel=find_stack_level(),
        )
    return output


@fill_doc
def surface_to_volume(
    coordinates,
    data,
    empty_value=0.0,
    grid_side=GRID_RESOLUTION,
    special_mode=0,
    data_transform=None,
    verbose=0,
):
    """Map point data onto a cubic voxel grid.

    Each point contributes a linear kernel of exactly 2 x 2 x 2 voxels.
    All kernels are summed and evaluated at voxel centres, and each voxel
    becomes the weighted average of the contributing points (or, with
    ``special_mode > 0``, the label with the largest summed weight).

    Parameters
    ----------
    %(coordinates)s

    data : array-like of shape (n_datasets, n_points) or (n_points,)
        Values to map.

    %(empty_value)s

    %(grid_side)s

    %(special_mode)s

    %(data_transform)s

    %(verbose0)s

    Returns
    -------
    volume : :obj:`numpy.ndarray`
        Array of shape (grid_side, grid_side, grid_side, n_datasets), or
        (grid_side, grid_side, grid_side) with ``special_mode > 0``.
        1-based voxel ``(i, j, k)`` is ``volume[i - 1, j - 1, k - 1]``.

    Examples
    --------
    >>> import numpy as np
    >>> from nisplat.surface import surface_to_volume
    >>> volume = surface_to_volume(
    ...     [[2.0, 2.0, 2.0]], [7.0], empty_value=-1, grid_side=4
    ... )
    >>> volume.shape
    (4, 4, 4, 1)
    >>> float(volume[1, 1, 1, 0])
    7.0

    """
    check_params(locals())
    if data_transform is not None:
        data = data_transform(data)
    data = np.asarray(data)
    n_datasets = 1 if data.ndim == 1 else data.shape[0]
    # fail before the operator is built
    special_mode = check_special_mode(special_mode, n_datasets=n_datasets)

    log(
        f"Mapping {n_datasets} dataset(s) onto a "
        f"{grid_side}x{grid_side}x{grid_side} grid.",
        verbose=verbose,
    )
    operator = splat_operator(
        coordinates, grid_side=grid_side, verbose=verbose
    )
    voxel_values = aggregate(
        data,
        operator,
        empty_value=empty_value,
        special_mode=special_mode,
        verbose=verbose,
    )
    return _unravel_volume(voxel_values, grid_side, special_mode)


def _unravel_volume(voxel_values, grid_side, special_mode):
    grid_shape = (grid_side,) * 3
    if special_mode > 0:
        return voxel_values[0].reshape(grid_shape)
    return np.moveaxis(voxel_values.reshape((-1, *grid_shape)), 0, -1)
