"""Transformer mapping surface data onto a voxel grid."""

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from nisplat._constants import GRID_RESOLUTION
from nisplat._utils import fill_doc
from nisplat._utils.logger import log
from nisplat._utils.param_validation import (
    check_empty_value,
    check_grid_side,
    check_params,
    check_special_mode,
)
from nisplat.surface.splatting import (
    _unravel_volume,
    aggregate,
    splat_operator,
)


@fill_doc
class SurfaceSplatter(TransformerMixin, BaseEstimator):
    """Map data defined on surface points onto a cubic voxel grid.

    The splatting operator only depends on the point coordinates, so it
    is built once in ``fit`` and reused for every call to ``transform``.

    Parameters
    ----------
    %(grid_side)s

    %(empty_value)s

    %(special_mode)s

    %(verbose0)s

    Attributes
    ----------
    operator_ : :obj:`scipy.sparse.csr_matrix` of shape \
                (n_points, grid_side ** 3)
        Splatting operator built from the coordinates passed to ``fit``.

    n_points_ : :obj:`int`
        Number of points.

    weight_sum_ : :obj:`numpy.ndarray` of shape (grid_side ** 3,)
        Total weight received by each voxel.

    See Also
    --------
    nisplat.surface.surface_to_volume

    """

    def __init__(
        self,
        grid_side=GRID_RESOLUTION,
        empty_value=0.0,
        special_mode=0,
        verbose=0,
    ):
        self.grid_side = grid_side
        self.empty_value = empty_value
        self.special_mode = special_mode
        self.verbose = verbose

    def __sklearn_is_fitted__(self):
        return hasattr(self, "operator_") and self.operator_ is not None

    @fill_doc
    def fit(self, X, y=None):
        """Build the splatting operator.

        Parameters
        ----------
        X : array-like of shape (n_points, 3)
            Point coordinates expressed as 1-based voxel indices of the
            output grid.

        %(y_dummy)s

        Returns
        -------
        SurfaceSplatter object

        """
        del y
        check_params(self.__dict__)
        check_grid_side(self.grid_side)
        check_empty_value(self.empty_value)
        check_special_mode(self.special_mode)

        log("Building splatting operator.", verbose=self.verbose)
        self.operator_ = splat_operator(
            X, grid_side=self.grid_side, verbose=self.verbose
        )
        self.n_points_ = self.operator_.shape[0]
        self.weight_sum_ = np.asarray(self.operator_.sum(axis=0)).ravel()
        log(
            f"{np.count_nonzero(self.weight_sum_)} voxels covered "
            f"by {self.n_points_} points.",
            verbose=self.verbose,
            msg_level=2,
        )
        return self

    def transform(self, X):
        """Map point data onto the grid.

        Parameters
        ----------
        X : array-like of shape (n_datasets, n_points) or (n_points,)
            Values of each dataset at each point, or integer labels when
            ``special_mode > 0``.

        Returns
        -------
        volume : :obj:`numpy.ndarray`
            Array of shape (grid_side, grid_side, grid_side, n_datasets),
            or (grid_side, grid_side, grid_side) when ``special_mode > 0``.

        """
        check_is_fitted(self)
        X = np.asarray(X)
        n_datasets = 1 if X.ndim == 1 else X.shape[0]
        special_mode = check_special_mode(
            self.special_mode, n_datasets=n_datasets
        )
        log(f"Mapping {n_datasets} dataset(s).", verbose=self.verbose)
        voxel_values = aggregate(
            X,
            self.operator_,
            empty_value=self.empty_value,
            special_mode=special_mode,
            verbose=self.verbose,
        )
        return _unravel_volume(voxel_values, self.grid_side, special_mode)

    def coverage_mask(self):
        """Return the voxels that receive weight from at least one point.

        Returns
        -------
        mask : :obj:`numpy.ndarray` of shape \
               (grid_side, grid_side, grid_side), dtype bool

        """
        check_is_fitted(self)
        return (self.weight_sum_ != 0).reshape((self.grid_side,) * 3)
