"""Custom warnings and errors used across nisplat."""

from nisplat._utils.exceptions import LookupMismatchError

__all__ = [
    "EmptyGridWarning",
    "LookupMismatchError",
]


class EmptyGridWarning(UserWarning):
    """Warn that no point contributed weight to any voxel of a grid.

    Every voxel of the resulting volume holds the empty value.
    """
