"""Utilities to check for valid parameters."""

import numbers
from collections.abc import Iterable
from typing import Any, Literal, get_args, get_origin

import numpy as np

import nisplat.typing as nisplat_typing

# dictionary that matches a given parameter / attribute name to a type
TYPE_MAPS = {
    "data_transform": nisplat_typing.DataTransform,
    "empty_value": nisplat_typing.EmptyValue,
    "fill_value": nisplat_typing.FillValue,
    "grid_side": nisplat_typing.GridSide,
    "hemi": nisplat_typing.Hemi,
    "special_mode": nisplat_typing.SpecialMode,
    "verbose": nisplat_typing.Verbose,
}


def check_params(fn_dict):
    """Check types of inputs passed to a function / method / class.

    This function checks the types of function / method parameters or
    the attributes of the class.

    If the function cannot check any of the parameters / attributes,
    it will throw an error to say that its use is not needed.

    Typical usage:

    .. code-block:: python

        def some_function(grid_side, verbose=0):
            check_params(locals())
            ...

        Class MyClass:
            def __init__(grid_side, verbose=0)
            ...

            def fit(X):
                # check attributes of the class instance
                check_params(self.__dict__)
                ...

    """
    keys_to_check = set(TYPE_MAPS.keys()).intersection(set(fn_dict.keys()))
    # Send a message to dev if they are using this function needlessly.
    if not keys_to_check:
        raise ValueError(
            "No known parameter to check.\n"
            "You probably do not need to use 'check_params' here."
        )

    for k in keys_to_check:
        type_to_check = TYPE_MAPS[k]
        value = fn_dict[k]

        if get_origin(type_to_check) is Literal:
            allowed_values = get_args(type_to_check)
            check_parameter_in_allowed(value, allowed_values, k)

        else:
            check_is_of_allowed_type(value, type_to_check, k)


def check_is_of_allowed_type(
    value: Any, type_to_check: tuple[Any] | Any, parameter_name: str
):
    if not isinstance(type_to_check, tuple):
        type_to_check = (type_to_check,)
    if not isinstance(value, type_to_check):
        type_to_check_str = ", ".join([str(x) for x in type_to_check])
        error_msg = (
            f"'{parameter_name}' must be of type(s): '{type_to_check_str}'.\n"
            f"Got: '{value.__class__.__name__}'"
        )
        raise TypeError(error_msg)


def check_parameter_in_allowed(
    parameter: Any, allowed: Iterable[Any], parameter_name: str
):
    if parameter not in allowed:
        raise ValueError(
            f"'{parameter_name}' must be one of {allowed}.\n"
            f"'{parameter}' was provided."
        )


def check_grid_side(grid_side):
    """Check that the side of the output lattice is a positive integer.

    Returns
    -------
    grid_side : :obj:`int`

    """
    check_is_of_allowed_type(grid_side, nisplat_typing.GridSide, "grid_side")
    if isinstance(grid_side, bool) or grid_side < 1:
        raise ValueError(
            f"'grid_side' must be a positive integer. Got {grid_side!r}."
        )
    return int(grid_side)


def check_special_mode(special_mode, n_datasets=None):
    """Check the aggregation mode and its compatibility with the data.

    Parameters
    ----------
    special_mode : :obj:`int`
        0 for weighted averaging, N > 0 for winner-take-all voting
        among N labels.

    n_datasets : :obj:`int` or None, default=None
        Number of datasets that will be aggregated. Voting requires
        exactly one.

    Returns
    -------
    special_mode : :obj:`int`

    """
    check_is_of_allowed_type(
        special_mode, nisplat_typing.SpecialMode, "special_mode"
    )
    if isinstance(special_mode, bool) or special_mode < 0:
        raise ValueError(
            "'special_mode' must be 0 (weighted average) or a positive "
            f"number of labels (winner-take-all). Got {special_mode!r}."
        )
    if special_mode > 0 and n_datasets is not None and n_datasets != 1:
        raise ValueError(
            "Winner-take-all voting (special_mode="
            f"{special_mode}) requires exactly one dataset; "
            f"got {n_datasets}."
        )
    return int(special_mode)


def check_empty_value(empty_value):
    """Check that the value used for voxels without data is a real number.

    Returns
    -------
    empty_value : :obj:`float` or :obj:`int`

    """
    if isinstance(empty_value, bool) or not isinstance(
        empty_value, numbers.Real
    ):
        raise TypeError(
            "'empty_value' must be a real number. "
            f"Got: '{empty_value.__class__.__name__}'"
        )
    if isinstance(empty_value, (numbers.Integral, np.integer)):
        return int(empty_value)
    return float(empty_value)
