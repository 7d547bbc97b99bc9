"""Functions related to the documentation.

docdict contains the standard documentation entries
used across nisplat.

Entries are listed in alphabetical order.

source: Eric Larson and MNE-python team.
https://github.com/mne-tools/mne-python/blob/main/mne/utils/docs.py
"""

import sys

##############################################################################
#
# Parameters definitions
#
# Standard documentation entries
#
# Entries are listed in alphabetical order.
#
docdict = {}

# coordinates
docdict["coordinates"] = """
coordinates : array-like of shape (n_points, 3)
    Point coordinates expressed as 1-based voxel indices of the output
    grid. They need not be integers nor lie inside the grid.
"""

# data_transform
docdict["data_transform"] = """
data_transform : callable or None, default=None
    Function applied to ``data`` before anything else,
    for example to threshold or rescale it.
"""

# empty_value
docdict["empty_value"] = """
empty_value : :obj:`float` or :obj:`int`, default=0.0
    Value given to voxels that receive no weight from any point.
"""

# grid_side
docdict["grid_side"] = """
grid_side : :obj:`int`, default=320
    Number of voxels along each side of the cubic output grid.
"""

# lookups
docdict["lookups"] = """
lookups : :class:`~nisplat.roi.SphereLookup` or sequence of them
    One lookup per hemisphere shown in the image, left to right.
    When two are given they must be for the ``"lh"`` and ``"rh"``
    hemispheres.
"""

# operator
docdict["operator"] = """
operator : :obj:`scipy.sparse.csr_matrix` of shape (n_points, n_voxels)
    Splatting operator, as returned by
    :func:`~nisplat.surface.splat_operator`.
"""

# special_mode
docdict["special_mode"] = """
special_mode : :obj:`int`, default=0
    Aggregation mode.

    - ``0``: each voxel is the weighted average of the values of the
      points around it.
    - ``N > 0``: data are integer labels from 1 to N and each voxel gets
      the label with the largest summed weight (winner-take-all).
      Ties go to the lowest label. Only one dataset is allowed.
"""

# verbose
verbose = """
verbose : :obj:`int`, default={}
    Verbosity level (`0` means no message).
"""
docdict["verbose"] = verbose.format(1)
docdict["verbose0"] = verbose.format(0)

# y_dummy
docdict["y_dummy"] = """
y : None
    This parameter is unused.
    It is solely included for scikit-learn compatibility.
"""

##############################################################################

docdict_indented: dict[int, dict[str, str]] = {}


def _indentcount_lines(lines):
    """Minimum indent for all lines in line list.

    >>> lines = [" one", "  two", "   three"]
    >>> _indentcount_lines(lines)
    1
    >>> lines = []
    >>> _indentcount_lines(lines)
    0
    >>> lines = [" one"]
    >>> _indentcount_lines(lines)
    1
    >>> _indentcount_lines(["    "])
    0

    """
    indentno = sys.maxsize
    for line in lines:
        stripped = line.lstrip()
        if stripped:
            indentno = min(indentno, len(line) - len(stripped))
    if indentno == sys.maxsize:
        return 0
    return indentno


def fill_doc(f):
    """Fill a docstring with docdict entries.

    Parameters
    ----------
    f : callable
        The function to fill the docstring of. Will be modified in place.

    Returns
    -------
    f : callable
        The function, potentially with an updated `__doc__`.

    """
    docstring = f.__doc__
    if not docstring:
        return f
    lines = docstring.splitlines()
    # Find the minimum indent of the main docstring, after first line
    icount = 0 if len(lines) < 2 else _indentcount_lines(lines[1:])
    # Insert this indent to dictionary docstrings
    try:
        indented = docdict_indented[icount]
    except KeyError:
        indent = " " * icount
        docdict_indented[icount] = indented = {}
        for name, dstr in docdict.items():
            lines = dstr.splitlines()
            try:
                newlines = [lines[0]] + [indent + line for line in lines[1:]]
                indented[name] = "\n".join(newlines)
            except IndexError:
                indented[name] = dstr
    try:
        f.__doc__ = docstring % indented
    except (TypeError, ValueError, KeyError) as exp:
        funcname = f.__name__
        funcname = docstring.split("\n")[0] if funcname is None else funcname
        raise RuntimeError(f"Error documenting {funcname}:\n{exp!s}")
    return f
