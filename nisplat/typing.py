"""Types or Type aliases used by nisplat.

Many of those correspond to the types of variable
declared in nisplat._utils.docs.

Several of them can be enforced at run time using
nisplat._utils.param_validation.check_params.

To expand the functionality of check_params you need to:

-   describe the expected type for that parameter / attribute
    in this module ``nisplat.typing``
    It must be something that ``isinstance`` can handle.

-   expand the ``TYPE_MAPS`` dictionary of ``check_params``
    to pair the name of the parameter / attribute with its expected type.
"""

from collections.abc import Callable
from typing import Literal, TypeAlias

import numpy as np

DataTransform: TypeAlias = Callable | None
EmptyValue: TypeAlias = float | int | np.floating | np.integer
FillValue: TypeAlias = float | int | np.floating | np.integer | bool
GridSide: TypeAlias = int | np.integer
Hemi = Literal["lh", "rh"]
SpecialMode: TypeAlias = int | np.integer
Verbose: TypeAlias = int | np.integer | bool
