"""The :mod:`nisplat._utils` module provides utilities for developers."""

from .docs import fill_doc
from .logger import compose_err_msg

__all__ = ["compose_err_msg", "fill_doc"]
