# theta/__init__.py
"""Scalar coefficient functions for the terms of an affine expansion."""

from ._base import *
from ._functions import *
