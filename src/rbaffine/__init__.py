# __init__.py
"""Affine parameter expansions for certified reduced basis methods.

Parameter points with step-indexed values, theta functions, and the affine
expansions that combine them.
"""

__version__ = "0.1.0"

from . import (
    errors,
    utils,
    parameters,
    theta,
    expansion,
)

from .parameters import ParameterSet
from .theta import ThetaTemplate, Theta, ConstantTheta, ParameterTheta
from .expansion import AffineExpansion, affine_sum
