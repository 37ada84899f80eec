# parameters/__init__.py
"""Parameter points with step-indexed values."""

from ._parameterset import *
