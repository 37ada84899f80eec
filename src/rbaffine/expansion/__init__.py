# expansion/__init__.py
"""Affine expansions of parametrized operators, right-hand sides, and
outputs.
"""

from ._expansion import *
from ._assembly import *
