# utils/__init__.py
r"""Miscellaneous utility functions."""


from ._hdf5 import *
from ._repr import *
from ._checks import *
