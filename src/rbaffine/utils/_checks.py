# utils/_checks.py
"""Validation of integer indices shared by parameter sets and expansions."""

__all__ = [
    "is_index",
    "check_step",
]

import numbers


def is_index(obj) -> bool:
    """Return ``True`` if ``obj`` is an integer that is not a ``bool``."""
    return isinstance(obj, numbers.Integral) and not isinstance(obj, bool)


def check_step(step) -> int:
    """Ensure ``step`` is a nonnegative integer and return it as an ``int``.

    Parameters
    ----------
    step : int
        Step index to validate.

    Raises
    ------
    TypeError
        If ``step`` is not an integer.
    ValueError
        If ``step`` is negative.
    """
    if not is_index(step):
        raise TypeError(f"step index must be an integer, got '{step!r}'")
    if step < 0:
        raise ValueError(f"step index must be nonnegative, got {step}")
    return int(step)
