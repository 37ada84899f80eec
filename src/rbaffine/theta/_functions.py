# theta/_functions.py
"""Concrete theta functions."""

__all__ = [
    "Theta",
    "ConstantTheta",
    "ParameterTheta",
    "as_theta",
]

import numbers
import numpy as np

from .. import errors, utils
from ._base import ThetaTemplate


class Theta(ThetaTemplate):
    """Theta function defined by a Python callable.

    Parameters
    ----------
    func : callable
        Function mapping a :class:`rbaffine.parameters.ParameterSet` to a
        scalar.
    vectorized : callable or None
        Function mapping a list of parameter sets to the corresponding
        list of scalars. If ``None`` (default), ``func`` is called once per
        parameter set.

    Examples
    --------
    >>> theta = Theta(lambda mu: mu["k"] + 1)
    >>> theta(ParameterSet({"k": 1.5}))
    2.5
    """

    def __init__(self, func, vectorized=None):
        """Store the callable(s)."""
        if not callable(func):
            raise errors.InvalidArgumentError(
                "argument 'func' must be callable"
            )
        if vectorized is not None and not callable(vectorized):
            raise errors.InvalidArgumentError(
                "argument 'vectorized' must be callable or None"
            )
        self.__func = func
        self.__vectorized = vectorized

    @property
    def func(self):
        """Callable evaluating a single parameter point."""
        return self.__func

    @property
    def vectorized(self):
        """Callable evaluating several parameter points, or ``None``."""
        return self.__vectorized

    def evaluate(self, parameters):
        """Evaluate ``func`` at one parameter point."""
        return self.__func(parameters)

    def evaluate_vec(self, parameters_list) -> np.ndarray:
        """Evaluate ``vectorized`` (or ``func`` repeatedly) at several
        parameter points.
        """
        if self.__vectorized is None:
            return ThetaTemplate.evaluate_vec(self, parameters_list)
        thetas = np.asarray(self.__vectorized(parameters_list))
        if thetas.shape != (n := len(parameters_list),):
            raise ValueError(
                f"vectorized theta returned shape {thetas.shape}, "
                f"expected ({n},)"
            )
        return thetas

    def __str__(self) -> str:
        name = getattr(self.__func, "__name__", repr(self.__func))
        return f"Theta({name})"


class ConstantTheta(ThetaTemplate):
    """Theta function with the same value at every parameter point.

    Parameters
    ----------
    value : float or complex
        Constant value.
    """

    def __init__(self, value=1.0):
        if not isinstance(value, numbers.Number) or isinstance(value, bool):
            raise TypeError("constant theta value must be a scalar")
        self.__value = value

    @property
    def value(self):
        """Constant value of the function."""
        return self.__value

    def evaluate(self, parameters):
        return self.__value

    def evaluate_vec(self, parameters_list) -> np.ndarray:
        return np.full(len(parameters_list), self.__value)

    def __str__(self) -> str:
        return f"ConstantTheta({self.__value})"


class ParameterTheta(ThetaTemplate):
    r"""Theta function returning a scaled parameter value,
    :math:`\theta(\bfmu) = c\,\mu_{\textrm{name}}^{(s)}`.

    Parameters
    ----------
    name : str
        Name of the parameter.
    step : int
        Step at which the parameter is read (default 0).
    scale : float or complex
        Scaling factor :math:`c` (default 1).
    """

    def __init__(self, name: str, step: int = 0, scale=1.0):
        self.__name = str(name)
        self.__step = utils.check_step(step)
        self.__scale = scale

    @property
    def name(self) -> str:
        """Name of the parameter."""
        return self.__name

    @property
    def step(self) -> int:
        """Step at which the parameter is read."""
        return self.__step

    @property
    def scale(self):
        """Scaling factor."""
        return self.__scale

    def evaluate(self, parameters):
        return self.__scale * parameters.get_step_value(
            self.__name, self.__step
        )

    def __str__(self) -> str:
        if self.__step == 0:
            return f"ParameterTheta({self.__name!r}, scale={self.__scale})"
        return (
            f"ParameterTheta({self.__name!r}, step={self.__step}, "
            f"scale={self.__scale})"
        )


def as_theta(obj) -> ThetaTemplate:
    """Interpret ``obj`` as a theta function.

    Parameters
    ----------
    obj : ThetaTemplate or callable
        Theta function, or a callable to wrap with :class:`Theta`.

    Raises
    ------
    rbaffine.errors.InvalidArgumentError
        If ``obj`` is ``None`` or neither a theta function nor callable.
    """
    if obj is None:
        raise errors.InvalidArgumentError("theta function must not be None")
    if isinstance(obj, ThetaTemplate):
        return obj
    if callable(obj):
        return Theta(obj)
    raise errors.InvalidArgumentError(
        f"theta function must be callable, got {type(obj).__name__}"
    )
