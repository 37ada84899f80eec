# theta/_base.py
"""Template for the scalar coefficient functions of an affine expansion."""

__all__ = [
    "ThetaTemplate",
    "is_theta",
]

import abc
import numpy as np


class ThetaTemplate(abc.ABC):
    r"""Template for a scalar-valued function of the parameters,
    :math:`\theta : \bfmu \mapsto \theta(\bfmu)\in\mathbb{C}`, weighting one
    term of an affine expansion.

    Child classes must implement :meth:`evaluate()`. Overriding
    :meth:`evaluate_vec()` is optional, for example to evaluate many
    parameter points at once, but the result must match calling
    :meth:`evaluate()` once per parameter point.

    Examples
    --------
    >>> class Diffusivity(ThetaTemplate):
    ...     def evaluate(self, parameters):
    ...         return parameters.get_value("kappa") ** 2
    >>> theta = Diffusivity()
    >>> theta(ParameterSet({"kappa": 3.0}))
    9.0
    """

    @abc.abstractmethod
    def evaluate(self, parameters):  # pragma: no cover
        """Evaluate the function at one parameter point.

        Parameters
        ----------
        parameters : rbaffine.parameters.ParameterSet
            Parameter point to evaluate at.

        Returns
        -------
        theta : float or complex
            Value of the function.
        """
        raise NotImplementedError

    def evaluate_vec(self, parameters_list) -> np.ndarray:
        """Evaluate the function at several parameter points.

        Parameters
        ----------
        parameters_list : list of rbaffine.parameters.ParameterSet
            Parameter points to evaluate at.

        Returns
        -------
        thetas : (len(parameters_list),) ndarray
            Values of the function, in the same order as the inputs.
        """
        return np.array([self.evaluate(mu) for mu in parameters_list])

    def __call__(self, parameters):
        """Evaluate the function at one parameter point."""
        return self.evaluate(parameters)

    def __str__(self) -> str:
        return self.__class__.__name__


def is_theta(obj) -> bool:
    """Return ``True`` if ``obj`` inherits from :class:`ThetaTemplate`."""
    return isinstance(obj, ThetaTemplate)
