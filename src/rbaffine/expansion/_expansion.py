# expansion/_expansion.py
"""Affine expansions of parametrized operators, right-hand sides, and
outputs.
"""

__all__ = [
    "AffineExpansion",
]

import logging
import numpy as np

from .. import errors, utils
from ..parameters import ParameterSet
from ..theta import as_theta


# Helper functions ============================================================
def _is_iterable(obj):
    """Return True if obj is iterable, False, else."""
    try:
        iter(obj)
        return True
    except TypeError:
        return False


def _as_theta_list(thetas) -> list:
    """Interpret an iterable of theta functions, validating every entry."""
    if thetas is None or not _is_iterable(thetas):
        raise errors.InvalidArgumentError(
            "theta functions must be given as an iterable, "
            f"got {type(thetas).__name__}"
        )
    return [as_theta(theta) for theta in thetas]


def _check_index(index, size: int, label: str) -> None:
    """Ensure ``0 <= index < size``."""
    if not utils.is_index(index) or not (0 <= index < size):
        raise errors.IndexOutOfRangeError(
            f"{label} = {index!r} out of range for {size} term(s)"
        )


def _evaluate(theta, parameters):
    """Evaluate ``theta`` at one parameter set or a sequence of them."""
    if isinstance(parameters, ParameterSet):
        return theta.evaluate(parameters)
    parameters = list(parameters)
    for i, mu in enumerate(parameters):
        if not isinstance(mu, ParameterSet):
            raise TypeError(
                f"parameters[{i}] is a {type(mu).__name__}, "
                "expected a ParameterSet"
            )
    return theta.evaluate_vec(parameters)


# Main class ==================================================================
class AffineExpansion:
    r"""Theta functions of the affine decompositions of a parametrized
    problem.

    A parametrized bilinear form, linear form, and outputs are written as

    .. math::
       a(\cdot,\cdot;\bfmu) = \sum_{q=0}^{Q_a-1}\theta_a^{(q)}(\bfmu)\,
       a^{(q)}(\cdot,\cdot),
       \qquad
       f(\cdot;\bfmu) = \sum_{q=0}^{Q_f-1}\theta_f^{(q)}(\bfmu)\,
       f^{(q)}(\cdot),
       \qquad
       \ell_n(\cdot;\bfmu) = \sum_{q=0}^{Q_{\ell_n}-1}
       \theta_{\ell_n}^{(q)}(\bfmu)\,\ell_n^{(q)}(\cdot),

    where the forms :math:`a^{(q)}`, :math:`f^{(q)}`, and
    :math:`\ell_n^{(q)}` do not depend on the parameters. This class stores
    the theta functions and evaluates them; the parameter-independent
    terms are assembled elsewhere and combined with the returned weights,
    for example with :func:`rbaffine.expansion.affine_sum()`.

    The theta functions are referenced, not copied: the same theta function
    object may be attached several times or shared between expansions.

    Examples
    --------
    >>> expansion = AffineExpansion()
    >>> expansion.attach_operator_theta(lambda mu: mu["k"])
    >>> expansion.attach_operator_theta(ConstantTheta(1.0))
    >>> mu = ParameterSet()
    >>> mu.set_value("k", 0, 3.5)
    >>> expansion.eval_operator_theta(0, mu)
    3.5
    >>> expansion.eval_operator_thetas(mu)
    array([3.5, 1. ])
    """

    def __init__(self):
        """Initialize empty term collections."""
        self.__A_thetas = []
        self.__F_thetas = []
        self.__output_thetas = []
        # _output_offsets[n] = total number of terms of outputs 0, ..., n-1.
        self.__output_offsets = [0]

    # Attachment --------------------------------------------------------------
    def attach_operator_theta(self, theta) -> None:
        """Append a theta function to the operator (``A``) expansion.

        Parameters
        ----------
        theta : rbaffine.theta.ThetaTemplate or callable
            Theta function for the new term.
        """
        self.__A_thetas.append(as_theta(theta))
        logging.debug(f"attached operator theta {len(self.__A_thetas) - 1}")

    def attach_operator_theta_batch(self, thetas) -> None:
        """Append several theta functions to the operator expansion.
        Nothing is attached if any of the ``thetas`` is invalid.
        """
        thetas = _as_theta_list(thetas)
        self.__A_thetas.extend(thetas)
        logging.debug(
            f"attached {len(thetas)} operator theta(s), "
            f"{len(self.__A_thetas)} total"
        )

    def attach_rhs_theta(self, theta) -> None:
        """Append a theta function to the right-hand side (``F``) expansion.

        Parameters
        ----------
        theta : rbaffine.theta.ThetaTemplate or callable
            Theta function for the new term.
        """
        self.__F_thetas.append(as_theta(theta))
        logging.debug(f"attached rhs theta {len(self.__F_thetas) - 1}")

    def attach_rhs_theta_batch(self, thetas) -> None:
        """Append several theta functions to the right-hand side expansion.
        Nothing is attached if any of the ``thetas`` is invalid.
        """
        thetas = _as_theta_list(thetas)
        self.__F_thetas.extend(thetas)
        logging.debug(
            f"attached {len(thetas)} rhs theta(s), "
            f"{len(self.__F_thetas)} total"
        )

    def attach_output_theta(self, thetas) -> None:
        """Append a new output.

        Parameters
        ----------
        thetas : theta function or iterable of theta functions
            If a single theta function (or callable), the new output has one
            term. If an iterable, the new output has one term per entry, in
            order; an empty iterable gives an output with no terms.
        """
        if thetas is None or callable(thetas) or not _is_iterable(thetas):
            thetas = [as_theta(thetas)]
        else:
            thetas = [as_theta(theta) for theta in thetas]
        self.__output_thetas.append(tuple(thetas))
        self.__output_offsets.append(self.__output_offsets[-1] + len(thetas))
        logging.debug(
            f"attached output {len(self.__output_thetas) - 1} "
            f"with {len(thetas)} term(s)"
        )

    # Sizes -------------------------------------------------------------------
    def n_operator_terms(self) -> int:
        """Number of terms in the operator expansion."""
        return len(self.__A_thetas)

    def n_rhs_terms(self) -> int:
        """Number of terms in the right-hand side expansion."""
        return len(self.__F_thetas)

    def n_outputs(self) -> int:
        """Number of outputs."""
        return len(self.__output_thetas)

    def n_output_terms(self, output_index: int) -> int:
        """Number of terms in the expansion of one output.

        Raises
        ------
        rbaffine.errors.IndexOutOfRangeError
            If ``output_index >= n_outputs()``.
        """
        if not utils.is_index(output_index) or not (
            0 <= output_index < self.n_outputs()
        ):
            raise errors.IndexOutOfRangeError(
                f"output_index = {output_index!r} out of range "
                f"for {self.n_outputs()} output(s)"
            )
        return len(self.__output_thetas[output_index])

    def total_output_terms(self) -> int:
        """Total number of terms over all outputs."""
        return self.__output_offsets[-1]

    def flatten_output_index(self, output_index: int, q_l: int) -> int:
        """Index of term ``q_l`` of output ``output_index`` when the terms
        of all outputs are numbered consecutively.

        The result is the number of terms of outputs
        ``0, ..., output_index - 1`` plus ``q_l``. It does not change when
        new outputs are attached. ``q_l`` is not checked against
        :meth:`n_output_terms()`.

        Raises
        ------
        rbaffine.errors.IndexOutOfRangeError
            If ``output_index >= n_outputs()``.
        """
        self.n_output_terms(output_index)
        return self.__output_offsets[output_index] + q_l

    # Evaluation --------------------------------------------------------------
    def eval_operator_theta(self, q: int, parameters):
        """Evaluate the theta function of operator term ``q``.

        Parameters
        ----------
        q : int
            Index of the term.
        parameters : ParameterSet or sequence of ParameterSet
            Parameter point(s) to evaluate at.

        Returns
        -------
        theta : scalar, or (len(parameters),) ndarray
            Value at the parameter point, or the values at each parameter
            point in the same order as ``parameters``.

        Raises
        ------
        rbaffine.errors.IndexOutOfRangeError
            If ``q >= n_operator_terms()``.
        """
        _check_index(q, self.n_operator_terms(), "q")
        return _evaluate(self.__A_thetas[q], parameters)

    def eval_rhs_theta(self, q: int, parameters):
        """Evaluate the theta function of right-hand side term ``q``.
        See :meth:`eval_operator_theta()`.

        Raises
        ------
        rbaffine.errors.IndexOutOfRangeError
            If ``q >= n_rhs_terms()``.
        """
        _check_index(q, self.n_rhs_terms(), "q")
        return _evaluate(self.__F_thetas[q], parameters)

    def eval_output_theta(self, output_index: int, q_l: int, parameters):
        """Evaluate the theta function of term ``q_l`` of an output.
        See :meth:`eval_operator_theta()`.

        Raises
        ------
        rbaffine.errors.IndexOutOfRangeError
            If ``output_index >= n_outputs()`` or
            ``q_l >= n_output_terms(output_index)``.
        """
        valid = utils.is_index(output_index) and (
            0 <= output_index < self.n_outputs()
        )
        if not valid or not (
            utils.is_index(q_l)
            and 0 <= q_l < len(self.__output_thetas[output_index])
        ):
            raise errors.IndexOutOfRangeError(
                f"(output_index, q_l) = ({output_index!r}, {q_l!r}) "
                "out of range, must have output_index < n_outputs() and "
                "q_l < n_output_terms(output_index)"
            )
        return _evaluate(self.__output_thetas[output_index][q_l], parameters)

    def eval_operator_thetas(self, parameters: ParameterSet) -> np.ndarray:
        """Evaluate every operator theta function at one parameter point.

        Returns
        -------
        thetas : (n_operator_terms(),) ndarray
            Coefficients of the operator expansion.
        """
        return np.array(
            [
                self.eval_operator_theta(q, parameters)
                for q in range(self.n_operator_terms())
            ]
        )

    def eval_rhs_thetas(self, parameters: ParameterSet) -> np.ndarray:
        """Evaluate every right-hand side theta function at one parameter
        point.
        """
        return np.array(
            [
                self.eval_rhs_theta(q, parameters)
                for q in range(self.n_rhs_terms())
            ]
        )

    def eval_output_thetas(
        self,
        output_index: int,
        parameters: ParameterSet,
    ) -> np.ndarray:
        """Evaluate every theta function of one output at one parameter
        point.
        """
        return np.array(
            [
                self.eval_output_theta(output_index, q_l, parameters)
                for q_l in range(self.n_output_terms(output_index))
            ]
        )

    # Diagnostics -------------------------------------------------------------
    def __str__(self) -> str:
        """String representation: class name + term counts."""
        out = [
            self.__class__.__name__,
            f"  operator terms: {self.n_operator_terms()}",
            f"  rhs terms:      {self.n_rhs_terms()}",
            f"  outputs:        {self.n_outputs()}",
        ]
        for n in range(self.n_outputs()):
            out.append(f"    output {n}: {self.n_output_terms(n)} term(s)")
        return "\n".join(out)

    def __repr__(self) -> str:
        return utils.str2repr(self)
