# expansion/_assembly.py
"""Combination of precomputed affine terms with theta weights."""

__all__ = [
    "affine_sum",
]

import numpy as np
import scipy.sparse as sparse


def affine_sum(coefficients, terms):
    r"""Weighted sum :math:`\sum_{q}\theta^{(q)}A^{(q)}` of
    parameter-independent terms.

    Parameters
    ----------
    coefficients : (Q,) array_like
        Theta values, e.g., from
        :meth:`rbaffine.expansion.AffineExpansion.eval_operator_thetas()`.
    terms : list of Q scalars, ndarrays, or scipy.sparse arrays
        Parameter-independent terms, all with the same shape.

    Returns
    -------
    combined : scalar, ndarray, or scipy.sparse array
        Weighted sum of the terms. The result is sparse if every term is
        sparse and dense otherwise.

    Examples
    --------
    >>> A0, A1 = np.eye(2), np.ones((2, 2))
    >>> affine_sum([2.0, 0.5], [A0, A1])
    array([[2.5, 0.5],
           [0.5, 2.5]])
    """
    coefficients = np.ravel(coefficients)
    terms = list(terms)
    if (n := len(terms)) == 0:
        raise ValueError("at least one term required")
    if coefficients.size != n:
        raise ValueError(
            f"{coefficients.size} = len(coefficients) != len(terms) = {n}"
        )
    shape = np.shape(terms[0])
    if any(np.shape(term) != shape for term in terms):
        raise ValueError("terms must all have the same shape")

    if all(sparse.issparse(term) for term in terms):
        combined = terms[0] * coefficients[0]
        for theta, term in zip(coefficients[1:], terms[1:]):
            combined = combined + term * theta
        return combined

    terms = [
        term.toarray() if sparse.issparse(term) else np.asarray(term)
        for term in terms
    ]
    return sum(theta * term for theta, term in zip(coefficients, terms))
