# expansion/test_assembly.py
"""Tests for expansion._assembly."""

import pytest
import numpy as np
import scipy.sparse as sparse

import rbaffine


_module = rbaffine.expansion


def test_affine_sum(n=8, nterms=3):
    """Test expansion._assembly.affine_sum()."""
    arrays = [np.random.random((n, n)) for _ in range(nterms)]
    coefficients = np.random.random(nterms)

    with pytest.raises(ValueError) as ex:
        _module.affine_sum([], [])
    assert ex.value.args[0] == "at least one term required"

    with pytest.raises(ValueError) as ex:
        _module.affine_sum(coefficients[:-1], arrays)
    assert ex.value.args[0] == (
        f"{nterms - 1} = len(coefficients) != len(terms) = {nterms}"
    )

    with pytest.raises(ValueError) as ex:
        _module.affine_sum([1, 2], [arrays[0], arrays[1][:, :-1]])
    assert ex.value.args[0] == "terms must all have the same shape"

    # Dense terms.
    combined = _module.affine_sum(coefficients, arrays)
    expected = sum(c * A for c, A in zip(coefficients, arrays))
    assert isinstance(combined, np.ndarray)
    assert np.allclose(combined, expected)

    # Sparse terms.
    sparrays = [sparse.csr_array(A * (A > 0.5)) for A in arrays]
    combined = _module.affine_sum(coefficients, sparrays)
    assert sparse.issparse(combined)
    expected = sum(c * A.toarray() for c, A in zip(coefficients, sparrays))
    assert np.allclose(combined.toarray(), expected)

    # Mixed terms give a dense result.
    combined = _module.affine_sum(coefficients, [sparrays[0]] + arrays[1:])
    assert isinstance(combined, np.ndarray)
    expected = coefficients[0] * sparrays[0].toarray() + sum(
        c * A for c, A in zip(coefficients[1:], arrays[1:])
    )
    assert np.allclose(combined, expected)

    # Scalar terms, e.g., output functionals already applied to a vector.
    assert np.isclose(_module.affine_sum([2.0, -1.0], [3.0, 4.0]), 2.0)


def test_affine_sum_with_expansion(n=5):
    """Assemble an operator from an expansion's theta values."""
    expansion = _module.AffineExpansion()
    expansion.attach_operator_theta(rbaffine.ParameterTheta("kappa"))
    expansion.attach_operator_theta(rbaffine.ConstantTheta(1.0))
    A0 = sparse.diags_array([2.0] * n)
    A1 = sparse.eye_array(n)

    mu = rbaffine.ParameterSet({"kappa": 4.0})
    A = _module.affine_sum(expansion.eval_operator_thetas(mu), [A0, A1])
    assert np.allclose(A.toarray(), 9 * np.eye(n))
