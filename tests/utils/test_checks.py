# utils/test_checks.py
"""Tests for utils._checks."""

import pytest
import numpy as np

import rbaffine


def test_is_index():
    """Test utils._checks.is_index()."""
    is_index = rbaffine.utils.is_index
    assert is_index(0)
    assert is_index(np.int64(3))
    assert is_index(-2)
    assert not is_index(True)
    assert not is_index(1.0)
    assert not is_index("1")


def test_check_step():
    """Test utils._checks.check_step()."""
    check_step = rbaffine.utils.check_step
    assert check_step(np.int32(4)) == 4
    assert isinstance(check_step(np.int32(4)), int)

    with pytest.raises(TypeError) as ex:
        check_step(None)
    assert ex.value.args[0] == "step index must be an integer, got 'None'"

    with pytest.raises(ValueError) as ex:
        check_step(-3)
    assert ex.value.args[0] == "step index must be nonnegative, got -3"
