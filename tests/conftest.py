# conftest.py
"""Fixtures shared by the test suite."""

import pytest

import rbaffine


@pytest.fixture
def strict_parameters():
    """Turn on step validation for every ParameterSet during a test."""
    original = rbaffine.ParameterSet.strict
    rbaffine.ParameterSet.strict = True
    yield
    rbaffine.ParameterSet.strict = original


@pytest.fixture
def multistep_parameters():
    """Parameter set with two parameters, three steps, and one extra."""
    mu = rbaffine.ParameterSet()
    for i, (a, b) in enumerate([(1.0, -1.0), (2.0, -2.0), (3.0, -3.0)]):
        mu.set_value("alpha", i, a)
        mu.set_value("beta", i, b)
    mu.set_extra_value("error_indicator", 0, 1e-3)
    return mu
