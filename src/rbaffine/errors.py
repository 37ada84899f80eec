# errors.py
"""Custom exception classes."""


class ParameterNotFoundError(KeyError):  # pragma: no cover
    """Parameter name not present in a parameter set."""

    def __str__(self):
        return str(self.args[0]) if self.args else ""


class StepOutOfRangeError(IndexError):  # pragma: no cover
    """Step index beyond the stored values of a parameter."""

    pass


class StepCountMismatchError(ValueError):  # pragma: no cover
    """Parameter sets with different numbers of steps cannot be combined."""

    pass


class StepConsistencyError(AssertionError):  # pragma: no cover
    """Parameters within one parameter set disagree in number of steps."""

    pass


class IndexOutOfRangeError(IndexError):  # pragma: no cover
    """Term or output index not aligned with an affine expansion."""

    pass


class InvalidArgumentError(TypeError):  # pragma: no cover
    """Missing or unusable theta function."""

    pass


class LoadfileFormatError(Exception):  # pragma: no cover
    """File format inconsistent with a loading routine."""

    pass


class RBWarning(UserWarning):  # pragma: no cover
    """Generic warning for package usage."""

    pass
