# parameters/_parameterset.py
"""Named, step-indexed parameter values for one parameter point."""

__all__ = [
    "ParameterSet",
]

import copy
import numbers
import logging
import warnings

from .. import errors, utils


_NODEFAULT = object()


def _check_name(name) -> str:
    """Ensure ``name`` is a string and return it."""
    if not isinstance(name, str):
        raise TypeError(f"parameter names must be strings, got {name!r}")
    return name


def _check_value(value) -> float:
    """Ensure ``value`` is a real scalar and return it as a ``float``."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        raise TypeError(
            f"parameter values must be real scalars, got {value!r}"
        )
    return float(value)


def _set_value_helper(stepmap: dict, name: str, step: int, value) -> None:
    """Write ``value`` at index ``step`` of ``stepmap[name]``, creating the
    entry if needed and padding with zeros if ``step`` is past the end.
    """
    name = _check_name(name)
    step = utils.check_step(step)
    value = _check_value(value)
    vec = stepmap.setdefault(name, [])
    if step < len(vec):
        vec[step] = value
    elif step == len(vec):
        vec.append(value)
    else:
        vec.extend([0.0] * (step - len(vec)))
        vec.append(value)


def _get_step_value_helper(stepmap: dict, name: str, step, default, label):
    """Look up ``stepmap[name][step]``, or ``default`` if given."""
    vec = stepmap.get(name)
    valid = utils.is_index(step) and step >= 0
    if vec is not None and valid and step < len(vec):
        return vec[step]
    if default is not _NODEFAULT:
        return default
    if vec is None:
        raise errors.ParameterNotFoundError(f"{label} '{name}' not found")
    raise errors.StepOutOfRangeError(
        f"step {step} out of range for {label} '{name}' "
        f"with {len(vec)} step(s)"
    )


class ParameterSet:
    r"""Values of named parameters :math:`\bfmu` at one parameter point.

    Each parameter stores an ordered sequence of scalar values, one per
    *step*, so that time-dependent or multi-stage parametrizations can be
    represented by a single object. All primary parameters are expected to
    share the same number of steps. A second, independent namespace holds
    *extra* parameters (for example, error indicators) that travel with the
    parameter point but are not part of the parameter vector and are never
    checked for step consistency.

    Parameters
    ----------
    parameter_map : dict or None
        Mapping from parameter names to scalar values. Each value becomes a
        parameter with a single step.

    Attributes
    ----------
    strict : bool
        If ``True``, :meth:`n_steps()` calls :meth:`validate_steps()` before
        returning. Defaults to ``__debug__``, i.e., validation is skipped
        when Python runs with optimizations (``python -O``). Set on the class
        to change the behavior globally or on an instance to change it for
        that object only.

    Examples
    --------
    >>> mu = ParameterSet({"kappa": 2.0})
    >>> mu.set_value("velocity", 0, 1.5)
    >>> mu["kappa"]
    2.0
    >>> mu.push_back_value("kappa", 3.0)
    >>> mu.push_back_value("velocity", 1.75)
    >>> mu.n_steps()
    2
    >>> print(mu.get_string(precision=2), end="")
    kappa: 2.00e+00, 3.00e+00
    velocity: 1.50e+00, 1.75e+00
    """

    strict = __debug__

    def __init__(self, parameter_map: dict = None):
        """Initialize the (empty) parameter and extra parameter mappings."""
        self.__parameters = {}
        self.__extra_parameters = {}
        self.__n_steps = 1
        if parameter_map is not None:
            for name, value in parameter_map.items():
                self.set_value(name, value)

    def clear(self) -> None:
        """Remove all parameters and extra parameters and reset the step
        count to 1.
        """
        self.__n_steps = 1
        self.__parameters.clear()
        self.__extra_parameters.clear()

    def copy(self):
        """Return an independent copy of the parameter set."""
        new = self.__class__()
        new.__parameters = copy.deepcopy(self.__parameters)
        new.__extra_parameters = copy.deepcopy(self.__extra_parameters)
        new.__n_steps = self.__n_steps
        if "strict" in self.__dict__:
            new.strict = self.strict
        return new

    # Queries -----------------------------------------------------------------
    def has_value(self, name: str) -> bool:
        """Return ``True`` if ``name`` is a (primary) parameter."""
        return name in self.__parameters

    def has_extra_value(self, name: str) -> bool:
        """Return ``True`` if ``name`` is an extra parameter."""
        return name in self.__extra_parameters

    def get_value(self, name: str, default=_NODEFAULT) -> float:
        """Get the value of a parameter at the first step.

        Parameters
        ----------
        name : str
            Name of the parameter.
        default : float
            Value to return if the parameter is missing or has no values.
            If not given, those conditions raise an exception.

        Raises
        ------
        rbaffine.errors.ParameterNotFoundError
            If ``name`` is not a parameter and no ``default`` is given.
        rbaffine.errors.StepOutOfRangeError
            If the parameter has no values and no ``default`` is given.
        """
        return self.get_step_value(name, 0, default)

    def get_step_value(self, name: str, step: int, default=_NODEFAULT):
        """Get the value of a parameter at a given step.

        Parameters
        ----------
        name : str
            Name of the parameter.
        step : int
            Index of the step.
        default : float
            Value to return if the parameter is missing or ``step`` is out of
            range. If not given, those conditions raise an exception.

        Raises
        ------
        rbaffine.errors.ParameterNotFoundError
            If ``name`` is not a parameter and no ``default`` is given.
        rbaffine.errors.StepOutOfRangeError
            If ``step`` is out of range and no ``default`` is given.
        """
        return _get_step_value_helper(
            self.__parameters, name, step, default, "parameter"
        )

    def get_extra_value(self, name: str, default=_NODEFAULT) -> float:
        """Get the value of an extra parameter at the first step.
        See :meth:`get_value()`.
        """
        return self.get_extra_step_value(name, 0, default)

    def get_extra_step_value(self, name: str, step: int, default=_NODEFAULT):
        """Get the value of an extra parameter at a given step.
        See :meth:`get_step_value()`.
        """
        return _get_step_value_helper(
            self.__extra_parameters, name, step, default, "extra parameter"
        )

    def __getitem__(self, name: str) -> float:
        """Shorthand for :meth:`get_value()` without a default."""
        return self.get_value(name)

    def n_parameters(self) -> int:
        """Number of distinct (primary) parameters."""
        return len(self.__parameters)

    def n_extra_parameters(self) -> int:
        """Number of distinct extra parameters."""
        return len(self.__extra_parameters)

    def get_parameter_names(self) -> set:
        """Names of the (primary) parameters."""
        return set(self.__parameters)

    def get_extra_parameter_names(self) -> set:
        """Names of the extra parameters."""
        return set(self.__extra_parameters)

    # Steps -------------------------------------------------------------------
    def validate_steps(self) -> None:
        """Check that every (primary) parameter has the same number of steps.

        Raises
        ------
        rbaffine.errors.StepConsistencyError
            If two parameters store a different number of values.
        """
        names = sorted(self.__parameters)
        if not names:
            return
        first = names[0]
        nfirst = len(self.__parameters[first])
        for name in names[1:]:
            if (n := len(self.__parameters[name])) != nfirst:
                raise errors.StepConsistencyError(
                    "all parameters must have the same number of steps "
                    f"('{first}' has {nfirst}, '{name}' has {n})"
                )

    def n_steps(self) -> int:
        """Number of steps shared by the parameters.

        If no parameters are stored, this is the value given to
        :meth:`set_n_steps()` (1 by default). Otherwise it is the number of
        values of the first parameter in sorted order; when :attr:`strict`
        is ``True``, all parameters are checked with :meth:`validate_steps()`
        first.
        """
        if not self.__parameters:
            return self.__n_steps
        if self.strict:
            self.validate_steps()
        return len(self.__parameters[min(self.__parameters)])

    def set_n_steps(self, n_steps: int) -> None:
        """Declare the number of steps for a parameter set with no
        parameters.

        Parameters
        ----------
        n_steps : int
            Positive number of steps.
        """
        if not utils.is_index(n_steps) or n_steps < 1:
            raise ValueError("n_steps must be a positive integer")
        if self.__parameters:
            warnings.warn(
                f"n_steps = {n_steps} has no effect while parameters are set "
                f"(parameters have {self.n_steps()} step(s))",
                errors.RBWarning,
            )
        self.__n_steps = int(n_steps)

    # Mutation ----------------------------------------------------------------
    def set_value(self, name: str, *args) -> None:
        """Set the value of a parameter.

        * ``set_value(name, value)`` replaces all stored values of ``name``
          with the single value ``value``.
        * ``set_value(name, step, value)`` writes ``value`` at index
          ``step``. If ``step`` equals the current number of values, the
          value is appended; if it is larger, the intermediate entries are
          set to zero.
        """
        if len(args) == 1:
            self.__parameters[_check_name(name)] = [_check_value(args[0])]
        elif len(args) == 2:
            _set_value_helper(self.__parameters, name, *args)
        else:
            raise TypeError(
                "set_value() expects (name, value) or (name, step, value)"
            )

    def set_extra_value(self, name: str, *args) -> None:
        """Set the value of an extra parameter. See :meth:`set_value()`."""
        if len(args) == 1:
            self.__extra_parameters[_check_name(name)] = [
                _check_value(args[0])
            ]
        elif len(args) == 2:
            _set_value_helper(self.__extra_parameters, name, *args)
        else:
            raise TypeError(
                "set_extra_value() expects (name, value) "
                "or (name, step, value)"
            )

    def push_back_value(self, name: str, value) -> None:
        """Append a value to a parameter, creating it if needed."""
        value = _check_value(value)
        self.__parameters.setdefault(_check_name(name), []).append(value)

    def push_back_extra_value(self, name: str, value) -> None:
        """Append a value to an extra parameter, creating it if needed."""
        value = _check_value(value)
        self.__extra_parameters.setdefault(_check_name(name), []).append(
            value
        )

    def erase_parameter(self, name: str) -> None:
        """Remove a parameter (nothing happens if it is not present)."""
        self.__parameters.pop(name, None)

    def erase_extra_parameter(self, name: str) -> None:
        """Remove an extra parameter (nothing happens if it is not present)."""
        self.__extra_parameters.pop(name, None)

    # Iteration ---------------------------------------------------------------
    def items(self):
        """Iterate over ``(name, values)`` pairs of the parameters in sorted
        name order. The values are returned as tuples.
        """
        for name in sorted(self.__parameters):
            yield name, tuple(self.__parameters[name])

    def extra_items(self):
        """Iterate over ``(name, values)`` pairs of the extra parameters in
        sorted name order. The values are returned as tuples.
        """
        for name in sorted(self.__extra_parameters):
            yield name, tuple(self.__extra_parameters[name])

    def __iter__(self):
        """Iterate over ``(name, values)`` pairs, see :meth:`items()`."""
        return self.items()

    # Comparison and combination ----------------------------------------------
    def __eq__(self, other) -> bool:
        """Two parameter sets are equal if they store the same values for
        the same names, for both the parameters and the extra parameters.
        """
        if not isinstance(other, ParameterSet):
            return NotImplemented
        return (
            self.__parameters == other.__parameters
            and self.__extra_parameters == other.__extra_parameters
        )

    __hash__ = None

    def __iadd__(self, other):
        """Insert or overwrite every parameter and extra parameter of
        ``other`` into this parameter set.

        Raises
        ------
        rbaffine.errors.StepCountMismatchError
            If the two parameter sets have a different number of steps.
        """
        if not isinstance(other, ParameterSet):
            return NotImplemented
        if (n1 := self.n_steps()) != (n2 := other.n_steps()):
            raise errors.StepCountMismatchError(
                "can only combine parameter sets with matching numbers of "
                f"steps ({n1} != {n2})"
            )
        for name, values in other.__parameters.items():
            self.__parameters[name] = list(values)
        for name, values in other.__extra_parameters.items():
            self.__extra_parameters[name] = list(values)
        return self

    def __add__(self, other):
        """Return a new parameter set combining this one and ``other``.
        See :meth:`__iadd__()`.
        """
        if not isinstance(other, ParameterSet):
            return NotImplemented
        new = self.copy()
        new += other
        return new

    # Diagnostics -------------------------------------------------------------
    def get_string(self, precision: int = 6) -> str:
        """Human-readable dump of the parameters (not the extra parameters).

        Each parameter gets one line of the form ``name: v0, v1, ...`` with
        the values in scientific notation.

        Parameters
        ----------
        precision : int
            Number of digits after the decimal point.
        """
        lines = []
        for name, values in self.items():
            vals = ", ".join(f"{v:.{precision}e}" for v in values)
            lines.append(f"{name}: {vals}\n")
        return "".join(lines)

    def print(self, precision: int = 6) -> None:
        """Print :meth:`get_string()` to the screen."""
        print(self.get_string(precision), end="", flush=True)

    def log(self, level: int = logging.INFO, precision: int = 6) -> None:
        """Log each line of :meth:`get_string()` at the given level."""
        for line in self.get_string(precision).splitlines():
            logging.log(level, line)

    def __str__(self) -> str:
        return self.get_string()

    def __repr__(self) -> str:
        return utils.str2repr(self)

    # Persistence -------------------------------------------------------------
    def save(self, savefile: str, overwrite: bool = False) -> None:
        """Save the parameter set to an HDF5 file.

        Parameters
        ----------
        savefile : str
            Path of the file to save the parameter set in.
        overwrite : bool
            If ``True``, overwrite the file if it already exists. If ``False``
            (default), raise a ``FileExistsError`` if the file already exists.
        """
        with utils.hdf5_savehandle(savefile, overwrite) as hf:
            meta = hf.create_dataset("meta", shape=(0,))
            meta.attrs["class"] = self.__class__.__name__
            meta.attrs["n_steps"] = self.__n_steps
            utils.save_stepmap(
                hf.create_group("parameters"), self.__parameters
            )
            utils.save_stepmap(
                hf.create_group("extra_parameters"), self.__extra_parameters
            )

    @classmethod
    def load(cls, loadfile: str):
        """Load a parameter set from an HDF5 file.

        Parameters
        ----------
        loadfile : str
            Path to the file where the parameter set was stored via
            :meth:`save()`.
        """
        with utils.hdf5_loadhandle(loadfile) as hf:
            if (ClassName := hf["meta"].attrs["class"]) != cls.__name__:
                raise errors.LoadfileFormatError(
                    f"file '{loadfile}' contains '{ClassName}' "
                    f"object, use '{ClassName}.load()'"
                )
            params = cls()
            params.__n_steps = int(hf["meta"].attrs["n_steps"])
            params.__parameters = utils.load_stepmap(hf["parameters"])
            params.__extra_parameters = utils.load_stepmap(
                hf["extra_parameters"]
            )
        return params
