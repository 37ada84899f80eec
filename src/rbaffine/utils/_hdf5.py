# utils/_hdf5.py
"""Utilities for HDF5 file interaction."""

__all__ = [
    "hdf5_savehandle",
    "hdf5_loadhandle",
    "save_stepmap",
    "load_stepmap",
]

import os
import h5py
import warnings
import numpy as np

from .. import errors


# File handle classes =========================================================
class _hdf5_filehandle:
    """Get a handle to an open HDF5 file to read or write to.

    Parameters
    ----------
    filename : str or h5py File/Group handle
        * str : Name of the file to interact with.
        * h5py File/Group handle : handle to part of an already open HDF5 file.
    mode : str
        * "save" : Open the file for writing only.
        * "load" : Open the file for reading only.
    overwrite : bool
        If True, overwrite the file if it already exists. If False,
        raise a FileExistsError if the file already exists.
        Only applies when ``mode = "save"``.
    """

    def __init__(self, filename, mode, overwrite=False):
        """Open the file handle."""
        self.close_when_done = True
        if isinstance(filename, h5py.HLObject):
            self.file_handle = filename
            self.close_when_done = False
        elif mode == "save":
            if not str(filename).endswith(".h5"):
                warnings.warn(
                    "expected file with extension '.h5'",
                    errors.RBWarning,
                )
            if os.path.isfile(filename) and not overwrite:
                raise FileExistsError(f"{filename} (overwrite=True to ignore)")
            self.file_handle = h5py.File(filename, "w")
        elif mode == "load":
            if not os.path.isfile(filename):
                raise FileNotFoundError(filename)
            self.file_handle = h5py.File(filename, "r")
        else:
            raise ValueError(f"invalid mode '{mode}'")

    def __enter__(self):
        """Return the handle to the open HDF5 file."""
        return self.file_handle

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """Close the file if needed."""
        if self.close_when_done:
            self.file_handle.close()


class hdf5_savehandle(_hdf5_filehandle):
    """Get a handle to an open HDF5 file to write to.

    Parameters
    ----------
    savefile : str or h5py File/Group handle
        Name of the file to save to, or a handle to part of an already open
        HDF5 file.
    overwrite : bool
        If ``True``, overwrite the file if it already exists.
        If ``False``, raise a ``FileExistsError`` if the file already exists.

    Examples
    --------
    >>> with hdf5_savehandle("parameters.h5", overwrite=True) as hf:
    ...     save_stepmap(hf.create_group("parameters"), {"mu": [1.0, 2.0]})
    """

    def __init__(self, savefile, overwrite=False):
        _hdf5_filehandle.__init__(self, savefile, "save", overwrite)


class hdf5_loadhandle(_hdf5_filehandle):
    """Get a handle to an open HDF5 file to read from.

    Any exception raised inside the ``with`` block other than a
    :class:`rbaffine.errors.LoadfileFormatError` is re-raised as one.

    Parameters
    ----------
    loadfile : str or h5py File/Group handle
        Name of the file to read from, or a handle to part of an already
        open HDF5 file.
    """

    def __init__(self, loadfile):
        _hdf5_filehandle.__init__(self, loadfile, "load")

    def __exit__(self, exc_type, exc_value, exc_traceback):
        """Close the file if needed. Raise a LoadfileFormatError if needed."""
        _hdf5_filehandle.__exit__(self, exc_type, exc_value, exc_traceback)
        if exc_type is None or issubclass(
            exc_type, errors.LoadfileFormatError
        ):
            return False
        message = exc_value.args[0] if exc_value.args else str(exc_type)
        raise errors.LoadfileFormatError(message) from exc_value


# Step-indexed mappings =======================================================
def save_stepmap(group: h5py.Group, stepmap: dict) -> None:
    """Save a mapping ``name -> sequence of floats`` in an HDF5 group.

    The names are stored in the string dataset ``names`` and the values of
    the i-th name in the dataset ``str(i)``, so names may contain any
    character, including ``/`` and ``.``.

    Parameters
    ----------
    group : h5py.Group
        HDF5 group to save the mapping to.
    stepmap : dict
        Mapping from names to step values.
    """
    names = list(stepmap)
    group.create_dataset(
        "names",
        data=np.array(names, dtype=object),
        dtype=h5py.string_dtype(),
    )
    for i, name in enumerate(names):
        group.create_dataset(
            str(i), data=np.asarray(stepmap[name], dtype=float)
        )


def load_stepmap(group: h5py.Group) -> dict:
    """Load a mapping saved with :func:`save_stepmap()`.

    Parameters
    ----------
    group : h5py.Group
        HDF5 group the mapping was saved to.

    Returns
    -------
    stepmap : dict
        Mapping from names to lists of floats.
    """
    names = group["names"].asstr()[:]
    return {
        str(name): [float(v) for v in np.atleast_1d(group[str(i)][:])]
        for i, name in enumerate(names)
    }
