"""Some miscellaneous utility functions."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from importlib.resources import files

import numpy as np


def _pl(x, non_pl="", pl="s"):
    """Determine if plural should be used."""
    len_x = x if isinstance(x, int | np.generic) else len(x)
    return non_pl if len_x == 1 else pl


def _resource_path(submodule, *parts):
    """Return a full system path to a package resource (AKA a file).

    Parameters
    ----------
    submodule : str
        An import-style module or submodule name
        (e.g., "eegcsd.channels").
    *parts : str
        The path components of the file, relative to the submodule.

    Returns
    -------
    path : Traversable
        The full system path to the requested file.
    """
    return files(submodule).joinpath(*parts)
