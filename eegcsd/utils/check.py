"""Argument validation helpers."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import operator
import os
from pathlib import Path

import numpy as np

from ._logging import logger, warn

# plausible head radii in cm: 3rd percentile newborn head circumference
# over 2 pi, and half the 99th percentile adult glabella-inion length
_HEAD_RADIUS_RANGE = (5.0, 10.85)


def _ensure_int(x, name="unknown", must_be="an int", *, extra=""):
    """Return ``x`` as an int, refusing bools and floats."""
    # operator.index accepts numpy integers but not 2.0
    if not isinstance(x, bool):
        try:
            return int(operator.index(x))
        except TypeError:
            pass
    extra = f" {extra}" if extra else ""
    raise TypeError(f"{name} must be {must_be}{extra}, got {type(x)}")


class _IntLike:
    @classmethod
    def __instancecheck__(cls, other):
        try:
            _ensure_int(other)
        except TypeError:
            return False
        return True


_TYPE_ALIASES = {
    "str": (str,),
    "numeric": (np.floating, float, _IntLike()),
    "int-like": (_IntLike(),),
    "path-like": (str, Path, os.PathLike),
}


def _validate_type(item, types, item_name="Item", type_name=None, *, extra=""):
    """Raise a TypeError unless ``item`` is one of ``types``.

    Parameters
    ----------
    item : object
        The value to check.
    types : type | str | None | tuple
        Accepted types. ``None`` stands for ``type(None)`` and the strings
        ``"str"``, ``"numeric"``, ``"int-like"`` and ``"path-like"`` for
        groups of types.
    item_name : str
        How ``item`` is called in the error message.
    type_name : str | None
        Replaces the generated description of ``types`` in the message.
    extra : str
        Appended to the message.
    """
    if not isinstance(types, list | tuple):
        types = (types,)
    allowed = ()
    names = []
    for type_ in types:
        if type_ is None:
            allowed += (type(None),)
            names.append("None")
        elif isinstance(type_, str):
            allowed += _TYPE_ALIASES[type_]
            names.append(type_)
        else:
            allowed += (type_,)
            names.append(type_.__name__)
    if isinstance(item, allowed):
        return
    if type_name is None:
        if len(names) > 2:
            type_name = ", ".join(names[:-1]) + ", or " + names[-1]
        else:
            type_name = " or ".join(names)
    extra = f" {extra}" if extra else ""
    raise TypeError(
        f"{item_name} must be an instance of {type_name}{extra}, "
        f"got {type(item)} instead."
    )


def _check_fname(fname, overwrite=False, must_exist=False, name="File") -> Path:
    """Resolve a file name and check it can be read or written.

    ``overwrite="read"`` accepts an existing file without logging, which is
    what readers pass together with ``must_exist=True``.
    """
    _validate_type(fname, "path-like", name)
    fname = Path(fname).expanduser().absolute()
    if not fname.exists():
        if must_exist:
            raise FileNotFoundError(f'{name} does not exist: "{fname}"')
        return fname
    if not overwrite:
        raise FileExistsError(
            f"{fname} already exists, pass overwrite=True to replace it."
        )
    if overwrite != "read":
        logger.info(f"Overwriting {fname}")
    if must_exist:
        if not fname.is_file():
            raise OSError(f"{name} must be a file, found a directory: {fname}")
        if not os.access(fname, os.R_OK):
            raise PermissionError(f"{name} is not readable: {fname}")
    return fname


def _check_range(val, min_val, max_val, name, min_inclusive=True, max_inclusive=True):
    """Raise a ValueError unless ``min_val <= val <= max_val``.

    ``min_inclusive`` and ``max_inclusive`` make the bounds strict when False.
    """
    too_small = val < min_val if min_inclusive else val <= min_val
    too_large = val > max_val if max_inclusive else val >= max_val
    if too_small or too_large:
        low = f"{min_val}{' inclusive' if min_inclusive else ''}"
        high = f"{max_val}{' inclusive' if max_inclusive else ''}"
        raise ValueError(
            f"The value of {name} must be between {low} and {high}, got {val}"
        )


def _check_if_nan(data, msg="to be transformed"):
    """Raise if any value is NaN or infinite."""
    if not np.isfinite(data).all():
        raise ValueError(f"Some of the values {msg} are NaN or infinite.")


def _check_option(parameter, value, allowed_values, extra=""):
    """Return ``value`` if it is one of ``allowed_values``, raise otherwise.

    Parameters
    ----------
    parameter : str
        The parameter name used in the error message.
    value : object
        The value to check.
    allowed_values : iterable
        The accepted values.
    extra : str
        Appended to the parameter name in the error message.

    Returns
    -------
    value : object
        The checked value.
    """
    allowed_values = list(allowed_values)
    if value in allowed_values:
        return value
    extra = f" {extra}" if extra else ""
    if len(allowed_values) == 1:
        options = f"The only allowed value is {allowed_values[0]!r}"
    else:
        reprs = [repr(v) for v in allowed_values]
        joined = " and ".join(reprs) if len(reprs) == 2 else ", ".join(reprs)
        options = f"Allowed values are {joined}"
    raise ValueError(
        f"Invalid value for the '{parameter}' parameter{extra}. {options}, "
        f"got {value!r}."
    )


def _check_head_radius(radius, add_info=""):
    """Warn if a head radius in cm is implausible for a human head."""
    min_radius, max_radius = _HEAD_RADIUS_RANGE
    if radius > max_radius:
        warn(
            f"Head radius ({radius:0.1f} cm) is above the 99th percentile "
            f"of adult heads.{add_info}"
        )
    elif radius < min_radius:
        warn(
            f"Head radius ({radius:0.1f} cm) is below the 3rd percentile "
            f"of newborn heads.{add_info}"
        )
