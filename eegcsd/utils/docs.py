"""Shared parameter descriptions for docstrings."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import functools

from ..defaults import HEAD_RADIUS_DEFAULT, LAMBDA2_DEFAULT, M_DEFAULT

# Keys are the parameter name, suffixed with the context when the same
# parameter is described differently in several places (``copy_csd``).
docdict = dict()

# %%
# C

docdict["ch_names_recording"] = """
ch_names : list of str
    The channel labels of the recording, in the order of the rows of its
    data array. This order is authoritative for everything built from it.
"""

docdict["copy_csd"] = """
copy : bool
    If ``True``, transform a copy of ``inst`` and leave ``inst`` untouched.
    If ``False`` (default), ``inst`` itself is modified in place, so that a
    second call on the same recording is rejected.
"""

# %%
# H

docdict["head_radius_csd"] = f"""
head_radius : float
    Head radius in cm used to rescale the unit-sphere Laplacian into
    potential per squared centimeter. Defaults to {HEAD_RADIUS_DEFAULT}.
"""

# %%
# L

docdict["lambda2_csd"] = f"""
lambda2 : float
    Smoothing constant added to the diagonal of the spline interpolation
    matrix before solving. Larger values damp the ill-conditioning caused by
    nearby electrodes at the expense of spatial detail. Must be in
    ``[0, 1)``. Defaults to {LAMBDA2_DEFAULT}.
"""

docdict["locations"] = """
locations : path-like | list of ElectrodeAngle
    A channel location file (``.xyz``, ``.ced``, ``.locs``/``.loc`` or
    ``.csd``) or the result of :func:`eegcsd.channels.read_locations`.
"""

docdict["locations_csd"] = """
locations : path-like | list of ElectrodeAngle | None
    A channel location file (``.xyz``, ``.ced``, ``.locs``/``.loc`` or
    ``.csd``) or the result of :func:`eegcsd.channels.read_locations`.
    If None, the file configured as ``EEGCSD_LOCATIONS`` is used, or the
    bundled idealized 10-10 table when that is not set.
"""

# %%
# M

docdict["m_csd"] = f"""
m : float
    Flexibility exponent of the spherical spline, between 2 (very flexible)
    and 10 (rigid). Higher values damp the higher order Legendre terms more
    strongly and give smoother maps. Defaults to {M_DEFAULT}.
"""

docdict["montage"] = """
montage : instance of Montage
    The electrode positions, index-aligned with the recording channels.
"""

# %%
# N

docdict["n_jobs"] = """\
n_jobs : int | None
    The number of jobs to run in parallel. If ``-1``, it is set
    to the number of CPU cores. ``None`` (default) and ``1`` run
    sequentially without :mod:`joblib`. Setting ``EEGCSD_FORCE_SERIAL`` to
    ``true`` forces sequential execution.
"""

# %%
# O

docdict["overwrite"] = """
overwrite : bool
    If True (default False), overwrite the destination file if it
    exists.
"""

# %%
# V

docdict["verbose"] = """
verbose : bool | str | int | None
    Control verbosity of the logging output. If ``None``, use the default
    verbosity level. See :func:`eegcsd.verbose` for details. Should only be
    passed as a keyword argument.
"""


@functools.lru_cache
def _indented_docdict(indent):
    """Return the entries with every line after the first indented."""
    return {
        key: entry.strip("\n").replace("\n", "\n" + " " * indent)
        for key, entry in docdict.items()
    }


def fill_doc(f):
    """Replace ``%(key)s`` placeholders in a docstring with docdict entries.

    The entries are indented to match the docstring body. A literal percent
    sign must be written ``%%`` in a filled docstring.

    Parameters
    ----------
    f : callable
        The function or class whose ``__doc__`` is filled in place.

    Returns
    -------
    f : callable
        The same object.
    """
    docstring = f.__doc__
    if not docstring:
        return f
    body = [line for line in docstring.splitlines()[1:] if line.strip()]
    indent = min((len(line) - len(line.lstrip()) for line in body), default=0)
    try:
        f.__doc__ = docstring % _indented_docdict(indent)
    except (TypeError, ValueError, KeyError) as exc:
        raise RuntimeError(
            f"Could not fill the docstring of {f.__qualname__}: {exc!r}"
        ) from exc
    return f
