"""Reading and writing electrode locations as spherical angles."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import logging
import warnings
from collections import namedtuple
from pathlib import Path

import numpy as np

from ..defaults import DEFAULT_LOCATIONS_FNAME
from ..errors import UnsupportedFormatError
from ..utils import (
    _check_fname,
    _pl,
    _resource_path,
    get_config,
    logger,
    verbose,
)

# theta: azimuth with Fpz = 90, T7 = 180, T8 = 0
# phi: elevation with Cz = 90
ElectrodeAngle = namedtuple("ElectrodeAngle", "label theta phi")


def _wrap_theta(theta):
    """Map azimuths into (-180, 180]."""
    theta = np.array(theta, float)
    theta[theta > 180] -= 360
    theta[theta <= -180] += 360
    return theta


def _angles_to_cartesian(theta, phi):
    """Convert azimuth/elevation in degrees to unit vectors."""
    theta = np.deg2rad(np.asarray(theta, float))
    phi = np.deg2rad(np.asarray(phi, float))
    return np.stack(
        [np.cos(phi) * np.cos(theta), np.cos(phi) * np.sin(theta), np.sin(phi)],
        axis=-1,
    )


def _read_table(fname, n_columns, kind, skip_header=0, comments="#"):
    """Read the first ``n_columns`` fields of each row as strings.

    Fields past ``n_columns`` are ignored, EEGLAB leaves trailing fields such
    as the channel type empty on some rows.
    """
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", "genfromtxt: Empty input file")
        try:
            table = np.genfromtxt(
                fname,
                dtype=str,
                comments=comments,
                skip_header=skip_header,
                usecols=range(n_columns),
                encoding="utf-8",
            )
        except ValueError as err:
            raise ValueError(
                f"A .{kind} location file needs at least {n_columns} columns "
                f"on every row, {fname} has shorter rows:\n{err}"
            ) from err
    if table.size == 0:
        raise ValueError(f"No channel locations found in {fname}")
    return np.atleast_2d(table)


def _log_off_sphere(labels, x, y, z):
    """Log the distance of each electrode from the unit sphere surface."""
    off = x**2 + y**2 + z**2 - 1
    for label, value in zip(labels, off):
        logger.debug(f"    {label:<8s} off sphere surface {value:22.17f}")


def _read_xyz_angles(fname):
    # label, X, Y, Z
    table = _read_table(fname, 4, "xyz", comments="//")
    labels = table[:, 0]
    x, y, z = table[:, 1:4].astype(float).T
    _log_off_sphere(labels, x, y, z)
    theta = np.rad2deg(np.arctan2(y, x))
    phi = np.rad2deg(np.arctan2(z, np.hypot(x, y)))
    return labels, theta, phi


def _read_ced_angles(fname):
    # Number, labels, theta, radius, X, Y, Z, sph_theta, sph_phi, sph_radius
    table = _read_table(fname, 9, "ced", skip_header=1)
    labels = table[:, 1]
    sph_theta, sph_phi = table[:, 7:9].astype(float).T
    # EEGLAB puts the nose at sph_theta = 0
    return labels, sph_theta + 90, sph_phi


def _read_locs_angles(fname):
    # Number, th, radius, labels
    table = _read_table(fname, 4, "locs")
    labels = table[:, 3]
    th, radius = table[:, 1:3].astype(float).T
    return labels, 90 - th, 90 - radius * 180


def _read_csd_angles(fname):
    # Label, Theta, Phi[, Radius, X, Y, Z, off sphere surface]
    table = _read_table(fname, 3, "csd", comments="//")
    labels = table[:, 0]
    theta, phi = table[:, 1:3].astype(float).T
    if logger.isEnabledFor(logging.DEBUG):
        try:
            xyz = _read_table(fname, 7, "csd", comments="//")[:, 4:7]
        except ValueError:
            logger.debug("    No X, Y, Z columns, skipping the sphere surface check")
        else:
            _log_off_sphere(labels, *xyz.astype(float).T)
    return labels, theta, phi


_LOCATION_READERS = {
    "xyz": _read_xyz_angles,
    "ced": _read_ced_angles,
    "locs": _read_locs_angles,
    "csd": _read_csd_angles,
}
_SUFFIX_ALIASES = {"loc": "locs"}


def _get_location_kind(fname):
    suffix = Path(fname).suffix.lower().lstrip(".")
    kind = _SUFFIX_ALIASES.get(suffix, suffix)
    if kind not in _LOCATION_READERS:
        raise UnsupportedFormatError(
            f"The channel location file {fname} is not supported (got "
            f"extension {suffix!r}, need one of .xyz, .ced, .locs, .loc or "
            ".csd). Re-export the locations in a supported format, e.g. save "
            "them as .ced from the EEGLAB channel editor, and pass that file."
        )
    return kind


@verbose
def read_locations(fname, *, verbose=None):
    """Read electrode locations as spherical angles.

    Parameters
    ----------
    fname : path-like
        The location file. The extension selects the format:

        ``.xyz``
            Label and Cartesian X, Y, Z per line, with x pointing to T8,
            y to Fpz and z to Cz. Files in the EEGLAB frame (x to the nose)
            must be rotated first, otherwise Fpz ends up at theta = 0.
        ``.ced``
            EEGLAB channel editor export, with a header line.
        ``.locs`` / ``.loc``
            EEGLAB polar coordinates (number, angle, radius, label).
        ``.csd``
            CSD toolbox export (label, theta, phi, ...).

        Lines starting with ``//`` are skipped in ``.xyz`` and ``.csd`` files.
    %(verbose)s

    Returns
    -------
    locations : list of ElectrodeAngle
        The label, azimuth ``theta`` and elevation ``phi`` (degrees) of each
        electrode in file order. ``theta`` is 90 at Fpz, 180 at T7 and 0 at
        T8, and lies in (-180, 180]. ``phi`` is 90 at the vertex.

    See Also
    --------
    write_locations
    make_csd_montage
    """
    kind = _get_location_kind(fname)
    fname = _check_fname(fname, overwrite="read", must_exist=True, name="locations")
    logger.info(f"Reading {kind} channel locations from {fname}")
    labels, theta, phi = _LOCATION_READERS[kind](fname)
    theta = _wrap_theta(theta)
    phi = np.asarray(phi, float)
    for label, th, ph in zip(labels, theta, phi):
        if not np.isfinite(th) or not -90 <= ph <= 90:
            raise ValueError(
                f"Invalid angles for channel {label} in {fname}: "
                f"theta={th}, phi={ph} (phi must be between -90 and 90)"
            )
    locations = [
        ElectrodeAngle(str(label), float(th), float(ph))
        for label, th, ph in zip(labels, theta, phi)
    ]
    logger.info(f"    {len(locations)} location{_pl(locations)} read")
    return locations


@verbose
def write_locations(fname, locations, *, overwrite=False, verbose=None):
    """Write electrode locations to a CSD toolbox ``.csd`` file.

    Parameters
    ----------
    fname : path-like
        The destination, must end with ``.csd``.
    locations : instance of Montage | list of ElectrodeAngle
        The locations to write.
    %(overwrite)s
    %(verbose)s

    See Also
    --------
    read_locations
    """
    if Path(fname).suffix.lower() != ".csd":
        raise UnsupportedFormatError(
            f"Channel locations can only be written as .csd, got {fname}"
        )
    fname = _check_fname(fname, overwrite=overwrite, name="fname")
    locations = [ElectrodeAngle(*loc) for loc in locations]
    theta = np.array([loc.theta for loc in locations], float)
    phi = np.array([loc.phi for loc in locations], float)
    pos = _angles_to_cartesian(theta, phi)
    off = np.sum(pos**2, axis=1) - 1
    with open(fname, "w", encoding="utf-8") as fid:
        fid.write("// Sphere coordinates [degrees]       Cartesian coordinates\n")
        fid.write(
            "// Label      Theta       Phi  Radius          X          Y"
            "          Z  off sphere surface\n"
        )
        for loc, (x, y, z), o in zip(locations, pos, off):
            fid.write(
                f"{loc.label:<8s} {loc.theta:9.3f} {loc.phi:9.3f} {1.0:7.3f} "
                f"{x:10.5f} {y:10.5f} {z:10.5f} {o:12.8f}\n"
            )
    logger.info(f"Wrote {len(locations)} location{_pl(locations)} to {fname}")


def get_default_locations_path():
    """Get the location file used when none is given.

    Returns
    -------
    fname : Path
        The value of the ``EEGCSD_LOCATIONS`` configuration if it is set,
        otherwise the bundled idealized 10-10 table.
    """
    fname = get_config("EEGCSD_LOCATIONS", None)
    if fname is None:
        fname = _resource_path(
            "eegcsd.channels", "data", "locations", DEFAULT_LOCATIONS_FNAME
        )
    return Path(str(fname))
