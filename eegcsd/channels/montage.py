"""Montage class and the matching of recording channels to locations."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from collections import OrderedDict

import numpy as np

from ..errors import MontageLengthMismatchError, UnmatchedChannelError
from ..utils import _pl, _validate_type, logger, verbose
from .locations import (
    ElectrodeAngle,
    _angles_to_cartesian,
    _wrap_theta,
    read_locations,
)


class Montage:
    """Electrode positions on the unit sphere, in recording channel order.

    Parameters
    ----------
    ch_names : list of str
        The channel labels.
    theta : array-like, shape (n_channels,)
        Azimuth of each electrode in degrees (Fpz = 90, T7 = 180, T8 = 0).
        Values are wrapped into (-180, 180].
    phi : array-like, shape (n_channels,)
        Elevation of each electrode in degrees (Cz = 90).

    Attributes
    ----------
    ch_names : tuple of str
        The channel labels.
    theta : ndarray, shape (n_channels,)
        Read-only azimuths in degrees.
    phi : ndarray, shape (n_channels,)
        Read-only elevations in degrees.

    See Also
    --------
    make_csd_montage

    Notes
    -----
    A montage is immutable. Build a new one from the locations when the
    channel set changes.
    """

    def __init__(self, ch_names, theta, phi):
        _validate_type(ch_names, (list, tuple), "ch_names")
        ch_names = tuple(str(ch_name) for ch_name in ch_names)
        theta = _wrap_theta(theta).ravel()
        phi = np.array(phi, float).ravel()
        if not len(ch_names) == len(theta) == len(phi):
            raise ValueError(
                f"ch_names, theta and phi must have the same length, got "
                f"{len(ch_names)}, {len(theta)} and {len(phi)}"
            )
        seen = OrderedDict()
        for ch_name in ch_names:
            seen.setdefault(ch_name.lower(), []).append(ch_name)
        dups = [names for names in seen.values() if len(names) > 1]
        if dups:
            raise ValueError(f"Duplicate channel labels in montage: {dups}")
        if not np.isfinite(theta).all():
            raise ValueError("All azimuths (theta) must be finite")
        bad = ~((phi >= -90) & (phi <= 90))
        if bad.any():
            bad = [ch_names[idx] for idx in np.where(bad)[0]]
            raise ValueError(
                f"Elevations (phi) must be between -90 and 90, got invalid "
                f"values for {bad}"
            )
        theta.flags.writeable = False
        phi.flags.writeable = False
        self._ch_names = ch_names
        self._theta = theta
        self._phi = phi

    @property
    def ch_names(self):
        """The channel labels."""
        return self._ch_names

    @property
    def theta(self):
        """Azimuths in degrees."""
        return self._theta

    @property
    def phi(self):
        """Elevations in degrees."""
        return self._phi

    def get_positions(self):
        """Get the electrode positions on the unit sphere.

        Returns
        -------
        pos : ndarray, shape (n_channels, 3)
            Cartesian coordinates ``(cos φ cos θ, cos φ sin θ, sin φ)``.
            The x axis points to T8, y to Fpz and z to Cz.
        """
        return _angles_to_cartesian(self._theta, self._phi)

    def get_cos_angles(self):
        """Get the cosines of the angles between all electrode pairs.

        Returns
        -------
        cosang : ndarray, shape (n_channels, n_channels)
            Symmetric matrix of great-circle separation cosines, clipped to
            [-1, 1], with ones on the diagonal.
        """
        theta = np.deg2rad(self._theta)
        phi = np.deg2rad(self._phi)
        sin_phi, cos_phi = np.sin(phi), np.cos(phi)
        cosang = np.outer(sin_phi, sin_phi) + np.outer(cos_phi, cos_phi) * np.cos(
            theta[:, np.newaxis] - theta[np.newaxis]
        )
        cosang = (cosang + cosang.T) / 2.0
        np.clip(cosang, -1.0, 1.0, out=cosang)
        np.fill_diagonal(cosang, 1.0)
        return cosang

    def __len__(self):
        return len(self._ch_names)

    def __iter__(self):
        for idx in range(len(self)):
            yield self[idx]

    def __getitem__(self, idx):
        idx = range(len(self))[idx]
        if isinstance(idx, range):
            return [self[ii] for ii in idx]
        return ElectrodeAngle(
            self._ch_names[idx], float(self._theta[idx]), float(self._phi[idx])
        )

    def __eq__(self, other):
        if not isinstance(other, Montage):
            return NotImplemented
        return (
            self._ch_names == other._ch_names
            and np.array_equal(self._theta, other._theta)
            and np.array_equal(self._phi, other._phi)
        )

    def __hash__(self):
        return hash((self._ch_names, self._theta.tobytes(), self._phi.tobytes()))

    def __repr__(self):
        n_ch = len(self)
        names = ", ".join(self._ch_names[:3])
        if n_ch > 3:
            names += ", ..."
        return f"<Montage | {n_ch} channel{_pl(n_ch)}: {names}>"


@verbose
def make_csd_montage(locations, ch_names, *, verbose=None):
    """Match recording channels to electrode locations.

    Parameters
    ----------
    %(locations)s
    %(ch_names_recording)s
    %(verbose)s

    Returns
    -------
    montage : instance of Montage
        The electrode positions, one per channel in ``ch_names`` order and
        carrying the recording's spelling of each label.

    Raises
    ------
    UnmatchedChannelError
        If a channel has no location. All such channels are listed.
    MontageLengthMismatchError
        If the matched locations are not one distinct entry per channel,
        e.g. because the location file repeats a label.

    Notes
    -----
    Labels are compared case-insensitively.
    """
    _validate_type(ch_names, (list, tuple), "ch_names")
    _validate_type(locations, ("path-like", list, tuple, Montage), "locations")
    if not isinstance(locations, list | tuple | Montage):
        locations = read_locations(locations)
    locations = [ElectrodeAngle(*loc) for loc in locations]
    ch_names = [str(ch_name) for ch_name in ch_names]
    logger.info(
        f"Matching {len(ch_names)} channel{_pl(ch_names)} to "
        f"{len(locations)} location{_pl(locations)}"
    )
    lookup = dict()
    for idx, loc in enumerate(locations):
        lookup.setdefault(str(loc.label).lower(), []).append(idx)
    missing = [ch_name for ch_name in ch_names if ch_name.lower() not in lookup]
    if missing:
        raise UnmatchedChannelError(
            f"No location found for channel {missing[0]!r}. "
            f"{len(missing)} channel{_pl(missing)} without a location: {missing}",
            missing,
        )
    matches = [lookup[ch_name.lower()] for ch_name in ch_names]
    n_distinct = len({idx for match in matches for idx in match})
    ambiguous = [ch for ch, match in zip(ch_names, matches) if len(match) > 1]
    if n_distinct != len(ch_names) or ambiguous:
        raise MontageLengthMismatchError(
            f"Found {n_distinct} distinct location{_pl(n_distinct)} for "
            f"{len(ch_names)} channel{_pl(ch_names)}"
            + (f", labels repeated in the locations: {ambiguous}" if ambiguous else "")
        )
    picks = [match[0] for match in matches]
    for ch_name, pick in zip(ch_names, picks):
        loc = locations[pick]
        logger.debug(f"    {ch_name:<8s} theta={loc.theta:9.3f} phi={loc.phi:9.3f}")
    return Montage(
        ch_names,
        [locations[pick].theta for pick in picks],
        [locations[pick].phi for pick in picks],
    )
