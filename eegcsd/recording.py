"""A minimal in-memory EEG recording."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from copy import deepcopy

import numpy as np

from .utils import _validate_type, fill_doc, logger, verbose


@fill_doc
class RecordingArray:
    """EEG data held in memory together with its channel labels.

    Parameters
    ----------
    data : array-like, shape (n_channels, n_samples) | (n_channels, n_samples, n_epochs)
        The channel potentials. Epoched data stack the epochs along the
        last axis.
    %(ch_names_recording)s
    ref : str | None
        The reference the data are expressed against, e.g. ``"average"``.
        Set to ``"csd-transform"`` once the data hold current source density
        values.

    Attributes
    ----------
    data : ndarray
        The data array.
    ch_names : list of str
        The channel labels.
    ref : str | None
        The reference tag.
    """  # noqa: E501

    def __init__(self, data, ch_names, ref=None):
        _validate_type(ch_names, (list, tuple), "ch_names")
        _validate_type(ref, (str, None), "ref")
        ch_names = [str(ch_name) for ch_name in ch_names]
        data = np.asarray(data)
        if data.dtype.kind not in "iuf":
            raise TypeError(f"data must be a real valued array, got dtype {data.dtype}")
        if data.ndim not in (2, 3):
            raise ValueError(
                "data must have shape (n_channels, n_samples) or "
                f"(n_channels, n_samples, n_epochs), got {data.shape}"
            )
        if data.shape[0] != len(ch_names):
            raise ValueError(
                f"The number of channels in data ({data.shape[0]}) does not "
                f"match the number of channel names ({len(ch_names)})"
            )
        lower = [ch_name.lower() for ch_name in ch_names]
        dups = sorted(
            {ch_name for ch_name in ch_names if lower.count(ch_name.lower()) > 1}
        )
        if dups:
            raise ValueError(f"Duplicate channel names found: {dups}")
        self.data = data.astype(np.float64)
        self.ch_names = ch_names
        self.ref = ref

    @property
    def n_channels(self):
        """The number of channels."""
        return len(self.ch_names)

    @property
    def n_samples(self):
        """The number of samples per epoch."""
        return self.data.shape[1]

    @property
    def n_epochs(self):
        """The number of epochs (1 for continuous data)."""
        return self.data.shape[2] if self.data.ndim == 3 else 1

    def copy(self):
        """Return a copy of the recording.

        Returns
        -------
        rec : instance of RecordingArray
            A copy of the recording.
        """
        return deepcopy(self)

    def __repr__(self):  # noqa: D105
        ref = "none" if self.ref is None else self.ref
        return (
            f"<RecordingArray | {self.n_channels} channels x "
            f"{self.n_samples} samples x {self.n_epochs} epoch"
            f"{'' if self.n_epochs == 1 else 's'}, ref: {ref}>"
        )


@verbose
def _check_recording(inst, *, verbose=None):
    """Check that an object looks like a recording and return its data."""
    for attr in ("ch_names", "data", "ref"):
        if not hasattr(inst, attr):
            raise TypeError(
                "inst must expose ch_names, data and ref attributes, "
                f"got {type(inst)} without {attr!r}"
            )
    data = np.asarray(inst.data)
    if data.ndim not in (2, 3) or data.shape[0] != len(inst.ch_names):
        raise ValueError(
            f"Recording data of shape {data.shape} does not match its "
            f"{len(inst.ch_names)} channels"
        )
    logger.debug(
        f"Recording with {data.shape[0]} channels and data shape {data.shape}"
    )
    return data
