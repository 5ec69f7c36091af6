"""Exceptions raised by the CSD pipeline."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import numpy as np


class UnsupportedFormatError(ValueError):
    """Exception raised for channel location files of an unknown kind."""


class UnmatchedChannelError(ValueError):
    """Exception raised when recording channels have no location.

    Parameters
    ----------
    msg : str
        The error message.
    ch_names : list of str
        The recording channels without a location entry.
    """

    def __init__(self, msg, ch_names=()):
        super().__init__(msg)
        self.ch_names = list(ch_names)


class MontageLengthMismatchError(ValueError):
    """Exception raised when locations do not map one-to-one onto channels."""


class InsufficientElectrodesError(ValueError):
    """Exception raised when too few electrodes are available for a spline."""


class SingularSystemError(np.linalg.LinAlgError):
    """Exception raised when the spline system cannot be solved reliably.

    Parameters
    ----------
    msg : str
        The error message.
    cond : float
        The condition number estimate of the augmented spline matrix.
    """

    def __init__(self, msg, cond=np.inf):
        super().__init__(msg)
        self.cond = cond


class AlreadyTransformedError(ValueError):
    """Exception raised when CSD is applied to CSD-transformed data."""
