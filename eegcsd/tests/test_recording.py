# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from eegcsd import RecordingArray
from eegcsd.recording import _check_recording


def test_recording_array():
    """Test the in-memory recording container."""
    data = np.arange(12).reshape(3, 4)
    rec = RecordingArray(data, ("Fz", "Cz", "Pz"), ref="average")
    assert rec.data.dtype == np.float64
    assert rec.ch_names == ["Fz", "Cz", "Pz"]
    assert (rec.n_channels, rec.n_samples, rec.n_epochs) == (3, 4, 1)
    assert repr(rec) == (
        "<RecordingArray | 3 channels x 4 samples x 1 epoch, ref: average>"
    )
    rec2 = rec.copy()
    rec2.data[0] = -1
    rec2.ref = None
    assert_array_equal(rec.data, data)
    assert rec.ref == "average"
    assert "ref: none" in repr(rec2)
    epochs = RecordingArray(np.zeros((3, 4, 2)), ["Fz", "Cz", "Pz"])
    assert epochs.n_epochs == 2
    assert "2 epochs" in repr(epochs)
    assert_array_equal(_check_recording(epochs), np.zeros((3, 4, 2)))


def test_recording_array_errors():
    """Test RecordingArray argument checks."""
    with pytest.raises(ValueError, match="does not match the number of channel"):
        RecordingArray(np.zeros((3, 4)), ["Fz", "Cz"])
    with pytest.raises(ValueError, match="must have shape"):
        RecordingArray(np.zeros(3), ["Fz", "Cz", "Pz"])
    with pytest.raises(ValueError, match=r"Duplicate channel names.*'CZ'"):
        RecordingArray(np.zeros((3, 4)), ["Fz", "Cz", "CZ"])
    with pytest.raises(TypeError, match="real valued"):
        RecordingArray(np.zeros((2, 4), complex), ["Fz", "Cz"])
    with pytest.raises(TypeError, match="ch_names must be an instance of"):
        RecordingArray(np.zeros((2, 4)), "Fz")
    with pytest.raises(TypeError, match="ref must be an instance of"):
        RecordingArray(np.zeros((2, 4)), ["Fz", "Cz"], ref=1)
