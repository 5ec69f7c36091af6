# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from eegcsd.channels import (
    ElectrodeAngle,
    Montage,
    get_default_locations_path,
    make_csd_montage,
    read_locations,
)
from eegcsd.conftest import ch_names_1020
from eegcsd.errors import MontageLengthMismatchError, UnmatchedChannelError
from eegcsd.utils import catch_logging

locations = [
    ElectrodeAngle("Fz", 90.0, 45.0),
    ElectrodeAngle("Cz", 0.0, 90.0),
    ElectrodeAngle("Pz", -90.0, 45.0),
    ElectrodeAngle("T7", 180.0, 0.0),
    ElectrodeAngle("T8", 0.0, 0.0),
]


def test_montage(four_electrode_montage):
    """Test the Montage container."""
    montage = four_electrode_montage
    assert len(montage) == 4
    assert montage.ch_names == ("Cz", "E1", "E2", "E3")
    assert montage[1] == ElectrodeAngle("E1", 90.0, 0.0)
    assert montage[-1].label == "E3"
    assert [loc.label for loc in montage[1:3]] == ["E1", "E2"]
    assert list(montage)[0] == ElectrodeAngle("Cz", 0.0, 90.0)
    assert "4 channels: Cz, E1, E2, ..." in repr(montage)
    assert montage == Montage(montage.ch_names, montage.theta, montage.phi)
    assert montage != Montage(montage.ch_names, montage.theta + 1, montage.phi)
    with pytest.raises(ValueError, match="read-only"):
        montage.theta[0] = 1.0
    with pytest.raises(IndexError):
        montage[4]
    pos = montage.get_positions()
    assert_allclose(
        pos, [[0, 0, 1], [0, 1, 0], [-1, 0, 0], [0, -1, 0]], atol=1e-12
    )
    assert_allclose(np.linalg.norm(pos, axis=1), 1.0)
    cosang = montage.get_cos_angles()
    assert_allclose(cosang, pos @ pos.T, atol=1e-12)
    assert_array_equal(cosang, cosang.T)
    assert_array_equal(np.diag(cosang), 1.0)
    assert cosang.min() >= -1


def test_montage_errors():
    """Test Montage argument checking."""
    with pytest.raises(ValueError, match="same length"):
        Montage(["Cz", "Fz"], [0.0], [90.0, 45.0])
    with pytest.raises(ValueError, match="Duplicate channel labels"):
        Montage(["Cz", "CZ"], [0.0, 0.0], [90.0, 90.0])
    with pytest.raises(ValueError, match=r"between -90 and 90.*'Fz'"):
        Montage(["Cz", "Fz"], [0.0, 90.0], [90.0, 100.0])
    with pytest.raises(TypeError, match="ch_names must be an instance of"):
        Montage("Cz", [0.0], [90.0])
    # azimuths are wrapped
    montage = Montage(["Oz"], [270.0], [0.0])
    assert montage[0].theta == -90


def test_make_csd_montage():
    """Test matching recording channels to locations."""
    ch_names = ["t8", "Cz", "FZ"]
    montage = make_csd_montage(locations, ch_names)
    # recording order and spelling win
    assert montage.ch_names == ("t8", "Cz", "FZ")
    assert_array_equal(montage.theta, [0, 0, 90])
    assert_array_equal(montage.phi, [0, 90, 45])
    # a montage is a valid location source as well
    assert make_csd_montage(montage, ["fz", "T8"]).ch_names == ("fz", "T8")


def test_make_csd_montage_file(recording_1020):
    """Test matching against the bundled table."""
    with catch_logging() as log:
        montage = make_csd_montage(
            get_default_locations_path(), recording_1020.ch_names, verbose="debug"
        )
    log = log.getvalue()
    assert "Matching 19 channels to 91 locations" in log
    assert "Cz       theta=    0.000 phi=   90.000" in log
    assert montage.ch_names == tuple(ch_names_1020)
    locs = {loc.label: loc for loc in read_locations(get_default_locations_path())}
    for loc in montage:
        assert loc == locs[loc.label]


def test_make_csd_montage_unmatched():
    """Test that unmatched channels are named."""
    with pytest.raises(UnmatchedChannelError, match="channel 'Oz'") as exc:
        make_csd_montage(locations, ["Fz", "Oz", "Cz", "EOG"])
    assert exc.value.ch_names == ["Oz", "EOG"]
    assert "2 channels without a location" in str(exc.value)
    assert isinstance(exc.value, ValueError)


def test_make_csd_montage_mismatch():
    """Test duplicate entries on either side."""
    # two recording channels matching one location
    with pytest.raises(MontageLengthMismatchError, match="1 distinct location for"):
        make_csd_montage(locations, ["Fz", "fz"])
    # a label repeated in the locations
    dup_locations = locations + [ElectrodeAngle("cz", 10.0, 80.0)]
    with pytest.raises(MontageLengthMismatchError, match=r"repeated.*\['Cz'\]"):
        make_csd_montage(dup_locations, ["Fz", "Cz"])
    # unrelated repeated labels do not matter
    assert len(make_csd_montage(dup_locations, ["Fz", "T7"])) == 2
