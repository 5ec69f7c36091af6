# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import os
from unittest import mock

import numpy as np
import pytest

from eegcsd.channels import Montage
from eegcsd.recording import RecordingArray

# a 10-20 subset of the bundled 10-10 table
ch_names_1020 = [
    "Fp1",
    "Fp2",
    "F7",
    "F3",
    "Fz",
    "F4",
    "F8",
    "T7",
    "C3",
    "Cz",
    "C4",
    "T8",
    "P7",
    "P3",
    "Pz",
    "P4",
    "P8",
    "O1",
    "O2",
]


def pytest_configure(config: pytest.Config):
    """Configure pytest options."""
    for fixture in ("protect_config",):
        config.addinivalue_line("usefixtures", fixture)

    if os.getenv("EEGCSD_IGNORE_WARNINGS_IN_TESTS", "") not in ("true", "1"):
        first_kind = "error"
    else:
        first_kind = "always"
    warning_lines = f"    {first_kind}::"
    warning_lines += r"""
    # joblib
    ignore:process .* is multi-threaded, use of fork/exec.*:DeprecationWarning
    ignore:ast\.Num is deprecated.*:DeprecationWarning
    """
    for warning_line in warning_lines.split("\n"):
        warning_line = warning_line.strip()
        if warning_line and not warning_line.startswith("#"):
            config.addinivalue_line("filterwarnings", warning_line)


@pytest.fixture(scope="session")
def protect_config(tmp_path_factory):
    """Protect ~/.eegcsd and the user's eegcsd environment variables."""
    temp = str(tmp_path_factory.mktemp("home"))
    env = {
        key: value for key, value in os.environ.items() if not key.startswith("EEGCSD_")
    }
    env["_EEGCSD_FAKE_HOME_DIR"] = temp
    with mock.patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture()
def fake_home(tmp_path, monkeypatch):
    """Point the configuration at an empty home directory."""
    monkeypatch.setenv("_EEGCSD_FAKE_HOME_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture()
def four_electrode_montage():
    """Return the vertex and three equator electrodes."""
    return Montage(["Cz", "E1", "E2", "E3"], [0.0, 90.0, 180.0, -90.0], [90, 0, 0, 0])


@pytest.fixture()
def recording_1020():
    """Return a small random recording on 10-20 positions."""
    rng = np.random.default_rng(0)
    data = rng.standard_normal((len(ch_names_1020), 50))
    return RecordingArray(data, ch_names_1020)
