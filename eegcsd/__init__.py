# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

"""Spherical spline current source density for EEG."""

import lazy_loader as lazy

try:
    from importlib.metadata import version

    __version__ = version("eegcsd")
except Exception:  # not installed, e.g. running from a source checkout
    __version__ = "0.0.0"

(__getattr__, __dir__, __all__) = lazy.attach_stub(__name__, __file__)

from .utils import set_log_file, set_log_level

set_log_level(None)
set_log_file()
