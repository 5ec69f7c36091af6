"""Utility functions shared across eegcsd."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from .check import (
    _check_fname,
    _check_head_radius,
    _check_if_nan,
    _check_option,
    _check_range,
    _ensure_int,
    _validate_type,
)
from .config import get_config, get_config_path, set_config
from .docs import fill_doc
from ._logging import (
    catch_logging,
    logger,
    set_log_file,
    set_log_level,
    use_log_level,
    verbose,
    warn,
)
from .misc import _pl, _resource_path
