"""Reading and writing the eegcsd configuration."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import json
import os
import os.path as op

from ._logging import logger, warn
from .check import _validate_type

_CONFIG_DIR = ".eegcsd"
_CONFIG_FNAME = "eegcsd.json"

_known_config_types = {
    "EEGCSD_FORCE_SERIAL": "bool, run the CSD solves serially whatever n_jobs is",
    "EEGCSD_LOCATIONS": (
        "str, channel location file used when compute_current_source_density "
        "is called without locations"
    ),
    "EEGCSD_LOGGING_LEVEL": "str or int, default level of the eegcsd logger",
}


def _home_dir():
    # tests point this at a temporary directory
    return os.environ.get("_EEGCSD_FAKE_HOME_DIR", op.expanduser("~"))


def get_config_path(home_dir=None):
    """Return the path of the configuration file.

    Parameters
    ----------
    home_dir : str | None
        The directory holding the ``.eegcsd`` folder. Defaults to the home
        directory of the user.

    Returns
    -------
    config_path : str
        ``<home_dir>/.eegcsd/eegcsd.json``. The file may not exist yet.
    """
    if home_dir is None:
        home_dir = _home_dir()
    return op.join(home_dir, _CONFIG_DIR, _CONFIG_FNAME)


def _read_config(config_path, raise_error=False):
    if not op.isfile(config_path):
        return dict()
    with open(config_path) as fid:
        try:
            return json.load(fid)
        except ValueError:
            msg = f"The configuration file {config_path} is not valid JSON"
            if raise_error:
                raise RuntimeError(msg) from None
            warn(f"{msg}, ignoring it")
            return dict()


def get_config(key=None, default=None, raise_error=False, home_dir=None, use_env=True):
    """Read a configuration value.

    Environment variables take precedence over the configuration file.

    Parameters
    ----------
    key : str | None
        The key to read. ``None`` returns all values set in the file or in
        the environment. An empty string returns the known keys with their
        descriptions.
    default : str | None
        Returned when ``key`` is not set.
    raise_error : bool
        If True, a missing key raises a KeyError instead of returning
        ``default``.
    home_dir : str | None
        The directory holding the ``.eegcsd`` folder.
    use_env : bool
        If False, only the configuration file is read.

    Returns
    -------
    value : str | dict | None
        The value of ``key``, or a dict when ``key`` is None or empty.

    See Also
    --------
    set_config
    """
    _validate_type(key, (str, None), "key")
    if key == "":
        return dict(_known_config_types)
    if use_env and key is not None and key in os.environ:
        return os.environ[key]

    config_path = get_config_path(home_dir=home_dir)
    config = _read_config(config_path)
    if key is None:
        if use_env:
            for env_key in set(config) | set(_known_config_types):
                if env_key in os.environ:
                    config[env_key] = os.environ[env_key]
        return config
    if key not in config and raise_error:
        where = "the environment or " if use_env else ""
        raise KeyError(
            f"{key} is set neither in {where}the configuration file "
            f"{config_path}. Set it with eegcsd.set_config({key!r}, value)."
        )
    return config.get(key, default)


def set_config(key, value, home_dir=None, set_env=True):
    """Store a configuration value in the configuration file.

    Parameters
    ----------
    key : str
        The key to set. Unknown keys are stored with a warning.
    value : str | path-like | None
        The value. ``None`` removes the key.
    home_dir : str | None
        The directory holding the ``.eegcsd`` folder.
    set_env : bool
        If True (default), also update :data:`os.environ` so the value takes
        effect in the running process.

    See Also
    --------
    get_config
    """
    _validate_type(key, "str", "key")
    # environment variables are strings, so values are stored as strings
    _validate_type(value, ("path-like", None), "value")
    if key not in _known_config_types:
        warn(f"Setting unknown configuration key {key!r}")

    config_path = get_config_path(home_dir=home_dir)
    config = _read_config(config_path, raise_error=True)
    if value is None:
        config.pop(key, None)
        if set_env:
            os.environ.pop(key, None)
    else:
        config[key] = value = str(value)
        if set_env:
            os.environ[key] = value

    if not op.isfile(config_path):
        logger.info(f"Creating the configuration file {config_path}")
        os.makedirs(op.dirname(config_path), exist_ok=True)
    with open(config_path, "w") as fid:
        json.dump(config, fid, sort_keys=True, indent=0)
