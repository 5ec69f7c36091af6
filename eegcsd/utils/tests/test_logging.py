# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import logging
import os

import pytest

from eegcsd.utils import (
    catch_logging,
    logger,
    set_log_file,
    set_log_level,
    use_log_level,
    verbose,
    warn,
)


@verbose
def _say(msg, *, verbose=None):
    logger.info(msg)
    logger.debug("debug: " + msg)


def test_verbose_decorator():
    """Test the verbose decorator."""
    with use_log_level("warning"):
        with catch_logging() as log:
            _say("hidden")
            _say("shown", verbose=True)
            _say("everything", verbose="debug")
    log = log.getvalue()
    assert "hidden" not in log
    assert "shown" in log
    assert "debug: shown" not in log
    assert "debug: everything" in log
    assert _say.__wrapped__.__name__ == "_say"

    @verbose
    def no_verbose(x):
        return x

    with pytest.raises(RuntimeError, match="does not accept a verbose"):
        no_verbose(1)


def test_use_log_level():
    """Test the log level context manager."""
    old = set_log_level("info", return_old_level=True)
    try:
        with use_log_level("error"):
            assert logger.level == logging.ERROR
            with use_log_level(False):
                assert logger.level == logging.WARNING
        assert logger.level == logging.INFO
        with pytest.raises(ValueError, match="Invalid value for the 'verbose'"):
            set_log_level("chatty")
        with pytest.raises(TypeError, match="verbose must be an instance of"):
            set_log_level(1.5)
    finally:
        set_log_level(old)


def test_log_level_config(monkeypatch):
    """Test the configured default log level."""
    old = set_log_level("info", return_old_level=True)
    try:
        monkeypatch.setenv("EEGCSD_LOGGING_LEVEL", "error")
        set_log_level(None)
        assert logger.level == logging.ERROR
    finally:
        set_log_level(old)


def test_set_log_file(tmp_path):
    """Test logging to a file."""
    fname = tmp_path / "test.log"
    try:
        set_log_file(fname, overwrite=True)
        with use_log_level(True):
            _say("to the file")
            with pytest.warns(RuntimeWarning, match="careful"):
                warn("careful")
        set_log_file(None)
        lines = fname.read_text().splitlines()
        assert lines == ["to the file", "careful"]
        set_log_file(fname, overwrite=False)
        with pytest.warns(RuntimeWarning, match="appended"):
            set_log_file(fname)
        with use_log_level(True):
            _say("appended")
    finally:
        set_log_file(None)
    assert fname.read_text().splitlines()[-1] == "appended"
    assert os.path.getsize(fname) > 0


def test_warn_location():
    """Test that warnings point at the calling code."""
    with pytest.warns(RuntimeWarning, match="outside") as record:
        warn("outside")
    assert record[0].filename == __file__


def test_log_to_stdout(capsys):
    """Test that the default handler follows the current stdout."""
    set_log_file(None)
    with use_log_level(True):
        logger.info("to stdout")
        logger.debug("not shown")
    out = capsys.readouterr().out
    assert "to stdout" in out
    assert "not shown" not in out


def test_catch_logging_level():
    """Test that catch_logging restores the log level."""
    old = set_log_level("warning", return_old_level=True)
    try:
        with catch_logging(verbose="debug") as log:
            _say("caught")
        assert "debug: caught" in log.getvalue()
        assert logger.level == logging.WARNING
    finally:
        set_log_level(old)
