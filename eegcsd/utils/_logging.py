"""Package logger, the verbose decorator and warning helpers."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import inspect
import logging
import os.path as op
import re
import sys
import warnings
from collections.abc import Callable
from io import StringIO
from typing import Any, TypeVar

from decorator import FunctionMaker

from .docs import fill_doc

logger = logging.getLogger("eegcsd")
logger.propagate = False

_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# frames of functions generated by the verbose decorator
_GENERATED_CODE = re.compile(r"^<decorator-gen-\d+>$")
_PACKAGE_DIR = op.dirname(op.dirname(op.abspath(__file__)))

_FuncT = TypeVar("_FuncT", bound=Callable[..., Any])

_VERBOSE_BODY = """\
def %(name)s(%(signature)s):
    try:
        level = verbose
    except (NameError, UnboundLocalError):
        raise RuntimeError(
            "%%s is decorated with @verbose but does not accept a verbose "
            "argument" %% (_wrapped_.__qualname__,)
        ) from None
    if level is None:
        return _wrapped_(%(shortsignature)s)
    with _use_log_level_(level):
        return _wrapped_(%(shortsignature)s)"""


def verbose(function: _FuncT) -> _FuncT:
    """Let a function override the log level for the duration of a call.

    The decorated function must accept a ``verbose`` keyword argument. When it
    is not ``None``, the package logger runs at that level until the call
    returns. The docstring of ``function`` is filled from the shared
    parameter descriptions as :func:`fill_doc` does.

    Parameters
    ----------
    function : callable
        The function to decorate.

    Returns
    -------
    dec : callable
        The decorated function, with the signature of ``function``.

    See Also
    --------
    set_log_level
    use_log_level

    Examples
    --------
    Print the progress of a single CSD transform only::

        >>> import eegcsd
        >>> eegcsd.set_log_level("WARNING")  # doctest: +SKIP
        >>> eegcsd.compute_current_source_density(rec, verbose=True)  # doctest: +SKIP
        Using default electrode locations: ...standard_1010.csd
        Converting channel locations into CSD locations
        Computing spline matrices for 32 electrodes (m=4)
        Running CSD transformation on 1000 samples...
        Completed
    """  # noqa: E501
    fill_doc(function)
    evaldict = dict(_use_log_level_=use_log_level, _wrapped_=function)
    maker = FunctionMaker(function)
    return maker.make(
        _VERBOSE_BODY,
        evaldict,
        addsource=True,
        __wrapped__=function,
        __qualname__=function.__qualname__,
        __globals__=function.__globals__,
    )


@fill_doc
class use_log_level:
    """Temporarily change the level of the package logger.

    Parameters
    ----------
    %(verbose)s

    Examples
    --------
    >>> from eegcsd.utils import logger, use_log_level
    >>> with use_log_level("WARNING"):
    ...     logger.info("not printed")
    >>> with use_log_level(True):
    ...     logger.info("printed")
    printed
    """

    def __init__(self, verbose=None):
        self._level = verbose

    def __enter__(self):  # noqa: D105
        self._old_level = set_log_level(self._level, return_old_level=True)
        return self

    def __exit__(self, *args):  # noqa: D105
        set_log_level(self._old_level)


def set_log_level(verbose=None, return_old_level=False):
    """Set the level of the package logger.

    Parameters
    ----------
    verbose : bool | str | int | None
        ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or
        ``"CRITICAL"`` (case-insensitive), or the matching :mod:`logging`
        constant. ``True`` means ``"INFO"`` and ``False`` means
        ``"WARNING"``. ``None`` reads ``EEGCSD_LOGGING_LEVEL`` from the
        configuration and falls back to ``"INFO"``.
    return_old_level : bool
        If True, return the level that was active before the call.

    Returns
    -------
    old_level : int
        The previous level, only when ``return_old_level`` is True.
    """
    old_level = logger.level
    logger.setLevel(_parse_verbose(verbose))
    return old_level if return_old_level else None


def _parse_verbose(verbose):
    from .check import _check_option, _validate_type
    from .config import get_config

    _validate_type(verbose, (bool, str, int, None), "verbose")
    if verbose is None:
        verbose = get_config("EEGCSD_LOGGING_LEVEL", "INFO")
    if isinstance(verbose, bool):
        return logging.INFO if verbose else logging.WARNING
    if isinstance(verbose, str):
        verbose = _check_option("verbose", verbose.upper(), _LOG_LEVELS, "(a str)")
        return _LOG_LEVELS[verbose]
    return verbose


class _StdOutHandler(logging.StreamHandler):
    """Stream handler that writes to the current ``sys.stdout``.

    Test runners and doctest replace ``sys.stdout`` after import, so the
    stream is looked up on every write.
    """

    def __init__(self):
        super().__init__(sys.stdout)

    @property
    def stream(self):  # noqa: D102
        return sys.stdout

    @stream.setter
    def stream(self, value):
        pass


def set_log_file(fname=None, output_format="%(message)s", overwrite=None):
    """Send the log messages to a file or to stdout.

    Parameters
    ----------
    fname : path-like | None
        The log file. If None, messages go to stdout.
    output_format : str
        A :class:`logging.Formatter` format string, for example
        ``"%(asctime)s - %(levelname)s - %(message)s"``.
    overwrite : bool | None
        Whether to truncate an existing log file. ``None`` appends like
        ``False`` but warns that the file already exists.
    """
    _remove_handlers()
    if fname is None:
        handler = _StdOutHandler()
    else:
        if overwrite is None and op.isfile(fname):
            warnings.warn(
                f"The log file {fname} exists, new entries will be appended. "
                "Pass overwrite=False to silence this warning.",
                RuntimeWarning,
                stacklevel=2,
            )
        handler = logging.FileHandler(fname, mode="w" if overwrite else "a")
    handler.setFormatter(logging.Formatter(output_format))
    logger.addHandler(handler)


def _remove_handlers():
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class catch_logging:
    """Collect the log messages of a block in a string buffer.

    Parameters
    ----------
    verbose : bool | str | int | None
        The level used inside the block. None keeps the current level.

    Examples
    --------
    >>> from eegcsd.utils import catch_logging, logger
    >>> with catch_logging(verbose=True) as log:
    ...     logger.info("hello")
    >>> log.getvalue()
    'hello\\n'
    """

    def __init__(self, verbose=None):
        self.verbose = verbose

    def __enter__(self):  # noqa: D105
        self._buffer = StringIO()
        _remove_handlers()
        handler = logging.StreamHandler(self._buffer)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        self._old_level = None
        if self.verbose is not None:
            self._old_level = set_log_level(self.verbose, return_old_level=True)
        return self._buffer

    def __exit__(self, *args):  # noqa: D105
        if self._old_level is not None:
            set_log_level(self._old_level)
        set_log_file(None)


def _caller_location():
    """Return the first file and line outside the package (tests count)."""
    fname, lineno = "unknown", 0
    frame = inspect.currentframe().f_back
    try:
        while frame is not None:
            fname, lineno = frame.f_code.co_filename, frame.f_lineno
            internal = fname.startswith(_PACKAGE_DIR) or _GENERATED_CODE.match(fname)
            if not internal or op.basename(op.dirname(fname)) == "tests":
                break
            frame = frame.f_back
    finally:
        del frame
    return fname, lineno


def warn(message, category=RuntimeWarning):
    """Warn at the code that called into the package.

    The warning is attributed to the first stack frame outside ``eegcsd``,
    so that users see their own line rather than an internal helper. When
    the log goes to a file, the message is logged as well.

    Parameters
    ----------
    message : str
        The warning message.
    category : type
        The warning class.
    """
    if logger.level <= logging.WARNING:
        fname, lineno = _caller_location()
        warnings.warn_explicit(message, category, fname, lineno, module="eegcsd")
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        logger.warning(message)
