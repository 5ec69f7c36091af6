"""Running the per-sample CSD solves with joblib."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import logging
import multiprocessing

from joblib import Parallel, delayed

from .utils import (
    _ensure_int,
    _validate_type,
    get_config,
    logger,
    use_log_level,
    verbose,
)


@verbose
def parallel_func(func, n_jobs, prefer=None, *, max_jobs=None, verbose=None):
    """Prepare ``func`` for parallel execution.

    Parameters
    ----------
    func : callable
        The function to run on each chunk.
    %(n_jobs)s
    prefer : str | None
        ``"processes"`` or ``"threads"``, see :class:`joblib.Parallel`.
    max_jobs : int | None
        Upper bound on the returned number of jobs, typically the number of
        chunks there are to process.
    %(verbose)s

    Returns
    -------
    parallel : instance of joblib.Parallel | list
        Call it on an iterable of ``my_func(...)`` calls to get the list of
        results. It is :class:`list` when running serially.
    my_func : callable
        ``func`` when running serially, else a delayed version of it.
    n_jobs : int
        The number of jobs actually used, at least 1.
    """
    _validate_type(n_jobs, ("int-like", None), "n_jobs")
    n_jobs = 1 if n_jobs is None else _check_n_jobs(n_jobs)
    if max_jobs is not None:
        n_jobs = min(n_jobs, max(_ensure_int(max_jobs, "max_jobs"), 1))
    if n_jobs == 1:
        return list, func, 1

    parallel = Parallel(
        n_jobs=n_jobs,
        prefer=prefer,
        verbose=5 if logger.level <= logging.INFO else 0,
    )
    logger.debug(f"Running {func.__name__} in {n_jobs} parallel jobs")

    # workers start with the default log level, pass the caller's along
    def run_with_level(*args, verbose=logger.level, **kwargs):
        with use_log_level(verbose):
            return func(*args, **kwargs)

    return parallel, delayed(run_with_level), n_jobs


def _check_n_jobs(n_jobs):
    """Turn a joblib style ``n_jobs`` into a positive number of jobs."""
    n_jobs = _ensure_int(n_jobs, "n_jobs", must_be="an int or None")
    if get_config("EEGCSD_FORCE_SERIAL", "").lower() in ("true", "1"):
        if n_jobs != 1:
            logger.info("EEGCSD_FORCE_SERIAL is set, running serially")
        return 1
    if n_jobs > 0:
        return n_jobs
    # -1 is all cores, -2 all but one, and so on
    n_cores = multiprocessing.cpu_count()
    if n_cores + n_jobs + 1 <= 0:
        raise ValueError(
            f"n_jobs={n_jobs} asks for fewer than one of the {n_cores} CPU "
            "cores, it must not be less than the negated number of cores"
        )
    return n_cores + n_jobs + 1
