# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import multiprocessing

import pytest

from eegcsd.parallel import _check_n_jobs, parallel_func


def _double(x):
    return x * 2


@pytest.mark.parametrize("n_jobs", [None, 1, 2, -1])
def test_parallel_func(n_jobs):
    """Test Parallel wrapping."""
    parallel, p_fun, got_jobs = parallel_func(_double, n_jobs, verbose="debug")
    if n_jobs in (None, 1):
        assert parallel is list
        assert p_fun is _double
        want_jobs = 1
    elif n_jobs < 0:
        want_jobs = multiprocessing.cpu_count()
    else:
        want_jobs = n_jobs
    assert got_jobs == want_jobs
    assert parallel(p_fun(x) for x in range(4)) == [0, 2, 4, 6]


def test_parallel_max_jobs():
    """Test limiting the number of jobs."""
    parallel, p_fun, n_jobs = parallel_func(_double, 4, max_jobs=1)
    assert n_jobs == 1
    assert parallel is list
    assert p_fun is _double
    _, _, n_jobs = parallel_func(_double, 4, max_jobs=2)
    assert n_jobs == 2


def test_force_serial(monkeypatch):
    """Test forcing serial execution."""
    monkeypatch.setenv("EEGCSD_FORCE_SERIAL", "true")
    assert _check_n_jobs(4) == 1
    parallel, _, n_jobs = parallel_func(_double, 4)
    assert n_jobs == 1
    assert parallel is list


def test_check_n_jobs():
    """Test n_jobs checking."""
    n_cores = multiprocessing.cpu_count()
    assert _check_n_jobs(3) == 3
    assert _check_n_jobs(-1) == n_cores
    with pytest.raises(ValueError, match="must not be less than"):
        _check_n_jobs(-n_cores - 1)
    with pytest.raises(TypeError, match="n_jobs must be an int or None"):
        _check_n_jobs(1.5)
    with pytest.raises(TypeError, match="must be an instance of int-like or None"):
        parallel_func(_double, "2")
