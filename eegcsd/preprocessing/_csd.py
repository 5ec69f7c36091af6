# Copyright 2003-2010 Jürgen Kayser <rjk23@columbia.edu>
#
# The original CSD Toolbox can be found at
# http://psychophysiology.cpmc.columbia.edu/Software/CSDtoolbox/

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from copy import deepcopy

import numpy as np
from scipy.linalg import lu_factor, lu_solve

from ..channels.interpolation import _check_stiffness, compute_spline_matrices
from ..channels.locations import get_default_locations_path
from ..channels.montage import make_csd_montage
from ..defaults import CSD_REF, HEAD_RADIUS_DEFAULT, LAMBDA2_DEFAULT, M_DEFAULT
from ..errors import AlreadyTransformedError, SingularSystemError
from ..parallel import parallel_func
from ..recording import _check_recording
from ..utils import (
    _check_head_radius,
    _check_if_nan,
    _pl,
    _validate_type,
    logger,
    verbose,
)


def _check_csd_params(lambda2, head_radius):
    _validate_type(lambda2, "numeric", "lambda2")
    if not 0 <= lambda2 < 1:
        raise ValueError(f"lambda2 must be between 0 and 1, got {lambda2}")
    _validate_type(head_radius, "numeric", "head_radius")
    if not head_radius > 0:
        raise ValueError(f"head_radius must be greater than 0, got {head_radius}")
    _check_head_radius(head_radius)
    return float(lambda2), float(head_radius)


def _prepare_G(G, lambda2):
    """Regularize G and add the row and column of the sum-to-zero constraint."""
    n_channels = len(G)
    A = np.zeros((n_channels + 1, n_channels + 1))
    A[:n_channels, :n_channels] = G + lambda2 * np.eye(n_channels)
    A[:n_channels, n_channels] = 1.0
    A[n_channels, :n_channels] = 1.0
    cond = np.linalg.cond(A)
    logger.debug(f"    Condition number of the spline system: {cond:g}")
    # same tolerance as np.linalg.matrix_rank
    if not np.isfinite(cond) or cond * len(A) * np.finfo(float).eps >= 1:
        raise SingularSystemError(
            f"The spline system cannot be solved reliably (condition number "
            f"{cond:g}). Check the locations for electrodes sharing a position "
            f"or increase lambda2 (got {lambda2:g}).",
            cond=cond,
        )
    return lu_factor(A)


def _compute_csd_chunk(lu_piv, H, data):
    """Solve the spline coefficients of some samples and apply H."""
    n_channels = len(H)
    rhs = np.concatenate([data, np.zeros((1, data.shape[1]))], axis=0)
    # the last row holds the Lagrange multiplier
    coeffs = lu_solve(lu_piv, rhs)[:n_channels]
    return H @ coeffs


def _apply_csd(data, G, H, lambda2, head_radius, n_jobs):
    lu_piv = _prepare_G(G, lambda2)
    shape = data.shape
    data = data.reshape(shape[0], -1)
    parallel, p_fun, n_jobs = parallel_func(
        _compute_csd_chunk, n_jobs, max_jobs=data.shape[1]
    )
    csd = parallel(
        p_fun(lu_piv, H, chunk) for chunk in np.array_split(data, n_jobs, axis=1)
    )
    csd = np.concatenate(csd, axis=1) / head_radius**2
    return csd.reshape(shape)


@verbose
def apply_csd(
    data,
    G,
    H,
    lambda2=LAMBDA2_DEFAULT,
    head_radius=HEAD_RADIUS_DEFAULT,
    n_jobs=None,
    *,
    verbose=None,
):
    """Apply the spherical spline surface Laplacian to potentials.

    Parameters
    ----------
    data : array-like, shape (n_channels, n_samples) | (n_channels, n_samples, n_epochs)
        The potentials, channels in montage order.
    G : ndarray, shape (n_channels, n_channels)
        The spline interpolation kernel.
    H : ndarray, shape (n_channels, n_channels)
        The surface Laplacian kernel.
    %(lambda2_csd)s
    %(head_radius_csd)s
    %(n_jobs)s
    %(verbose)s

    Returns
    -------
    csd : ndarray
        The current source density, same shape as ``data``.

    See Also
    --------
    compute_current_source_density
    eegcsd.channels.compute_spline_matrices

    Notes
    -----
    The spline coefficients of every sample are constrained to sum to zero,
    so the output does not depend on the reference of ``data``. The
    augmented system is factorized once and reused for all samples.
    """  # noqa: E501
    data = np.asarray(data, dtype=np.float64)
    G = np.asarray(G, dtype=np.float64)
    H = np.asarray(H, dtype=np.float64)
    if G.ndim != 2 or G.shape[0] != G.shape[1] or G.shape != H.shape:
        raise ValueError(
            f"G and H must be square matrices of the same shape, got {G.shape} "
            f"and {H.shape}"
        )
    if data.ndim not in (2, 3) or data.shape[0] != len(G):
        raise ValueError(
            f"data must have shape ({len(G)}, n_samples) or ({len(G)}, "
            f"n_samples, n_epochs), got {data.shape}"
        )
    _check_if_nan(data)
    lambda2, head_radius = _check_csd_params(lambda2, head_radius)
    return _apply_csd(data, G, H, lambda2, head_radius, n_jobs)


@verbose
def compute_current_source_density(
    inst,
    locations=None,
    m=M_DEFAULT,
    lambda2=LAMBDA2_DEFAULT,
    head_radius=HEAD_RADIUS_DEFAULT,
    copy=False,
    n_jobs=None,
    *,
    verbose=None,
):
    """Get the current source density (CSD) transformation.

    Transformation based on the spherical spline surface Laplacian of
    Perrin et al. [1]_ as implemented in the CSD toolbox [2]_.

    This function can be used to re-reference the signal using a Laplacian
    (LAP) "reference-free" transformation.

    Parameters
    ----------
    inst : instance of RecordingArray
        The data to be transformed. Any object exposing ``ch_names``,
        ``data`` and a writable ``ref`` attribute is accepted.
    %(locations_csd)s
    %(m_csd)s
    %(lambda2_csd)s
    %(head_radius_csd)s
    %(copy_csd)s
    %(n_jobs)s
    %(verbose)s

    Returns
    -------
    inst_csd : instance of RecordingArray
        The transformed data, with ``ref`` set to ``"csd-transform"``.

    Raises
    ------
    AlreadyTransformedError
        If ``inst.ref`` is already ``"csd-transform"``.

    Notes
    -----
    The transform is not invertible. Keep a copy of the potentials if they
    are needed later.

    References
    ----------
    .. [1] Perrin, F., Pernier, J., Bertrand, O. and Echallier, JF. (1989).
           Spherical splines for scalp potential and current density mapping.
           Electroencephalography Clinical Neurophysiology, Feb; 72(2):184-7.
    .. [2] Kayser, J. and Tenke, C. E. (2006). Principal components analysis
           of Laplacian waveforms as a generic method for identifying ERP
           generator patterns: I. Evaluation with auditory oddball tasks.
           Clinical Neurophysiology, 117(2), 348-368.
    """
    if getattr(inst, "ref", None) == CSD_REF:
        raise AlreadyTransformedError("CSD already applied, should not be reapplied")
    data = _check_recording(inst)
    _check_if_nan(data)
    _validate_type(copy, bool, "copy")
    m = _check_stiffness(m)
    lambda2, head_radius = _check_csd_params(lambda2, head_radius)

    if locations is None:
        locations = get_default_locations_path()
        logger.info(f"Using default electrode locations: {locations}")
    logger.info("Converting channel locations into CSD locations")
    montage = make_csd_montage(locations, list(inst.ch_names))
    G, H = compute_spline_matrices(montage, m)

    n_samples = data.shape[1]
    msg = f"Running CSD transformation on {n_samples} sample{_pl(n_samples)}"
    if data.ndim == 3:
        msg += f" x {data.shape[2]} epoch{_pl(data.shape[2])}"
    logger.info(msg + "...")
    csd = _apply_csd(np.asarray(data, np.float64), G, H, lambda2, head_radius, n_jobs)

    inst = deepcopy(inst) if copy else inst
    inst.data = csd
    inst.ref = CSD_REF
    logger.info("Completed")
    return inst
