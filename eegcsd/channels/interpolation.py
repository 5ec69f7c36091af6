# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

from collections import namedtuple

import numpy as np
from numpy.polynomial.legendre import legval

from ..defaults import M_DEFAULT, M_RANGE
from ..errors import InsufficientElectrodesError
from ..utils import _check_range, _validate_type, logger, verbose
from .montage import Montage

# order of the truncated Legendre expansion
_N_LEGENDRE_TERMS = 7

SplineMatrices = namedtuple("SplineMatrices", "G H")


def _calc_h(cosang, stiffness=M_DEFAULT):
    """Calculate spherical spline h function between points on a sphere.

    Parameters
    ----------
    cosang : array-like | float
        cosine of angles between pairs of points on a spherical surface. This
        is equivalent to the dot product of unit vectors.
    stiffness : float
        stiffness of the spline. Also referred to as ``m``.
    """
    factors = [
        (2 * n + 1) / (n ** (stiffness - 1) * (n + 1) ** (stiffness - 1) * 4 * np.pi)
        for n in range(1, _N_LEGENDRE_TERMS + 1)
    ]
    return legval(cosang, [0] + factors)


def _calc_g(cosang, stiffness=M_DEFAULT):
    """Calculate spherical spline g function between points on a sphere.

    Parameters
    ----------
    cosang : array-like of float, shape(n_channels, n_channels)
        cosine of angles between pairs of points on a spherical surface. This
        is equivalent to the dot product of unit vectors.
    stiffness : float
        stiffness of the spline.

    Returns
    -------
    G : np.ndarray of float, shape(n_channels, n_channels)
        The G matrix.
    """
    factors = [
        (2 * n + 1) / (n**stiffness * (n + 1) ** stiffness * 4 * np.pi)
        for n in range(1, _N_LEGENDRE_TERMS + 1)
    ]
    return legval(cosang, [0] + factors)


def _check_stiffness(m):
    _validate_type(m, "numeric", "m")
    _check_range(m, *M_RANGE, "m")
    return float(m)


@verbose
def compute_spline_matrices(montage, m=M_DEFAULT, *, verbose=None):
    """Compute the spherical spline matrices of a montage.

    Parameters
    ----------
    %(montage)s
    %(m_csd)s
    %(verbose)s

    Returns
    -------
    matrices : SplineMatrices
        Named tuple ``(G, H)`` of symmetric arrays of shape
        (n_channels, n_channels). ``G`` is the spline interpolation kernel
        between electrode pairs and ``H`` the surface Laplacian kernel on the
        unit sphere.

    Notes
    -----
    Both kernels are truncated after seven Legendre terms and normalized by
    :math:`1 / 4\\pi`. ``H`` weights each term of ``G`` by the eigenvalue
    :math:`n (n + 1)` of the Laplace-Beltrami operator with the sign chosen
    so that current sources come out positive.

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
    _validate_type(montage, Montage, "montage")
    m = _check_stiffness(m)
    n_channels = len(montage)
    if n_channels < 4:
        raise InsufficientElectrodesError(
            f"At least 4 electrodes are needed for the spherical spline, "
            f"got {n_channels}"
        )
    logger.info(f"Computing spline matrices for {n_channels} electrodes (m={m:g})")
    cosang = montage.get_cos_angles()
    G = _calc_g(cosang, m)
    H = _calc_h(cosang, m)
    logger.debug(
        f"    G diagonal {G[0, 0]:g}, H diagonal {H[0, 0]:g}, min cosine "
        f"{cosang.min():0.4f}"
    )
    return SplineMatrices(G, H)
