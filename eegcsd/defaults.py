"""Default values of the CSD transform."""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

# flexibility exponent of the spherical spline and its admissible range
M_DEFAULT = 4
M_RANGE = (2, 10)

# smoothing constant added to the diagonal of G
LAMBDA2_DEFAULT = 1e-5

# in cm
HEAD_RADIUS_DEFAULT = 10.0

# reference tag of a recording holding CSD values
CSD_REF = "csd-transform"

# used by the default location lookup when EEGCSD_LOCATIONS is not set
DEFAULT_LOCATIONS_FNAME = "standard_1010.csd"
