"""Module dedicated to electrode locations.

Can be used for reading location files and building the spherical spline
matrices of a montage.
"""

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import lazy_loader as lazy

(__getattr__, __dir__, __all__) = lazy.attach_stub(__name__, __file__)
