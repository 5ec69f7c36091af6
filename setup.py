#!/usr/bin/env python

# Authors: The eegcsd contributors.
# License: BSD-3-Clause
# Copyright the eegcsd contributors.

import os
import os.path as op

from setuptools import setup


def parse_requirements_file(fname):
    requirements = list()
    with open(fname, "r") as fid:
        for line in fid:
            req = line.strip()
            if req.startswith("#") or not req:
                continue
            # strip end-of-line comments
            req = req.split("#", maxsplit=1)[0].strip()
            requirements.append(req)
    return requirements


def package_tree(pkgroot):
    """Get the submodule list."""
    # Adapted from VisPy
    path = op.dirname(__file__)
    subdirs = [
        op.relpath(i[0], path).replace(op.sep, ".")
        for i in os.walk(op.join(path, pkgroot))
        if "__init__.py" in i[2]
    ]
    return sorted(subdirs)


if __name__ == "__main__":
    if op.exists("MANIFEST"):
        os.remove("MANIFEST")

    with open("README.rst", "r") as fid:
        long_description = fid.read()

    install_requires = parse_requirements_file("requirements_base.txt")
    test_requires = parse_requirements_file("requirements_testing.txt")
    setup(
        name="eegcsd",
        version="0.1.0",
        description="Spherical spline current source density for EEG",
        long_description=long_description,
        long_description_content_type="text/x-rst",
        license="BSD-3-Clause",
        python_requires=">=3.10",
        classifiers=[
            "Intended Audience :: Science/Research",
            "License :: OSI Approved :: BSD License",
            "Programming Language :: Python :: 3",
            "Topic :: Scientific/Engineering",
        ],
        install_requires=install_requires,
        extras_require={
            "test": test_requires,
        },
        packages=package_tree("eegcsd"),
        package_data={
            "eegcsd": ["py.typed", "*.pyi", "*/*.pyi"],
            "eegcsd.channels": ["data/locations/*.csd"],
        },
        zip_safe=False,
    )
