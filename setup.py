#! /usr/bin/env python

# noqa: D100

import os

from setuptools import find_packages, setup


def load_version():
    """Execute nisplat/version.py in a globals dictionary and return it.

    Note: importing nisplat is not an option because there may be
    dependencies like nibabel which are not installed and
    setup.py is supposed to install them.
    """
    # load all vars into globals, otherwise
    #   the later function call using global vars doesn't work.
    globals_dict = {}
    with open(os.path.join("nisplat", "version.py")) as fp:
        exec(fp.read(), globals_dict)

    return globals_dict


# Make sources available using relative paths from this file's directory.
os.chdir(os.path.dirname(os.path.abspath(__file__)))

_VERSION_GLOBALS = load_version()
DISTNAME = "nisplat"
DESCRIPTION = "Surface-to-volume splatting and ROI projection for neuroimaging"
with open("README.rst") as fp:
    LONG_DESCRIPTION = fp.read()
LICENSE = "new BSD"
VERSION = _VERSION_GLOBALS["__version__"]
INSTALL_REQUIRES = [
    "matplotlib>=3.3",
    "nibabel>=4.0",
    "numpy>=1.22",
    "scikit-learn>=1.1",
    "scipy>=1.8",
]
EXTRAS_REQUIRE = {
    "rich": ["rich"],
    "test": ["pytest>=6.0"],
}

if __name__ == "__main__":
    setup(
        name=DISTNAME,
        description=DESCRIPTION,
        license=LICENSE,
        version=VERSION,
        long_description=LONG_DESCRIPTION,
        zip_safe=False,  # the package can run out of an .egg file
        classifiers=[
            "Intended Audience :: Science/Research",
            "Intended Audience :: Developers",
            "License :: OSI Approved",
            "Programming Language :: Python",
            "Topic :: Scientific/Engineering",
            "Operating System :: Microsoft :: Windows",
            "Operating System :: POSIX",
            "Operating System :: Unix",
            "Operating System :: MacOS",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
        ],
        packages=find_packages(),
        python_requires=">=3.10",
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
    )
