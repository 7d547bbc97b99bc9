"""Configuration and extra fixtures for pytest."""

import matplotlib
import nibabel
import numpy as np
import pytest

from nisplat.roi import SphereLookup


def pytest_configure(config):  # noqa: ARG001
    """Use Agg so that no figures pop up."""
    matplotlib.use("Agg", force=True)


@pytest.fixture(autouse=True)
def no_int64_nifti(monkeypatch):
    """Prevent creating or writing a Nift1Image containing 64-bit ints.

    It is easy to create such images by mistake because Numpy uses int64 by
    default, but tools like FSL fail to read them and Nibabel will refuse to
    write them in the future.

    For tests that do need to manipulate int64 images, it is always possible to
    disable this fixture by parametrizing a test to override it:

    @pytest.mark.parametrize("no_int64_nifti", [None])
    def test_behavior_when_user_provides_int64_img():
        # ...

    """
    forbidden_types = (np.int64, np.uint64)
    error_msg = (
        "Creating or saving an image containing 64-bit ints is forbidden."
    )

    to_filename = nibabel.nifti1.Nifti1Image.to_filename

    def checked_to_filename(img, filename):
        assert img.get_data_dtype() not in forbidden_types, error_msg
        return to_filename(img, filename)

    monkeypatch.setattr(
        "nibabel.nifti1.Nifti1Image.to_filename", checked_to_filename
    )

    init = nibabel.nifti1.Nifti1Image.__init__

    def checked_init(self, dataobj, *args, **kwargs):
        assert dataobj.dtype not in forbidden_types, error_msg
        return init(self, dataobj, *args, **kwargs)

    monkeypatch.setattr("nibabel.nifti1.Nifti1Image.__init__", checked_init)


# ------------------------   RNG   ------------------------#


def _rng(seed=42):
    return np.random.default_rng(seed)


@pytest.fixture()
def rng():
    """Return a seeded random number generator."""
    return _rng()


# ------------------------ AFFINES ------------------------#


@pytest.fixture()
def affine_eye():
    """Return an identity matrix affine."""
    return np.eye(4)


# ------------------------ LOOKUPS ------------------------#


def _lookup_lh():
    """Return a left hemisphere lookup with a 4 x 3 image and 6 vertices.

    Pixel ``p`` shows vertex ``p // 2`` and vertex ``v`` projects onto
    pixel ``2 * v``.

    Mostly used for set up in other fixtures in other testing modules.
    """
    return SphereLookup(
        hemi="lh",
        image_shape=(4, 3),
        vertex_to_pixel=np.arange(6) * 2,
        pixel_to_vertex=np.arange(12) // 2,
    )


def _lookup_rh():
    """Return a right hemisphere lookup with a 4 x 2 image and 3 vertices.

    The last row lies outside the projected sphere.
    Pixel ``p`` shows vertex ``p // 2`` and vertex ``v`` projects onto
    pixel ``2 * v``.

    Mostly used for set up in other fixtures in other testing modules.
    """
    extrapolation_mask = np.zeros(8, dtype=bool)
    extrapolation_mask[6:] = True
    return SphereLookup(
        hemi="rh",
        image_shape=(4, 2),
        vertex_to_pixel=np.arange(3) * 2,
        pixel_to_vertex=np.minimum(np.arange(8) // 2, 2),
        extrapolation_mask=extrapolation_mask,
    )


@pytest.fixture()
def lookup_lh():
    """Return a small left hemisphere lookup."""
    return _lookup_lh()


@pytest.fixture()
def lookup_rh():
    """Return a small right hemisphere lookup."""
    return _lookup_rh()


@pytest.fixture()
def lookups(lookup_lh, lookup_rh):
    """Return lookups for both hemispheres, left one first."""
    return [lookup_lh, lookup_rh]
