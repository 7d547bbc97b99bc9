import numpy as np
import pytest
from numpy.testing import assert_array_equal

from nisplat.exceptions import LookupMismatchError
from nisplat.roi import SphereLookup, image_to_vertices, vertices_to_image
from nisplat.roi.lookup import check_lookups


def test_sphere_lookup(lookup_lh):
    assert lookup_lh.n_vertices == 6
    assert lookup_lh.n_pixels == 12
    assert not lookup_lh.extrapolation_mask.any()
    assert "lh" in repr(lookup_lh)


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"vertex_to_pixel": np.arange(5)}, "6 vertices"),
        ({"pixel_to_vertex": np.zeros(11)}, "12 pixels"),
        ({"extrapolation_mask": np.zeros(4, dtype=bool)}, "12 pixels"),
        ({"vertex_to_pixel": np.arange(6) + 10}, "outside the image"),
        ({"pixel_to_vertex": np.arange(12)}, "do not exist"),
        ({"image_shape": (12,)}, "2 elements"),
    ],
)
def test_sphere_lookup_errors(kwargs, match):
    params = {
        "hemi": "lh",
        "image_shape": (4, 3),
        "vertex_to_pixel": np.arange(6) * 2,
        "pixel_to_vertex": np.arange(12) // 2,
        "n_vertices": 6,
    }
    params.update(kwargs)
    with pytest.raises(LookupMismatchError, match=match):
        SphereLookup(**params)


def test_sphere_lookup_error_hemi():
    with pytest.raises(ValueError, match="'hemi' must be one of"):
        SphereLookup("left", (1, 1), [0], [0])


def test_sphere_lookup_ignores_extrapolated_pixels():
    # pixels outside the sphere may hold any vertex index
    lookup = SphereLookup(
        "rh",
        (1, 3),
        vertex_to_pixel=[0],
        pixel_to_vertex=[0, -1, 99],
        extrapolation_mask=[False, True, True],
    )
    assert_array_equal(vertices_to_image([5], lookup), [[5, 0, 0]])


def test_lookup_mismatch_error_message():
    error = LookupMismatchError("bad size", hemi="rh")
    assert isinstance(error, ValueError)
    assert str(error) == "[rh] bad size"
    assert str(LookupMismatchError("bad size")) == "bad size"


def test_image_to_vertices(lookup_lh):
    image = np.arange(12).reshape((4, 3))
    assert_array_equal(
        image_to_vertices(image, lookup_lh), [0, 2, 4, 6, 8, 10]
    )


def test_image_to_vertices_rgb(lookup_lh):
    image = np.zeros((4, 3, 3))
    image[0, 2] = [1, 2, 3]
    values = image_to_vertices(image, lookup_lh)
    assert values.shape == (6, 3)
    assert_array_equal(values[1], [1, 2, 3])


def test_image_to_vertices_error(lookup_lh):
    with pytest.raises(LookupMismatchError, match="does not match") as error:
        image_to_vertices(np.zeros((3, 4)), lookup_lh)
    assert str(error.value).startswith("[lh] ")
    assert "image_shape: (3, 4)" in str(error.value)
    assert "lookup_image_shape: (4, 3)" in str(error.value)


def test_vertices_to_image(lookup_rh):
    image = vertices_to_image([1.0, 2.0, 3.0], lookup_rh, fill_value=np.nan)
    assert image.shape == (4, 2)
    assert_array_equal(image[:3], [[1, 1], [2, 2], [3, 3]])
    assert np.isnan(image[3]).all()


def test_vertices_to_image_bool(lookup_lh):
    mask = np.array([True, False, False, False, False, True])
    image = vertices_to_image(mask, lookup_lh)
    assert_array_equal(
        image, [[1, 1, 0], [0, 0, 0], [0, 0, 0], [0, 1, 1]]
    )


def test_vertices_to_image_error(lookup_lh):
    with pytest.raises(LookupMismatchError, match="6 vertices"):
        vertices_to_image(np.zeros(5), lookup_lh)
    with pytest.raises(TypeError, match="'fill_value' must be of type"):
        vertices_to_image(np.zeros(6), lookup_lh, fill_value="white")


def test_check_lookups(lookup_lh, lookup_rh):
    assert check_lookups(lookup_lh) == [lookup_lh]
    assert check_lookups((lookup_rh, lookup_lh)) == [lookup_rh, lookup_lh]
    with pytest.raises(LookupMismatchError, match="both hemispheres"):
        check_lookups([lookup_lh, lookup_lh])
    with pytest.raises(LookupMismatchError, match="one or two"):
        check_lookups([lookup_lh, lookup_rh, lookup_lh])
    with pytest.raises(TypeError, match="SphereLookup"):
        check_lookups([lookup_lh, "rh"])


def test_check_lookups_height(lookup_lh):
    lookup = SphereLookup("rh", (3, 2), np.arange(2), np.arange(6) // 3)
    with pytest.raises(LookupMismatchError, match="same height") as error:
        check_lookups([lookup_lh, lookup])
    assert "lh_image_shape: (4, 3)\nrh_image_shape: (3, 2)" in str(error.value)
