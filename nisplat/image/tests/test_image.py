import numpy as np
import pytest
from nibabel import Nifti1Header, load
from numpy.testing import assert_array_almost_equal, assert_array_equal

from nisplat.image import save_volumes, volume_to_imgs
from nisplat.surface import grid_affine, surface_to_volume


def test_volume_to_imgs_one_image_per_dataset(rng, affine_eye):
    volume = rng.standard_normal((3, 4, 5, 2))
    imgs = volume_to_imgs(volume, affine_eye)
    assert len(imgs) == 2
    for i, img in enumerate(imgs):
        assert img.shape == (3, 4, 5)
        assert img.get_data_dtype() == np.float32
        assert_array_equal(img.affine, affine_eye)
        assert_array_almost_equal(img.get_fdata(), volume[..., i], decimal=5)


def test_volume_to_imgs_labels():
    volume = surface_to_volume(
        [[2.0, 2.0, 2.0]], [1], empty_value=0, grid_side=3, special_mode=1
    )
    (img,) = volume_to_imgs(volume, grid_affine(), dtype="int16")
    assert img.shape == (3, 3, 3)
    assert img.get_data_dtype() == np.int16
    assert np.asanyarray(img.dataobj)[1, 1, 1] == 1


def test_volume_to_imgs_header(affine_eye):
    header = Nifti1Header()
    header["descrip"] = b"splatted"
    imgs = volume_to_imgs(np.zeros((2, 2, 2, 2)), affine_eye, header=header)
    for img in imgs:
        assert img.header["descrip"] == b"splatted"
    assert imgs[0].header is not imgs[1].header


def test_volume_to_imgs_errors(affine_eye):
    with pytest.raises(ValueError, match="4x4"):
        volume_to_imgs(np.zeros((2, 2, 2)), np.eye(3))
    with pytest.raises(ValueError, match="3D or 4D"):
        volume_to_imgs(np.zeros((2, 2)), affine_eye)


def test_save_volumes(tmp_path, rng, affine_eye):
    volume = rng.standard_normal((3, 3, 3, 2))
    prefixes = [tmp_path / "first", tmp_path / "second"]
    filenames = save_volumes(volume, prefixes, affine_eye, verbose=0)
    assert filenames == [
        tmp_path / "first.nii.gz",
        tmp_path / "second.nii.gz",
    ]
    for i, filename in enumerate(filenames):
        img = load(filename)
        assert img.get_data_dtype() == np.float32
        assert_array_almost_equal(img.get_fdata(), volume[..., i], decimal=5)


def test_save_volumes_single_prefix(tmp_path, affine_eye, capsys):
    filenames = save_volumes(
        np.ones((2, 2, 2)), str(tmp_path / "vals"), affine_eye, verbose=1
    )
    assert filenames == [tmp_path / "vals.nii.gz"]
    assert filenames[0].exists()
    assert "Wrote" in capsys.readouterr().out


def test_save_volumes_prefix_count_mismatch(tmp_path, affine_eye):
    with pytest.raises(ValueError, match="2 output prefixes for 3 datasets"):
        save_volumes(
            np.zeros((2, 2, 2, 3)),
            [tmp_path / "a", tmp_path / "b"],
            affine_eye,
        )
    assert not list(tmp_path.iterdir())
