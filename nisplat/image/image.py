"""Conversion of splatted volumes into Nifti images."""

from pathlib import Path

import numpy as np
from nibabel import Nifti1Image

from nisplat._utils import fill_doc
from nisplat._utils.logger import log


def _check_affine(affine):
    affine = np.asarray(affine, dtype=float)
    if affine.shape != (4, 4):
        raise ValueError(
            f"'affine' must be a 4x4 matrix. Got shape {affine.shape}."
        )
    return affine


def volume_to_imgs(volume, affine, header=None, dtype="float32"):
    """Build one Nifti image per dataset of a splatted volume.

    Parameters
    ----------
    volume : :obj:`numpy.ndarray` of shape (x, y, z) or (x, y, z, n_datasets)
        Output of :func:`~nisplat.surface.surface_to_volume`.

    affine : :obj:`numpy.ndarray` of shape (4, 4)
        Voxel to world transformation, for instance
        :func:`~nisplat.surface.grid_affine` or the affine of a reference
        image.

    header : :obj:`nibabel.nifti1.Nifti1Header` or None, default=None
        Header to copy into each image, for instance that of a reference
        anatomical image.

    dtype : dtype-like, default="float32"
        Data type of the stored values. Single precision by default.

    Returns
    -------
    imgs : :obj:`list` of :obj:`nibabel.nifti1.Nifti1Image`
        One 3D image per dataset.

    """
    affine = _check_affine(affine)
    volume = np.asarray(volume)
    if volume.ndim == 3:
        volume = volume[..., np.newaxis]
    if volume.ndim != 4:
        raise ValueError(
            "'volume' must be a 3D or 4D array. "
            f"Got {volume.ndim}D array of shape {volume.shape}."
        )
    imgs = []
    for i in range(volume.shape[-1]):
        data = np.asarray(volume[..., i], dtype=dtype)
        img = Nifti1Image(
            data,
            affine,
            header=None if header is None else header.copy(),
        )
        img.set_data_dtype(data.dtype)
        imgs.append(img)
    return imgs


@fill_doc
def save_volumes(
    volume,
    output_prefixes,
    affine,
    header=None,
    dtype="float32",
    verbose=1,
):
    """Write each dataset of a splatted volume as a compressed Nifti file.

    Parameters
    ----------
    volume : :obj:`numpy.ndarray` of shape (x, y, z) or (x, y, z, n_datasets)
        Output of :func:`~nisplat.surface.surface_to_volume`.

    output_prefixes : :obj:`str`, :obj:`pathlib.Path` or sequence of them
        One filename prefix per dataset; ``.nii.gz`` is appended.

    affine : :obj:`numpy.ndarray` of shape (4, 4)
        Voxel to world transformation.

    header : :obj:`nibabel.nifti1.Nifti1Header` or None, default=None
        Header to copy into each image.

    dtype : dtype-like, default="float32"
        Data type of the stored values.

    %(verbose)s

    Returns
    -------
    filenames : :obj:`list` of :obj:`pathlib.Path`
        Written files.

    """
    if isinstance(output_prefixes, (str, Path)):
        output_prefixes = [output_prefixes]
    output_prefixes = list(output_prefixes)
    imgs = volume_to_imgs(volume, affine, header=header, dtype=dtype)
    if len(imgs) != len(output_prefixes):
        raise ValueError(
            f"Got {len(output_prefixes)} output prefixes "
            f"for {len(imgs)} datasets."
        )
    filenames = []
    for img, prefix in zip(imgs, output_prefixes):
        filename = Path(f"{prefix}.nii.gz")
        img.to_filename(filename)
        log(f"Wrote {filename}", verbose=verbose)
        filenames.append(filename)
    return filenames
