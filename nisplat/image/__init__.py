"""Export of splatted volumes as Nifti images."""

from .image import save_volumes, volume_to_imgs

__all__ = ["save_volumes", "volume_to_imgs"]
