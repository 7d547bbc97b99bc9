"""Constants used by nisplat."""

# Side length, in voxels, of the FreeSurfer conformed volume.
FS_RESOLUTION = 256

# Side length, in voxels, of the internal high resolution grid
# (0.8 mm isotropic for a 256 mm field of view).
GRID_RESOLUTION = 320

# Offset added to FreeSurfer surface RAS coordinates to get
# 1-based voxel indices in the conformed volume.
FS_ORIGIN = (128.0, 129.0, 128.0)

# Order in which hemispheres are concatenated.
HEMISPHERES = ("lh", "rh")

# Intensity kept outside the ROI when blending it with a background image.
ROI_BACKGROUND_WEIGHT = 0.25
