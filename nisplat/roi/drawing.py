"""Interactive drawing of ROIs on flattened sphere images.

The drawing loop is a state machine fed with events by the caller, for
instance from the callbacks of a :class:`matplotlib.widgets.PolygonSelector`
and of the figure's key press and close events:

- a completed polygon is projected onto the vertices and shown;
- a restart (escape key) discards the polygon being drawn;
- closing the window ends the session.
"""

import enum
from dataclasses import dataclass

import numpy as np
from matplotlib.path import Path

from nisplat._utils import fill_doc
from nisplat._utils.logger import log
from nisplat.roi.lookup import check_lookups
from nisplat.roi.projection import (
    _composite_shape,
    blend_roi,
    project_roi_image,
)


class DrawingState(enum.Enum):
    """States of a drawing session.

    Every state but ``CLOSED`` accepts the next event, so the user can
    draw, erase and redraw as many times as they like:

    - ``AWAITING_INPUT``: no event handled yet.
    - ``POLYGON_COMPLETE``: awaiting input after a polygon was projected
      and shown; it is the current ROI.
    - ``RESTARTED``: awaiting input after the polygon being drawn was
      discarded; the last completed ROI, if any, is kept.
    - ``CLOSED``: the display was closed, no more events are accepted.
    """

    AWAITING_INPUT = "awaiting_input"
    POLYGON_COMPLETE = "polygon_complete"
    RESTARTED = "restarted"
    CLOSED = "closed"


@dataclass(frozen=True)
class PolygonEvent:
    """A closed polygon, as (x, y) = (column, row) pixel coordinates."""

    vertices: tuple


@dataclass(frozen=True)
class RestartEvent:
    """The polygon being drawn is discarded."""


@dataclass(frozen=True)
class CloseEvent:
    """The display was closed."""


def polygon_to_mask(vertices, shape):
    """Rasterize a polygon: pixels whose centre lies inside it are True.

    Parameters
    ----------
    vertices : array-like of shape (n_vertices, 2)
        Polygon corners as (column, row) coordinates.

    shape : 2-tuple of :obj:`int`
        Number of rows and columns of the image.

    Returns
    -------
    mask : :obj:`numpy.ndarray` of bool of shape ``shape``

    """
    vertices = np.asarray(vertices, dtype=float)
    if vertices.ndim != 2 or vertices.shape[1] != 2 or len(vertices) < 3:
        raise ValueError(
            "A polygon needs at least 3 vertices given as (x, y) pairs. "
            f"Got an array of shape {vertices.shape}."
        )
    h, w = shape
    y, x = np.mgrid[:h, :w]
    coords = np.stack((x.ravel(), y.ravel()), axis=-1)
    return Path(vertices).contains_points(coords).reshape(h, w)


@fill_doc
class RoiDrawingSession:
    """Turn drawing events into an ROI projected onto surface vertices.

    Parameters
    ----------
    background : array-like of shape (n_rows, n_columns) or \
                 (n_rows, n_columns, n_channels)
        Image of the hemispheres of ``lookups``, side by side.

    %(lookups)s

    render : callable or None, default=None
        Called with the background darkened outside the ROI after each
        completed polygon.

    %(verbose)s

    Attributes
    ----------
    state : :class:`DrawingState`

    roi : :class:`~nisplat.roi.projection.RoiMask` or None
        Last completed ROI.

    """

    def __init__(self, background, lookups, render=None, verbose=1):
        self.lookups = check_lookups(lookups)
        self.background = np.asarray(background)
        self.render = render
        self.verbose = verbose
        self.shape = _composite_shape(self.lookups)
        if self.background.shape[:2] != self.shape:
            raise ValueError(
                f"Background of shape {self.background.shape} does not "
                f"match the lookup images, expected {self.shape}."
            )
        self.state = DrawingState.AWAITING_INPUT
        self.roi = None

    def handle(self, event):
        """Process one event and return the new state."""
        if self.state is DrawingState.CLOSED:
            raise RuntimeError("The drawing session is closed.")

        if isinstance(event, CloseEvent):
            self.state = DrawingState.CLOSED
        elif isinstance(event, RestartEvent):
            log("Polygon discarded, start again.", verbose=self.verbose)
            self.state = DrawingState.RESTARTED
        elif isinstance(event, PolygonEvent):
            mask = polygon_to_mask(event.vertices, self.shape)
            self.commit(mask)
        else:
            raise TypeError(
                "Unknown drawing event. "
                f"Got: '{event.__class__.__name__}'"
            )
        return self.state

    def commit(self, roi_image):
        """Project a complete ROI image and display it."""
        self.roi = project_roi_image(
            roi_image, self.lookups, verbose=self.verbose
        )
        self._render(blend_roi(self.background, self.roi.roi_image))
        self.state = DrawingState.POLYGON_COMPLETE
        return self.roi

    def run(self, events):
        """Handle events until the session is closed or events run out.

        Returns
        -------
        roi : :class:`~nisplat.roi.projection.RoiMask` or None
        """
        for event in events:
            if self.handle(event) is DrawingState.CLOSED:
                break
        self.state = DrawingState.CLOSED
        return self.roi

    def _render(self, image):
        if self.render is not None:
            self.render(image)


@fill_doc
def draw_roi(
    background, lookups, events=None, roi_image=None, render=None, verbose=1
):
    """Draw an ROI and project it onto surface vertices.

    Parameters
    ----------
    background : array-like of shape (n_rows, n_columns) or \
                 (n_rows, n_columns, n_channels)
        Image of the hemispheres of ``lookups``, side by side.

    %(lookups)s

    events : iterable of drawing events or None, default=None
        :class:`PolygonEvent`, :class:`RestartEvent` and
        :class:`CloseEvent` objects, consumed until a close event.

    roi_image : array-like of shape (n_rows, n_columns) or None, \
                default=None
        If given, drawing is skipped and the pixels equal to 1 are used
        as the ROI.

    render : callable or None, default=None
        Display callback, see :class:`RoiDrawingSession`.

    %(verbose)s

    Returns
    -------
    roi : :class:`~nisplat.roi.projection.RoiMask` or None
        Last completed ROI, None if no polygon was completed.

    """
    session = RoiDrawingSession(
        background, lookups, render=render, verbose=verbose
    )
    if roi_image is not None:
        session.commit(roi_image)
        session.state = DrawingState.CLOSED
        return session.roi
    if events is None:
        raise ValueError("Either 'events' or 'roi_image' must be given.")
    log(
        "Press Escape to erase and start again. "
        "Close the window when finished.",
        verbose=verbose,
    )
    return session.run(events)
