import copy
import logging
from typing import List, Sequence, Tuple

import numpy as np

from .energy import compute_energy
from .errors import InvalidDimensions
from .grid import WRAP_EDGES, PixelGrid, check_edge_mode
from .seam import Seam, find_seam

logger = logging.getLogger(__name__)

HORIZONTAL = 'horizontal'
VERTICAL = 'vertical'
VALID_ORIENTATIONS = (HORIZONTAL, VERTICAL)

SHRINK = 'shrink'
GROW = 'grow'
VALID_MODES = (SHRINK, GROW)

DEBUG_COLOR = (255, 0, 0, 255)

Point = Tuple[int, int]


def average_pixels(left, right) -> np.ndarray:
    """Per-channel average of two pixels, rounded down"""
    left = np.asarray(left)
    right = np.asarray(right)
    avg = (left.astype(np.int64) + right.astype(np.int64)) // 2
    return avg.astype(np.result_type(left, right))


def _check_src(src: np.ndarray) -> np.ndarray:
    """Ensure the source to be a non-empty RGB(A) or grayscale image"""
    src = np.asarray(src, dtype=np.uint8)
    if src.size == 0 or src.ndim not in (2, 3):
        raise InvalidDimensions('Invalid src of shape {}: expected a 3D color '
                                'image or a 2D grayscale image'.format(
                                    src.shape))
    return src


def _is_integer(value) -> bool:
    return (isinstance(value, (int, np.integer))
            and not isinstance(value, bool))


def _check_distance(distance: int) -> int:
    if not _is_integer(distance):
        raise InvalidDimensions('Invalid distance {!r}: expected an '
                                'integer'.format(distance))
    if distance < 0:
        raise InvalidDimensions('Invalid distance {}: expected >= 0'.format(
            distance))
    return int(distance)


def _check_target(name: str, target: int) -> int:
    """Ensure a target size to be a positive integer"""
    if not _is_integer(target):
        raise InvalidDimensions('Invalid target {} {!r}: expected an '
                                'integer'.format(name, target))
    if target <= 0:
        raise InvalidDimensions('Invalid target {} {}: expected > 0'.format(
            name, target))
    return int(target)


class Carver:
    """Content-aware resizing of a single image by seam carving.

    The carver owns a :class:`PixelGrid` built from the source image and
    mutates it in place on every call to :meth:`resize` or :meth:`carve`.
    Seams are always removed or inserted vertically; resizing the height
    rotates the grid before and after.

    :param src: A source image in RGB(A) or grayscale format.
    :param edge_mode: Border policy of the energy function. Could be one of
        ``wrap`` or ``clamp``. If ``wrap``, neighbors beyond the border are
        taken from the opposite side of the image. If ``clamp``, the gradient
        across the border is zero. ``wrap`` is the default: it is the policy
        the reference energies are defined with, e.g. ``[20808, 52020,
        20808]`` for the first row of the classic 3x4 test image, which
        ``clamp`` turns into ``[0, 41616, 0]``.
    """

    def __init__(self, src: np.ndarray, edge_mode: str = WRAP_EDGES):
        src = _check_src(src)
        self._ndim = src.ndim
        if src.ndim == 2:
            src = src[:, :, np.newaxis]
        self._grid = PixelGrid(src)
        self._edge_mode = check_edge_mode(edge_mode)
        self._debug_points: List[Point] = []

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def edge_mode(self) -> str:
        return self._edge_mode

    def copy(self) -> 'Carver':
        """An independent carver over a deep copy of the grid"""
        other = copy.copy(self)
        other._grid = self._grid.copy()
        other._debug_points = []
        return other

    def debug_points(self) -> List[Point]:
        """Coordinates removed or grown by the most recent resize"""
        return list(self._debug_points)

    def resize(self, width: int, height: int) -> np.ndarray:
        """Resize the image to (width, height) and return the result.

        The width is adjusted first, then the height.
        """
        width = _check_target('width', width)
        height = _check_target('height', height)

        self._debug_points = []
        logger.debug(f"Resizing {self.width}x{self.height} image to "
                     f"{width}x{height}")
        self._resize_axis(width - self.width)
        if height != self.height:
            self._rotated(self._resize_axis, height - self.height)
        return self.rebuild_image()

    def carve(self, distance: int, orientation: str = HORIZONTAL,
              mode: str = SHRINK) -> np.ndarray:
        """Shrink or grow one axis of the image by distance pixels.

        :param distance: Number of seams to remove or insert.
        :param orientation: ``horizontal`` to change the width, ``vertical``
            to change the height.
        :param mode: ``shrink`` to remove seams, ``grow`` to insert them.
        :return: The carved image.
        """
        if orientation not in VALID_ORIENTATIONS:
            raise ValueError('Invalid orientation {}: expected {}'.format(
                orientation, VALID_ORIENTATIONS))
        if mode not in VALID_MODES:
            raise ValueError('Invalid mode {}: expected {}'.format(
                mode, VALID_MODES))
        distance = _check_distance(distance)
        sign = 1 if mode == GROW else -1

        if orientation == HORIZONTAL:
            return self.resize(self.width + sign * distance, self.height)
        return self.resize(self.width, self.height + sign * distance)

    def _resize_axis(self, delta: int) -> None:
        if delta > 0:
            self.grow(delta)
        elif delta < 0:
            self.shrink(-delta)

    def _rotated(self, func, *args) -> None:
        """Run func on the rotated grid, reporting debug points unrotated"""
        start = len(self._debug_points)
        self._grid.rotate()
        try:
            func(*args)
        finally:
            self._grid.rotate()
        self._debug_points[start:] = [
            (y, x) for x, y in self._debug_points[start:]]

    def shrink(self, distance: int) -> List[Point]:
        """Remove the cheapest seam distance times.

        Every seam is recomputed against the already shrunk grid.

        :return: The original positions of the removed cells, in the order
            they were removed.
        """
        logger.debug(f"Shrinking {self.width}x{self.height} grid by "
                     f"{distance} seam(s)")
        removed = []
        for _ in range(distance):
            seam = find_seam(self._grid, self._edge_mode)
            removed.extend(self._remove_seam(seam))
        return removed

    def _remove_seam(self, seam: Seam) -> List[Point]:
        removed = []
        for x, y in seam:
            removed.append(self._grid.original_position(x, y))
            self._debug_points.append((x, y))
            self._grid.shift_row_left_from_point(x, y)
        self._grid.remove_last_column()
        return removed

    def grow(self, distance: int) -> None:
        """Insert distance seams of averaged pixels.

        The seams to duplicate are the ones a shrink by the same distance
        would remove, found by shrinking a copy of this carver. They are
        inserted right to left so that earlier insertions never move the
        columns of later ones. A copy can lose at most width - 1 seams, so
        larger distances are inserted in several steps.
        """
        logger.debug(f"Growing {self.width}x{self.height} grid by "
                     f"{distance} seam(s)")
        remaining = distance
        while remaining > 0:
            step = min(remaining, max(self.width - 1, 1))
            self._grow_step(step)
            remaining -= step

    def _grow_step(self, distance: int) -> None:
        if self.width == 1:
            # the only seam is the whole column
            points = [(0, y) for y in range(self.height - 1, -1, -1)]
        else:
            simulation = self.copy()
            simulation._grid.reset_original_positions()
            points = simulation.shrink(distance)
            points.sort(key=lambda p: p[0], reverse=True)

        for _ in range(distance):
            self._grid.append_column()

        for x, y in points:
            left = self._grid.get_color(x, y)
            right = self._grid.get_color(x + 1, y)
            self._grid.shift_row_right_from_point(x, y)
            self._grid.set_color(x + 1, y, average_pixels(left, right))
            self._debug_points.append((x, y))

    def rebuild_image(self) -> np.ndarray:
        """Get the current grid as an image of the source layout"""
        dst = self._grid.to_array()
        if self._ndim == 2:
            dst = dst[:, :, 0]
        return dst


def resize(src: np.ndarray, size: Tuple[int, int],
           edge_mode: str = WRAP_EDGES) -> np.ndarray:
    """Resize the image using the content-aware seam-carving algorithm.

    :param src: A source image in RGB(A) or grayscale format.
    :param size: The target size in pixels, as a 2-tuple (width, height).
    :param edge_mode: Border policy of the energy function, ``wrap`` or
        ``clamp``.
    :return: A resized copy of the source image.
    """
    width, height = size
    return Carver(src, edge_mode).resize(width, height)


def draw_debug_points(image: np.ndarray, points: Sequence[Point],
                      color: Sequence[int] = DEBUG_COLOR) -> np.ndarray:
    """Paint the given points on a copy of the image.

    Points outside of the image are skipped. The color is truncated to the
    number of channels of the image; grayscale images use its first value.
    """
    dst = np.array(image, copy=True)
    h, w = dst.shape[:2]
    pts = np.asarray(points, dtype=np.int64).reshape((-1, 2))
    xs, ys = pts[:, 0], pts[:, 1]
    inside = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    color = np.asarray(color)
    if dst.ndim == 2:
        dst[ys[inside], xs[inside]] = color[0]
    else:
        dst[ys[inside], xs[inside]] = color[:dst.shape[2]]
    return dst


def energy_image(src: np.ndarray, edge_mode: str = WRAP_EDGES) -> np.ndarray:
    """Render the energy map of an image as a grayscale image.

    Energies are scaled linearly so that the highest one becomes 255. An
    image without any gradient renders black.
    """
    src = _check_src(src)
    if src.ndim == 2:
        src = src[:, :, np.newaxis]
    energy = compute_energy(src, edge_mode)
    darkest = energy.max()
    if darkest == 0:
        return np.zeros(energy.shape, dtype=np.uint8)
    return (energy * 255 // darkest).astype(np.uint8)
