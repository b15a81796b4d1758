"""Pixel energy: how visually important each cell of a grid is.

The energy of a cell is the squared color gradient between its left and right
neighbors plus the one between its up and down neighbors, summed over all
channels. How missing neighbors on the border are resolved is controlled by
the edge mode, see :meth:`gridcarve.grid.PixelGrid.adjacent`.
"""

import numpy as np
from scipy.ndimage import correlate1d

from .grid import CLAMP_EDGES, WRAP_EDGES, Cell, PixelGrid, check_edge_mode

# ``mirror`` extends (d c b | a b c d | c b a), i.e. the missing neighbor is
# the opposite one of the pair.
_NDIMAGE_MODES = {WRAP_EDGES: 'wrap', CLAMP_EDGES: 'mirror'}
_CENTRAL_DIFF = np.array([-1, 0, 1], dtype=np.float64)


def square_gradient(a: Cell, b: Cell) -> int:
    """Sum over channels of the squared difference between two cells"""
    return sum((int(p) - int(q)) ** 2 for p, q in zip(a.color, b.color))


def pixel_energy(grid: PixelGrid, x: int, y: int,
                 edge_mode: str = WRAP_EDGES) -> int:
    """Compute the energy of a single cell"""
    left, right, up, down = grid.adjacent(x, y, edge_mode)
    return square_gradient(left, right) + square_gradient(up, down)


def compute_energy(colors: np.ndarray, edge_mode: str = WRAP_EDGES
                   ) -> np.ndarray:
    """Compute the energy map of a (height, width, channels) color array"""
    assert colors.ndim == 3 and colors.size > 0
    mode = _NDIMAGE_MODES[check_edge_mode(edge_mode)]

    colors = colors.astype(np.int64)
    grad_x = correlate1d(colors, _CENTRAL_DIFF, axis=1, mode=mode)
    grad_y = correlate1d(colors, _CENTRAL_DIFF, axis=0, mode=mode)
    energy = (grad_x ** 2).sum(axis=2) + (grad_y ** 2).sum(axis=2)
    return energy.astype(np.int64)
