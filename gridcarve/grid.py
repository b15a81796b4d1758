from typing import List, NamedTuple, Tuple

import numpy as np

from .errors import InvalidDimensions, OutOfBounds

WRAP_EDGES = 'wrap'
CLAMP_EDGES = 'clamp'
VALID_EDGE_MODES = (WRAP_EDGES, CLAMP_EDGES)


class Cell(NamedTuple):
    color: Tuple[int, ...]
    energy: int
    path_cost: int
    original_position: Tuple[int, int]


def check_edge_mode(edge_mode: str) -> str:
    """Ensure the edge mode is one of the supported border policies"""
    if edge_mode not in VALID_EDGE_MODES:
        raise ValueError('Invalid edge mode {}: expected {}'.format(
            edge_mode, VALID_EDGE_MODES))
    return edge_mode


def _neighbor_indices(i: int, n: int, edge_mode: str) -> Tuple[int, int]:
    """Get the indices of the two neighbors of i along an axis of length n"""
    if edge_mode == WRAP_EDGES:
        return (i - 1) % n, (i + 1) % n
    if n == 1:
        return i, i
    lo, hi = i - 1, i + 1
    if lo < 0:
        lo = hi
    if hi >= n:
        hi = lo
    return lo, hi


class PixelGrid:
    """A mutable width x height matrix of pixel cells.

    Each cell holds a color, its energy, its cumulative path cost and the
    position it had when the original positions were last reset. Rows are
    stored in fixed-capacity numpy buffers: ``width`` may be smaller than the
    allocated capacity, so removing or appending a column only moves the
    boundary instead of reallocating every row.
    """

    def __init__(self, colors: np.ndarray):
        colors = np.asarray(colors)
        if colors.ndim != 3 or colors.shape[0] == 0 or colors.shape[1] == 0:
            raise InvalidDimensions('Invalid colors of shape {}: expected a '
                                    'non-empty (height, width, channels) '
                                    'array'.format(colors.shape))
        h, w, _ = colors.shape
        self._width = w
        self._height = h
        self._colors = colors.copy()
        self._energy = np.zeros((h, w), dtype=np.int64)
        self._path_cost = np.zeros((h, w), dtype=np.int64)
        self._origins = np.zeros((h, w, 2), dtype=np.int64)
        self.reset_original_positions()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def channels(self) -> int:
        return self._colors.shape[2]

    @property
    def capacity(self) -> int:
        return self._colors.shape[1]

    @property
    def colors(self) -> np.ndarray:
        return self._colors[:, :self._width]

    @property
    def energy(self) -> np.ndarray:
        return self._energy[:, :self._width]

    @property
    def path_cost(self) -> np.ndarray:
        return self._path_cost[:, :self._width]

    @property
    def original_positions(self) -> np.ndarray:
        return self._origins[:, :self._width]

    def _buffers(self) -> Tuple[np.ndarray, ...]:
        return self._colors, self._energy, self._path_cost, self._origins

    def _check_point(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfBounds('Point ({}, {}) is outside of the {}x{} '
                              'grid'.format(x, y, self._width, self._height))

    def get(self, x: int, y: int) -> Cell:
        self._check_point(x, y)
        return Cell(color=tuple(int(v) for v in self._colors[y, x]),
                    energy=int(self._energy[y, x]),
                    path_cost=int(self._path_cost[y, x]),
                    original_position=self.original_position(x, y))

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._check_point(x, y)
        self._colors[y, x] = cell.color
        self._energy[y, x] = cell.energy
        self._path_cost[y, x] = cell.path_cost
        self._origins[y, x] = cell.original_position

    def get_color(self, x: int, y: int) -> np.ndarray:
        self._check_point(x, y)
        return self._colors[y, x].copy()

    def set_color(self, x: int, y: int, color) -> None:
        self._check_point(x, y)
        self._colors[y, x] = color

    def original_position(self, x: int, y: int) -> Tuple[int, int]:
        self._check_point(x, y)
        ox, oy = self._origins[y, x]
        return int(ox), int(oy)

    def reset_original_positions(self) -> None:
        """Tag every cell with its current position"""
        w, h = self._width, self._height
        self._origins[:, :w, 0] = np.arange(w, dtype=np.int64)[np.newaxis, :]
        self._origins[:, :w, 1] = np.arange(h, dtype=np.int64)[:, np.newaxis]

    def adjacent(self, x: int, y: int,
                 edge_mode: str = WRAP_EDGES) -> Tuple[Cell, Cell, Cell, Cell]:
        """Get the (left, right, up, down) neighbors of a cell.

        With ``wrap`` edges a missing neighbor is taken from the opposite side
        of the image. With ``clamp`` edges it is replaced by the other
        neighbor of the same pair, so the gradient along that axis is zero.
        """
        self._check_point(x, y)
        check_edge_mode(edge_mode)
        left, right = _neighbor_indices(x, self._width, edge_mode)
        up, down = _neighbor_indices(y, self._height, edge_mode)
        return (self.get(left, y), self.get(right, y),
                self.get(x, up), self.get(x, down))

    def parents(self, x: int, y: int) -> List[Tuple[int, int]]:
        """Get the existing cells above-left, above and above-right"""
        self._check_point(x, y)
        if y == 0:
            return []
        return [(px, y - 1) for px in (x - 1, x, x + 1)
                if 0 <= px < self._width]

    def rotate(self) -> None:
        """Transpose the grid, so that the cell at (x, y) moves to (y, x)"""
        w = self._width
        self._colors = np.ascontiguousarray(
            self._colors[:, :w].transpose((1, 0, 2)))
        self._energy = np.ascontiguousarray(self._energy[:, :w].T)
        self._path_cost = np.ascontiguousarray(self._path_cost[:, :w].T)
        self._origins = np.ascontiguousarray(
            self._origins[:, :w].transpose((1, 0, 2))[:, :, ::-1])
        self._width, self._height = self._height, self._width

    def _reserve(self, capacity: int) -> None:
        """Grow the row buffers to hold at least capacity columns"""
        if capacity <= self.capacity:
            return
        capacity = max(capacity, 2 * self.capacity)
        grown = []
        for buf in self._buffers():
            shape = (buf.shape[0], capacity) + buf.shape[2:]
            new_buf = np.zeros(shape, dtype=buf.dtype)
            new_buf[:, :self._width] = buf[:, :self._width]
            grown.append(new_buf)
        self._colors, self._energy, self._path_cost, self._origins = grown

    def append_column(self) -> None:
        """Widen the grid by one column, repeating the last column"""
        self._reserve(self._width + 1)
        for buf in self._buffers():
            buf[:, self._width] = buf[:, self._width - 1]
        self._width += 1

    def remove_last_column(self) -> None:
        if self._width == 1:
            raise OutOfBounds('Cannot remove the only column of the grid')
        self._width -= 1

    def shift_row_right_from_point(self, x: int, y: int) -> None:
        """Move the cells of row y at columns >= x one position right.

        The last cell of the row falls off and column x keeps its old cell,
        so column x + 1 is free to be overwritten by the caller.
        """
        self._check_point(x, y)
        w = self._width
        for buf in self._buffers():
            buf[y, x + 1:w] = buf[y, x:w - 1]

    def shift_row_left_from_point(self, x: int, y: int) -> None:
        """Move the cells of row y at columns > x one position left.

        The cell at x is overwritten and the last column is left holding a
        stale duplicate until the column is removed.
        """
        self._check_point(x, y)
        w = self._width
        for buf in self._buffers():
            buf[y, x:w - 1] = buf[y, x + 1:w]

    def copy(self) -> 'PixelGrid':
        other = PixelGrid.__new__(PixelGrid)
        other._width = self._width
        other._height = self._height
        other._colors = self._colors.copy()
        other._energy = self._energy.copy()
        other._path_cost = self._path_cost.copy()
        other._origins = self._origins.copy()
        return other

    def to_array(self) -> np.ndarray:
        """Get a (height, width, channels) copy of the colors"""
        return self.colors.copy()
