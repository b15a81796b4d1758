__version__ = "0.1.0"

from .carve import (DEBUG_COLOR, GROW, HORIZONTAL, SHRINK, VERTICAL, Carver,
                    average_pixels, draw_debug_points, energy_image,
                    resize)
from .errors import InvalidDimensions, OutOfBounds
from .grid import CLAMP_EDGES, WRAP_EDGES, Cell, PixelGrid
