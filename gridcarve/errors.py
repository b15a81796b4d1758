class InvalidDimensions(ValueError):
    """Raised when an image or a target size has an unusable shape"""


class OutOfBounds(IndexError):
    """Raised when a grid is accessed outside of its current shape"""
