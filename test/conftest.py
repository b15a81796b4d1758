import numpy as np
import pytest


def _rgba(rows):
    img = np.array(rows, dtype=np.uint8)
    alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate((img, alpha), axis=2)


@pytest.fixture
def image_3x4():
    """3 columns x 4 rows RGBA image"""
    return _rgba([
        [(255, 101, 51), (255, 101, 153), (255, 101, 255)],
        [(255, 153, 51), (255, 153, 153), (255, 153, 255)],
        [(255, 203, 51), (255, 204, 153), (255, 205, 255)],
        [(255, 255, 51), (255, 255, 153), (255, 255, 255)],
    ])


@pytest.fixture
def image_6x5():
    """6 columns x 5 rows RGBA image"""
    return _rgba([
        [(78, 209, 79), (63, 118, 247), (92, 175, 95),
         (243, 73, 183), (210, 109, 104), (252, 101, 119)],
        [(224, 191, 182), (108, 89, 82), (80, 196, 230),
         (112, 156, 180), (176, 178, 120), (142, 151, 142)],
        [(117, 189, 149), (171, 231, 153), (149, 164, 168),
         (107, 119, 71), (120, 105, 138), (163, 174, 196)],
        [(163, 222, 132), (187, 117, 183), (92, 145, 69),
         (158, 143, 79), (220, 75, 222), (189, 73, 214)],
        [(211, 120, 173), (188, 218, 244), (214, 103, 68),
         (163, 166, 246), (79, 125, 246), (211, 201, 106)],
    ])


@pytest.fixture
def random_rgba():
    rng = np.random.default_rng(17)
    h = int(rng.integers(8, 20))
    w = int(rng.integers(8, 20))
    return rng.integers(0, 256, (h, w, 4), dtype=np.uint8)
