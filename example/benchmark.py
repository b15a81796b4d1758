import timeit

import numpy as np

import gridcarve


def perf(edge_mode, delta, n=3):
    rng = np.random.default_rng(0)
    src = rng.integers(0, 256, (120, 160, 4), dtype=np.uint8)
    h, w, _ = src.shape

    f = lambda: gridcarve.resize(src, (w + delta, h), edge_mode=edge_mode)
    cost = timeit.timeit(f, setup=f, number=n) / n
    print(f"edges: {edge_mode}, delta: {delta:+}px, cost: {cost:.4f}s")


def main():
    perf("wrap", -40)
    perf("wrap", 40)
    perf("clamp", -40)
    perf("clamp", 40)


if __name__ == "__main__":
    main()
