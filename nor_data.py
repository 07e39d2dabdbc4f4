import numpy as np

# (inputs, label) for every pair of input bits
NOR_TABLE = (
    ((0.0, 0.0), 1.0),
    ((0.0, 1.0), 0.0),
    ((1.0, 0.0), 0.0),
    ((1.0, 1.0), 0.0),
)


def nor(a, b):
    return int(not (a or b))


def generate_nor(n, seed=None):
    """
    Draw `n` random NOR examples.

    :param n: Number of examples.
    :param seed: Seed for numpy's default_rng; None draws fresh entropy.
    :return: inputs of shape (n, 2) and labels of shape (n, 1), both float64
    """
    if n < 0:
        raise ValueError(f"n must not be negative, got {n}")
    rng = np.random.default_rng(seed)
    bits = rng.integers(0, 2, size=(n, 2))
    labels = np.logical_not(bits.any(axis=1)).astype(np.float64)
    return bits.astype(np.float64), labels.reshape(-1, 1)
