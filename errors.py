class NetworkError(Exception):
    """
    Base class for every error raised while building or running a layer chain.
    """


class ShapeMismatch(NetworkError, ValueError):
    """
    A vector or matrix does not have the dimensions the chain expects
    (bad construction sizes, bad input/label length, or corrupted layer state).
    """


# Alternate name used when sizes are rejected before any propagation happens.
ShapeError = ShapeMismatch


class InvalidTopology(NetworkError):
    """
    Layers were wired out of order, twice, or to themselves.
    """


class UninitializedLayer(NetworkError, RuntimeError):
    """
    Propagation reached a non-terminal layer whose weights were never initialized.
    """
