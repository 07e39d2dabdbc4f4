import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import torch
from tqdm import tqdm

from errors import ShapeMismatch
from layers import Layer
from network import Network

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainConfig:
    layer_sizes: Tuple[int, ...] = (2, 4, 1)
    iterations: int = 100_000
    seed: Optional[int] = None
    log_interval: int = 10_000
    progress: bool = True

    def with_(self, **kwargs) -> "TrainConfig":
        """Clone with updated values"""
        return replace(self, **kwargs)


def make_generator(seed=None):
    generator = torch.Generator()
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(seed)
    return generator


def build_network(layer_sizes, generator=None):
    """
    Build and initialize a chain with one layer per entry of `layer_sizes`,
    input layer first.
    """
    sizes = [int(size) for size in layer_sizes]
    if not sizes:
        raise ShapeMismatch("layer_sizes must name at least one layer")
    network = Network()
    for size, next_size in zip(sizes, sizes[1:] + [0]):
        network.append(Layer(size, next_size))
    network.initialize(generator)
    logger.info("Built network %s", " -> ".join(str(size) for size in sizes))
    return network


class Trainer:
    """
    Online SGD: one forward and one backward pass per example, in order.
    """

    def __init__(self, network: Network):
        self.network = network

    def fit(self, inputs, labels, log_interval=10_000, progress=True):
        """
        Train on every (input, label) pair once.

        :param inputs: Sequence of input vectors.
        :param labels: Sequence of label vectors, same length as `inputs`.
        :param log_interval: Log the mean squared error every this many examples (0 disables).
        :param progress: Show a progress bar.
        :return: Squared error of each example, measured before its update.
        """
        if len(inputs) != len(labels):
            raise ShapeMismatch(f"Got {len(inputs)} inputs but {len(labels)} labels")

        history = []
        running = 0.0
        examples = tqdm(zip(inputs, labels), total=len(inputs), desc="Training", disable=not progress)
        for step, (x, y) in enumerate(examples, start=1):
            self.network.forward(x)
            cost = self.network.cost(y)
            self.network.backward(y)
            history.append(cost)
            running += cost
            if log_interval and step % log_interval == 0:
                logger.info("Example %d/%d, mean squared error %.6f", step, len(inputs), running / log_interval)
                running = 0.0
        return history

    def predict(self, x):
        """Forward `x` and return a copy of the output."""
        return self.network.forward(x).clone()
