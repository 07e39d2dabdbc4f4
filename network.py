import logging

from errors import InvalidTopology, ShapeMismatch
from layers import as_vector

logger = logging.getLogger(__name__)


class Network:
    def __init__(self):
        """
        Initialize a `layers` attribute holding the chain from input to output.
        The network owns these layers; they only refer to each other by index.
        """
        self.layers = []

    def __len__(self):
        return len(self.layers)

    def __iter__(self):
        return iter(self.layers)

    def append(self, layer):
        """
        Adds a new layer at the output end of the chain.

        Layers *must* be added in order from input to output, and each layer
        can only be added once.
        :param layer: The layer to be added
        """
        if self.is_empty():
            layer.join(self.layers)
        else:
            self.tail().connect_next(layer)
        logger.debug("Appended %r as layer %d", layer, layer.index)

    def initialize(self, generator=None):
        """
        Draw fresh weights for every layer. Call after all layers are appended.
        :param generator: Optional torch.Generator, for reproducible runs.
        """
        for layer in self.layers:
            layer.initialize_weights(generator)
        logger.debug("Initialized %d layers", len(self.layers))

    def is_empty(self):
        return not self.layers

    def head(self):
        return self.layers[0] if self.layers else None

    def tail(self):
        return self.layers[-1] if self.layers else None

    def _require_layers(self):
        if self.is_empty():
            raise InvalidTopology("Network has no layers")

    def forward(self, inputs=None):
        """
        Compute the output of the network by propagating from the head to the tail.

        :param inputs: Optional input vector assigned to the head before propagating.
                       When omitted, the head's activations must already hold the input.
        :return: The output activations (see `output`)
        """
        self._require_layers()
        if inputs is not None:
            self.head().set_activations(inputs)
        self.head().propagate_forward()
        return self.output()

    def backward(self, labels):
        """
        Perform one step of stochastic gradient descent towards `labels`,
        updating the weights of every layer from the tail back to the head.

        :param labels: Target values, one per output neuron.
        """
        self._require_layers()
        tail = self.tail()
        labels = as_vector(labels, tail.in_size, "labels")
        out = tail.activations
        delta = out * (1 - out) * (labels - out)
        tail.propagate_backward(delta)

    def output(self):
        """
        The tail's activation tensor. It is overwritten in place by the next forward pass.
        """
        self._require_layers()
        return self.tail().activations

    def cost(self, labels):
        """
        Sum of squared differences between the current output and `labels`.
        """
        self._require_layers()
        labels = as_vector(labels, self.tail().in_size, "labels")
        if labels.shape != self.output().shape:
            raise ShapeMismatch(f"labels shape {tuple(labels.shape)} does not match output")
        return float(((self.output() - labels) ** 2).sum())
