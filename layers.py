import logging

import torch

from errors import InvalidTopology, ShapeMismatch, UninitializedLayer

# A Layer holds the neurons of one stage of the chain together with the
# weights and biases feeding the *next* stage.  Layers never own each other:
# adjacency is an index into the ordered list the chain lives in.

LEARNING_RATE = 0.1
DTYPE = torch.float64

logger = logging.getLogger(__name__)


def as_vector(values, size, name):
    """
    Convert values to a 1-D float tensor of the given length.

    Column vectors of shape (size, 1) are accepted and flattened.
    :raises ShapeMismatch: if the number of elements is not `size`
    """
    vector = torch.as_tensor(values, dtype=DTYPE)
    if vector.dim() == 2 and vector.shape[1] == 1:
        vector = vector.reshape(-1)
    if vector.dim() != 1 or vector.shape[0] != size:
        raise ShapeMismatch(f"{name} must have shape ({size},), got {tuple(vector.shape)}")
    return vector


class Layer:
    def __init__(self, in_size, out_size=0):
        """
        :param in_size: Number of neurons in this layer.
        :param out_size: Number of neurons in the next layer, 0 for the output layer.
        """
        if in_size < 1:
            raise ShapeMismatch(f"A layer needs at least one neuron, got in_size={in_size}")
        if out_size < 0:
            raise ShapeMismatch(f"out_size must not be negative, got {out_size}")
        self.in_size = in_size
        self.out_size = out_size
        self.activations = torch.zeros(in_size, dtype=DTYPE)
        # biases[i] is added to neuron i of the next layer, so there are out_size of them
        self.biases = torch.zeros(out_size, dtype=DTYPE)
        self.weights = None
        self._chain = None
        self._index = None

    def __repr__(self):
        return f"{self.__class__.__name__}(in_size={self.in_size}, out_size={self.out_size})"

    @property
    def index(self):
        return self._index

    @property
    def prev(self):
        if self._chain is None or self._index == 0:
            return None
        return self._chain[self._index - 1]

    @property
    def next(self):
        if self._chain is None or self._index + 1 >= len(self._chain):
            return None
        return self._chain[self._index + 1]

    def join(self, chain):
        """
        Place this layer at the end of `chain`, the ordered list that owns it.

        Network uses this to adopt its first layer; every later layer is
        placed by connect_next.
        """
        if self._chain is not None:
            raise InvalidTopology(f"{self!r} already belongs to a chain")
        self._chain = chain
        self._index = len(chain)
        chain.append(self)

    def connect_next(self, layer):
        """
        Make `layer` the successor of this layer.

        Each adjacent pair is connected exactly once, in chain order.
        :param layer: A layer that is not yet part of any chain.
        """
        if layer is self:
            raise InvalidTopology(f"{self!r} cannot be connected to itself")
        if self.next is not None:
            raise InvalidTopology(f"{self!r} already has a successor")
        if layer._chain is not None:
            raise InvalidTopology(f"{layer!r} is already connected")
        if self.out_size != layer.in_size:
            raise ShapeMismatch(
                f"Cannot connect {self!r} to {layer!r}: out_size {self.out_size} != in_size {layer.in_size}"
            )
        if self._chain is None:
            self.join([])
        layer.join(self._chain)
        logger.debug("Connected layer %d %r -> layer %d %r", self._index, self, layer._index, layer)

    def set_activations(self, values):
        """
        Assign this layer's activation vector (the network input, for the head).
        :param values: Sequence or tensor with `in_size` elements.
        """
        self.activations = as_vector(values, self.in_size, "activations").clone()

    def set_weights(self, weights, biases=None):
        """
        Replace the outgoing weights (and optionally biases) of this layer.
        :param weights: Matrix of shape (out_size, in_size).
        :param biases: Vector of length out_size.
        """
        weights = torch.as_tensor(weights, dtype=DTYPE)
        if tuple(weights.shape) != (self.out_size, self.in_size):
            raise ShapeMismatch(
                f"weights must have shape ({self.out_size}, {self.in_size}), got {tuple(weights.shape)}"
            )
        self.weights = weights.clone()
        if biases is not None:
            self.biases = as_vector(biases, self.out_size, "biases").clone()

    def initialize_weights(self, generator=None):
        """
        Fill the weight matrix with draws from U[-1, 1] and reset the biases.
        Does nothing on the output layer, which has no outgoing weights.

        :param generator: Optional torch.Generator used for the draws.
        """
        nxt = self.next
        if nxt is None:
            return
        if nxt.in_size != self.out_size:
            raise ShapeMismatch(f"{self!r} feeds {nxt!r} but their sizes disagree")
        self.weights = torch.empty(self.out_size, self.in_size, dtype=DTYPE).uniform_(-1, 1, generator=generator)
        self.biases = torch.zeros(self.out_size, dtype=DTYPE)
        logger.debug("Initialized weights of layer %d %r", self._index, self)

    def _check_outgoing(self):
        if self.weights is None:
            raise UninitializedLayer(f"Layer {self._index} {self!r} has no weights; initialize the network first")
        if tuple(self.weights.shape) != (self.out_size, self.in_size):
            raise ShapeMismatch(
                f"Layer {self._index} weights have shape {tuple(self.weights.shape)}, "
                f"expected ({self.out_size}, {self.in_size})"
            )
        if tuple(self.activations.shape) != (self.in_size,):
            raise ShapeMismatch(
                f"Layer {self._index} activations have shape {tuple(self.activations.shape)}, expected ({self.in_size},)"
            )
        if tuple(self.biases.shape) != (self.out_size,):
            raise ShapeMismatch(
                f"Layer {self._index} biases have shape {tuple(self.biases.shape)}, expected ({self.out_size},)"
            )

    def forward_step(self):
        """
        Compute the next layer's activations from this layer's:

            next.activations[i] = sigmoid(weights[i] . activations + biases[i])
        """
        nxt = self.next
        if nxt is None:
            return
        self._check_outgoing()
        if tuple(nxt.activations.shape) != (self.out_size,):
            raise ShapeMismatch(
                f"Layer {nxt._index} activations have shape {tuple(nxt.activations.shape)}, expected ({self.out_size},)"
            )
        nxt.activations.copy_(torch.sigmoid(torch.mv(self.weights, self.activations) + self.biases))

    def backward_step(self, delta):
        """
        Apply one SGD update to the weights feeding this layer and return the
        error signal for the previous layer.

        For every neuron i of this layer the incoming weight row is updated
        first, and the previous layer's delta is then derived from the
        updated row:

            prev.weights[i][j] += LEARNING_RATE * delta[i] * prev.activations[j]
            prev_delta[j] = a_j * (1 - a_j) * prev.weights[i][j] * delta[i]

        prev_delta[j] is assigned, not accumulated, so the last row wins.
        :param delta: Error signal for this layer's neurons, length in_size.
        :return: The previous layer's delta, or None at the head.
        """
        prev = self.prev
        if prev is None:
            return None
        delta = as_vector(delta, self.in_size, "delta")
        prev._check_outgoing()
        derivative = prev.activations * (1 - prev.activations)
        prev_delta = torch.zeros(prev.in_size, dtype=DTYPE)
        for i in range(self.in_size):
            row = prev.weights[i]
            row += LEARNING_RATE * delta[i] * prev.activations
            prev_delta = derivative * row * delta[i]
        return prev_delta

    def propagate_forward(self):
        """
        Run forward steps from this layer to the output layer.
        The activations of this layer must already be set.
        """
        layer = self
        while layer.next is not None:
            layer.forward_step()
            layer = layer.next

    def propagate_backward(self, delta):
        """
        Run backward steps from this layer to the input layer, updating
        weights in place along the way.
        :param delta: Error signal for this layer's neurons.
        """
        layer = self
        while layer.prev is not None:
            delta = layer.backward_step(delta)
            layer = layer.prev
