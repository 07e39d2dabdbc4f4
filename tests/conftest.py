# tests/conftest.py
import os
import sys

# Ensure project root is importable (so `import layers` works when running from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest
import torch


@pytest.fixture
def generator():
    return torch.Generator().manual_seed(1234)


@pytest.fixture
def layer_factory():
    from layers import Layer
    def make(in_size=2, out_size=0):
        return Layer(in_size, out_size)
    return make


@pytest.fixture
def network_factory(generator):
    from trainer import build_network
    def make(*sizes, initialize=True):
        if initialize:
            return build_network(sizes, generator)
        from layers import Layer
        from network import Network
        net = Network()
        for size, next_size in zip(sizes, list(sizes[1:]) + [0]):
            net.append(Layer(size, next_size))
        return net
    return make
