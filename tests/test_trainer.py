# tests/test_trainer.py
import dataclasses
import logging

import pytest
import torch

from errors import ShapeMismatch
from nor_data import generate_nor
from trainer import TrainConfig, Trainer, build_network, make_generator


def test_config_defaults_and_with():
    config = TrainConfig()
    assert config.layer_sizes == (2, 4, 1)
    assert config.iterations == 100_000
    updated = config.with_(iterations=10, seed=5)
    assert (updated.iterations, updated.seed) == (10, 5)
    assert config.iterations == 100_000
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.iterations = 1


def test_build_network_wires_and_initializes():
    net = build_network((2, 4, 1), make_generator(0))
    assert [(layer.in_size, layer.out_size) for layer in net] == [(2, 4), (4, 1), (1, 0)]
    assert net.layers[0].weights.shape == (4, 2)
    assert net.layers[1].weights.shape == (1, 4)
    assert net.tail().weights is None


def test_build_network_same_seed_same_weights():
    a = build_network((2, 3, 1), make_generator(42))
    b = build_network((2, 3, 1), make_generator(42))
    for la, lb in zip(a, b):
        if la.weights is not None:
            assert torch.equal(la.weights, lb.weights)


def test_build_network_requires_layers():
    with pytest.raises(ShapeMismatch):
        build_network(())


def test_fit_returns_history_and_logs(caplog):
    net = build_network((2, 4, 1), make_generator(0))
    inputs, labels = generate_nor(40, seed=0)
    with caplog.at_level(logging.INFO, logger="trainer"):
        history = Trainer(net).fit(inputs, labels, log_interval=10, progress=False)
    assert len(history) == 40
    assert all(cost >= 0 for cost in history)
    assert sum("mean squared error" in record.getMessage() for record in caplog.records) == 4


def test_fit_rejects_unequal_lengths():
    net = build_network((2, 1), make_generator(0))
    with pytest.raises(ShapeMismatch):
        Trainer(net).fit([[0.0, 0.0]], [], progress=False)


def test_predict_returns_copy():
    net = build_network((2, 3, 1), make_generator(0))
    trainer = Trainer(net)
    first = trainer.predict([0.0, 1.0])
    trainer.predict([1.0, 1.0])
    assert first.shape == (1,)
    assert first is not net.output()
    assert torch.equal(first, trainer.predict([0.0, 1.0]))
