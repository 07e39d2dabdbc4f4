# tests/test_nor_data.py
import numpy as np
import pytest

from nor_data import NOR_TABLE, generate_nor, nor


def test_nor_truth_table():
    for (a, b), label in NOR_TABLE:
        assert nor(a, b) == label
    assert [nor(a, b) for a in (0, 1) for b in (0, 1)] == [1, 0, 0, 0]


def test_generate_nor_shapes_and_labels():
    inputs, labels = generate_nor(500, seed=3)
    assert inputs.shape == (500, 2)
    assert labels.shape == (500, 1)
    assert inputs.dtype == np.float64
    assert set(np.unique(inputs)) <= {0.0, 1.0}
    for (a, b), (y,) in zip(inputs, labels):
        assert y == nor(a, b)


def test_generate_nor_is_reproducible():
    a_inputs, a_labels = generate_nor(50, seed=11)
    b_inputs, b_labels = generate_nor(50, seed=11)
    np.testing.assert_array_equal(a_inputs, b_inputs)
    np.testing.assert_array_equal(a_labels, b_labels)


def test_generate_nor_covers_every_pair():
    inputs, _ = generate_nor(400, seed=0)
    assert {tuple(row) for row in inputs} == {(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)}


def test_generate_nor_rejects_negative_count():
    with pytest.raises(ValueError):
        generate_nor(-1)
