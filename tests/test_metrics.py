import math

import numpy as np
import pytest

from nnx import (
    ArgumentError,
    Dataset,
    MultilayerPerceptron,
    NumericError,
    ValidationError,
    cross_entropy_error,
    get_accuracy,
    get_error,
    max_index,
    mean_square_error,
)

VECTORS = [
    ([0.1, 0.5, 1.0], [0.3, 0.3, 0.4]),
    ([1.0], [0.25]),
    ([0.2, 0.2, 0.2, 0.4], [0.9, 0.05, 0.03, 0.02]),
]


@pytest.mark.parametrize("t, o", VECTORS)
def test_mean_square_error_is_symmetric(t, o):
    assert mean_square_error(t, o) == mean_square_error(o, t)


@pytest.mark.parametrize("t, o", VECTORS)
def test_self_errors(t, o):
    assert cross_entropy_error(t, t) >= 0
    assert mean_square_error(t, t) == 0


def test_cross_entropy_matches_formula():
    target = [0.0, 1.0, 0.0]
    output = [0.2, 0.7, 0.1]
    assert cross_entropy_error(target, output) == pytest.approx(-math.log(0.7))


def test_cross_entropy_is_not_symmetric():
    a, b = [0.2, 0.8], [0.6, 0.4]
    assert cross_entropy_error(a, b) != pytest.approx(cross_entropy_error(b, a))


def test_mean_square_error_matches_formula():
    assert mean_square_error([1.0, 2.0], [0.0, 4.0]) == pytest.approx((1.0 + 4.0) / 2)


@pytest.mark.parametrize("func", [cross_entropy_error, mean_square_error])
def test_length_mismatch_is_rejected(func):
    with pytest.raises(ValidationError):
        func([0.5, 0.5], [1.0])


def test_cross_entropy_of_non_positive_output_is_a_numeric_error():
    with pytest.raises(NumericError):
        cross_entropy_error([1.0, 0.0], [0.0, 1.0])
    with pytest.raises(NumericError):
        cross_entropy_error([1.0], [-0.5])


def test_cross_entropy_ignores_zero_outputs_under_zero_targets():
    assert cross_entropy_error([1.0, 0.0], [1.0, 0.0]) == 0.0
    assert cross_entropy_error([0.0, 1.0], [0.0, 1.0]) == 0.0
    assert cross_entropy_error([0.0, 1.0], [0.0, 0.5]) == pytest.approx(math.log(2.0))
    with pytest.raises(NumericError):
        cross_entropy_error([0.5, 0.5], [1.0, 0.0])


def test_max_index_prefers_first_occurrence():
    assert max_index([0.1, 0.7, 0.7]) == 1
    assert max_index([3.0, 1.0]) == 0


def make_identity_classifier() -> MultilayerPerceptron:
    network = MultilayerPerceptron(2, 2)
    network.set_layer_weights(0, [1.0, 0.0, 0.0, 0.0, 1.0, 0.0])
    return network


def test_accuracy_is_one_when_every_argmax_matches():
    network = make_identity_classifier()
    test_set = Dataset.from_pairs([([2.0, 0.0], [1.0, 0.0]), ([0.0, 3.0], [0.0, 1.0]), ([1.0, 1.0], [1.0, 0.0])])
    assert get_accuracy(network, test_set) == 1.0


def test_accuracy_is_zero_when_no_argmax_matches():
    network = make_identity_classifier()
    test_set = Dataset.from_pairs([([2.0, 0.0], [0.0, 1.0]), ([0.0, 3.0], [1.0, 0.0])])
    assert get_accuracy(network, test_set) == 0.0


def test_accuracy_counts_partial_hits():
    network = make_identity_classifier()
    test_set = Dataset.from_pairs(
        [
            ([2.0, 0.0], [1.0, 0.0]),
            ([2.0, 0.0], [0.0, 1.0]),
            ([0.0, 2.0], [0.0, 1.0]),
            ([0.0, 2.0], [1.0, 0.0]),
        ]
    )
    accuracy = get_accuracy(network, test_set)
    assert 0.0 <= accuracy <= 1.0
    assert accuracy == 0.5


def test_get_error_is_mean_cross_entropy():
    network = make_identity_classifier()
    pairs = [([2.0, 0.0], [1.0, 0.0]), ([0.0, 1.0], [0.0, 1.0])]
    test_set = Dataset.from_pairs(pairs)
    expected = np.mean(
        [cross_entropy_error(t, network.feed_forward(x).output) for x, t in pairs]
    )
    assert get_error(network, test_set) == pytest.approx(expected)


def test_get_error_and_accuracy_need_a_network_and_examples():
    network = make_identity_classifier()
    with pytest.raises(ValidationError):
        get_error(network, [])
    with pytest.raises(ValidationError):
        get_accuracy(network, Dataset())
    with pytest.raises(ArgumentError):
        get_accuracy(None, Dataset.from_pairs([([1.0, 0.0], [1.0, 0.0])]))
