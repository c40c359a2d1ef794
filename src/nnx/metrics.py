"""Loss and accuracy functions over vector pairs and datasets."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import ArgumentError, NumericError, ValidationError, check_same_length


def cross_entropy_error(target: Sequence[float], output: Sequence[float]) -> float:
    """Return ``-sum(target_i * ln(output_i))``.

    Terms with a zero target contribute nothing, whatever the output. A
    non-positive output under a non-zero target raises :class:`NumericError`
    rather than yielding ``inf`` or ``nan``.
    """

    check_same_length("target", target, "output", output)
    target = np.asarray(target, dtype=np.float64)
    output = np.asarray(output, dtype=np.float64)
    used = target != 0
    try:
        with np.errstate(divide="raise", invalid="raise"):
            logs = np.log(output[used])
    except FloatingPointError as exc:
        raise NumericError(f"Cannot take the logarithm of non-positive output {output.tolist()}.") from exc
    return float(-np.sum(target[used] * logs))


def mean_square_error(target: Sequence[float], output: Sequence[float]) -> float:
    """Return ``mean((target_i - output_i) ** 2)``."""

    check_same_length("target", target, "output", output)
    diff = np.asarray(target, dtype=np.float64) - np.asarray(output, dtype=np.float64)
    return float(np.dot(diff, diff) / diff.shape[0])


def max_index(values: Sequence[float]) -> int:
    """Index of the largest component; ties go to the first occurrence."""

    return int(np.argmax(np.asarray(values, dtype=np.float64)))


def _check_test_set(network, test_set) -> None:
    if network is None:
        raise ArgumentError("Network cannot be None.")
    if test_set is None or len(test_set) == 0:
        raise ValidationError("Test set cannot be empty.")


def get_error(network, test_set) -> float:
    """Mean cross-entropy error of ``network`` over ``test_set``."""

    _check_test_set(network, test_set)
    error = 0.0
    for example in test_set:
        result = network.feed_forward(example.input)
        error += cross_entropy_error(example.target, result.output)
    return error / len(test_set)


def get_accuracy(network, test_set) -> float:
    """Fraction of examples whose predicted argmax equals the target argmax."""

    _check_test_set(network, test_set)
    hits = 0
    for example in test_set:
        expected = max_index(example.target)
        actual = max_index(network.feed_forward(example.input).output)
        hits += int(expected == actual)
    return hits / len(test_set)


__all__ = [
    "cross_entropy_error",
    "get_accuracy",
    "get_error",
    "max_index",
    "mean_square_error",
]
