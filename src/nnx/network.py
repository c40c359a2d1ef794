"""Multilayer perceptron with flat per-layer weight storage.

Hidden layers apply ``tanh``; the output layer applies softmax. Gradients are
those of the cross-entropy loss ``-sum(t * log(y))`` with respect to every
weight, obtained by backpropagation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Sequence

import numpy as np

from .errors import ValidationError

logger = logging.getLogger(__name__)

Vector = np.ndarray
Weights = List[np.ndarray]


@dataclass
class FeedForwardResult:
    """Output of :meth:`MultilayerPerceptron.feed_forward`.

    ``activations[0]`` is the input itself and ``activations[-1]`` equals
    ``output``.
    """

    output: Vector
    activations: list[Vector] = field(default_factory=list)


def tanh(values: Vector) -> Vector:
    return np.tanh(values)


def softmax(logits: Vector) -> Vector:
    shifted = np.exp(logits - np.max(logits))
    return shifted / np.sum(shifted)


def as_vector(values: Sequence[float], name: str = "input") -> Vector:
    vector = np.asarray(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValidationError(f"Argument '{name}' must be a one-dimensional vector; had shape {vector.shape}.")
    return vector


def _check_width(value, name: str) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer. Was: {value!r}")
    return int(value)


class MultilayerPerceptron:
    """Feed-forward network described by ``(num_inputs, num_outputs, hidden_layer_sizes)``.

    Each layer owns one flat array of ``(input_width + 1) * output_width``
    weights laid out row by row: for output unit ``j`` the slice
    ``[j * (input_width + 1), (j + 1) * (input_width + 1))`` holds the input
    weights followed by the bias. All weights start at zero; random
    initialisation is the trainer's job.
    """

    def __init__(self, num_inputs: int, num_outputs: int, hidden_layer_sizes: Sequence[int] = ()) -> None:
        self.num_inputs = _check_width(num_inputs, "num_inputs")
        self.num_outputs = _check_width(num_outputs, "num_outputs")
        if hidden_layer_sizes is None:
            hidden_layer_sizes = ()
        self.hidden_layer_sizes = tuple(
            _check_width(size, f"hidden_layer_sizes[{i}]") for i, size in enumerate(hidden_layer_sizes)
        )

        widths = (self.num_inputs, *self.hidden_layer_sizes, self.num_outputs)
        self.layer_sizes: list[tuple[int, int]] = list(zip(widths[:-1], widths[1:]))
        self.weights: Weights = [np.zeros((n_in + 1) * n_out) for n_in, n_out in self.layer_sizes]

        logger.info("Created multilayer perceptron with widths %s", list(widths))

    def __repr__(self) -> str:
        return (
            f"<MultilayerPerceptron num_inputs={self.num_inputs}, num_outputs={self.num_outputs}, "
            f"hidden_layer_sizes={list(self.hidden_layer_sizes)}>"
        )

    @property
    def num_layers(self) -> int:
        return len(self.weights)

    # ------------------------------------------------------------------
    # Weight access
    # ------------------------------------------------------------------
    def _layer_matrix(self, layer: int) -> np.ndarray:
        n_in, n_out = self.layer_sizes[layer]
        return self.weights[layer].reshape(n_out, n_in + 1)

    def get_layer_weights(self, layer: int) -> np.ndarray:
        """Return a copy of the flat weights of ``layer`` (zero-based)."""

        self._check_layer_index(layer)
        return self.weights[layer].copy()

    def set_layer_weights(self, layer: int, values: Sequence[float]) -> None:
        """Overwrite every weight of ``layer`` with ``values``."""

        self._check_layer_index(layer)
        array = as_vector(values, "values")
        expected = self.weights[layer].shape[0]
        if array.shape[0] != expected:
            raise ValidationError(
                f"Weights were expected to have {expected} values in layer {layer + 1}; had: {array.shape[0]}."
            )
        self.weights[layer][:] = array

    def load_weights(self, weights: Sequence[Sequence[float]]) -> None:
        """Replace all layers at once; shapes are checked before anything is written."""

        if len(weights) != self.num_layers:
            raise ValidationError(f"Weights were expected to have {self.num_layers} layers; had: {len(weights)}.")
        arrays = [as_vector(values, "values") for values in weights]
        for layer, array in enumerate(arrays):
            expected = self.weights[layer].shape[0]
            if array.shape[0] != expected:
                raise ValidationError(
                    f"Weights were expected to have {expected} values in layer {layer + 1}; had: {array.shape[0]}."
                )
        for layer, array in enumerate(arrays):
            self.weights[layer][:] = array

    def copy(self) -> "MultilayerPerceptron":
        clone = MultilayerPerceptron(self.num_inputs, self.num_outputs, self.hidden_layer_sizes)
        clone.load_weights(self.weights)
        return clone

    def _check_layer_index(self, layer: int) -> None:
        if not 0 <= layer < self.num_layers:
            raise ValidationError(f"Layer must be between 0 and {self.num_layers - 1}; was {layer}.")

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def feed_forward(self, inputs: Sequence[float]) -> FeedForwardResult:
        """Evaluate the network on one input vector."""

        x = as_vector(inputs)
        if x.shape[0] != self.num_inputs:
            raise ValidationError(
                f"Length of 'input' argument ({x.shape[0]}) is different from the number of "
                f"network inputs ({self.num_inputs})."
            )

        activations = [x]
        last = self.num_layers - 1
        for layer in range(self.num_layers):
            matrix = self._layer_matrix(layer)
            z = matrix[:, :-1] @ activations[-1] + matrix[:, -1]
            activations.append(softmax(z) if layer == last else tanh(z))
        return FeedForwardResult(output=activations[-1], activations=activations)

    def calculate_gradients(self, inputs: Sequence[float], targets: Sequence[float]) -> Weights:
        """Return d(cross-entropy)/d(weight) with the same per-layer shape as :attr:`weights`."""

        t = as_vector(targets, "target")
        if t.shape[0] != self.num_outputs:
            raise ValidationError(
                f"Length of 'target' argument ({t.shape[0]}) is different from the number of "
                f"network outputs ({self.num_outputs})."
            )
        activations = self.feed_forward(inputs).activations

        # Softmax + cross-entropy: dL/dz_j = y_j * sum(t) - t_j
        delta = activations[-1] * np.sum(t) - t
        gradients: Weights = [np.empty(0)] * self.num_layers
        for layer in range(self.num_layers - 1, -1, -1):
            previous = activations[layer]
            gradients[layer] = np.outer(delta, np.append(previous, 1.0)).ravel()
            if layer > 0:
                back = self._layer_matrix(layer)[:, :-1].T @ delta
                delta = back * (1.0 - previous * previous)
        return gradients


__all__ = [
    "FeedForwardResult",
    "MultilayerPerceptron",
    "Weights",
    "as_vector",
    "softmax",
    "tanh",
]
