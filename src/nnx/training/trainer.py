"""Single-example stochastic gradient trainer with momentum and L2 decay."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional, Sequence

import numpy as np
from tqdm.auto import tqdm

from ..data import Dataset, InputOutput, as_dataset
from ..errors import ArgumentError, ConfigurationError, ValidationError
from ..metrics import get_accuracy, get_error
from ..network import MultilayerPerceptron, Weights
from ..rng import RandomGenerator, get_random
from .config import EarlyStoppingConfig, TrainerConfig

logger = logging.getLogger(__name__)

INITIAL_WEIGHT_RANGE = 0.1


@dataclass
class TrainingHistory:
    """What happened during the most recent :meth:`Trainer.train` call."""

    epochs_run: int = 0
    validation_losses: list[float] = field(default_factory=list)
    stopped_early: bool = False


def initialize_weights(
    network: MultilayerPerceptron,
    rand: RandomGenerator,
    scale: float = INITIAL_WEIGHT_RANGE,
) -> None:
    """Draw every weight uniformly from ``[-scale, scale)``, layer by layer in storage order."""

    for layer_weights in network.weights:
        for i in range(layer_weights.shape[0]):
            layer_weights[i] = rand.uniform(-scale, scale)


def adjust_weights(
    network: MultilayerPerceptron,
    gradients: Weights,
    previous_gradients: Weights,
    config: TrainerConfig,
) -> None:
    """Apply one update step in place.

    For every weight ``w`` with gradient ``g``::

        g' = g + quadratic_regularization * w + momentum * g_prev
        w  = w - learning_rate * g'

    ``previous_gradients`` is overwritten with ``g'`` for the next step.
    """

    for weights, gradient, previous in zip(network.weights, gradients, previous_gradients):
        full_gradient = gradient + config.quadratic_regularization * weights + config.momentum * previous
        weights -= config.learning_rate * full_gradient
        previous[:] = full_gradient


def _perturb(inputs: np.ndarray, max_relative_noise: float, rand: RandomGenerator) -> np.ndarray:
    noise = np.array([rand.uniform(-max_relative_noise, max_relative_noise) for _ in range(inputs.shape[0])])
    return inputs * (1.0 + noise)


class _RunAllEpochs:
    """Stopping rule of the plain trainer: never stop before ``num_epochs``."""

    def __init__(self, training_set: Dataset) -> None:
        self.training_set = training_set

    def should_stop(self, epoch: int, network: MultilayerPerceptron, history: TrainingHistory) -> bool:
        return False


class _StopWhenValidationStalls:
    """Hold out part of the data and stop once validation loss stops strictly decreasing."""

    @staticmethod
    def check_size(dataset: Dataset) -> None:
        if len(dataset) < 2:
            raise ValidationError("Early stopping needs at least two examples to hold out a validation set.")

    def __init__(self, config: EarlyStoppingConfig, dataset: Dataset, rand: RandomGenerator) -> None:
        self.check_size(dataset)
        self.config = config
        indices = list(range(len(dataset)))
        rand.shuffle(indices)
        num_validation = min(max(int(round(config.validation_set_fraction * len(dataset))), 1), len(dataset) - 1)
        self.validation_set = Dataset(dataset[i] for i in indices[:num_validation])
        self.training_set = Dataset(dataset[i] for i in indices[num_validation:])
        self.best_loss = math.inf
        self.checks_without_improvement = 0
        logger.info(
            "Holding out %d of %d examples for validation", len(self.validation_set), len(dataset)
        )

    def should_stop(self, epoch: int, network: MultilayerPerceptron, history: TrainingHistory) -> bool:
        if (epoch + 1) % self.config.epochs_between_validations != 0:
            return False
        loss = get_error(network, self.validation_set)
        history.validation_losses.append(loss)
        if loss < self.best_loss:
            self.best_loss = loss
            self.checks_without_improvement = 0
        else:
            self.checks_without_improvement += 1
        logger.debug(
            "Epoch %d: validation loss %.6f (best %.6f, %d checks without improvement)",
            epoch + 1,
            loss,
            self.best_loss,
            self.checks_without_improvement,
        )
        return self.checks_without_improvement >= self.config.max_epochs_without_improvement


class Trainer:
    """Train a :class:`MultilayerPerceptron` by single-example gradient descent.

    The trainer holds only its configuration; all per-run state (random
    stream, momentum accumulator, validation split) lives inside one
    :meth:`train` call. ``history`` describes the last run.
    """

    def __init__(self, config: Optional[TrainerConfig] = None, *, progress: bool = False) -> None:
        self.config = config
        self.progress = progress
        self.history = TrainingHistory()

    def train(self, training_set: Sequence[InputOutput], network: MultilayerPerceptron) -> MultilayerPerceptron:
        """Mutate and return ``network`` after ``config.num_epochs`` update steps (or fewer on early stop)."""

        if self.config is None:
            raise ConfigurationError("Trainer is missing its config.")
        if not isinstance(self.config, TrainerConfig):
            raise ConfigurationError(f"Trainer config must be a TrainerConfig; was {type(self.config).__name__}.")
        config = self.config.validate()
        if network is None:
            raise ArgumentError("Network cannot be None.")
        dataset = as_dataset(training_set)
        dataset.check_widths(network.num_inputs, network.num_outputs)
        if config.early_stopping is not None:
            _StopWhenValidationStalls.check_size(dataset)

        rand = get_random(config.seed)
        if config.initialize_weights:
            initialize_weights(network, rand)

        if config.early_stopping is None:
            stopping = _RunAllEpochs(dataset)
        else:
            stopping = _StopWhenValidationStalls(config.early_stopping, dataset, rand)
        examples = stopping.training_set

        previous_gradients = [np.zeros_like(weights) for weights in network.weights]
        history = TrainingHistory()
        self.history = history

        logger.info(
            "Training %r on %d examples for up to %d epochs (learning_rate=%g, momentum=%g, "
            "quadratic_regularization=%g)",
            network,
            len(examples),
            config.num_epochs,
            config.learning_rate,
            config.momentum,
            config.quadratic_regularization,
        )

        with tqdm(range(config.num_epochs), desc="Training", disable=not self.progress) as epochs:
            for epoch in epochs:
                example = examples[rand.next_int(len(examples))]
                inputs = example.input
                if config.max_relative_noise > 0:
                    inputs = _perturb(inputs, config.max_relative_noise, rand)

                gradients = network.calculate_gradients(inputs, example.target)
                adjust_weights(network, gradients, previous_gradients, config)
                history.epochs_run = epoch + 1

                if stopping.should_stop(epoch, network, history):
                    history.stopped_early = True
                    logger.warning(
                        "Stopping early after %d epochs: validation loss did not improve for %d checks",
                        epoch + 1,
                        config.early_stopping.max_epochs_without_improvement,
                    )
                    break

        if not all(np.all(np.isfinite(weights)) for weights in network.weights):
            logger.warning("Training produced non-finite weights; consider a smaller learning rate.")
        logger.info("Finished training after %d epochs", history.epochs_run)
        return network

    get_error = staticmethod(get_error)
    get_accuracy = staticmethod(get_accuracy)


def train(
    config: TrainerConfig,
    training_set: Sequence[InputOutput],
    network: MultilayerPerceptron,
) -> MultilayerPerceptron:
    """Functional form of :meth:`Trainer.train`."""

    return Trainer(config).train(training_set, network)


__all__ = [
    "INITIAL_WEIGHT_RANGE",
    "Trainer",
    "TrainingHistory",
    "adjust_weights",
    "initialize_weights",
    "train",
]
