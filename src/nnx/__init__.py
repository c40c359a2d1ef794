"""Feed-forward neural network training engine.

The package provides a multilayer perceptron with backpropagation, a
single-example stochastic gradient trainer with momentum, L2 regularisation
and input noise, and the loss/accuracy functions used to evaluate it.
"""

import logging

from .data import Dataset, InputOutput
from .errors import (
    ArgumentError,
    ConfigurationError,
    NeuralNetworkError,
    NumericError,
    ValidationError,
)
from .metrics import cross_entropy_error, get_accuracy, get_error, max_index, mean_square_error
from .network import FeedForwardResult, MultilayerPerceptron
from .rng import RandomGenerator, get_random
from .training import EarlyStoppingConfig, Trainer, TrainerConfig, TrainingHistory, train

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "ConfigurationError",
    "Dataset",
    "EarlyStoppingConfig",
    "FeedForwardResult",
    "InputOutput",
    "MultilayerPerceptron",
    "NeuralNetworkError",
    "NumericError",
    "RandomGenerator",
    "Trainer",
    "TrainerConfig",
    "TrainingHistory",
    "ValidationError",
    "cross_entropy_error",
    "get_accuracy",
    "get_error",
    "get_random",
    "max_index",
    "mean_square_error",
    "train",
]
