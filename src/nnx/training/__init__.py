"""Gradient trainer and its configuration."""

from .config import EarlyStoppingConfig, TrainerConfig
from .trainer import Trainer, TrainingHistory, adjust_weights, initialize_weights, train

__all__ = [
    "EarlyStoppingConfig",
    "TrainerConfig",
    "Trainer",
    "TrainingHistory",
    "adjust_weights",
    "initialize_weights",
    "train",
]
