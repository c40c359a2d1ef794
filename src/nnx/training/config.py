"""Configuration dataclasses for the gradient trainer."""
from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Optional

from ..errors import ConfigurationError


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


@dataclass(frozen=True, slots=True)
class EarlyStoppingConfig:
    """Hold-out validation settings for the early-stopping trainer.

    Parameters
    ----------
    validation_set_fraction:
        Share of the training examples held out for validation. Must lie in
        ``(0, 1)``; at least one example is always kept for training and one
        for validation.
    max_epochs_without_improvement:
        Number of consecutive validation checks without a strict decrease in
        validation loss after which training stops.
    epochs_between_validations:
        Number of single-example update steps between two validation checks.
    """

    validation_set_fraction: float = 0.2
    max_epochs_without_improvement: int = 5
    epochs_between_validations: int = 100

    def validate(self) -> "EarlyStoppingConfig":
        if not _is_finite(self.validation_set_fraction) or not 0.0 < self.validation_set_fraction < 1.0:
            raise ConfigurationError(
                f"validation_set_fraction must be within (0, 1). Was: {self.validation_set_fraction!r}"
            )
        if not _is_int(self.max_epochs_without_improvement) or self.max_epochs_without_improvement <= 0:
            raise ConfigurationError(
                f"max_epochs_without_improvement must be a positive integer. "
                f"Was: {self.max_epochs_without_improvement!r}"
            )
        if not _is_int(self.epochs_between_validations) or self.epochs_between_validations <= 0:
            raise ConfigurationError(
                f"epochs_between_validations must be a positive integer. Was: {self.epochs_between_validations!r}"
            )
        return self


@dataclass(frozen=True, slots=True)
class TrainerConfig:
    """Hyperparameters of the stochastic gradient trainer.

    Parameters
    ----------
    num_epochs:
        Number of update steps. Each step uses a single example drawn at
        random with replacement, so an "epoch" here is one step and not a
        pass over the dataset.
    learning_rate:
        Step size ``eta`` applied to the combined gradient.
    momentum:
        Fraction ``beta`` of the previous combined gradient added to the
        current one. Must lie in ``[0, 1)``.
    quadratic_regularization:
        L2 coefficient ``lambda``; ``lambda * w`` is added to every gradient.
    batch_size:
        Accepted for compatibility and validated, but updates are always
        computed from one example.
    max_relative_noise:
        When positive, every input component of the drawn example is scaled
        by ``1 + u`` with ``u`` uniform in ``[-max_relative_noise,
        max_relative_noise)`` before computing gradients.
    seed:
        Seed of the run's random stream. ``None`` draws a fresh seed, which
        makes the run non-reproducible.
    initialize_weights:
        Reset every weight to a uniform value in ``[-0.1, 0.1)`` before
        training. Disable to continue from externally supplied weights.
    early_stopping:
        Switches the trainer to the hold-out validation variant.
    """

    num_epochs: int = 1000
    learning_rate: float = 0.1
    momentum: float = 0.0
    quadratic_regularization: float = 0.0
    batch_size: int = 1
    max_relative_noise: float = 0.0
    seed: Optional[int] = 0
    initialize_weights: bool = True
    early_stopping: Optional[EarlyStoppingConfig] = None

    def validate(self) -> "TrainerConfig":
        """Return ``self`` if every field is usable, otherwise raise :class:`ConfigurationError`."""

        if not _is_int(self.num_epochs) or self.num_epochs <= 0:
            raise ConfigurationError(f"num_epochs should be a positive integer. Was: {self.num_epochs!r}")
        if not _is_finite(self.learning_rate) or self.learning_rate <= 0:
            raise ConfigurationError(f"learning_rate must be a positive number. Was: {self.learning_rate!r}")
        if not _is_finite(self.momentum) or not 0.0 <= self.momentum < 1.0:
            raise ConfigurationError(f"momentum must be within [0, 1). Was: {self.momentum!r}")
        if not _is_finite(self.quadratic_regularization) or self.quadratic_regularization < 0:
            raise ConfigurationError(
                f"quadratic_regularization must be non-negative. Was: {self.quadratic_regularization!r}"
            )
        if not _is_int(self.batch_size) or self.batch_size <= 0:
            raise ConfigurationError(f"batch_size should be a positive integer. Was: {self.batch_size!r}")
        if not _is_finite(self.max_relative_noise) or self.max_relative_noise < 0:
            raise ConfigurationError(f"max_relative_noise must be non-negative. Was: {self.max_relative_noise!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ConfigurationError(f"seed must be an integer or None. Was: {self.seed!r}")
        if not isinstance(self.initialize_weights, bool):
            raise ConfigurationError(f"initialize_weights must be a boolean. Was: {self.initialize_weights!r}")
        if self.early_stopping is not None:
            if not isinstance(self.early_stopping, EarlyStoppingConfig):
                raise ConfigurationError("early_stopping must be an EarlyStoppingConfig or None.")
            self.early_stopping.validate()
        return self

    def with_updates(self, **changes) -> "TrainerConfig":
        """Return a copy with ``changes`` applied (the original is left untouched)."""

        return replace(self, **changes)


__all__ = ["EarlyStoppingConfig", "TrainerConfig"]
