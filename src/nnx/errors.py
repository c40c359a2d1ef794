"""Exception hierarchy shared by every ``nnx`` module."""
from __future__ import annotations


class NeuralNetworkError(Exception):
    """Root of all errors raised by the training engine."""


class ValidationError(NeuralNetworkError, ValueError):
    """A vector, matrix or layer specification has the wrong shape or value."""


class ConfigurationError(ValidationError):
    """The trainer was invoked without a usable configuration."""


class ArgumentError(NeuralNetworkError, ValueError):
    """A required argument was ``None`` or otherwise unusable."""


class NumericError(NeuralNetworkError, ArithmeticError):
    """A computation left the domain of real numbers (e.g. ``log(0)``)."""


def check_same_length(target_name: str, target, output_name: str, output) -> None:
    """Raise :class:`ValidationError` unless both sequences have equal length."""

    if len(output) != len(target):
        raise ValidationError(
            f"Length of '{output_name}' argument ({len(output)}) is different from "
            f"length of '{target_name}' argument ({len(target)})."
        )


__all__ = [
    "ArgumentError",
    "ConfigurationError",
    "NeuralNetworkError",
    "NumericError",
    "ValidationError",
    "check_same_length",
]
