"""Training examples and fixed-width datasets."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, overload

import numpy as np

from .errors import ArgumentError, ValidationError
from .network import as_vector


@dataclass(frozen=True, eq=False)
class InputOutput:
    """One training example: an input vector and its target vector."""

    input: np.ndarray
    target: np.ndarray

    @classmethod
    def of(cls, inputs: Sequence[float], targets: Sequence[float]) -> "InputOutput":
        return cls(as_vector(inputs, "input"), as_vector(targets, "target"))


class Dataset(Sequence[InputOutput]):
    """Ordered collection of examples sharing one input width and one target width."""

    def __init__(self, examples: Iterable[InputOutput] = ()) -> None:
        self._examples: List[InputOutput] = []
        self.input_width: Optional[int] = None
        self.target_width: Optional[int] = None
        for example in examples:
            self.append(example)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Sequence[float], Sequence[float]]]) -> "Dataset":
        return cls(InputOutput.of(inputs, targets) for inputs, targets in pairs)

    @classmethod
    def from_matrices(cls, inputs, targets) -> "Dataset":
        """Build a dataset from row-aligned input and target matrices.

        Rows where either side holds a missing value (``None`` or ``NaN``)
        are skipped, matching blank cells in a host sheet. At least one
        complete row must remain.
        """

        if inputs is None or targets is None:
            raise ArgumentError("Both 'inputs' and 'targets' matrices are required.")
        inputs = np.atleast_2d(np.asarray(inputs, dtype=np.float64))
        targets = np.atleast_2d(np.asarray(targets, dtype=np.float64))
        if inputs.shape[0] != targets.shape[0]:
            raise ValidationError(
                f"Height of inputs matrix (was {inputs.shape[0]}) should be equal to height "
                f"of targets matrix (was {targets.shape[0]})."
            )
        complete = ~(np.isnan(inputs).any(axis=1) | np.isnan(targets).any(axis=1))
        if not complete.any():
            raise ValidationError("There were no good input/target point pairs.")
        return cls(InputOutput(x, t) for x, t in zip(inputs[complete], targets[complete]))

    def append(self, example: InputOutput) -> None:
        if example is None:
            raise ArgumentError("Example cannot be None.")
        in_width = example.input.shape[0]
        out_width = example.target.shape[0]
        if self.input_width is None:
            self.input_width, self.target_width = in_width, out_width
        elif (in_width, out_width) != (self.input_width, self.target_width):
            raise ValidationError(
                f"Example {len(self._examples)} has widths ({in_width}, {out_width}); "
                f"dataset expects ({self.input_width}, {self.target_width})."
            )
        self._examples.append(example)

    def check_widths(self, num_inputs: int, num_outputs: int) -> None:
        """Raise unless every example fits a network of the given widths."""

        if not self._examples:
            raise ValidationError("Dataset cannot be empty.")
        if self.input_width != num_inputs:
            raise ValidationError(
                f"Dataset input width ({self.input_width}) is different from the number of "
                f"network inputs ({num_inputs})."
            )
        if self.target_width != num_outputs:
            raise ValidationError(
                f"Dataset target width ({self.target_width}) is different from the number of "
                f"network outputs ({num_outputs})."
            )

    def __len__(self) -> int:
        return len(self._examples)

    @overload
    def __getitem__(self, index: int) -> InputOutput: ...

    @overload
    def __getitem__(self, index: slice) -> "Dataset": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Dataset(self._examples[index])
        return self._examples[index]

    def __iter__(self) -> Iterator[InputOutput]:
        return iter(self._examples)

    def __repr__(self) -> str:
        return f"<Dataset size={len(self)}, input_width={self.input_width}, target_width={self.target_width}>"


def as_dataset(examples) -> Dataset:
    """Return ``examples`` as a :class:`Dataset`, validating widths on the way."""

    if examples is None:
        raise ArgumentError("Dataset cannot be None.")
    if isinstance(examples, Dataset):
        return examples
    return Dataset(
        example if isinstance(example, InputOutput) else InputOutput.of(*example) for example in examples
    )


__all__ = ["Dataset", "InputOutput", "as_dataset"]
