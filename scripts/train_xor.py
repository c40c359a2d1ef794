#!/usr/bin/env python3
"""Train a small multilayer perceptron on XOR and print error and accuracy."""
from __future__ import annotations

import argparse
from typing import Optional

from nnx import Dataset, EarlyStoppingConfig, MultilayerPerceptron, RandomGenerator, Trainer, TrainerConfig
from nnx.logging_utils import configure_logging
from nnx.metrics import get_accuracy, get_error
from nnx.training import initialize_weights


def make_xor_dataset(repeats: int = 1) -> Dataset:
    pairs = [
        ([0.0, 0.0], [1.0, 0.0]),
        ([0.0, 1.0], [0.0, 1.0]),
        ([1.0, 0.0], [0.0, 1.0]),
        ([1.0, 1.0], [1.0, 0.0]),
    ]
    return Dataset.from_pairs(pairs * repeats)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--hidden", type=int, nargs="*", default=[8], help="Hidden layer sizes")
    p.add_argument("--epochs", type=int, default=20000)
    p.add_argument("--learning-rate", type=float, default=0.1)
    p.add_argument("--momentum", type=float, default=0.5)
    p.add_argument("--quadratic-regularization", type=float, default=0.0)
    p.add_argument("--max-relative-noise", type=float, default=0.0)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument(
        "--init-scale",
        type=float,
        default=1.0,
        help="Start from weights uniform in [-scale, scale); 0 keeps the trainer's own initialisation",
    )
    p.add_argument("--early-stopping", action="store_true", help="Hold out data and stop when it stalls")
    p.add_argument("--validation-fraction", type=float, default=0.25)
    p.add_argument("--patience", type=int, default=5)
    p.add_argument("--validation-interval", type=int, default=500)
    p.add_argument("--progress", action="store_true")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level)

    early_stopping = None
    if args.early_stopping:
        early_stopping = EarlyStoppingConfig(
            validation_set_fraction=args.validation_fraction,
            max_epochs_without_improvement=args.patience,
            epochs_between_validations=args.validation_interval,
        )
    config = TrainerConfig(
        num_epochs=args.epochs,
        learning_rate=args.learning_rate,
        momentum=args.momentum,
        quadratic_regularization=args.quadratic_regularization,
        max_relative_noise=args.max_relative_noise,
        seed=args.seed,
        initialize_weights=args.init_scale <= 0,
        early_stopping=early_stopping,
    )

    dataset = make_xor_dataset(repeats=4 if args.early_stopping else 1)
    network = MultilayerPerceptron(2, 2, args.hidden)
    if args.init_scale > 0:
        initialize_weights(network, RandomGenerator(args.seed), scale=args.init_scale)
    trainer = Trainer(config, progress=args.progress)
    trainer.train(dataset, network)

    stats = {
        "epochs_run": trainer.history.epochs_run,
        "stopped_early": trainer.history.stopped_early,
        "error": get_error(network, dataset),
        "accuracy": get_accuracy(network, dataset),
    }
    print(stats)


if __name__ == "__main__":
    main()
