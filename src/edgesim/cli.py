"""
Command line entry point: run both experiments for one seed.
"""

import argparse
import os

import matplotlib.pyplot as plt

from .compare import print_comparison
from .experiment import edges_config, run_edges_experiment, run_redundancy_experiment
from .logging_utils import setup_run_logger
from .simulate import make_rng, print_data_summary

DEFAULT_SEED = 42


def build_parser():
    parser = argparse.ArgumentParser(
        prog="edgesim",
        description=(
            "Compare a random forest and an elastic net on simulated data, "
            "then study how duplicated columns affect feature selection."
        ),
    )
    parser.add_argument(
        "--seed", type=int, default=DEFAULT_SEED, help="random seed for the whole run"
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="save figures here instead of showing them",
    )
    parser.add_argument("--log-dir", default=None, help="also write a run log here")
    return parser


def _finish_figure(fig, output_dir, filename):
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, filename)
        fig.savefig(path, dpi=150, bbox_inches="tight")
        print(f"Saved figure to {path}")
        plt.close(fig)
    else:
        plt.show()


def main(argv=None):
    args = build_parser().parse_args(argv)
    logger, log_path = setup_run_logger(args.log_dir)
    if log_path:
        logger.info("Logging to %s", log_path)

    # One generator for the whole run; train is drawn before test.
    rng = make_rng(args.seed)
    config = edges_config(seed=args.seed)

    print("Step 1: edged data, random forest vs elastic net")
    fig, ax = plt.subplots(figsize=(7, 6))
    train, test, result = run_edges_experiment(config, rng, plot=True, ax=ax)
    print_data_summary(train, "Training data")
    print_data_summary(test, "Test data")
    print_comparison(result)
    _finish_figure(fig, args.output_dir, "roc_edges.png")

    print("\nStep 2: duplicated columns and feature selection")
    redundancy = run_redundancy_experiment(config, rng, plot=True)
    print("\nForest importances:")
    for name, value in redundancy["importances"].items():
        print(f"  {name}: {value:.4f}")
    rfe = redundancy["rfe"]
    print(f"\nRFE selected {rfe.best_size} features: {rfe.selected}")
    _finish_figure(plt.gcf(), args.output_dir, "rfe_profile.png")

    return 0
