# train.py
# Purpose: End-to-end training runner wiring data I/O, AdaBoost, and metrics.

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from data import DataSet, load_csv, restaurant_dataset, train_test_split
from metrics import confusion, evaluate, pretty_print, round_summary
from models import BoostingError, get_model
from models.adaboost import DEGENERATE_POLICIES, WEIGHTING_STRATEGIES
from models.weights import INIT_SCHEMES


# --------------------------------------------------------------------------------------
# CLI
# --------------------------------------------------------------------------------------

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the training run."""
    p = argparse.ArgumentParser(description="AdaBoost — Training Runner")

    # Data options
    p.add_argument("--csv", default=None, help="CSV file to train on (default: built-in restaurant dataset).")
    p.add_argument("--target", default=None, help="Label column of --csv (required with --csv).")
    p.add_argument("--attributes", nargs="*", default=None, help="Feature columns to use (default: all but target).")
    p.add_argument("--train-frac", type=float, default=1.0, help="Train fraction (default 1.0 = test on train).")
    p.add_argument("--shuffle", action="store_true", help="Shuffle before splitting.")

    # Model options
    p.add_argument("--rounds", "-K", type=int, default=5, help="Number of boosting rounds (default 5).")
    p.add_argument("--learner", default="stump", help="Weak learner name (default 'stump').")
    p.add_argument("--weighting", choices=WEIGHTING_STRATEGIES, default="sample_weight",
                   help="How weak learners see the example weights.")
    p.add_argument("--init", choices=INIT_SCHEMES, default="uniform", help="Initial weight scheme.")
    p.add_argument("--on-degenerate", choices=DEGENERATE_POLICIES, default="raise",
                   help="Policy when a round's weighted error is 0 or 1.")

    # Run options
    p.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility.")
    p.add_argument("--save", default=None, help="Optional path to save metrics as JSON.")
    p.add_argument("--plot-rounds", default=None, help="Optional path to save a per-round error/z plot.")

    return p.parse_args(argv)


# --------------------------------------------------------------------------------------
# Round plotting
# --------------------------------------------------------------------------------------

def plot_rounds(rounds, output_path: str) -> None:
    """Plot weighted error and hypothesis weight per boosting round."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        print("Warning: matplotlib not installed. Skipping round plot.")
        return

    idx = [r.index for r in rounds]
    fig, (ax_err, ax_z) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    ax_err.plot(idx, [r.error for r in rounds], marker="o", linewidth=2)
    ax_err.axhline(0.5, color="grey", linestyle="--", linewidth=1)
    ax_err.set_ylabel("Weighted error")
    ax_err.grid(True, alpha=0.3)
    ax_z.bar(idx, [r.z for r in rounds])
    ax_z.set_xlabel("Round")
    ax_z.set_ylabel("Hypothesis weight z")
    ax_z.grid(True, alpha=0.3)
    fig.suptitle("AdaBoost rounds")

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=100, bbox_inches="tight")
    print(f"Saved round plot → {out}")
    plt.close(fig)


# --------------------------------------------------------------------------------------
# Main
# --------------------------------------------------------------------------------------

def load_dataset(args: argparse.Namespace) -> DataSet:
    if args.csv:
        if not args.target:
            raise SystemExit("--target is required with --csv")
        return load_csv(Path(args.csv), args.target, attributes=args.attributes)
    return restaurant_dataset()


def main(args: argparse.Namespace) -> int:

    # 1) Load and split
    ds = load_dataset(args)
    train_ds, test_ds = train_test_split(ds, train_frac=args.train_frac, shuffle=args.shuffle, random_state=args.seed)
    if len(test_ds) == 0:
        test_ds = train_ds
    print(f"\nExamples: train={len(train_ds)}  test={len(test_ds)}  attributes={len(ds.attributes)}")

    # 2) Train
    model = get_model(
        "adaboost",
        n_estimators=int(args.rounds),
        learner=args.learner,
        weighting=args.weighting,
        init_scheme=args.init,
        on_degenerate=args.on_degenerate,
        random_state=int(args.seed),
    )
    try:
        model.train(train_ds)
    except BoostingError as e:
        print(f"Training failed: {e}", file=sys.stderr)
        return 1

    print(f"\n{'Round':<6} {'Error':>10} {'z':>10}")
    print("-" * 28)
    for r in model.rounds:
        print(f"{r.index:<6} {r.error:>10.6f} {r.z:>+10.4f}")

    # 3) Evaluate
    print("\n=== Train Metrics ===")
    metrics_train = evaluate(model, train_ds)
    pretty_print(metrics_train)

    print("\n=== Test Metrics ===")
    metrics_test = evaluate(model, test_ds)
    pretty_print(metrics_test)
    labels, cm = confusion(model, test_ds)
    print(f"\nConfusion (rows=true, cols=pred) labels={labels}")
    print(cm)

    if args.plot_rounds:
        plot_rounds(model.rounds, args.plot_rounds)

    # 4) Save metrics (optional)
    if args.save:
        payload = {
            "model": "adaboost",
            "params": model.get_params(),
            "dataset": str(args.csv) if args.csv else "restaurant",
            "split": {"train_frac": args.train_frac, "shuffle": bool(args.shuffle)},
            "rounds": round_summary(model.rounds),
            "metrics": {"train": metrics_train, "test": metrics_test},
            "seed": int(args.seed),
        }
        out = Path(args.save)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        print(f"\nSaved metrics → {out}")

    return 0


def cli() -> None:
    sys.exit(main(parse_args()))


if __name__ == "__main__":
    cli()
