"""Command line entry point: train one network per logic gate concurrently."""

from __future__ import annotations

import argparse
import json
import threading
from pathlib import Path
from typing import Iterable

from gatenets.core.types import REPORT_EVERY
from gatenets.data import gates as gate_registry
from gatenets.reporting.console import ConsoleReporter
from gatenets.training import pipelines
from gatenets.training.pipelines import TrainingLaunchError
from gatenets.training.trainer import NonFiniteNetworkError


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="default",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--gates",
        help="Comma separated gate names, e.g. AND,OR,XOR (see --list-gates)",
    )
    parser.add_argument("--epochs", type=int, help="Number of training epochs")
    parser.add_argument("--lr", type=float, help="Learning rate")
    parser.add_argument("--seed", type=int, help="Seed for weight initialisation")
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Train the networks one after another in the main thread",
    )
    parser.add_argument("--run-dir", type=Path, help="Write error histories and summaries here")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Plot error curves into the run directory"
    )
    parser.add_argument(
        "--show-accuracy", action="store_true", help="Print thresholded accuracy per gate"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--list-gates", action="store_true", help="List registered gates and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> dict:
    config = pipelines.load_preset(args.preset)

    if args.config:
        override = pipelines.read_config_file(args.config)
        # a file carrying every section replaces the preset outright
        if {"data", "model", "train"} <= override.keys():
            config = override
        else:
            config = pipelines.merge_config(config, override)

    if args.gates:
        names = [name.strip() for name in args.gates.split(",") if name.strip()]
        config.setdefault("data", {})["gates"] = names
    if args.lr is not None:
        config.setdefault("model", {})["learning_rate"] = float(args.lr)
    train_cfg = config.setdefault("train", {})
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.sequential:
        train_cfg["concurrent"] = False
    if args.run_dir is not None:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    if args.list_gates:
        for name in gate_registry.names():
            gate = gate_registry.get_gate(name)
            print(f"{name}: {' '.join(str(int(t)) for t in gate.targets)}")
        raise SystemExit(0)

    config = resolve_config(args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    try:
        result = pipelines.run_pipeline(config)
    except TrainingLaunchError as exc:
        raise SystemExit(f"fatal: {exc}: {exc.__cause__}") from exc
    except NonFiniteNetworkError as exc:
        raise SystemExit(f"fatal: {exc}") from exc

    reporter = ConsoleReporter(
        threading.Lock(),
        every=int(config["train"].get("report_every", REPORT_EVERY)),
        show_accuracy=args.show_accuracy,
    )
    reporter.report_all(result.results)


if __name__ == "__main__":
    main()
