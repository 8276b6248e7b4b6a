"""Pipeline assembly: concurrent training of one network per gate."""

from __future__ import annotations

import json
import math
import warnings
from concurrent.futures import Future, ThreadPoolExecutor
from copy import deepcopy
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from ..core.network import init_network, predict
from ..core.types import EPOCHS, LEARNING_RATE, REPORT_EVERY, GateResult, RunResult, TrainingTask
from ..data.gates import DEFAULT_GATES, SAMPLES, Gate, get_gates
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from ..reporting.summary import write_summary
from .trainer import Trainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "default": {
        "data": {"gates": list(DEFAULT_GATES)},
        "model": {"learning_rate": LEARNING_RATE},
        "train": {
            "epochs": EPOCHS,
            "seed": None,
            "concurrent": True,
            "report_every": REPORT_EVERY,
            "enable_plots": False,
        },
    },
    "quick": {
        "data": {"gates": list(DEFAULT_GATES)},
        "model": {"learning_rate": 0.5},
        "train": {
            "epochs": 2000,
            "seed": 0,
            "concurrent": True,
            "report_every": 500,
            "enable_plots": False,
        },
    },
    "all-gates": {
        "data": {"gates": ["AND", "OR", "XOR", "NAND", "NOR", "XNOR"]},
        "model": {"learning_rate": LEARNING_RATE},
        "train": {
            "epochs": EPOCHS,
            "seed": 0,
            "concurrent": True,
            "report_every": REPORT_EVERY,
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_CONFIG_SUFFIXES = (".json", ".yaml", ".yml")
_SECTIONS = frozenset({"data", "model", "train"})


class TrainingLaunchError(RuntimeError):
    """A training thread could not be started."""


def read_config_file(path: str | Path) -> Dict[str, object]:
    """Decode a JSON or YAML config file into a plain dict."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in _CONFIG_SUFFIXES:
        raise ValueError(f"{path.name}: config files must end in {', '.join(_CONFIG_SUFFIXES)}")
    text = path.read_text()
    if suffix == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - declared dependency
            raise RuntimeError(f"{path.name}: reading YAML configs needs PyYAML") from exc
        data = yaml.safe_load(text)
        data = {} if data is None else data
    if not isinstance(data, dict):
        raise TypeError(f"{path.name}: top level must be a mapping, got {type(data).__name__}")
    return data


def merge_config(base: Mapping[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Return ``base`` with ``override`` applied section by section."""

    merged = deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


@lru_cache(maxsize=1)
def _preset_files() -> Tuple[Tuple[str, str], ...]:
    # (name, JSON text) pairs so that callers always decode a fresh copy
    found = []
    if _PRESET_DIR.is_dir():
        for path in sorted(_PRESET_DIR.glob("*")):
            if path.suffix.lower() not in _CONFIG_SUFFIXES:
                continue
            data = read_config_file(path)
            missing = sorted(_SECTIONS.difference(data))
            if missing:
                raise KeyError(f"Preset {path.name} lacks sections: {', '.join(missing)}")
            found.append((path.stem, json.dumps(data)))
    return tuple(found)


def presets() -> Dict[str, Dict[str, object]]:
    combined = {name: deepcopy(dict(cfg)) for name, cfg in _PRESETS.items()}
    for name, text in _preset_files():
        combined[name] = json.loads(text)
    return combined


def load_preset(name: str) -> Dict[str, object]:
    available = presets()
    if name not in available:
        raise KeyError(f"Unknown preset {name!r}. Available presets: {', '.join(sorted(available))}")
    return available[name]


def _gate_names(value: object) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"data.gates must be a list of gate names, got {type(value).__name__}")
    return [str(name) for name in value]


def build_tasks(
    gates: Sequence[Gate],
    *,
    epochs: int,
    learning_rate: float,
    rng: np.random.Generator,
) -> List[TrainingTask]:
    """Create one task per gate, drawing every network from ``rng`` in order."""

    if epochs <= 0:
        raise ValueError(f"epochs must be positive, got {epochs}")
    tasks: List[TrainingTask] = []
    for gate in gates:
        network = init_network(gate.name, learning_rate, rng)
        tasks.append(
            TrainingTask(
                network=network,
                samples=SAMPLES,
                targets=gate.targets,
                error_history=np.zeros(epochs, dtype=np.float64),
            )
        )
    return tasks


def _launch(tasks: Sequence[TrainingTask]) -> None:
    trainers = [Trainer(task) for task in tasks]
    with ThreadPoolExecutor(
        max_workers=len(trainers), thread_name_prefix="gatenets-train"
    ) as executor:
        futures: List[Future] = []
        for trainer in trainers:
            try:
                futures.append(executor.submit(trainer.run))
            except RuntimeError as exc:
                raise TrainingLaunchError(
                    f"Could not start training thread for {trainer.task.network.name}"
                ) from exc
        # barrier: every network is read only after all trainers finished
        for future in futures:
            future.result()


def _run_sequential(tasks: Sequence[TrainingTask]) -> None:
    for task in tasks:
        Trainer(task).run()


def run_gates(
    gates: Sequence[Gate],
    *,
    epochs: int = EPOCHS,
    learning_rate: float = LEARNING_RATE,
    seed: int | None = None,
    concurrent: bool = True,
) -> Tuple[GateResult, ...]:
    """Train one network per gate and return results in declaration order."""

    rng = np.random.default_rng(seed)
    tasks = build_tasks(gates, epochs=epochs, learning_rate=learning_rate, rng=rng)
    if concurrent:
        _launch(tasks)
    else:
        _run_sequential(tasks)
    return tuple(
        GateResult(
            gate=gate.name,
            network=task.network,
            error_history=task.error_history,
            samples=task.samples,
            predictions=predict(task.network, task.samples),
            targets=task.targets,
        )
        for gate, task in zip(gates, tasks)
    )


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    data_cfg = dict(config.get("data", {}))
    model_cfg = dict(config.get("model", {}))
    train_cfg = dict(config.get("train", {}))

    gates = get_gates(_gate_names(data_cfg.get("gates", DEFAULT_GATES)))
    learning_rate = float(model_cfg.get("learning_rate", LEARNING_RATE))
    if not math.isfinite(learning_rate) or learning_rate <= 0.0:
        raise ValueError(f"learning_rate must be finite and positive, got {learning_rate!r}")
    epochs = int(train_cfg.get("epochs", EPOCHS))
    if epochs <= 0:
        raise ValueError(f"epochs must be positive, got {epochs}")
    report_every = int(train_cfg.get("report_every", REPORT_EVERY))
    if report_every <= 0:
        raise ValueError(f"report_every must be positive, got {report_every}")
    if epochs % report_every:
        warnings.warn(
            f"epochs={epochs} is not a multiple of report_every={report_every}; "
            "the trailing partial stride is not reported",
            UserWarning,
            stacklevel=2,
        )
    seed = train_cfg.get("seed")
    seed = int(seed) if seed is not None else None
    concurrent = bool(train_cfg.get("concurrent", True))

    if not config.get("quiet", False):
        _print_startup_summary(
            gates=[gate.name for gate in gates],
            epochs=epochs,
            learning_rate=learning_rate,
            seed=seed,
            concurrent=concurrent,
        )

    results = run_gates(
        gates,
        epochs=epochs,
        learning_rate=learning_rate,
        seed=seed,
        concurrent=concurrent,
    )

    if "run_dir" not in train_cfg:
        return RunResult(results=results, epochs=epochs)

    run_dir = Path(train_cfg["run_dir"])
    run_dir.mkdir(parents=True, exist_ok=True)
    metrics_paths: List[str] = []
    for result in results:
        sink = JsonlSink(
            run_dir / f"errors_{result.gate.lower()}.jsonl",
            gate=result.gate,
            seed=seed,
            every=report_every,
        )
        sink.write_history(result)
        metrics_paths.append(str(sink.path))
    CsvSink(run_dir / "errors.csv", every=report_every).write(results)

    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    plots.extend(results)
    plots.close()

    safe_config = json.loads(json.dumps(config))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=safe_config,
        gates=[gate.name for gate in gates],
    )
    summary_tail = int(train_cfg.get("summary_tail", 32))
    summary_path = write_summary(results, run_dir / "summary.json", tail=summary_tail)
    (run_dir / "config.json").write_text(json.dumps(safe_config, indent=2))

    return RunResult(
        results=results,
        epochs=epochs,
        metrics_paths=tuple(metrics_paths),
        manifest_path=manifest,
        summary_path=summary_path,
    )


def _print_startup_summary(
    *,
    gates: Sequence[str],
    epochs: int,
    learning_rate: float,
    seed: int | None,
    concurrent: bool,
) -> None:
    print("=== GateNets run ===")
    print(f"Gates         : {', '.join(gates)}")
    print(f"Epochs        : {epochs}")
    print(f"Learning rate : {learning_rate}")
    print(f"Seed          : {seed if seed is not None else 'entropy'}")
    print(f"Threads       : {len(gates) if concurrent else 1}")
    print("====================")


__all__ = [
    "TrainingLaunchError",
    "build_tasks",
    "load_preset",
    "merge_config",
    "presets",
    "read_config_file",
    "run_gates",
    "run_pipeline",
]
