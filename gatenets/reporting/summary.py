"""Deterministic run summarisation helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from ..core.types import GateResult
from ..training.metrics import compute_metrics, default_metrics


def _area(y: np.ndarray, x: np.ndarray) -> float:
    trapezoid = getattr(np, "trapezoid", None)
    if callable(trapezoid):
        return float(trapezoid(y, x))
    return float(np.trapz(y, x))


def compute_auc(points: Sequence[float]) -> float:
    """Return the area-under-curve of ``points`` along an implicit epoch axis."""

    if len(points) == 0:
        return 0.0
    y = np.asarray(points, dtype=np.float64)
    x = np.arange(len(points), dtype=np.float64)
    return _area(y, x)


def summarise_history(history: Sequence[float], *, tail: int = 32) -> Mapping[str, float]:
    arr = np.asarray(history, dtype=np.float64)
    if arr.size == 0:
        return {"epochs": 0}
    tail_window = min(tail, arr.size)
    return {
        "epochs": int(arr.size),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "mean": float(np.mean(arr)),
        "first": float(arr[0]),
        "last": float(arr[-1]),
        "auc": compute_auc(arr),
        "tail_auc": compute_auc(arr[-tail_window:]) if tail_window else 0.0,
    }


def _build_summary(results: Sequence[GateResult], tail: int) -> Mapping[str, object]:
    gates: dict[str, Mapping[str, object]] = {}
    for result in results:
        gates[result.gate] = {
            "error": summarise_history(result.error_history, tail=tail),
            "predictions": [float(p) for p in result.predictions],
            "targets": [int(t) for t in result.targets],
            "metrics": dict(
                compute_metrics(default_metrics(), result.predictions, result.targets)
            ),
        }
    return {"version": 1, "gates": gates, "order": [r.gate for r in results]}


def write_summary(
    results: Sequence[GateResult], out_summary_json: str | Path, *, tail: int = 32
) -> str:
    """Write a deterministic summary of ``results`` to ``out_summary_json``."""

    out_path = Path(out_summary_json)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    summary = _build_summary(results, tail)
    out_path.write_text(json.dumps(summary, sort_keys=True, indent=2))
    return str(out_path)


__all__ = ["compute_auc", "summarise_history", "write_summary"]
