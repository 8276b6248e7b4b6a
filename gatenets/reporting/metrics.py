"""Error-history sinks for gate training runs."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from ..core.types import REPORT_EVERY, GateResult
from .console import sampled_epochs


class JsonlSink:
    """Append-only JSONL writer for one gate's sampled error history."""

    def __init__(
        self,
        path: str | Path,
        *,
        gate: str,
        seed: int | None = None,
        every: int = REPORT_EVERY,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.gate = gate
        self.seed = seed
        self.every = every

    def on_epoch(self, epoch: int, error: float) -> None:
        record = {
            "epoch": int(epoch),
            "gate": self.gate,
            "seed": self.seed,
            "error": float(error),
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    def write_history(self, result: GateResult) -> None:
        for epoch in sampled_epochs(len(result.error_history), self.every):
            self.on_epoch(epoch, result.error_history[epoch])

    __call__ = on_epoch


class CsvSink:
    """Write sampled error histories of several gates to one CSV file."""

    fieldnames = ("epoch", "gate", "error")

    def __init__(self, path: str | Path, *, every: int = REPORT_EVERY) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.every = every

    def write(self, results: Sequence[GateResult]) -> None:
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.fieldnames)
            writer.writeheader()
            for result in results:
                history = result.error_history
                for epoch in sampled_epochs(len(history), self.every):
                    writer.writerow(
                        {"epoch": epoch, "gate": result.gate, "error": float(history[epoch])}
                    )


__all__ = ["JsonlSink", "CsvSink"]
