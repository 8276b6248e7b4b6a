"""Headless-safe plotting of error histories."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence

import numpy as np

from ..core.types import GateResult


class PlotAdapter:
    """Collect error histories and optionally emit a matplotlib figure."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: Dict[str, np.ndarray] = {}
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def add(self, result: GateResult) -> None:
        if not self.enable_plots:
            return
        self._history[result.gate] = np.asarray(result.error_history, dtype=np.float64)

    def extend(self, results: Sequence[GateResult]) -> None:
        for result in results:
            self.add(result)

    def close(self) -> Path | None:
        if not self.enable_plots or not self._history:
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        fig, ax = plt.subplots()
        for gate, errors in self._history.items():
            ax.plot(np.arange(errors.size), errors, label=gate)
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Total squared error")
        ax.set_yscale("log")
        ax.set_title("Training Curve")
        ax.legend()
        plot_path = self.run_dir / "errors.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path

    __call__ = add
