"""Run artifact helpers."""

from __future__ import annotations

import json
import platform
import subprocess
import time
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np


def _git_sha() -> str:
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
    return proc.stdout.strip() or "unknown"


def write_manifest(
    path: str | Path,
    *,
    config: Mapping[str, object],
    gates: Sequence[str],
) -> str:
    """Write a manifest JSON file capturing reproducibility metadata."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    manifest = {
        "git_sha": _git_sha(),
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "config": config,
        "gates": list(gates),
        "environment": {
            "python": platform.python_version(),
            "numpy": np.__version__,
        },
    }
    path.write_text(json.dumps(manifest, indent=2))
    return str(path)
