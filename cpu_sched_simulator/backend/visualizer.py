from __future__ import annotations

from typing import Optional
import random
import numpy as np
import matplotlib.pyplot as plt

from .simulator import SimulationResult
from .utils import ensure_dir


def pid_color(pid: int) -> str:
    # Stable color per pid across runs
    rng = random.Random(pid)
    r = rng.randint(50, 220)
    g = rng.randint(50, 220)
    b = rng.randint(50, 220)
    return f"#{r:02x}{g:02x}{b:02x}"


def plot_gantt(result: SimulationResult, out_path: Optional[str] = None) -> None:
    pids = [p.pid for p in result.processes]
    fig, ax = plt.subplots(figsize=(12, 3 + 0.2 * max(1, len(pids))))
    y_positions = dict(zip(pids, np.arange(len(pids))))

    for pid in pids:
        spans = [(seg["start"], seg["end"] - seg["start"]) for seg in result.logger.slices_for(pid)]
        ax.broken_barh(spans, (y_positions[pid] - 0.4, 0.8), facecolors=pid_color(pid), edgecolor="black", alpha=0.9)

    title = f"Gantt Chart ({result.policy}"
    if result.time_quantum is not None:
        title += f", q={result.time_quantum}"
    title += f"), avg wait {result.avg_waiting_time:.2f}"

    ax.set_yticks([y_positions[pid] for pid in pids])
    ax.set_yticklabels([f"P{pid}" for pid in pids])
    ax.invert_yaxis()
    ax.set_xlabel("Time")
    ax.set_title(title)
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    fig.tight_layout()

    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
