# Section 0: Standard library imports
import sys
import json
import time
import argparse
from pathlib import Path
from datetime import datetime
from dataclasses import dataclass, asdict, field
from typing import Dict, List, Optional

import numpy as np
import matplotlib.pyplot as plt

# Add project root to Python path
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from planning.grid import Grid
from planning.pathfinding import SearchStatus, search


# Section 1: Experiment configuration - set your parameters here
base_config = {
    "rows": 30,
    "cols": 30,
    "densities": [0.0, 0.1, 0.2, 0.3, 0.4, 0.5],  # fraction of blocked cells
    "runs_per_density": 50,     # independent random grids per density
    "max_expansions": None,     # optional safety valve per search
    "seed_start": 42,           # run i of a density uses seed_start + i; None = unseeded
}


@dataclass
class ExperimentConfig:
    """Configuration for one density sweep."""
    rows: int = 30
    cols: int = 30
    densities: List[float] = field(default_factory=lambda: [0.0, 0.1, 0.2, 0.3])
    runs_per_density: int = 20
    max_expansions: Optional[int] = None
    seed_start: Optional[int] = 42

    def validate(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"rows/cols must be positive (got {self.rows}x{self.cols}).")
        if self.runs_per_density <= 0:
            raise ValueError(f"runs_per_density must be positive (got {self.runs_per_density}).")
        if not self.densities:
            raise ValueError("densities must contain at least one value.")
        for d in self.densities:
            if not 0.0 <= d <= 1.0:
                raise ValueError(f"Every density must be within [0, 1] (got {d}).")


# Section 2: Running the sweep
def run_density(config: ExperimentConfig, density: float) -> Dict[str, np.ndarray]:
    """
    Plan corner-to-corner on `runs_per_density` random grids of one density.

    Returns:
        Dict of per-run arrays:
            - "status":     0 found, 1 no path, 2 aborted
            - "length":     path length in moves (-1 when not found)
            - "expansions": cells expanded by the search
    """
    n = config.runs_per_density
    status = np.zeros(n, dtype=int)
    length = np.full(n, -1, dtype=int)
    expansions = np.zeros(n, dtype=int)

    start = (0, 0)
    goal = (config.rows - 1, config.cols - 1)
    status_codes = {SearchStatus.FOUND: 0, SearchStatus.NO_PATH: 1, SearchStatus.ABORTED: 2}

    for i in range(n):
        seed = None if config.seed_start is None else config.seed_start + i
        grid = Grid.random(config.rows, config.cols, density, seed=seed)
        grid.clear_cell(*start)
        grid.clear_cell(*goal)

        result = search(grid, start, goal, max_expansions=config.max_expansions)
        status[i] = status_codes[result.status]
        length[i] = result.length
        expansions[i] = result.expansions

    return {"status": status, "length": length, "expansions": expansions}


def summarize(runs: Dict[str, np.ndarray]) -> dict:
    found = runs["status"] == 0
    return {
        "num_runs": int(len(runs["status"])),
        "found": int(np.count_nonzero(found)),
        "no_path": int(np.count_nonzero(runs["status"] == 1)),
        "aborted": int(np.count_nonzero(runs["status"] == 2)),
        "success_rate": float(np.mean(found)),
        "mean_path_length": float(np.mean(runs["length"][found])) if found.any() else None,
        "mean_expansions": float(np.mean(runs["expansions"])),
    }


def create_experiment_name(config: ExperimentConfig) -> str:
    """e.g. 20261019_1343_grid30x30_d6_r50"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M")
    return (f"{timestamp}_grid{config.rows}x{config.cols}"
            f"_d{len(config.densities)}_r{config.runs_per_density}")


def save_experiment_data(experiment_name: str, config: ExperimentConfig,
                         all_runs: Dict[float, Dict[str, np.ndarray]],
                         data_root: Optional[Path] = None) -> Path:
    """
    Write per-density arrays and a JSON summary.

    Layout:
        <data_root>/<experiment_name>/
            density_0p1_status.npy, ..._length.npy, ..._expansions.npy
            summary.json
    """
    data_dir = (data_root or ROOT_DIR / "data") / experiment_name
    data_dir.mkdir(parents=True, exist_ok=True)

    for density, runs in all_runs.items():
        tag = _format_density(density)
        for key, values in runs.items():
            np.save(data_dir / f"density_{tag}_{key}.npy", values)

    summary = {
        "experiment_name": experiment_name,
        "config": asdict(config),
        "results_summary": {str(d): summarize(runs) for d, runs in all_runs.items()},
    }
    with open(data_dir / "summary.json", "w") as f:
        json.dump(summary, f, indent=2)

    print(f"\n{'='*60}")
    print(f"Data saved to: {data_dir}")
    print(f"{'='*60}\n")
    return data_dir


def _format_density(density: float) -> str:
    """0.25 → '0p25' for filenames; distinct floats give distinct tags."""
    return repr(float(density)).replace(".", "p")


def run_experiment(config: Optional[ExperimentConfig] = None, data_root: Optional[Path] = None,
                   save: bool = True):
    """
    Main experiment loop - sweeps densities and (optionally) saves results.

    Returns:
        (all_runs, experiment_name)
    """
    if config is None:
        config = ExperimentConfig(**base_config)
    config.validate()

    start_time = time.perf_counter()
    print(f"\n{'='*60}")
    print("STARTING DENSITY SWEEP")
    print(f"{'='*60}")
    print(f"Grid: {config.rows}x{config.cols}")
    print(f"Densities: {config.densities}")
    print(f"Runs per density: {config.runs_per_density}")
    print(f"{'='*60}\n")

    all_runs: Dict[float, Dict[str, np.ndarray]] = {}
    for density in config.densities:
        print(f"Running density {density:.2f}...", end=" ", flush=True)
        runs = run_density(config, density)
        all_runs[density] = runs
        s = summarize(runs)
        print(f"✓ (success {s['success_rate']:.0%}, mean expansions {s['mean_expansions']:.1f})")

    print(f"\nTotal elapsed: {time.perf_counter() - start_time:.2f}s")

    experiment_name = create_experiment_name(config)
    if save:
        save_experiment_data(experiment_name, config, all_runs, data_root=data_root)
    return all_runs, experiment_name


# Section 3: Plot
def plot_success_rate(all_runs: Dict[float, Dict[str, np.ndarray]], save_path: Optional[Path] = None):
    """Success rate and mean expansions against obstacle density."""
    densities = sorted(all_runs)
    summaries = [summarize(all_runs[d]) for d in densities]

    fig, axes = plt.subplots(2, 1, figsize=(8, 8))
    axes[0].plot(densities, [s["success_rate"] for s in summaries], marker="o", linewidth=2)
    axes[0].set_ylabel("Path found (fraction)", fontsize=12)
    axes[0].set_title("Reachability vs obstacle density", fontsize=14)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(densities, [s["mean_expansions"] for s in summaries], marker="o",
                 color="tab:orange", linewidth=2)
    axes[1].set_xlabel("Obstacle density", fontsize=12)
    axes[1].set_ylabel("Mean cells expanded", fontsize=12)
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    if save_path is not None:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
        print(f"Plot saved to: {save_path}")
    return fig


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sweep obstacle densities and measure A* reachability.")
    parser.add_argument("--no-save", action="store_true", help="Do not write results under data/")
    parser.add_argument("--plot", action="store_true", help="Show the summary plot")
    args = parser.parse_args()

    all_runs, exp_name = run_experiment(save=not args.no_save)
    if args.plot:
        plot_success_rate(all_runs)
        plt.show()
    print(f"Experiment '{exp_name}' completed successfully!")
