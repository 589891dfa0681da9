"""
Reactor Simulation Runner Module

This module provides the main headless runner function that can be called
from scripts or imported directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from . import config
from .core.data_classes import ScramStatus, TickRecord
from .core.io_utils import export_history_to_csv, export_core_snapshot_to_csv
from .core.simulation import ReactorSimulation, run_simulation
from .plotting import visualize_reactor_history, visualize_core_map, print_statistics


def report_scram_events(records: List[TickRecord]):
    """Print one line per scram status change found in ``records``."""
    previous = ScramStatus.NORMAL.name
    for record in records:
        if record.scram_status != previous:
            print(f"[info] t={record.elapsed_ms/1000:7.2f} s  tick {record.tick:6d}: "
                  f"{previous} -> {record.scram_status} (rods {record.rod_position}%)")
            previous = record.scram_status


def run_full_simulation(
    output_dir: Optional[Path] = None,
    n_ticks: Optional[int] = None,
    rod_position: Optional[float] = None,
    speed_multiplier: Optional[float] = None,
    scram_at_tick: Optional[int] = None,
    seed: Optional[int] = None,
    save_results: bool = True,
    generate_plots: bool = True,
    show_progress: bool = True,
) -> List[TickRecord]:
    """Run a complete headless reactor simulation.

    This is the main entry point for running simulations. It handles:
    1. Building the core and applying the operator settings
    2. Advancing the core at the nominal frame rate
    3. Exporting the run history and the final core state
    4. Generating analysis plots

    Parameters
    ----------
    output_dir : Path, optional
        Directory for output files (Data/, Figures/). If None, uses current working directory.
    n_ticks : int, optional
        Number of ticks to simulate. If None, uses config default.
    rod_position : float, optional
        Rod insertion (%) applied before the first tick. If None, the rods
        stay fully inserted.
    speed_multiplier : float, optional
        Global time scaling. If None, uses config default.
    scram_at_tick : int, optional
        Tick at which to press AZ-5.
    seed : int, optional
        Random seed for a reproducible run.
    save_results : bool
        Whether to save results to CSV files.
    generate_plots : bool
        Whether to generate visualization plots.
    show_progress : bool
        Whether to show a progress bar.

    Returns
    -------
    List[TickRecord]
        One record per simulated tick.
    """
    if output_dir is None:
        output_dir = Path.cwd()
    else:
        output_dir = Path(output_dir)

    if n_ticks is None:
        n_ticks = config.DEFAULT_N_TICKS
    if speed_multiplier is None:
        speed_multiplier = config.DEFAULT_SPEED_MULTIPLIER

    simulation = ReactorSimulation(seed=seed)

    print("\n" + "="*70)
    print("REACTOR CONFIGURATION")
    print("="*70)
    print(f"Grid: {simulation.grid.cols} x {simulation.grid.rows} cells "
          f"({simulation.grid.extent[0]:.0f} x {simulation.grid.extent[1]:.0f} units)")
    print(f"Column pattern: moderator every {config.COLUMN_PATTERN_PERIOD} columns, "
          f"rod at offset {config.ROD_COLUMN_OFFSET}")
    inventory = simulation.grid.fuel_inventory()
    print("Initial fuel: " + ", ".join(f"{state.name.lower()}={count}" for state, count in inventory.items()))
    print(f"Rod position: {rod_position if rod_position is not None else simulation.rod_position}%")
    print(f"Speed multiplier: {speed_multiplier}")
    print(f"Scram at tick: {scram_at_tick if scram_at_tick is not None else 'never'}")
    print("="*70 + "\n")

    print(f"[info] Starting simulation for {n_ticks} ticks...")

    progress = None
    if show_progress:
        progress = lambda ticks: tqdm(ticks, desc="Simulating Ticks", unit="tick")

    records = run_simulation(
        n_ticks=n_ticks,
        simulation=simulation,
        rod_position=rod_position,
        speed_multiplier=speed_multiplier,
        scram_at_tick=scram_at_tick,
        progress=progress,
    )

    report_scram_events(records)
    print_statistics(records)

    if save_results and records:
        csv_filename = str(output_dir / config.DATA_OUTPUT_DIR / config.HISTORY_DATA_CSV)
        export_history_to_csv(records, filename=csv_filename)

        snapshot_filename = str(output_dir / config.DATA_OUTPUT_DIR / config.CORE_SNAPSHOT_CSV)
        export_core_snapshot_to_csv(simulation.snapshot(), filename=snapshot_filename)

    if generate_plots and records:
        import matplotlib.pyplot as plt

        print("[info] Generating visualizations...")
        figures_dir = output_dir / config.FIGURES_OUTPUT_DIR
        figures_dir.mkdir(parents=True, exist_ok=True)
        fig = visualize_reactor_history(records, save_path=str(figures_dir / config.HISTORY_FIGURE_BASE),
                                        rated_power=simulation.params.rated_power)
        plt.close(fig)
        fig = visualize_core_map(simulation.snapshot(), save_path=str(figures_dir / config.CORE_MAP_FIGURE_BASE),
                                 cell_size=simulation.params.cell_size)
        plt.close(fig)
        print("[info] Visualization complete!")

    return records


def main(argv: Optional[List[str]] = None):
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the reactor core simulation headless")
    parser.add_argument("-n", "--ticks", type=int, default=None,
                        help="Number of ticks to simulate (60 ticks = 1 s)")
    parser.add_argument("--rod", type=float, default=None,
                        help="Control rod insertion in percent (0-100)")
    parser.add_argument("--speed", type=float, default=None,
                        help="Speed multiplier (> 0)")
    parser.add_argument("--scram-at", type=int, default=None,
                        help="Trigger AZ-5 at this tick")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--no-save", action="store_true",
                        help="Don't save results to CSV")
    parser.add_argument("--no-plot", action="store_true",
                        help="Don't generate visualization plots")
    parser.add_argument("--no-progress", action="store_true",
                        help="Don't show a progress bar")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Output directory for results and figures")

    args = parser.parse_args(argv)

    if args.ticks is not None and args.ticks < 0:
        parser.error("--ticks must be non-negative")
    if args.speed is not None and args.speed <= 0:
        parser.error("--speed must be positive")

    run_full_simulation(
        output_dir=args.output_dir,
        n_ticks=args.ticks,
        rod_position=args.rod,
        speed_multiplier=args.speed,
        scram_at_tick=args.scram_at,
        seed=args.seed,
        save_results=not args.no_save,
        generate_plots=not args.no_plot,
        show_progress=not args.no_progress,
    )


if __name__ == "__main__":
    main()
