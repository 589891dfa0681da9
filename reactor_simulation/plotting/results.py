"""
Simulation results visualization.

This module provides visualization functions for reactor runs, including
reading histories, neutron population, fuel inventory and a static map
of the core.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from .. import config
from ..core.data_classes import CellKind, FuelState, ReactorSnapshot, TickRecord


def visualize_reactor_history(
    records: List[TickRecord],
    save_path: Optional[str] = None,
    dpi: int = config.PLOT_DPI,
    show: bool = False,
    rated_power: float = config.RATED_POWER_MW,
) -> Optional[plt.Figure]:
    """Plot power, temperature, radiation, rods and neutron population over a run.

    Parameters
    ----------
    records : List[TickRecord]
        Records of a run, in tick order.
    save_path : str, optional
        Base path for saving the figure.
    dpi : int
        Resolution of the saved figure.
    show : bool
        Whether to call ``plt.show()``.
    rated_power : float
        Rated power (MW) of the run, drawn as a reference line.

    Returns
    -------
    matplotlib.figure.Figure or None
        None if there was nothing to plot.
    """
    if not records:
        print("[warning] No tick records to visualize.")
        return None

    time_s = np.array([r.elapsed_ms for r in records]) / 1000.0
    power = np.array([r.power for r in records])
    temperature = np.array([r.temperature for r in records])
    radiation = np.array([r.radiation for r in records])
    rods = np.array([r.rod_position for r in records])
    fast = np.array([r.fast_count for r in records])
    thermal = np.array([r.thermal_count for r in records])
    scram_active = np.array([r.scram_status != "NORMAL" for r in records])

    fig, axes = plt.subplots(2, 2, figsize=config.HISTORY_FIGSIZE, sharex=True)

    # 1. Power (top-left)
    ax1 = axes[0, 0]
    ax1.plot(time_s, power, color='orange', linewidth=1.5, label='Power')
    ax1.axhline(rated_power, color='red', linestyle='--', linewidth=1,
                label=f'Rated ({rated_power:.0f} MW)')
    ax1.set_ylabel('Power (MW)')
    ax1.set_title('Thermal Power')
    ax1.legend()
    ax1.grid(True, alpha=0.3)

    # 2. Temperature and radiation (top-right)
    ax2 = axes[0, 1]
    ax2.plot(time_s, temperature, color='red', linewidth=1.5, label='Temperature')
    ax2.set_ylabel('Temperature (°C)')
    ax2_twin = ax2.twinx()
    ax2_twin.semilogy(time_s, radiation, color='purple', linewidth=1.0, label='Radiation')
    ax2_twin.set_ylabel('Radiation')
    ax2.set_title('Temperature and Radiation')
    ax2.grid(True, alpha=0.3)

    # 3. Control rods (bottom-left)
    ax3 = axes[1, 0]
    ax3.plot(time_s, rods, color='black', linewidth=1.5)
    if scram_active.any():
        ax3.fill_between(time_s, 0, 100, where=scram_active, color='red', alpha=0.15,
                         label='Scram / shutdown')
        ax3.legend()
    ax3.set_ylim(-5, 105)
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Rod insertion (%)')
    ax3.set_title('Control Rods')
    ax3.grid(True, alpha=0.3)

    # 4. Neutron population (bottom-right)
    ax4 = axes[1, 1]
    ax4.stackplot(time_s, fast, thermal, labels=['Fast', 'Thermal'],
                  colors=['#bbbbbb', '#555555'], alpha=0.8)
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('Neutrons')
    ax4.set_title('Neutron Population')
    ax4.legend(loc='upper left')
    ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(f"{save_path}_history.png", dpi=dpi, bbox_inches='tight')
        print(f"[info] Saved history visualization to {save_path}_history.png")

    if show:
        plt.show()

    return fig


def _core_material_map(snapshot: ReactorSnapshot, rows: int, cols: int) -> np.ndarray:
    """Encode each cell as 0 moderator, 1 rod, 2 uranium, 3 spent, 4 xenon."""
    material = np.zeros((rows, cols), dtype=int)
    for cell in snapshot.cells:
        col, row = cell.position
        if cell.kind == CellKind.MODERATOR:
            material[row, col] = 0
        elif cell.kind == CellKind.ROD:
            material[row, col] = 1
        else:
            material[row, col] = 2 + int(cell.fuel_state)
    return material


def visualize_core_map(
    snapshot: ReactorSnapshot,
    save_path: Optional[str] = None,
    dpi: int = config.PLOT_DPI,
    show: bool = False,
    cell_size: float = config.CELL_SIZE,
) -> Optional[plt.Figure]:
    """Plot fuel composition and cell temperatures of one snapshot side by side.

    ``cell_size`` must match the run that produced ``snapshot`` so that
    neutron positions land on the right cells.
    """
    if not snapshot.cells:
        print("[warning] Snapshot holds no cells to visualize.")
        return None

    cols = max(c.position[0] for c in snapshot.cells) + 1
    rows = max(c.position[1] for c in snapshot.cells) + 1

    material = _core_material_map(snapshot, rows, cols)
    temperature = np.zeros((rows, cols), dtype=float)
    for cell in snapshot.cells:
        col, row = cell.position
        temperature[row, col] = cell.temperature

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=config.CORE_MAP_FIGSIZE)

    cmap = ListedColormap([
        config.MODERATOR_COLOR,
        config.ROD_COLOR,
        config.URANIUM_COLOR,
        config.SPENT_COLOR,
        config.XENON_COLOR,
    ])
    ax1.imshow(material, cmap=cmap, vmin=0, vmax=4, origin='upper')
    rod_depth = snapshot.rod_position / 100.0 * rows
    ax1.axhline(rod_depth - 0.5, color='red', linestyle='--', linewidth=1)
    ax1.set_title(f'Core Composition (tick {snapshot.tick}, rods {snapshot.rod_position}%)')
    ax1.set_xlabel('Column')
    ax1.set_ylabel('Row')

    if snapshot.particles:
        xs = np.array([p.x for p in snapshot.particles])
        ys = np.array([p.y for p in snapshot.particles])
        ax1.scatter(xs / cell_size - 0.5, ys / cell_size - 0.5, s=4, c='white',
                    edgecolors='black', linewidths=0.3)

    im = ax2.imshow(temperature, cmap='hot', origin='upper')
    fig.colorbar(im, ax=ax2, label='Temperature (°C)')
    ax2.set_title('Cell Temperature')
    ax2.set_xlabel('Column')
    ax2.set_ylabel('Row')

    inventory = snapshot.fuel_inventory
    if inventory:
        fig.suptitle(
            f"U: {inventory.get(FuelState.URANIUM, 0)}  "
            f"Spent: {inventory.get(FuelState.SPENT, 0)}  "
            f"Xe: {inventory.get(FuelState.XENON, 0)}"
        )

    plt.tight_layout()

    if save_path:
        plt.savefig(f"{save_path}_core_map.png", dpi=dpi, bbox_inches='tight')
        print(f"[info] Saved core map to {save_path}_core_map.png")

    if show:
        plt.show()

    return fig


def print_statistics(records: List[TickRecord]):
    """Print statistical summary of a run.

    Parameters
    ----------
    records : List[TickRecord]
        Records of the run.
    """
    if not records:
        print(f"\n[Statistics] No tick records to display.")
        return

    power = np.array([r.power for r in records])
    temperature = np.array([r.temperature for r in records])
    radiation = np.array([r.radiation for r in records])
    population = np.array([r.particle_count for r in records])

    total_fissions = sum(r.fissions for r in records)
    total_rod = sum(r.rod_absorptions for r in records)
    total_xenon = sum(r.xenon_absorptions for r in records)
    total_expired = sum(r.expired for r in records)
    total_injected = sum(r.injected for r in records)
    scram_ticks = sum(1 for r in records if r.scram_status == "SCRAM_IN_PROGRESS")

    last = records[-1]

    print("\n" + "="*60)
    print("REACTOR RUN STATISTICS")
    print("="*60)
    print(f"Ticks simulated: {len(records)} ({last.elapsed_ms/1000:.1f} s of frame time)")
    print(f"Final rod position: {last.rod_position}%  status: {last.scram_status}")
    print(f"Ticks with scram in progress: {scram_ticks}")
    print()
    print("Power (MW):")
    print(f"  Mean: {np.mean(power):.2f}, Std: {np.std(power):.2f}")
    print(f"  Range: [{np.min(power):.2f}, {np.max(power):.2f}]")
    print(f"  Final: {last.power:.2f} ({last.power_percent:.1f}% of rated)")
    print()
    print("Core Temperature:")
    print(f"  Mean: {np.mean(temperature):.2f}, Range: [{np.min(temperature):.2f}, {np.max(temperature):.2f}]")
    print()
    print("Radiation:")
    print(f"  Mean: {np.mean(radiation):.2f}, Max: {np.max(radiation):.2f}")
    print()
    print("Neutron Population:")
    print(f"  Mean: {np.mean(population):.1f}, Max: {np.max(population)}")
    print()
    print("Neutron Fates:")
    print(f"  Spontaneous injections: {total_injected}")
    print(f"  Fissions: {total_fissions}")
    print(f"  Absorbed by rods: {total_rod}")
    print(f"  Absorbed by xenon: {total_xenon}")
    print(f"  Expired: {total_expired}")
    print()
    print("Fuel Inventory (final):")
    print(f"  Uranium: {last.uranium_cells}, Spent: {last.spent_cells}, Xenon: {last.xenon_cells}")
    print("="*60)
