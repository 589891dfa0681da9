"""
Plotting subpackage for reactor simulation analysis.

This subpackage provides visualization tools for:
- Reading histories of a run (power, temperature, radiation, rods)
- Neutron population and fuel inventory
- Static maps of the core composition and temperature

Example usage:
    from reactor_simulation import load_history_from_csv
    from reactor_simulation.plotting import visualize_reactor_history, print_statistics

    records = load_history_from_csv('Data/reactor_history.csv')
    visualize_reactor_history(records, save_path='Figures/reactor_history')
    print_statistics(records)
"""

from .results import (
    visualize_reactor_history,
    visualize_core_map,
    print_statistics,
)

__all__ = [
    # Simulation results
    "visualize_reactor_history",
    "visualize_core_map",
    "print_statistics",
]
