"""
Reactor Core Simulation Package
===============================

This package provides a small stochastic model of a graphite-moderated
reactor core: a grid of moderator, control-rod and fuel cells traversed by
fast and thermal neutrons, with smoothed power, temperature and radiation
readings and an AZ-5 emergency shutdown.

Modules:
--------
- config: Configurable simulation parameters
- constants: Fixed constants and debug flag
- data_classes: Data structures (Cell, Neutron, ReactorSnapshot, TickRecord)
- grid: Reactor grid and fuel state machine
- sampling: Random sampling utilities
- kinematics: Neutron velocity helpers
- particles: Neutron pool and free flight
- interactions: Moderation, absorption and fission
- statistics: Spontaneous source and smoothed readings
- scram: Emergency shutdown controller
- simulation: Tick orchestrator and run driver
- io_utils: Data import/export utilities
- plotting: Analysis plots
"""

from . import config
from .core.constants import DEBUG, NO_FUEL, ROD_POSITION_MIN, ROD_POSITION_MAX
from .core.data_classes import (
    CellKind,
    FuelState,
    ParticleKind,
    ScramStatus,
    ReactorParameters,
    Neutron,
    ReactorState,
    InteractionTally,
    Cell,
    ParticleSnapshot,
    ReactorSnapshot,
    TickRecord,
)
from .core.grid import column_kind, ReactorGrid
from .core.particles import ParticlePool
from .core.interactions import resolve_interactions
from .core.statistics import StatisticsAggregator, inject_spontaneous_neutron, power_percent
from .core.scram import RodControl, ScramController
from .core.simulation import ReactorSimulation, run_simulation
from .core.io_utils import (
    export_history_to_csv,
    load_history_from_csv,
    export_core_snapshot_to_csv,
)

__version__ = "1.0.0"
__all__ = [
    # Config module
    "config",
    # Constants
    "DEBUG",
    "NO_FUEL",
    "ROD_POSITION_MIN",
    "ROD_POSITION_MAX",
    # Data classes
    "CellKind",
    "FuelState",
    "ParticleKind",
    "ScramStatus",
    "ReactorParameters",
    "Neutron",
    "ReactorState",
    "InteractionTally",
    "Cell",
    "ParticleSnapshot",
    "ReactorSnapshot",
    "TickRecord",
    # Grid
    "column_kind",
    "ReactorGrid",
    # Particles
    "ParticlePool",
    # Interactions
    "resolve_interactions",
    # Statistics
    "StatisticsAggregator",
    "inject_spontaneous_neutron",
    "power_percent",
    # Scram
    "RodControl",
    "ScramController",
    # Simulation
    "ReactorSimulation",
    "run_simulation",
    # IO
    "export_history_to_csv",
    "load_history_from_csv",
    "export_core_snapshot_to_csv",
]
