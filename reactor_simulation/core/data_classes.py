"""
Data classes for the reactor core simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Tuple

import numpy as np

from .. import config


class CellKind(IntEnum):
    """Static role of a grid cell, fixed by its column."""

    MODERATOR = 0
    ROD = 1
    FUEL = 2


class FuelState(IntEnum):
    """Composition of a fuel cell."""

    URANIUM = 0
    SPENT = 1
    XENON = 2


class ParticleKind(IntEnum):
    """Energy class of a neutron."""

    FAST = 0
    THERMAL = 1


class ScramStatus(IntEnum):
    """Status of the emergency rod insertion."""

    NORMAL = 0
    SCRAM_IN_PROGRESS = 1
    SHUTDOWN = 2


@dataclass(frozen=True)
class ReactorParameters:
    """All tunable rates and constants of the core model.

    Defaults come from :mod:`reactor_simulation.config`. Override single
    fields to explore the model, e.g. ``ReactorParameters(fission_probability=1.0)``.
    """

    # Topology
    cols: int = config.GRID_COLS
    rows: int = config.GRID_ROWS
    cell_size: float = config.CELL_SIZE
    initial_spent_fraction: float = config.INITIAL_SPENT_FRACTION
    initial_xenon_fraction: float = config.INITIAL_XENON_FRACTION

    # Neutrons
    max_particles: int = config.MAX_PARTICLES
    fast_speed: float = config.NEUTRON_SPEED_FAST
    thermal_speed: float = config.NEUTRON_SPEED_THERMAL
    neutron_life: float = config.NEUTRON_LIFE
    life_decay: float = config.LIFE_DECAY_PER_TICK
    spontaneous_fission_probability: float = config.SPONTANEOUS_FISSION_PROBABILITY

    # Fuel state machine
    spent_transition_probability: float = config.SPENT_TRANSITION_PROBABILITY
    spent_to_uranium_fraction: float = config.SPENT_TO_URANIUM_FRACTION
    xenon_decay_probability: float = config.XENON_DECAY_PROBABILITY

    # Thermal model
    baseline_temperature: float = config.BASELINE_TEMPERATURE
    cooling_rate: float = config.COOLING_RATE
    boil_decay: float = config.BOIL_DECAY_FACTOR
    boil_gain: float = config.BOIL_GAIN
    boil_max: float = config.BOIL_MAX
    neutron_heating: float = config.NEUTRON_HEATING
    fission_heat: float = config.FISSION_HEAT
    resilience_temperature: float = config.RESILIENCE_TEMPERATURE
    consumption_probability: float = config.CONSUMPTION_PROBABILITY
    hot_consumption_probability: float = config.HOT_CONSUMPTION_PROBABILITY

    # Interactions
    fission_probability: float = config.FISSION_PROBABILITY
    fission_neutron_yield: int = config.FISSION_NEUTRON_YIELD
    fission_power_yield: float = config.FISSION_POWER_YIELD
    xenon_absorption_probability: float = config.XENON_ABSORPTION_PROBABILITY

    # Statistics
    power_per_neutron: float = config.POWER_PER_NEUTRON
    power_smoothing: float = config.POWER_SMOOTHING
    temperature_smoothing: float = config.TEMPERATURE_SMOOTHING
    radiation_background: float = config.RADIATION_BACKGROUND
    radiation_per_power: float = config.RADIATION_PER_POWER
    rated_power: float = config.RATED_POWER_MW

    # Initial readings
    initial_power: float = config.INITIAL_POWER
    initial_temperature: float = config.INITIAL_TEMPERATURE
    initial_radiation: float = config.INITIAL_RADIATION
    initial_rod_position: int = config.INITIAL_ROD_POSITION

    # Scram
    scram_step_interval_ms: float = config.SCRAM_STEP_INTERVAL_MS
    scram_step_size: int = config.SCRAM_STEP_SIZE
    shutdown_hold_ms: float = config.SHUTDOWN_HOLD_MS
    manual_input_cancels_scram: bool = config.MANUAL_INPUT_CANCELS_SCRAM

    @property
    def extent(self) -> Tuple[float, float]:
        """Width and height of the core in simulation units."""
        return (self.cols * self.cell_size, self.rows * self.cell_size)

    def speed_for(self, kind: ParticleKind) -> float:
        if kind == ParticleKind.FAST:
            return self.fast_speed
        if kind == ParticleKind.THERMAL:
            return self.thermal_speed
        raise AssertionError(f"unknown particle kind {kind!r}")


@dataclass(eq=False)
class Neutron:
    """A mobile neutron owned by the particle pool.

    Attributes
    ----------
    position : np.ndarray, shape (2,)
        Continuous position (x, y) in simulation units.
    velocity : np.ndarray, shape (2,)
        Displacement per tick at speed multiplier 1.
    kind : ParticleKind
        FAST until moderated, then THERMAL.
    remaining_life : float
        Particle is purged once this drops to zero.
    """

    position: np.ndarray
    velocity: np.ndarray
    kind: ParticleKind
    remaining_life: float = config.NEUTRON_LIFE

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass
class ReactorState:
    """Aggregate readings derived every tick. Never set by operator input."""

    power: float = config.INITIAL_POWER
    temperature: float = config.INITIAL_TEMPERATURE
    radiation: float = config.INITIAL_RADIATION
    speed_multiplier: float = config.DEFAULT_SPEED_MULTIPLIER


@dataclass
class InteractionTally:
    """Counts of collision events resolved during one tick."""

    moderations: int = 0
    rod_absorptions: int = 0
    fissions: int = 0
    fuel_consumed: int = 0
    xenon_absorptions: int = 0
    out_of_grid: int = 0


@dataclass(frozen=True)
class Cell:
    """Read view of one grid position."""

    position: Tuple[int, int]
    kind: CellKind
    fuel_state: Optional[FuelState]
    temperature: float
    boil_intensity: float


@dataclass(frozen=True)
class ParticleSnapshot:
    """Immutable per-frame view of a neutron."""

    x: float
    y: float
    kind: ParticleKind


@dataclass(frozen=True)
class ReactorSnapshot:
    """Everything an external renderer or display needs after one tick."""

    tick: int
    cells: Tuple[Cell, ...]
    particles: Tuple[ParticleSnapshot, ...]
    power: float
    power_percent: float
    temperature: float
    radiation: float
    rod_position: int
    scram_status: ScramStatus
    is_scrammed: bool
    speed_multiplier: float
    fuel_inventory: Dict[FuelState, int] = field(default_factory=dict)

    @property
    def particle_count(self) -> int:
        return len(self.particles)


@dataclass
class TickRecord:
    """One row of run history.

    Attributes
    ----------
    tick : int
        Tick index, starting at 1 for the first completed tick.
    elapsed_ms : float
        Real time fed to the scram clock since the run started (ms).
    power, power_percent, temperature, radiation : float
        Reactor readings after the tick.
    rod_position : int
        Control rod insertion (%).
    scram_status : str
        Name of the :class:`ScramStatus` member.
    particle_count, fast_count, thermal_count : int
        Neutron population after the tick.
    """

    tick: int
    elapsed_ms: float
    power: float
    power_percent: float
    temperature: float
    radiation: float
    rod_position: int
    scram_status: str
    particle_count: int
    fast_count: int = 0
    thermal_count: int = 0
    fissions: int = 0
    rod_absorptions: int = 0
    xenon_absorptions: int = 0
    moderations: int = 0
    expired: int = 0
    injected: int = 0
    uranium_cells: int = 0
    spent_cells: int = 0
    xenon_cells: int = 0
