"""
High-level simulation driver.

:class:`ReactorSimulation` owns the whole simulation context (grid,
neutrons, readings, rods) and advances it one logical tick at a time.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional

import numpy as np

from .. import config
from .constants import DEBUG
from .data_classes import (
    FuelState,
    InteractionTally,
    ParticleKind,
    ReactorParameters,
    ReactorSnapshot,
    ReactorState,
    ScramStatus,
    TickRecord,
)
from .grid import ReactorGrid
from .interactions import resolve_interactions
from .particles import ParticlePool
from .scram import RodControl, ScramController
from .statistics import StatisticsAggregator, inject_spontaneous_neutron, power_percent


class ReactorSimulation:
    """Reactor core model advanced by an external frame clock.

    Parameters
    ----------
    params : ReactorParameters, optional
        Model constants. Defaults to the values in :mod:`reactor_simulation.config`.
    seed : int, optional
        Seed for the random generator, for reproducible runs.
    """

    def __init__(self, params: Optional[ReactorParameters] = None, seed: Optional[int] = None):
        self.params = params or ReactorParameters()
        self.rng = np.random.default_rng(seed)

        self.grid = ReactorGrid(self.params, self.rng)
        self.pool = ParticlePool(self.params, self.grid.extent, self.rng)
        self.state = ReactorState(
            power=self.params.initial_power,
            temperature=self.params.initial_temperature,
            radiation=self.params.initial_radiation,
        )
        self.rods = RodControl(self.params.initial_rod_position)
        self.scram = ScramController(self.rods, self.params)
        self.statistics = StatisticsAggregator(self.params)

        self.tick_count = 0
        self.last_tally = InteractionTally()
        self.last_injected = False

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def set_rod_position(self, value: float) -> bool:
        """Operator rod input in percent inserted, clamped to 0..100.

        Returns
        -------
        bool
            False if the input was ignored because a scram is running and
            manual input does not cancel it.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise ValueError(f"Rod position must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"Rod position must be finite, got {value}")
        return self.scram.manual_rod_input(int(round(value)))

    def set_speed_multiplier(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise ValueError(f"Speed multiplier must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"Speed multiplier must be positive and finite, got {value}")
        self.state.speed_multiplier = float(value)

    def trigger_scram(self) -> bool:
        return self.scram.trigger()

    def advance_clock(self, elapsed_ms: float) -> None:
        """Report real time elapsed since the last call to the scram controller."""
        self.scram.advance(elapsed_ms)

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @property
    def power(self) -> float:
        return self.state.power

    @property
    def temperature(self) -> float:
        return self.state.temperature

    @property
    def radiation(self) -> float:
        return self.state.radiation

    @property
    def speed_multiplier(self) -> float:
        return self.state.speed_multiplier

    @property
    def rod_position(self) -> int:
        return self.rods.position

    @property
    def scram_status(self) -> ScramStatus:
        return self.scram.status

    @property
    def is_scrammed(self) -> bool:
        return self.rods.is_scrammed

    @property
    def particle_count(self) -> int:
        return len(self.pool)

    def _rod_readings(self):
        """Rod position, scram status and scram flag read as one consistent set."""
        with self.rods.lock:
            return self.rods.position, self.scram.status, self.rods.is_scrammed

    def snapshot(self) -> ReactorSnapshot:
        rod_position, scram_status, is_scrammed = self._rod_readings()
        return ReactorSnapshot(
            tick=self.tick_count,
            cells=self.grid.cells(),
            particles=self.pool.snapshot(),
            power=self.state.power,
            power_percent=power_percent(self.state.power, self.params.rated_power),
            temperature=self.state.temperature,
            radiation=self.state.radiation,
            rod_position=rod_position,
            scram_status=scram_status,
            is_scrammed=is_scrammed,
            speed_multiplier=self.state.speed_multiplier,
            fuel_inventory=self.grid.fuel_inventory(),
        )

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(self) -> None:
        """Advance the core by one tick without building a snapshot."""
        m = self.state.speed_multiplier
        rod_position = self.rods.position

        total_heat = self.grid.step(m)
        live = self.pool.step_motion(m)
        tally = resolve_interactions(self.grid, self.pool, live, rod_position, m, self.rng)
        self.state.power += tally.fissions * self.params.fission_power_yield
        injected = inject_spontaneous_neutron(self.pool, m, self.rng)
        self.statistics.update(self.state, len(self.pool), total_heat, self.grid.cell_count)

        self.tick_count += 1
        self.last_tally = tally
        self.last_injected = injected

        if __debug__:
            self.grid.check_invariants()

    def tick(self) -> ReactorSnapshot:
        """Advance one tick and return the resulting snapshot."""
        self.step()
        return self.snapshot()

    def record(self, elapsed_ms: float = 0.0) -> TickRecord:
        """Summarise the last completed tick as a :class:`TickRecord`."""
        counts = self.pool.counts_by_kind()
        inventory = self.grid.fuel_inventory()
        tally = self.last_tally
        rod_position, scram_status, _ = self._rod_readings()
        return TickRecord(
            tick=self.tick_count,
            elapsed_ms=elapsed_ms,
            power=self.state.power,
            power_percent=power_percent(self.state.power, self.params.rated_power),
            temperature=self.state.temperature,
            radiation=self.state.radiation,
            rod_position=rod_position,
            scram_status=scram_status.name,
            particle_count=len(self.pool),
            fast_count=counts[ParticleKind.FAST],
            thermal_count=counts[ParticleKind.THERMAL],
            fissions=tally.fissions,
            rod_absorptions=tally.rod_absorptions,
            xenon_absorptions=tally.xenon_absorptions,
            moderations=tally.moderations,
            expired=self.pool.last_expired,
            injected=int(self.last_injected),
            uranium_cells=inventory[FuelState.URANIUM],
            spent_cells=inventory[FuelState.SPENT],
            xenon_cells=inventory[FuelState.XENON],
        )


def run_simulation(
    n_ticks: int,
    simulation: Optional[ReactorSimulation] = None,
    rod_position: Optional[float] = None,
    speed_multiplier: Optional[float] = None,
    scram_at_tick: Optional[int] = None,
    frame_period_ms: float = config.FRAME_PERIOD_MS,
    seed: Optional[int] = None,
    progress: Optional[Callable] = None,
) -> List[TickRecord]:
    """Run the core for ``n_ticks`` frames and return one record per tick.

    Each frame advances the scram clock by ``frame_period_ms`` and then
    performs one physics tick.

    Parameters
    ----------
    n_ticks : int
        Number of ticks to simulate.
    simulation : ReactorSimulation, optional
        Simulation to advance. A new one is created from ``seed`` if omitted.
    rod_position : float, optional
        Operator rod position applied before the first tick.
    speed_multiplier : float, optional
        Speed multiplier applied before the first tick.
    scram_at_tick : int, optional
        Trigger a scram just before this tick (1-based).
    frame_period_ms : float
        Real time per frame fed to the scram clock.
    seed : int, optional
        Seed for a newly created simulation.
    progress : callable, optional
        Wrapper for the tick iterator, e.g. ``tqdm``.

    Returns
    -------
    list of TickRecord
    """
    if n_ticks < 0:
        raise ValueError(f"n_ticks must be non-negative, got {n_ticks}")

    simulation = simulation or ReactorSimulation(seed=seed)
    if rod_position is not None:
        simulation.set_rod_position(rod_position)
    if speed_multiplier is not None:
        simulation.set_speed_multiplier(speed_multiplier)

    records: List[TickRecord] = []
    elapsed_ms = 0.0
    ticks = range(1, n_ticks + 1)
    if progress is not None:
        ticks = progress(ticks)

    for tick in ticks:
        if scram_at_tick is not None and tick == scram_at_tick:
            simulation.trigger_scram()
        simulation.advance_clock(frame_period_ms)
        elapsed_ms += frame_period_ms
        simulation.step()
        records.append(simulation.record(elapsed_ms))

    if DEBUG and records:
        last = records[-1]
        print(f"[debug] {n_ticks} ticks: power={last.power:.1f} MW, "
              f"neutrons={last.particle_count}, rods={last.rod_position}%")

    return records
