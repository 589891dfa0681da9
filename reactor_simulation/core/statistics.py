"""
Spontaneous neutron source and smoothed reactor readings.
"""

from __future__ import annotations

import numpy as np

from .data_classes import ParticleKind, ReactorParameters, ReactorState
from .particles import ParticlePool
from .sampling import sample_position_in_extent


def inject_spontaneous_neutron(
    pool: ParticlePool,
    speed_multiplier: float,
    rng: np.random.Generator,
) -> bool:
    """Possibly add one fast neutron at a random point of the core.

    Nothing is injected once the pool holds ``max_particles`` neutrons.

    Returns
    -------
    bool
        True if a neutron was injected.
    """
    if pool.is_full:
        return False
    if rng.random() >= pool.params.spontaneous_fission_probability * speed_multiplier:
        return False
    pool.spawn(sample_position_in_extent(rng, pool.extent), ParticleKind.FAST)
    return True


def power_percent(power: float, rated_power: float) -> float:
    """Power as a percentage of rated power. Not capped at 100."""
    return power / rated_power * 100.0


class StatisticsAggregator:
    """Derive power, temperature and radiation from the core state.

    Power and temperature follow their targets through first-order low-pass
    filters so a single burst of fissions does not spike the readings.
    Radiation follows power directly.
    """

    def __init__(self, params: ReactorParameters):
        self.params = params

    def target_power(self, particle_count: int) -> float:
        return particle_count * self.params.power_per_neutron

    def update(
        self,
        state: ReactorState,
        particle_count: int,
        total_cell_heat: float,
        cell_count: int,
    ) -> None:
        p = self.params

        state.power += (self.target_power(particle_count) - state.power) * p.power_smoothing

        average_temperature = total_cell_heat / cell_count
        state.temperature += (average_temperature - state.temperature) * p.temperature_smoothing

        state.radiation = p.radiation_background + state.power * p.radiation_per_power
