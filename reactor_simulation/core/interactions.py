"""
Neutron interactions with the reactor grid.

This module resolves, once per tick, what happens to every neutron that
sits inside the core after its free flight: heating of fuel channels,
moderation, absorption in inserted control rods, fission of uranium and
burn-off of xenon poison.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np

from .data_classes import (
    CellKind,
    FuelState,
    InteractionTally,
    Neutron,
    ParticleKind,
)
from .grid import ReactorGrid
from .kinematics import rescale_speed
from .particles import ParticlePool


def moderate(neutron: Neutron, thermal_speed: float) -> bool:
    """Slow a fast neutron down to thermal speed, keeping its heading.

    Returns
    -------
    bool
        True if the neutron was fast and has been converted.
    """
    if neutron.kind != ParticleKind.FAST:
        return False
    neutron.kind = ParticleKind.THERMAL
    neutron.velocity = rescale_speed(neutron.velocity, thermal_speed)
    return True


def rod_absorbs(row: int, rod_depth: float) -> bool:
    """Whether the rod material reaches down to ``row``."""
    return row < rod_depth


def fission(
    grid: ReactorGrid,
    pool: ParticlePool,
    neutron: Neutron,
    cell: Tuple[int, int],
    rng: np.random.Generator,
) -> bool:
    """Split the uranium in ``cell`` with ``neutron``.

    The incident neutron must be removed by the caller. Two fast neutrons are
    born at the fission site and the cell heats up. Hot fuel is more
    resilient and is consumed with a lower probability.

    Returns
    -------
    bool
        True if the fuel was consumed (uranium -> spent).
    """
    p = grid.params
    col, row = cell

    if grid.temperature[col, row] > p.resilience_temperature:
        chance_to_spend = p.hot_consumption_probability
    else:
        chance_to_spend = p.consumption_probability

    consumed = rng.random() < chance_to_spend
    if consumed:
        grid.set_fuel_state(col, row, FuelState.SPENT)

    for _ in range(p.fission_neutron_yield):
        pool.spawn(neutron.position, ParticleKind.FAST)

    grid.add_heat(col, row, p.fission_heat)
    return consumed


def _interact_with_fuel(
    grid: ReactorGrid,
    pool: ParticlePool,
    neutron: Neutron,
    cell: Tuple[int, int],
    rng: np.random.Generator,
    tally: InteractionTally,
) -> bool:
    """Apply the fuel rules to a thermal neutron. Returns True if it was consumed."""
    p = grid.params
    state = grid.fuel_state_at(*cell)

    if state == FuelState.URANIUM:
        if rng.random() < p.fission_probability:
            tally.fissions += 1
            if fission(grid, pool, neutron, cell, rng):
                tally.fuel_consumed += 1
            return True
        return False
    if state == FuelState.XENON:
        if rng.random() < p.xenon_absorption_probability:
            grid.set_fuel_state(*cell, FuelState.SPENT)
            tally.xenon_absorptions += 1
            return True
        return False
    if state == FuelState.SPENT:
        return False
    raise AssertionError(f"fuel cell {cell} has no fuel state")


def resolve_interactions(
    grid: ReactorGrid,
    pool: ParticlePool,
    live: List[Neutron],
    rod_position: float,
    speed_multiplier: float,
    rng: np.random.Generator,
) -> InteractionTally:
    """Resolve collisions of every live neutron with the cell it occupies.

    Rules are applied in priority order and stop at the first one that
    consumes the neutron:

    1. any neutron in a fuel channel boils and heats the cell;
    2. a moderator turns a fast neutron thermal;
    3. an inserted rod section absorbs the neutron;
    4. a thermal neutron in fuel may split uranium or be absorbed by xenon.

    Neutrons outside the grid are skipped. Fission neutrons born during
    this pass are not in ``live`` and first interact on the next tick.

    Parameters
    ----------
    grid : ReactorGrid
        Core lattice, mutated in place.
    pool : ParticlePool
        Owner of ``live``; consumed neutrons are removed from it.
    live : list of Neutron
        Neutrons returned by :meth:`ParticlePool.step_motion`.
    rod_position : float
        Control rod insertion (%) read once for the whole pass.
    speed_multiplier : float
        Global time scaling.
    rng : np.random.Generator
        Source of randomness.

    Returns
    -------
    InteractionTally
        Event counts for this pass.
    """
    tally = InteractionTally()
    rod_depth = grid.rod_depth(rod_position)
    thermal_speed = grid.params.thermal_speed
    consumed: List[Neutron] = []

    for neutron in live:
        cell = grid.locate(neutron.position[0], neutron.position[1])
        if cell is None:
            tally.out_of_grid += 1
            continue

        col, row = cell
        kind = grid.kind_at(col, row)

        if kind == CellKind.FUEL:
            grid.agitate(col, row, speed_multiplier)

        if kind == CellKind.MODERATOR:
            if moderate(neutron, thermal_speed):
                tally.moderations += 1
        elif kind == CellKind.ROD:
            if rod_absorbs(row, rod_depth):
                tally.rod_absorptions += 1
                consumed.append(neutron)
                continue
        elif kind == CellKind.FUEL:
            if neutron.kind == ParticleKind.THERMAL:
                if _interact_with_fuel(grid, pool, neutron, cell, rng, tally):
                    consumed.append(neutron)
                    continue
        else:
            raise AssertionError(f"unknown cell kind {kind!r}")

    pool.remove_many(consumed)
    return tally
