"""
Reactor grid and fuel state machine.

The core is a fixed ``cols x rows`` lattice. Each column has a static role
(moderator, control rod or fuel) given by a repeating 6-column pattern.
Cell state is kept in ``(cols, rows)`` numpy arrays so that the per-tick
relaxation and fuel transitions can be applied to the whole core at once;
:class:`Cell` objects are produced as read-only views.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from .. import config
from .constants import NO_FUEL
from .data_classes import Cell, CellKind, FuelState, ReactorParameters
from .sampling import sample_initial_fuel_states


def column_kind(
    col: int,
    period: int = config.COLUMN_PATTERN_PERIOD,
    moderator_offset: int = config.MODERATOR_COLUMN_OFFSET,
    rod_offset: int = config.ROD_COLUMN_OFFSET,
) -> CellKind:
    """Return the cell kind of every cell in column ``col``."""
    offset = col % period
    if offset == moderator_offset:
        return CellKind.MODERATOR
    if offset == rod_offset:
        return CellKind.ROD
    return CellKind.FUEL


class ReactorGrid:
    """Fixed grid of moderator, rod and fuel cells.

    Parameters
    ----------
    params : ReactorParameters
        Topology, thermal and fuel-transition constants.
    rng : np.random.Generator
        Used for the initial fuel composition and for fuel transitions.
    """

    def __init__(self, params: ReactorParameters, rng: np.random.Generator):
        self.params = params
        self.cols = params.cols
        self.rows = params.rows
        self.cell_size = params.cell_size
        self.baseline = params.baseline_temperature
        self._rng = rng

        shape = (self.cols, self.rows)
        column_kinds = np.array([column_kind(c) for c in range(self.cols)], dtype=np.int8)
        self.kinds = np.repeat(column_kinds[:, np.newaxis], self.rows, axis=1)
        self.fuel_mask = self.kinds == CellKind.FUEL

        self.fuel = np.full(shape, NO_FUEL, dtype=np.int8)
        initial = sample_initial_fuel_states(
            rng, shape, params.initial_spent_fraction, params.initial_xenon_fraction
        )
        self.fuel[self.fuel_mask] = initial[self.fuel_mask]

        self.temperature = np.full(shape, self.baseline, dtype=float)
        self.boil = np.zeros(shape, dtype=float)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.cols, self.rows)

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    @property
    def extent(self) -> Tuple[float, float]:
        return (self.cols * self.cell_size, self.rows * self.cell_size)

    def locate(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Map a continuous position to ``(col, row)``, or None outside the grid."""
        col = int(np.floor(x / self.cell_size))
        row = int(np.floor(y / self.cell_size))
        if 0 <= col < self.cols and 0 <= row < self.rows:
            return col, row
        return None

    def rod_depth(self, rod_position: float) -> float:
        """Number of rows, counted from row 0, covered by inserted rod material."""
        return (rod_position / 100.0) * self.rows

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def kind_at(self, col: int, row: int) -> CellKind:
        return CellKind(int(self.kinds[col, row]))

    def fuel_state_at(self, col: int, row: int) -> Optional[FuelState]:
        value = int(self.fuel[col, row])
        if value == NO_FUEL:
            return None
        return FuelState(value)

    def cell(self, col: int, row: int) -> Cell:
        return Cell(
            position=(col, row),
            kind=self.kind_at(col, row),
            fuel_state=self.fuel_state_at(col, row),
            temperature=float(self.temperature[col, row]),
            boil_intensity=float(self.boil[col, row]),
        )

    def cells(self) -> Tuple[Cell, ...]:
        """All cells, column by column."""
        return tuple(self.cell(c, r) for c in range(self.cols) for r in range(self.rows))

    def average_temperature(self) -> float:
        return float(self.temperature.mean())

    def fuel_inventory(self) -> Dict[FuelState, int]:
        """Number of fuel cells in each fuel state."""
        return {state: int(np.count_nonzero(self.fuel == state)) for state in FuelState}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_fuel_state(self, col: int, row: int, state: FuelState) -> None:
        assert self.fuel_mask[col, row], f"cell {(col, row)} holds no fuel"
        self.fuel[col, row] = state

    def add_heat(self, col: int, row: int, amount: float) -> None:
        self.temperature[col, row] += amount

    def agitate(self, col: int, row: int, speed_multiplier: float) -> None:
        """Boiling and heating caused by a neutron crossing a fuel channel."""
        p = self.params
        self.boil[col, row] = min(p.boil_max, self.boil[col, row] + p.boil_gain * speed_multiplier)
        self.temperature[col, row] += p.neutron_heating * speed_multiplier

    def step(self, speed_multiplier: float) -> float:
        """Advance thermal relaxation, boil decay and fuel transitions by one tick.

        Returns
        -------
        float
            Sum of all cell temperatures after relaxation.
        """
        p = self.params

        hot = self.temperature > self.baseline
        self.temperature[hot] -= p.cooling_rate * speed_multiplier
        np.maximum(self.temperature, self.baseline, out=self.temperature)

        # Boil decay is not scaled by the speed multiplier
        self.boil *= p.boil_decay

        # Masks are taken before any update so each cell transitions at most once
        spent = self.fuel == FuelState.SPENT
        xenon = self.fuel == FuelState.XENON

        spent_trigger = spent & (self._rng.random(self.shape) < p.spent_transition_probability * speed_multiplier)
        to_uranium = self._rng.random(self.shape) < p.spent_to_uranium_fraction
        self.fuel[spent_trigger & to_uranium] = FuelState.URANIUM
        self.fuel[spent_trigger & ~to_uranium] = FuelState.XENON

        xenon_trigger = xenon & (self._rng.random(self.shape) < p.xenon_decay_probability * speed_multiplier)
        self.fuel[xenon_trigger] = FuelState.SPENT

        return float(self.temperature.sum())

    def check_invariants(self) -> None:
        """Fail fast on states the update rules can never produce."""
        assert np.all(self.fuel[~self.fuel_mask] == NO_FUEL), "fuel state on a non-fuel cell"
        assert np.all(self.fuel[self.fuel_mask] != NO_FUEL), "fuel cell without fuel state"
        assert np.all(self.temperature >= self.baseline), "cell temperature below baseline"
        assert np.all(self.boil >= 0.0), "negative boil intensity"
