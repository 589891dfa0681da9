"""
Random sampling utilities for neutron generation and fuel loading.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from .data_classes import FuelState


def sample_isotropic_direction(rng: np.random.Generator) -> np.ndarray:
    """Generate a random unit vector uniformly distributed on the circle."""
    phi = 2.0 * math.pi * rng.random()
    return np.array([math.cos(phi), math.sin(phi)], dtype=float)


def sample_position_in_extent(
    rng: np.random.Generator,
    extent: Tuple[float, float],
) -> np.ndarray:
    """Sample a uniformly distributed point in ``[0, width) x [0, height)``."""
    width, height = extent
    return np.array([rng.random() * width, rng.random() * height], dtype=float)


def sample_initial_fuel_states(
    rng: np.random.Generator,
    shape: Tuple[int, ...],
    spent_fraction: float,
    xenon_fraction: float,
) -> np.ndarray:
    """Draw the initial fuel composition for an array of fuel cells.

    Parameters
    ----------
    rng : np.random.Generator
        Source of randomness.
    shape : tuple of int
        Shape of the returned array.
    spent_fraction : float
        Probability that a cell starts as spent fuel.
    xenon_fraction : float
        Probability that a cell starts poisoned with xenon.

    Returns
    -------
    np.ndarray of int
        :class:`FuelState` values; the remainder of cells are uranium.
    """
    r = rng.random(shape)
    states = np.full(shape, FuelState.URANIUM, dtype=np.int8)
    states[r < spent_fraction + xenon_fraction] = FuelState.XENON
    states[r < spent_fraction] = FuelState.SPENT
    return states
