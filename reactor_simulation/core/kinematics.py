"""
Kinematics utilities for neutron velocities.
"""

from __future__ import annotations

import numpy as np


def velocity_from_direction(direction: np.ndarray, speed: float) -> np.ndarray:
    """Scale a unit direction to a velocity of magnitude ``speed``."""
    return np.asarray(direction, dtype=float) * speed


def rescale_speed(velocity: np.ndarray, target_speed: float) -> np.ndarray:
    """Return ``velocity`` rescaled to ``target_speed`` with its direction kept.

    Used when a fast neutron is moderated: the magnitude drops to the
    thermal speed constant while the heading is unchanged.

    Parameters
    ----------
    velocity : np.ndarray, shape (2,)
        Current velocity.
    target_speed : float
        Desired magnitude.

    Returns
    -------
    np.ndarray
        New velocity vector.
    """
    current_speed = np.linalg.norm(velocity)
    if current_speed == 0.0:
        raise ValueError("Velocity vector must be non-zero")
    scale = target_speed / current_speed
    return velocity * scale


def reflect_at_walls(position: np.ndarray, velocity: np.ndarray, extent) -> None:
    """Reverse each velocity component whose coordinate left ``[0, extent]``.

    Reflection is applied in place and the position is not clamped, so a
    particle may stay outside the core for one tick.
    """
    for axis in range(2):
        if position[axis] < 0.0 or position[axis] > extent[axis]:
            velocity[axis] = -velocity[axis]
