"""
Neutron population and free-flight motion.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .data_classes import Neutron, ParticleKind, ParticleSnapshot, ReactorParameters
from .kinematics import reflect_at_walls, velocity_from_direction
from .sampling import sample_isotropic_direction


class ParticlePool:
    """Sole owner of every live neutron in the core.

    Parameters
    ----------
    params : ReactorParameters
        Speed, life and population constants.
    extent : tuple of float
        Width and height of the reflecting box.
    rng : np.random.Generator
        Used to draw the heading of new neutrons.
    """

    def __init__(self, params: ReactorParameters, extent: Tuple[float, float], rng: np.random.Generator):
        self.params = params
        self.extent = extent
        self._rng = rng
        self._particles: List[Neutron] = []
        self.last_expired = 0

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Neutron]:
        return iter(list(self._particles))

    @property
    def is_full(self) -> bool:
        return len(self._particles) >= self.params.max_particles

    def spawn(self, position, kind: ParticleKind, direction: Optional[np.ndarray] = None) -> Neutron:
        """Create a neutron at ``position`` moving at the speed of its kind.

        The heading is isotropic unless ``direction`` is given.
        """
        if direction is None:
            direction = sample_isotropic_direction(self._rng)
        neutron = Neutron(
            position=np.array(position, dtype=float),
            velocity=velocity_from_direction(direction, self.params.speed_for(kind)),
            kind=kind,
            remaining_life=self.params.neutron_life,
        )
        self._particles.append(neutron)
        return neutron

    def remove(self, neutron: Neutron) -> None:
        self._particles.remove(neutron)

    def remove_many(self, neutrons: List[Neutron]) -> None:
        doomed = {id(n) for n in neutrons}
        self._particles = [n for n in self._particles if id(n) not in doomed]

    def clear(self) -> None:
        self._particles.clear()

    def step_motion(self, speed_multiplier: float) -> List[Neutron]:
        """Move every neutron, age it, reflect it at walls and purge the expired.

        Returns
        -------
        list of Neutron
            The live neutrons after purging, for collision processing.
        """
        life_loss = self.params.life_decay * speed_multiplier
        for neutron in self._particles:
            neutron.position += neutron.velocity * speed_multiplier
            neutron.remaining_life -= life_loss
            reflect_at_walls(neutron.position, neutron.velocity, self.extent)

        live = [n for n in self._particles if n.remaining_life > 0.0]
        self.last_expired = len(self._particles) - len(live)
        self._particles = live

        assert all(n.remaining_life > 0.0 for n in self._particles), "expired neutron survived purge"
        return list(live)

    def counts_by_kind(self) -> Dict[ParticleKind, int]:
        counts = {kind: 0 for kind in ParticleKind}
        for neutron in self._particles:
            counts[neutron.kind] += 1
        return counts

    def snapshot(self) -> Tuple[ParticleSnapshot, ...]:
        return tuple(
            ParticleSnapshot(x=float(n.position[0]), y=float(n.position[1]), kind=n.kind)
            for n in self._particles
        )
