"""
Emergency shutdown (SCRAM / AZ-5) controller.

The scram runs on its own real-time clock, independent of the physics tick.
An external scheduler reports elapsed wall-clock time through
:meth:`ScramController.advance`; every ``scram_step_interval_ms`` of
accumulated time the rods are pushed one percent further in. Once they are
fully inserted the controller holds ``SHUTDOWN`` for ``shutdown_hold_ms``
and then returns to ``NORMAL``.

Pending actions are never cancelled. Each one checks the current status
when it comes due and does nothing if it has been superseded.
"""

from __future__ import annotations

import threading

from .constants import DEBUG, ROD_POSITION_MAX, ROD_POSITION_MIN
from .data_classes import ReactorParameters, ScramStatus


class RodControl:
    """Control rod position and scram flag shared by the tick and the scram clock.

    This is the only state touched by both timing sources; every access goes
    through ``lock``.
    """

    def __init__(self, position: int = ROD_POSITION_MAX, scrammed: bool = False):
        self.lock = threading.RLock()
        self._position = max(ROD_POSITION_MIN, min(ROD_POSITION_MAX, int(position)))
        self._scrammed = scrammed

    @property
    def position(self) -> int:
        with self.lock:
            return self._position

    @property
    def is_scrammed(self) -> bool:
        with self.lock:
            return self._scrammed

    def set_position(self, value: int) -> int:
        with self.lock:
            self._position = max(ROD_POSITION_MIN, min(ROD_POSITION_MAX, int(value)))
            return self._position

    def insert(self, step: int) -> int:
        """Push the rods ``step`` percent further in, up to full insertion."""
        with self.lock:
            self._position = min(ROD_POSITION_MAX, self._position + step)
            return self._position

    def set_scrammed(self, flag: bool) -> None:
        with self.lock:
            self._scrammed = flag


class ScramController:
    """State machine NORMAL -> SCRAM_IN_PROGRESS -> SHUTDOWN -> NORMAL.

    Parameters
    ----------
    rods : RodControl
        Handle on the rod position; the controller sees nothing else of the
        simulation.
    params : ReactorParameters
        Cadence, step size, shutdown hold and manual-override policy.
    """

    def __init__(self, rods: RodControl, params: ReactorParameters):
        self._rods = rods
        self.params = params
        self._status = ScramStatus.NORMAL
        self._step_clock = 0.0
        self._hold_clock = 0.0

    @property
    def status(self) -> ScramStatus:
        with self._rods.lock:
            return self._status

    def trigger(self) -> bool:
        """Start a scram. Returns False if one is already in progress."""
        with self._rods.lock:
            if self._status == ScramStatus.SCRAM_IN_PROGRESS:
                return False
            self._enter(ScramStatus.SCRAM_IN_PROGRESS)
            self._rods.set_scrammed(True)
            self._step_clock = 0.0
            return True

    def manual_rod_input(self, value: int) -> bool:
        """Apply an operator rod position.

        While a scram is in progress the input either cancels it (default)
        or is ignored, depending on ``manual_input_cancels_scram``.

        Returns
        -------
        bool
            True if the position was applied.
        """
        with self._rods.lock:
            if self._status == ScramStatus.SCRAM_IN_PROGRESS:
                if not self.params.manual_input_cancels_scram:
                    return False
                self._rods.set_scrammed(False)
                self._enter(ScramStatus.NORMAL)
            self._rods.set_position(value)
            return True

    def advance(self, elapsed_ms: float) -> None:
        """Feed ``elapsed_ms`` of real time to the pending periodic and deferred actions."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed time must be non-negative, got {elapsed_ms}")

        with self._rods.lock:
            if self._status == ScramStatus.SCRAM_IN_PROGRESS:
                self._step_clock += elapsed_ms
                while (self._status == ScramStatus.SCRAM_IN_PROGRESS
                       and self._step_clock >= self.params.scram_step_interval_ms):
                    self._step_clock -= self.params.scram_step_interval_ms
                    self._insertion_step()
                if self._status != ScramStatus.SHUTDOWN:
                    return
                # time past the final insertion step counts towards the hold
                elapsed_ms = self._step_clock
                self._step_clock = 0.0

            if self._status == ScramStatus.SHUTDOWN:
                self._hold_clock += elapsed_ms
                if self._hold_clock >= self.params.shutdown_hold_ms:
                    self._release_shutdown()

    def _insertion_step(self) -> None:
        if self._status != ScramStatus.SCRAM_IN_PROGRESS:
            return
        position = self._rods.insert(self.params.scram_step_size)
        if position >= ROD_POSITION_MAX:
            self._rods.set_scrammed(False)
            self._enter(ScramStatus.SHUTDOWN)
            self._hold_clock = 0.0

    def _release_shutdown(self) -> None:
        if self._status == ScramStatus.SHUTDOWN:
            self._enter(ScramStatus.NORMAL)

    def _enter(self, status: ScramStatus) -> None:
        if DEBUG:
            print(f"[debug] Scram status {self._status.name} -> {status.name} "
                  f"(rods at {self._rods.position}%)")
        self._status = status
