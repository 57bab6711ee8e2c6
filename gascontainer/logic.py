"""
Gas container logic unit.

Owns the single lock around GasContainerState, exposes the mass
adjustment and query operations, and drives the autonomous thermal cycle
on a background thread.
"""

import logging
import threading
import time
import numpy as np
from typing import List, Optional

from .state import GasContainerState
from .data_types import ContainerConfig, ContainerEvent, MassChange
from .rng import make_generator, temperature_change
from .constants import (
    TICK_INTERVAL_SECONDS,
    TEMPERATURE_SWING_K,
    TICK_TIME_WINDOW,
    STOP_JOIN_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


class GasContainerLogic:
    """
    Concurrent state machine for one gas container.

    States are Stable and Destroyed. Only tick() moves between them:

        Stable    -> Destroyed   pressure < implosion_limit or > explosion_limit
        Destroyed -> Stable      reset on the *next* tick (one-tick lag)

    LOCKING CONTRACT:
    - Every public operation and every tick acquire self._lock exactly once
      and hold it for the whole critical section.
    - Nothing blocks under the lock. Log records are built under the lock
      and emitted after it is released; the inter-tick wait happens
      outside the lock.
    - The serialization order of all operations is the order in which
      they acquire the lock.
    """

    def __init__(
        self,
        state: GasContainerState,
        rng: Optional[np.random.Generator] = None,
        tick_interval_seconds: float = TICK_INTERVAL_SECONDS,
        temperature_swing: int = TEMPERATURE_SWING_K
    ):
        """
        Args:
            state: Container state, owned by this logic unit from now on
            rng: Generator for temperature perturbations (OS entropy if None)
            tick_interval_seconds: Period of the autonomous cycle
            temperature_swing: Perturbation bound, drawn from [-swing, +swing]
        """
        self._state = state
        self._lock = threading.Lock()
        self._rng = rng if rng is not None else make_generator(None, "temperature")
        self.tick_interval_seconds = tick_interval_seconds
        self.temperature_swing = temperature_swing

        # Background cycle
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

        # Tick telemetry (guarded by self._lock)
        self.tick_count: int = 0
        self.destruction_count: int = 0
        self.reset_count: int = 0
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW

    @classmethod
    def from_config(cls, config: Optional[ContainerConfig] = None) -> 'GasContainerLogic':
        """
        Build a logic unit with a fresh seed state.

        Args:
            config: Container configuration (defaults if None)

        Returns:
            Logic unit (background cycle not started)
        """
        config = config or ContainerConfig()
        return cls(
            state=GasContainerState.from_config(config),
            rng=make_generator(config.seed, "temperature"),
            tick_interval_seconds=config.tick_interval_seconds,
            temperature_swing=config.temperature_swing
        )

    # ------------------------------------------------------------------
    # Mass adjustment and queries
    # ------------------------------------------------------------------

    def increase_mass(self, mass: float) -> MassChange:
        """
        Add mass while the container is intact and pressure < pressure_limit.

        Rejections are silent no-ops; the returned MassChange is for
        in-process callers only.
        """
        with self._lock:
            state = self._state
            if state.destroyed:
                outcome = MassChange.REJECTED_DESTROYED
            elif state.pressure < state.pressure_limit:
                state.mass += mass
                outcome = MassChange.APPLIED
            else:
                outcome = MassChange.REJECTED_PRESSURE
            new_mass = state.mass

        if outcome is MassChange.APPLIED:
            logger.info("Mass increased by %s units. New mass: %s units.", mass, new_mass)
        elif outcome is MassChange.REJECTED_PRESSURE:
            logger.info("Pressure too high to add mass.")
        else:
            logger.info("Container destroyed, mass not added.")
        return outcome

    def decrease_mass(self, mass: float) -> MassChange:
        """
        Remove mass while the container is intact and pressure > upper_pressure_limit.
        """
        with self._lock:
            state = self._state
            if state.destroyed:
                outcome = MassChange.REJECTED_DESTROYED
            elif state.pressure > state.upper_pressure_limit:
                state.mass -= mass
                outcome = MassChange.APPLIED
            else:
                outcome = MassChange.REJECTED_PRESSURE
            new_mass = state.mass

        if outcome is MassChange.APPLIED:
            logger.info("Mass decreased by %s units. New mass: %s units.", mass, new_mass)
        elif outcome is MassChange.REJECTED_PRESSURE:
            logger.info("Pressure too low to remove mass.")
        else:
            logger.info("Container destroyed, mass not removed.")
        return outcome

    def get_pressure(self) -> float:
        """Pressure computed from one consistent mass/temperature pair"""
        with self._lock:
            return self._state.pressure

    def is_destroyed(self) -> bool:
        with self._lock:
            return self._state.destroyed

    # ------------------------------------------------------------------
    # Autonomous cycle
    # ------------------------------------------------------------------

    def tick(self) -> ContainerEvent:
        """
        Run one autonomous cycle under a single lock acquisition.

        Intact container: perturb temperature by a random integer in
        [-swing, +swing], then flag destruction if pressure is strictly
        outside [implosion_limit, explosion_limit].

        Destroyed container (flagged on an earlier tick): reset to the seed
        state. Destruction on tick N is therefore reset on tick N+1.

        Returns:
            ContainerEvent describing what this tick did
        """
        start_time = time.perf_counter()

        with self._lock:
            state = self._state
            if state.destroyed:
                state.reset()
                event = ContainerEvent.RESET
                self.reset_count += 1
            else:
                change = temperature_change(self._rng, self.temperature_swing)
                state.temperature += change
                pressure = state.pressure
                if pressure < state.implosion_limit:
                    state.destroyed = True
                    event = ContainerEvent.IMPLODED
                elif pressure > state.explosion_limit:
                    state.destroyed = True
                    event = ContainerEvent.EXPLODED
                else:
                    event = ContainerEvent.STABLE
                if event is not ContainerEvent.STABLE:
                    self.destruction_count += 1
            temperature = state.temperature
            self.tick_count += 1
            self._record_tick_time(time.perf_counter() - start_time)

        if event is ContainerEvent.RESET:
            logger.info("Container destroyed. Resetting state.")
            return event

        logger.info("Temperature changed by %sK. New temperature: %sK", change, temperature)
        logger.info("Current pressure: %s", pressure)
        if event is ContainerEvent.IMPLODED:
            logger.warning("Pressure dropped below implosion limit. Container imploded!")
        elif event is ContainerEvent.EXPLODED:
            logger.warning("Pressure exceeded explosion limit. Container exploded!")
        return event

    def start(self):
        """
        Start the autonomous cycle on a daemon thread.

        Raises:
            RuntimeError: If the cycle is already running
        """
        if self.running:
            raise RuntimeError("Autonomous cycle already running")

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="gas-container-cycle",
            daemon=True
        )
        self._thread.start()
        logger.info("Autonomous cycle started (interval=%ss)", self.tick_interval_seconds)

    def stop(self, timeout: float = STOP_JOIN_TIMEOUT_SECONDS) -> bool:
        """
        Signal the autonomous cycle to stop and wait for the thread.

        Args:
            timeout: Seconds to wait for the thread to exit

        Returns:
            True if the thread is no longer running
        """
        thread = self._thread
        if thread is None:
            return True

        self._stop_event.set()
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("Autonomous cycle did not stop within %ss", timeout)
            return False

        self._thread = None
        logger.info("Autonomous cycle stopped")
        return True

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self, stop_event: threading.Event):
        """Wait one period (outside the lock), then tick, until stopped"""
        while not stop_event.wait(self.tick_interval_seconds):
            self.tick()

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average. Caller holds self._lock.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_tick_stats(self) -> dict:
        """
        Get current tick statistics.

        Returns:
            Dict with tick_count, destruction_count, reset_count,
            avg_tick_time_ms, last_tick_time_ms
        """
        with self._lock:
            stats = {
                'tick_count': self.tick_count,
                'destruction_count': self.destruction_count,
                'reset_count': self.reset_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }
            if self._tick_times:
                stats['avg_tick_time_ms'] = self._tick_time_sum / len(self._tick_times) * 1000.0
                stats['last_tick_time_ms'] = self._tick_times[-1] * 1000.0
            return stats

    def get_snapshot(self) -> dict:
        """
        Get a consistent state snapshot.

        Returns:
            Dict with mass, temperature, pressure, destroyed and timing
        """
        with self._lock:
            snapshot = self._state.to_dict()
        snapshot['timing'] = self.get_tick_stats()
        return snapshot
