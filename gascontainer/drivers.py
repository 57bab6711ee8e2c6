"""
Producer and consumer driver loops.

Each driver polls a gas container service on a fixed interval and adjusts
mass when observed pressure crosses its threshold. A driver stops for good
once it observes the container destroyed. Connection failures and server
errors are retried here; the service itself never retries.
"""

import logging
import threading
import numpy as np
from typing import Optional

from .client import ServiceError, TransportError
from .data_types import DriverAction, DriverConfig
from .rng import make_generator, mass_delta
from .service import GasContainerContract

logger = logging.getLogger(__name__)


class PressureDriver:
    """
    Base polling loop shared by ProducerDriver and ConsumerDriver.

    Subclasses decide when pressure warrants an adjustment and which
    service call performs it.
    """

    name = "driver"

    def __init__(
        self,
        service: GasContainerContract,
        config: Optional[DriverConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Args:
            service: In-process facade or HTTP client
            config: Threshold, mass range and retry policy (defaults if None)
            rng: Generator for mass quantities (seeded from config if None)
        """
        self.service = service
        self.config = config or DriverConfig()
        self.rng = rng if rng is not None else make_generator(self.config.seed, self.name)
        self._stop_event = threading.Event()
        self.step_count: int = 0

    def wants_adjustment(self, pressure: float) -> bool:
        raise NotImplementedError

    def adjust(self, amount: int):
        raise NotImplementedError

    def step(self) -> DriverAction:
        """
        One poll: check destroyed, read pressure, maybe adjust mass.

        Raises:
            TransportError, ServiceError: Propagated from the service
        """
        if self.service.is_destroyed():
            logger.info("The container has been destroyed. Stopping updates.")
            return DriverAction.STOPPED

        pressure = self.service.get_pressure()
        logger.info("Current pressure: %s", pressure)

        if not self.wants_adjustment(pressure):
            self.log_skip()
            return DriverAction.SKIPPED

        amount = mass_delta(self.rng, self.config.min_mass_delta, self.config.max_mass_delta)
        self.adjust(amount)
        return DriverAction.ADJUSTED

    def log_skip(self):
        logger.info("%s: no adjustment at this pressure.", self.name)

    def run(self, max_steps: Optional[int] = None) -> int:
        """
        Poll until the container is destroyed, stop() is called, or
        max_steps polls have completed.

        Args:
            max_steps: Optional cap on completed polls (None = unbounded)

        Returns:
            Number of completed polls
        """
        logger.info("Starting %s...", self.name)
        completed = 0

        while not self._stop_event.is_set():
            if max_steps is not None and completed >= max_steps:
                break

            try:
                action = self.step()
            except TransportError as e:
                logger.warning("Unable to connect to server. Retrying... (%s)", e)
                self._stop_event.wait(self.config.connect_retry_seconds)
                continue
            except ServiceError as e:
                logger.warning("Server rejected request. Retrying... (%s)", e)
                self._stop_event.wait(self.config.error_retry_seconds)
                continue

            completed += 1
            self.step_count += 1
            if action is DriverAction.STOPPED:
                break
            self._stop_event.wait(self.config.poll_interval_seconds)

        logger.info("%s finished after %d polls", self.name, completed)
        return completed

    def stop(self):
        """Ask run() to return at its next wait"""
        self._stop_event.set()


class ProducerDriver(PressureDriver):
    """Adds a random quantity of mass while pressure is below the threshold"""

    name = "producer"

    def wants_adjustment(self, pressure: float) -> bool:
        return pressure < self.config.pressure_threshold

    def adjust(self, amount: int):
        self.service.increase_mass(amount)
        logger.info("Added %d units of mass.", amount)

    def log_skip(self):
        logger.info("Pressure is above the threshold, no mass added.")


class ConsumerDriver(PressureDriver):
    """Removes a random quantity of mass while pressure is above the threshold"""

    name = "consumer"

    def wants_adjustment(self, pressure: float) -> bool:
        return pressure > self.config.pressure_threshold

    def adjust(self, amount: int):
        self.service.decrease_mass(amount)
        logger.info("Removed %d units of mass.", amount)

    def log_skip(self):
        logger.info("Pressure below the threshold for removing mass.")
