"""
Gas container service facade.

The four-operation contract shared by the in-process facade and the HTTP
client. The facade carries no state and forwards each call to the logic
unit unchanged.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from .data_types import ContainerConfig
from .logic import GasContainerLogic


class GasContainerContract(ABC):
    """Operations a producer/consumer can invoke on a gas container"""

    @abstractmethod
    def increase_mass(self, mass: float) -> None:
        """Add mass if allowed; silently ignored otherwise"""

    @abstractmethod
    def decrease_mass(self, mass: float) -> None:
        """Remove mass if allowed; silently ignored otherwise"""

    @abstractmethod
    def get_pressure(self) -> float:
        """Current pressure"""

    @abstractmethod
    def is_destroyed(self) -> bool:
        """True while the container is flagged destroyed"""


class GasContainerService(GasContainerContract):
    """Pass-through facade over GasContainerLogic"""

    def __init__(self, logic: GasContainerLogic):
        self._logic = logic

    def increase_mass(self, mass: float) -> None:
        self._logic.increase_mass(mass)

    def decrease_mass(self, mass: float) -> None:
        self._logic.decrease_mass(mass)

    def get_pressure(self) -> float:
        return self._logic.get_pressure()

    def is_destroyed(self) -> bool:
        return self._logic.is_destroyed()


def build_service(config: Optional[ContainerConfig] = None) -> Tuple[GasContainerService, GasContainerLogic]:
    """
    Wire a fresh state, logic unit and facade.

    The autonomous cycle is not started; the caller owns the returned
    logic unit and decides when to start() and stop() it.

    Args:
        config: Container configuration (defaults if None)

    Returns:
        (service, logic)
    """
    logic = GasContainerLogic.from_config(config)
    return GasContainerService(logic), logic
