"""
Gas container state record.

Holds mass, temperature, the destroyed flag and the pressure limits.
Pressure is derived on every read and never stored. The record has no
lock of its own; GasContainerLogic serializes all access.
"""

from dataclasses import dataclass
from typing import Optional

from .data_types import ContainerConfig
from .constants import (
    INITIAL_MASS,
    INITIAL_TEMPERATURE,
    CONTAINER_VOLUME,
    PRESSURE_LIMIT,
    UPPER_PRESSURE_LIMIT,
    EXPLOSION_LIMIT,
    IMPLOSION_LIMIT,
)


@dataclass
class GasContainerState:
    """
    Physical state of the container.

    Attributes:
        mass: Gas mass (arbitrary units), defaults to initial_mass
        temperature: Gas temperature in Kelvin, defaults to initial_temperature
        destroyed: Set when pressure left [implosion_limit, explosion_limit]
        pressure_limit: Mass may be added only below this pressure
        upper_pressure_limit: Mass may be removed only above this pressure
        explosion_limit: Destruction above this pressure
        implosion_limit: Destruction below this pressure
        volume: Fixed container volume used by the pressure formula
        initial_mass: Mass restored by reset()
        initial_temperature: Temperature restored by reset()
    """
    mass: Optional[float] = None
    temperature: Optional[float] = None
    destroyed: bool = False
    pressure_limit: float = PRESSURE_LIMIT
    upper_pressure_limit: float = UPPER_PRESSURE_LIMIT
    explosion_limit: float = EXPLOSION_LIMIT
    implosion_limit: float = IMPLOSION_LIMIT
    volume: float = CONTAINER_VOLUME
    initial_mass: float = INITIAL_MASS
    initial_temperature: float = INITIAL_TEMPERATURE

    def __post_init__(self):
        """Start from the seed values unless given explicitly"""
        if self.mass is None:
            self.mass = float(self.initial_mass)
        if self.temperature is None:
            self.temperature = float(self.initial_temperature)

    @classmethod
    def from_config(cls, config: Optional[ContainerConfig] = None) -> 'GasContainerState':
        """
        Build the seed state from container configuration.

        Args:
            config: Container configuration (defaults if None)

        Returns:
            Fresh, non-destroyed state
        """
        config = config or ContainerConfig()
        return cls(
            pressure_limit=config.pressure_limit,
            upper_pressure_limit=config.upper_pressure_limit,
            explosion_limit=config.explosion_limit,
            implosion_limit=config.implosion_limit,
            volume=config.volume,
            initial_mass=config.initial_mass,
            initial_temperature=config.initial_temperature
        )

    @property
    def pressure(self) -> float:
        """Current pressure: mass * temperature / volume"""
        return (self.mass * self.temperature) / self.volume

    def reset(self):
        """Hard reset to the seed values (not a re-derivation)"""
        self.mass = float(self.initial_mass)
        self.temperature = float(self.initial_temperature)
        self.destroyed = False

    def to_dict(self) -> dict:
        """
        Serialize state to JSON-compatible dict.

        Returns:
            Dict with mass, temperature, pressure and destroyed flag
        """
        return {
            'mass': self.mass,
            'temperature': self.temperature,
            'pressure': self.pressure,
            'destroyed': self.destroyed
        }
