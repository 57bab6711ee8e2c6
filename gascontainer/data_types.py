"""
Data types mirroring YAML configuration structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import Optional
from enum import Enum

from .constants import (
    INITIAL_MASS,
    INITIAL_TEMPERATURE,
    CONTAINER_VOLUME,
    PRESSURE_LIMIT,
    UPPER_PRESSURE_LIMIT,
    EXPLOSION_LIMIT,
    IMPLOSION_LIMIT,
    TICK_INTERVAL_SECONDS,
    TEMPERATURE_SWING_K,
    SERVER_HOST,
    SERVER_PORT,
    SERVER_PATH,
    CLIENT_TIMEOUT_SECONDS,
    DRIVER_PRESSURE_THRESHOLD,
    DRIVER_MIN_MASS_DELTA,
    DRIVER_MAX_MASS_DELTA,
    DRIVER_POLL_INTERVAL_SECONDS,
    DRIVER_CONNECT_RETRY_SECONDS,
    DRIVER_ERROR_RETRY_SECONDS,
)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class ContainerConfig:
    """Seed state, limits and autonomous cycle settings for one container"""
    initial_mass: float = INITIAL_MASS
    initial_temperature: float = INITIAL_TEMPERATURE  # Kelvin
    volume: float = CONTAINER_VOLUME
    pressure_limit: float = PRESSURE_LIMIT
    upper_pressure_limit: float = UPPER_PRESSURE_LIMIT
    explosion_limit: float = EXPLOSION_LIMIT
    implosion_limit: float = IMPLOSION_LIMIT
    tick_interval_seconds: float = TICK_INTERVAL_SECONDS
    temperature_swing: int = TEMPERATURE_SWING_K
    seed: Optional[int] = None  # None = OS entropy


@dataclass
class ServerConfig:
    """HTTP transport endpoint"""
    host: str = SERVER_HOST
    port: int = SERVER_PORT
    path: str = SERVER_PATH
    client_timeout_seconds: float = CLIENT_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"


@dataclass
class DriverConfig:
    """Polling and retry policy shared by the producer and consumer"""
    pressure_threshold: float = DRIVER_PRESSURE_THRESHOLD
    min_mass_delta: int = DRIVER_MIN_MASS_DELTA
    max_mass_delta: int = DRIVER_MAX_MASS_DELTA
    poll_interval_seconds: float = DRIVER_POLL_INTERVAL_SECONDS
    connect_retry_seconds: float = DRIVER_CONNECT_RETRY_SECONDS
    error_retry_seconds: float = DRIVER_ERROR_RETRY_SECONDS
    seed: Optional[int] = None


@dataclass
class AppConfig:
    """Complete configuration (container + server + drivers)"""
    container: ContainerConfig = field(default_factory=ContainerConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    driver: DriverConfig = field(default_factory=DriverConfig)


# ============================================================================
# Runtime Outcomes
# ============================================================================

class ContainerEvent(Enum):
    """Outcome of one autonomous tick"""
    STABLE = "stable"
    IMPLODED = "imploded"
    EXPLODED = "exploded"
    RESET = "reset"


class MassChange(Enum):
    """Outcome of a mass adjustment (never surfaced through the service)"""
    APPLIED = "applied"
    REJECTED_DESTROYED = "rejected_destroyed"
    REJECTED_PRESSURE = "rejected_pressure"


class DriverAction(Enum):
    """What a producer/consumer step did"""
    ADJUSTED = "adjusted"
    SKIPPED = "skipped"
    STOPPED = "stopped"  # container observed destroyed
