"""
Central configuration constants for the gas container simulation.

Defines default values, thresholds, and configuration parameters
used across multiple modules.
"""

# ============================================================================
# Container Seed State
# ============================================================================

# Values restored on every reset
INITIAL_MASS = 10.0          # arbitrary units
INITIAL_TEMPERATURE = 293.0  # Kelvin (room temperature)

# Fixed volume used to derive pressure: p = m * T / V
CONTAINER_VOLUME = 22.4


# ============================================================================
# Pressure Limits
# ============================================================================

# Mass may only be added while pressure is strictly below this value
PRESSURE_LIMIT = 110.0

# Mass may only be removed while pressure is strictly above this value
UPPER_PRESSURE_LIMIT = 125.0

# Destructive limits (strict comparisons, equal values are still stable)
EXPLOSION_LIMIT = 140.0
IMPLOSION_LIMIT = 40.0


# ============================================================================
# Autonomous Cycle
# ============================================================================

# Period between autonomous ticks
TICK_INTERVAL_SECONDS = 2.0

# Temperature perturbation per tick, drawn from [-swing, +swing] inclusive
TEMPERATURE_SWING_K = 15

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100

# Seconds to wait for the background thread on stop()
STOP_JOIN_TIMEOUT_SECONDS = 5.0


# ============================================================================
# Transport
# ============================================================================

SERVER_HOST = "127.0.0.1"
SERVER_PORT = 5001
SERVER_PATH = "/gasrpc"

CLIENT_TIMEOUT_SECONDS = 5.0


# ============================================================================
# Producer / Consumer Drivers
# ============================================================================

# Producer adds below this pressure, consumer removes above it
DRIVER_PRESSURE_THRESHOLD = 150.0

# Mass delta per call, drawn from [min, max] inclusive
DRIVER_MIN_MASS_DELTA = 1
DRIVER_MAX_MASS_DELTA = 4

DRIVER_POLL_INTERVAL_SECONDS = 2.0
DRIVER_CONNECT_RETRY_SECONDS = 5.0  # server unreachable
DRIVER_ERROR_RETRY_SECONDS = 2.0    # server answered with an error


# ============================================================================
# Logging
# ============================================================================

LOG_FORMAT = "%(asctime)s|%(levelname)s| %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
