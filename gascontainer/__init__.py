"""
Gas Container Simulation

A pressurized gas container whose mass and temperature are mutated by
producer/consumer agents and by an autonomous thermal drift cycle.

Architecture: the logic unit owns the container state. The HTTP server and
the driver loops are consumers.
"""

__version__ = "0.1.0"
