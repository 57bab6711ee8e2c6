"""
RNG utilities for the gas container simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(run seed, component name). All randomness uses
numpy.random.Generator(PCG64) so a seeded run is reproducible.
"""

import hashlib
import numpy as np
from typing import Any, Optional


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (run seed, component name, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        thermal_seed = make_seed(run_seed, "temperature")
        producer_seed = make_seed(run_seed, "producer")
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


def make_generator(seed: Optional[int], component: str) -> np.random.Generator:
    """
    Create a PCG64 generator for one component.

    Args:
        seed: Run seed, or None for OS entropy
        component: Component name mixed into the seed

    Returns:
        numpy Generator
    """
    if seed is None:
        return np.random.Generator(np.random.PCG64())
    return np.random.Generator(np.random.PCG64(make_seed(seed, component)))


def temperature_change(rng: np.random.Generator, swing: int) -> int:
    """
    Draw an integer temperature perturbation in [-swing, +swing] inclusive.
    """
    return int(rng.integers(-swing, swing, endpoint=True))


def mass_delta(rng: np.random.Generator, min_val: int, max_val: int) -> int:
    """
    Draw an integer mass quantity in [min_val, max_val] inclusive.
    """
    return int(rng.integers(min_val, max_val, endpoint=True))
