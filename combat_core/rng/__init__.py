"""
Randomness package for the combat core.

Provides the swappable random algorithms and the provider through which
every combat outcome is drawn.
"""

from .algorithms import (
    DEFAULT_ALGORITHM,
    MersenneTwister,
    RandomAlgorithm,
    SystemEntropy,
    XorShift,
    available_algorithms,
    create_algorithm,
    register_algorithm,
    unregister_algorithm,
)
from .provider import RandomProvider, get_default_provider, set_default_provider

__all__ = [
    "DEFAULT_ALGORITHM",
    "MersenneTwister",
    "RandomAlgorithm",
    "SystemEntropy",
    "XorShift",
    "available_algorithms",
    "create_algorithm",
    "register_algorithm",
    "unregister_algorithm",
    "RandomProvider",
    "get_default_provider",
    "set_default_provider",
]
