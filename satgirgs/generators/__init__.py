"""Graph generators built on the SAT-GIRG and hyperbolic models."""

from satgirgs.generators.base import BaseGenerator, GeneratedGraph
from satgirgs.generators.hyperbolic import HyperbolicGenerator, generate_hyperbolic
from satgirgs.generators.satgirg import SatGirgGenerator, generate_satgirg

# Registry: name → class
GENERATOR_REGISTRY: dict[str, type[BaseGenerator]] = {
    "satgirg": SatGirgGenerator,
    "hyperbolic": HyperbolicGenerator,
}


def get_generator(name: str) -> type[BaseGenerator]:
    """Look up a generator class by name."""
    if name not in GENERATOR_REGISTRY:
        available = ", ".join(sorted(GENERATOR_REGISTRY))
        raise ValueError(f"Unknown generator '{name}'. Available: {available}")
    return GENERATOR_REGISTRY[name]


def list_generators() -> list[str]:
    """Return the names of all available generators."""
    return sorted(GENERATOR_REGISTRY.keys())


__all__ = [
    "BaseGenerator",
    "GeneratedGraph",
    "GENERATOR_REGISTRY",
    "get_generator",
    "list_generators",
    "SatGirgGenerator",
    "HyperbolicGenerator",
    "generate_satgirg",
    "generate_hyperbolic",
]
