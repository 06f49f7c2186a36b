from .dummy import (
    Building,
    SimulatedMap,
    SimulatedSubject,
    SimulatedWorld,
    create_simulated_collaborators,
)

__all__ = [
    "Building",
    "SimulatedMap",
    "SimulatedSubject",
    "SimulatedWorld",
    "create_simulated_collaborators",
]
