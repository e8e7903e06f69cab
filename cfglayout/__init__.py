"""Layered grid layout with orthogonal edge routing for control flow graphs."""

__version__ = "0.1.0"
__all__ = [
    "model",
    "state",
    "structures",
    "placement",
    "routing",
    "segments",
    "linear",
    "edges",
    "optimize",
    "grid",
    "horizontal",
]