"""Airlock Adapter - simulates Airlock.create to predict launched asset addresses."""

from .adapter import AirlockAdapter, CreateSimulation

__all__ = [
    "AirlockAdapter",
    "CreateSimulation",
]
