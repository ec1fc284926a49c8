"""Simulation core exports."""

from .engine import ActivationEngine

__all__ = ["ActivationEngine"]
