"""
Simulation Package
==================

Tick driver and the pieces it owns: clock, building and mail generator.
"""

from .clock import Clock
from .building import Building
from .generator import MailGenerator
from .simulation import Simulation, SimulationResults

__all__ = [
    'Clock',
    'Building',
    'MailGenerator',
    'Simulation',
    'SimulationResults',
]
