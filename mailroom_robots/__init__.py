"""
Mailroom Robots Package
=======================

Discrete-time simulation of mail delivery robots working out of a
building's mailroom. Each robot carries up to two items per run, one
in hand and one in its tube, delivers them floor by floor and returns
to the mailroom for more.

Subpackages:
    - core:       Config, events, errors and the robot state machine
    - mail:       Mail items, dispatch pool, accountant, delivery sink
    - simulation: Clock, building, mail generator and the tick driver

Example:
    from mailroom_robots.core import get_config
    from mailroom_robots.simulation import Simulation

    results = Simulation(get_config()).run()
"""

__version__ = '1.0.0'
