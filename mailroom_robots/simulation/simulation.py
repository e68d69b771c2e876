"""
Simulation Engine
=================

Drives the mailroom over discrete time steps. Each step:
1. Release mail arriving now into the pool
2. Let the pool load and dispatch waiting robots
3. Tick every robot once, in id order
4. Advance the clock

The run ends once every generated item has been delivered or rejected
and all robots are empty, or when the configured tick limit is hit.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import Config
from ..core.events import Event, EventBus, EventType, get_event_bus
from ..core.exceptions import MailroomError
from ..core.state_machine import DeliveryRobot
from ..mail.accountant import Accountant, DeliveryStatistics
from ..mail.delivery import ReportDelivery
from ..mail.item import MailItem
from ..mail.pool import MailPool
from .building import Building
from .clock import Clock
from .generator import MailGenerator

logger = logging.getLogger(__name__)


@dataclass
class SimulationResults:
    """Outcome of a simulation run."""
    final_time: int
    created: int
    delivered: int
    rejected: List[MailItem] = field(default_factory=list)
    statistics: DeliveryStatistics = field(default_factory=DeliveryStatistics)
    completed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        summary = {
            "Final Time": self.final_time,
            "Mail Created": self.created,
            "Rejected (overweight)": len(self.rejected),
            "Completed": self.completed,
        }
        summary.update(self.statistics.to_dict())
        return summary


class Simulation:
    """
    Tick driver wiring robots to the pool, accountant and delivery sink.

    Attributes:
        clock: Simulation clock shared by all components
        building: Floor topology
        pool: Dispatch pool
        accountant: Delivery statistics recorder
        delivery: Final delivery sink
        generator: Seeded mail source
        robots: Fleet, ticked in this order every step
    """

    def __init__(self, config: Config, event_bus: Optional[EventBus] = None):
        self.config = config
        self.event_bus = event_bus or get_event_bus()

        self.clock = Clock()
        self.building = Building.from_config(config.building)
        self.pool = MailPool(clock=self.clock, event_bus=self.event_bus)
        self.accountant = Accountant(clock=self.clock)
        self.delivery = ReportDelivery(clock=self.clock)
        self.generator = MailGenerator(config.mail, self.building, seed=config.simulation.seed)
        self.robots: List[DeliveryRobot] = [
            DeliveryRobot(
                number,
                pool=self.pool,
                recorder=self.accountant,
                sink=self.delivery,
                clock=self.clock,
                config=config,
                event_bus=self.event_bus,
            )
            for number in range(1, config.robot.count + 1)
        ]

    def step(self) -> None:
        """Advance the whole system by one time step."""
        self.generator.release(self.clock.time, self.pool)
        self.pool.load_items_to_robots()
        for robot in self.robots:
            robot.tick()
        self.clock.tick()

    @property
    def finished(self) -> bool:
        return (
            self.generator.exhausted
            and self.pool.pending_count == 0
            and all(robot.is_idle() for robot in self.robots)
        )

    def run(self) -> SimulationResults:
        """Run until all mail is handled or the tick limit is reached."""
        max_ticks = self.config.simulation.max_ticks
        logger.info(f"Starting simulation: {len(self.robots)} robots, "
                    f"{self.generator.created} items, seed={self.config.simulation.seed}")
        self.event_bus.publish(Event(
            event_type=EventType.SIMULATION_STARTED,
            data={'robots': len(self.robots), 'mail': self.generator.created},
            source='simulation',
        ))

        try:
            while not self.finished and self.clock.time < max_ticks:
                self.step()
        except MailroomError as e:
            logger.error(f"T: {self.clock.time} > simulation aborted: {e}")
            raise

        completed = self.finished
        if not completed:
            logger.warning(f"Tick limit {max_ticks} reached with "
                           f"{self.pool.pending_count} items still pending")

        results = SimulationResults(
            final_time=self.clock.time,
            created=self.generator.created,
            delivered=self.delivery.delivered_count,
            rejected=self.pool.rejected_items,
            statistics=self.accountant.summary(),
            completed=completed,
        )
        self.event_bus.publish(Event(
            event_type=EventType.SIMULATION_STOPPED,
            data={'time': results.final_time, 'delivered': results.delivered},
            source='simulation',
        ))
        logger.info(f"Simulation finished at T: {results.final_time}, "
                    f"delivered {results.delivered}/{results.created}")
        return results
