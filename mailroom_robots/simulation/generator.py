"""
Mail Generator
==============

Creates the run's mail up front from a seeded random generator and
releases each item into the pool at its arrival time.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

import numpy as np

from ..core.config import MailConfig
from ..mail.item import MailItem
from ..mail.pool import MailPool
from .building import Building

logger = logging.getLogger(__name__)


class MailGenerator:
    """
    Seeded mail source.

    Usage:
        generator = MailGenerator(config.mail, building, seed=30006)
        generator.release(clock.time, pool)  # once per step
    """

    def __init__(self, settings: MailConfig, building: Building, seed: Optional[int] = None):
        self.settings = settings
        self.building = building
        self._rng = np.random.default_rng(seed)
        self._items: List[MailItem] = []
        self._schedule: Dict[int, List[MailItem]] = defaultdict(list)
        self._created = 0
        self._released = 0
        self._generate()

    def _generate(self) -> None:
        floors = np.array(self.building.delivery_floors())
        count = self.settings.mail_to_create

        arrivals = self._rng.integers(1, self.settings.last_arrival_time, size=count, endpoint=True)
        destinations = self._rng.choice(floors, size=count)
        weights = self._rng.integers(
            self.settings.min_weight, self.settings.max_weight, size=count, endpoint=True
        )

        for index, (arrival, floor, weight) in enumerate(zip(arrivals, destinations, weights)):
            item = MailItem(
                item_id=f"M{index}",
                arrival_time=int(arrival),
                destination_floor=int(floor),
                weight=int(weight),
            )
            self._items.append(item)
            self._schedule[item.arrival_time].append(item)
        self._created = count
        logger.debug(f"Generated {count} items for floors {floors.min()}-{floors.max()}")

    @property
    def created(self) -> int:
        return self._created

    @property
    def exhausted(self) -> bool:
        """All items have been released."""
        return self._released >= self._created

    def all_items(self) -> List[MailItem]:
        return list(self._items)

    def release(self, now: int, pool: MailPool) -> int:
        """Add every item arriving at ``now`` to the pool. Returns how many."""
        items = self._schedule.pop(now, [])
        for item in items:
            pool.add_to_pool(item)
        self._released += len(items)
        return len(items)
