"""
Delivery Accounting
===================

Records every delivered item and summarises fleet performance.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

from ..core.interfaces import TimeSource
from .item import MailItem

logger = logging.getLogger(__name__)

DELAY_PENALTY = 1.2


@dataclass
class DeliveryRecord:
    """One delivered item as seen by the accountant."""
    item_id: str
    destination_floor: int
    weight: int
    distance: int
    arrival_time: int
    delivered_time: int

    @property
    def delay(self) -> int:
        return self.delivered_time - self.arrival_time


@dataclass
class DeliveryStatistics:
    """
    Aggregate delivery statistics.

    Attributes:
        delivered: Number of items delivered
        total_distance: Floors travelled by items while being delivered
        mean_distance: Average floors travelled per item
        total_weight: Sum of delivered weights
        total_delay: Sum of (delivered - arrival) times
        mean_delay: Average delay per item
        delay_score: Sum of delay ** DELAY_PENALTY, lower is better
    """
    delivered: int = 0
    total_distance: int = 0
    mean_distance: float = 0.0
    total_weight: int = 0
    total_delay: int = 0
    mean_delay: float = 0.0
    delay_score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "Delivered": self.delivered,
            "Total Distance": f"{self.total_distance} floors",
            "Mean Distance": f"{self.mean_distance:.2f} floors",
            "Total Weight": f"{self.total_weight} g",
            "Mean Delay": f"{self.mean_delay:.2f} ticks",
            "Delay Score": f"{self.delay_score:.2f}",
        }


class Accountant:
    """Statistics recorder invoked by robots just before final delivery."""

    def __init__(self, clock: TimeSource):
        self.clock = clock
        self._records: List[DeliveryRecord] = []

    @property
    def records(self) -> List[DeliveryRecord]:
        return list(self._records)

    def record_delivery(self, item: MailItem) -> None:
        self._records.append(DeliveryRecord(
            item_id=item.item_id,
            destination_floor=item.destination_floor,
            weight=item.weight,
            distance=item.distance_travelled,
            arrival_time=item.arrival_time,
            delivered_time=self.clock.time,
        ))

    def summary(self) -> DeliveryStatistics:
        """Compute aggregate statistics over all recorded deliveries."""
        if not self._records:
            return DeliveryStatistics()

        distances = np.array([r.distance for r in self._records])
        weights = np.array([r.weight for r in self._records])
        delays = np.array([r.delay for r in self._records], dtype=float)

        return DeliveryStatistics(
            delivered=len(self._records),
            total_distance=int(distances.sum()),
            mean_distance=float(distances.mean()),
            total_weight=int(weights.sum()),
            total_delay=int(delays.sum()),
            mean_delay=float(delays.mean()),
            delay_score=float(np.power(np.clip(delays, 0, None), DELAY_PENALTY).sum()),
        )
