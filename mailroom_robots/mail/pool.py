"""
Mail Pool
=========

Holds undelivered mail and hands it to robots waiting in the mailroom.

Robots register themselves when they arrive at the mailroom with empty
slots; the pool loads a hand item and, when one is available, a tube
item, then dispatches the robot. Items a robot refuses for weight are
set aside in ``rejected_items`` rather than left in the robot.
"""

import logging
from collections import deque
from typing import Deque, List, Optional, Set, TYPE_CHECKING

from ..core.events import Event, EventBus, EventType, get_event_bus
from ..core.exceptions import DispatchContractError, OverweightError
from ..core.interfaces import TimeSource
from .item import MailItem

if TYPE_CHECKING:
    from ..core.state_machine import DeliveryRobot

logger = logging.getLogger(__name__)


class MailPool:
    """
    Dispatch pool shared by all robots.

    Pending items are served oldest first (arrival time, then id).

    Usage:
        pool = MailPool(clock=clock)
        pool.add_to_pool(item)
        ...
        pool.load_items_to_robots()  # between ticks
    """

    def __init__(
        self,
        clock: Optional[TimeSource] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.clock = clock
        self.event_bus = event_bus or get_event_bus()
        self._pending: List[MailItem] = []
        self._waiting: Deque['DeliveryRobot'] = deque()
        self._waiting_ids: Set[str] = set()
        self._rejected: List[MailItem] = []

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def waiting_count(self) -> int:
        return len(self._waiting)

    @property
    def rejected_items(self) -> List[MailItem]:
        return list(self._rejected)

    def _now(self) -> Optional[int]:
        return self.clock.time if self.clock is not None else None

    def _publish(self, event_type: EventType, **data) -> None:
        data.setdefault('time', self._now())
        self.event_bus.publish(Event(event_type=event_type, data=data, source='pool'))

    def add_to_pool(self, item: MailItem) -> None:
        """Queue a newly arrived item."""
        self._pending.append(item)
        self._pending.sort(key=lambda m: (m.arrival_time, m.item_id))
        logger.debug(f"T: {self._now()} > new addToPool [{item}]")
        self._publish(EventType.ITEM_ARRIVED, item_id=item.item_id)

    def return_item(self, item: MailItem) -> None:
        """Take back an item a robot still held on return."""
        item.reset_activity()
        self._pending.append(item)
        self._pending.sort(key=lambda m: (m.arrival_time, m.item_id))
        logger.info(f"T: {self._now()} > old addToPool [{item}]")
        self._publish(EventType.ITEM_RETURNED, item_id=item.item_id)

    def register_waiting(self, robot: 'DeliveryRobot') -> None:
        """Robot is in the mailroom and ready for a load."""
        if robot.robot_id in self._waiting_ids:
            return
        self._waiting.append(robot)
        self._waiting_ids.add(robot.robot_id)

    def load_items_to_robots(self) -> None:
        """Load and dispatch as many waiting robots as pending mail allows."""
        while self._waiting and self._pending:
            robot = self._waiting[0]
            if not robot.is_idle():
                raise DispatchContractError(
                    f"{robot.robot_id} registered as waiting with items still loaded"
                )

            if not self._load(robot):
                # Nothing deliverable left; robot keeps its place
                break

            self._waiting.popleft()
            self._waiting_ids.discard(robot.robot_id)
            robot.dispatch()
            self._publish(
                EventType.ROBOT_DISPATCHED,
                robot_id=robot.robot_id,
                hand=robot.hand_item.item_id,
                tube=robot.tube_item.item_id if robot.tube_item else None,
            )

    def _load(self, robot: 'DeliveryRobot') -> bool:
        """Fill the robot's hand, then its tube. Returns whether a hand item was loaded."""
        while robot.hand_item is None and self._pending:
            item = self._pending.pop(0)
            try:
                robot.assign_hand_item(item)
            except OverweightError as e:
                self._reject(item, e)

        if robot.hand_item is None:
            return False

        while robot.tube_item is None and self._pending:
            item = self._pending.pop(0)
            try:
                robot.assign_tube_item(item)
            except OverweightError as e:
                self._reject(item, e)
        return True

    def _reject(self, item: MailItem, error: OverweightError) -> None:
        self._rejected.append(item)
        logger.warning(f"T: {self._now()} > rejected [{item}]: {error}")
        self._publish(EventType.ITEM_REJECTED, item_id=item.item_id, weight=item.weight,
                      limit=error.limit)

    def __repr__(self) -> str:
        return (f"MailPool(pending={self.pending_count}, waiting={self.waiting_count}, "
                f"rejected={len(self._rejected)})")
