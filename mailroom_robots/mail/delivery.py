"""Final delivery sink: the outside world's view of delivered mail."""

import logging
from typing import Callable, Dict, List, Optional

from ..core.exceptions import MailAlreadyDeliveredError
from ..core.interfaces import TimeSource
from .item import MailItem

logger = logging.getLogger(__name__)


class ReportDelivery:
    """
    Accepts each delivered item exactly once.

    A second delivery of the same item id means an item was duplicated
    somewhere between the pool and the robots, which aborts the run.
    """

    def __init__(
        self,
        clock: Optional[TimeSource] = None,
        on_delivered: Optional[Callable[[MailItem], None]] = None,
    ):
        self.clock = clock
        self.on_delivered = on_delivered
        self._delivered: Dict[str, MailItem] = {}

    @property
    def delivered_count(self) -> int:
        return len(self._delivered)

    @property
    def delivered_items(self) -> List[MailItem]:
        return list(self._delivered.values())

    def is_delivered(self, item_id: str) -> bool:
        return item_id in self._delivered

    def deliver(self, item: MailItem) -> None:
        if item.item_id in self._delivered:
            raise MailAlreadyDeliveredError(item)
        self._delivered[item.item_id] = item
        now = self.clock.time if self.clock is not None else None
        logger.info(f"T: {now} > Delivered({len(self._delivered):4d}) [{item}]")
        if self.on_delivered:
            self.on_delivered(item)
