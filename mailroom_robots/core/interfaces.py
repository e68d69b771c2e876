"""
Collaborator Interfaces
=======================

Structural types for the objects a robot calls into. The robot never
owns any of these; it holds capability references handed to it at
construction.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..mail.item import MailItem
    from .state_machine import DeliveryRobot


class DispatchPool(Protocol):
    """Source of mail items and registry of waiting robots."""

    def register_waiting(self, robot: 'DeliveryRobot') -> None:
        """Robot reached the mailroom with empty slots."""
        ...

    def return_item(self, item: 'MailItem') -> None:
        """Take back an item a robot could not deliver."""
        ...


class DeliveryRecorder(Protocol):
    """Accounting hook called right before an item is handed to the sink."""

    def record_delivery(self, item: 'MailItem') -> None:
        ...


class DeliverySink(Protocol):
    """Final consumer of delivered items."""

    def deliver(self, item: 'MailItem') -> None:
        ...


class TimeSource(Protocol):
    """Anything exposing the current simulation time."""

    @property
    def time(self) -> int:
        ...
