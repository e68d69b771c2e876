"""
Mail Handling
=============

Mail items and the collaborators robots hand them to:
- MailPool:       undelivered mail and waiting robots
- Accountant:     per-delivery statistics
- ReportDelivery: final delivery sink
"""

from .item import MailItem
from .pool import MailPool
from .accountant import Accountant, DeliveryRecord, DeliveryStatistics
from .delivery import ReportDelivery

__all__ = [
    'MailItem',
    'MailPool',
    'Accountant',
    'DeliveryRecord',
    'DeliveryStatistics',
    'ReportDelivery',
]
