"""
Accounting and Delivery Sink Tests
==================================

Unit tests for the accountant and the final delivery sink.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mailroom_robots.core.exceptions import MailAlreadyDeliveredError
from mailroom_robots.mail.accountant import Accountant, DeliveryStatistics
from mailroom_robots.mail.delivery import ReportDelivery
from mailroom_robots.mail.item import MailItem
from mailroom_robots.simulation.clock import Clock


def make_item(item_id, floor, weight=500, arrival=1, distance=0):
    item = MailItem(item_id=item_id, arrival_time=arrival, destination_floor=floor, weight=weight)
    item.record_movement(distance)
    return item


class TestMailItem:
    """Test MailItem data class."""

    def test_movement_accumulates(self):
        item = make_item("M1", 4)
        item.record_movement(1)
        item.record_movement(1)
        assert item.distance_travelled == 2

    def test_reset_activity(self):
        item = make_item("M1", 4, distance=3)
        item.reset_activity()
        assert item.distance_travelled == 0

    def test_str(self):
        text = str(make_item("M12", 4, weight=750, arrival=9))
        assert "M12" in text
        assert "Destination:  4" in text
        assert "Weight:  750" in text


class TestAccountant:
    """Test Accountant statistics."""

    def test_empty_summary(self):
        assert Accountant(clock=Clock()).summary() == DeliveryStatistics()

    def test_requires_clock(self):
        with pytest.raises(TypeError):
            Accountant()

    def test_records_delivery_time(self):
        clock = Clock()
        accountant = Accountant(clock=clock)
        for _ in range(7):
            clock.tick()

        accountant.record_delivery(make_item("M1", 3, arrival=2, distance=3))

        record = accountant.records[0]
        assert record.delivered_time == 7
        assert record.delay == 5
        assert record.distance == 3

    def test_summary(self):
        clock = Clock()
        accountant = Accountant(clock=clock)
        for _ in range(10):
            clock.tick()

        accountant.record_delivery(make_item("M1", 3, weight=400, arrival=9, distance=3))
        accountant.record_delivery(make_item("M2", 5, weight=600, arrival=7, distance=5))

        stats = accountant.summary()
        assert stats.delivered == 2
        assert stats.total_distance == 8
        assert stats.mean_distance == pytest.approx(4.0)
        assert stats.total_weight == 1000
        assert stats.total_delay == 4
        assert stats.mean_delay == pytest.approx(2.0)
        assert stats.delay_score == pytest.approx(1.0 + 3 ** 1.2)

    def test_to_dict(self):
        summary = DeliveryStatistics(delivered=3).to_dict()
        assert summary["Delivered"] == 3


class TestReportDelivery:
    """Test the delivery sink."""

    def test_deliver_once(self):
        sink = ReportDelivery()
        sink.deliver(make_item("M1", 2))

        assert sink.delivered_count == 1
        assert sink.is_delivered("M1")

    def test_duplicate_delivery_raises(self):
        sink = ReportDelivery()
        item = make_item("M1", 2)
        sink.deliver(item)

        with pytest.raises(MailAlreadyDeliveredError):
            sink.deliver(item)
        assert sink.delivered_count == 1

    def test_on_delivered_callback(self):
        seen = []
        sink = ReportDelivery(on_delivered=seen.append)
        item = make_item("M1", 2)

        sink.deliver(item)

        assert seen == [item]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
