"""
Mail Pool Tests
===============

Unit tests for loading and dispatching robots from the mail pool.
"""

import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mailroom_robots.core.events import EventType
from mailroom_robots.core.exceptions import DispatchContractError
from mailroom_robots.core.state_machine import DeliveryRobot, RobotState
from mailroom_robots.mail.accountant import Accountant
from mailroom_robots.mail.delivery import ReportDelivery
from mailroom_robots.mail.item import MailItem
from mailroom_robots.mail.pool import MailPool
from mailroom_robots.simulation.clock import Clock


def make_item(item_id, floor, weight=500, arrival=1):
    return MailItem(item_id=item_id, arrival_time=arrival, destination_floor=floor, weight=weight)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def pool(clock, event_bus):
    return MailPool(clock=clock, event_bus=event_bus)


@pytest.fixture
def make_robot(pool, clock, event_bus):
    def _make(number=1):
        robot = DeliveryRobot(
            number,
            pool=pool,
            recorder=Accountant(clock=clock),
            sink=ReportDelivery(clock=clock),
            clock=clock,
            event_bus=event_bus,
        )
        robot.tick()  # reaches WAITING and registers
        return robot
    return _make


class TestMailPool:
    """Test MailPool behaviour."""

    def test_empty_pool(self, pool):
        assert pool.pending_count == 0
        assert pool.waiting_count == 0
        assert pool.rejected_items == []

    def test_register_waiting(self, pool, make_robot):
        make_robot()
        assert pool.waiting_count == 1

    def test_duplicate_registration_ignored(self, pool, make_robot):
        robot = make_robot()
        pool.register_waiting(robot)
        assert pool.waiting_count == 1

    def test_loads_hand_and_tube_then_dispatches(self, pool, make_robot):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 3))
        pool.add_to_pool(make_item("M2", 5))

        pool.load_items_to_robots()

        assert robot.hand_item.item_id == "M1"
        assert robot.tube_item.item_id == "M2"
        assert pool.pending_count == 0
        assert pool.waiting_count == 0

        robot.tick()
        assert robot.current_state == RobotState.DELIVERING

    def test_single_item_hand_only(self, pool, make_robot):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 3))

        pool.load_items_to_robots()

        assert robot.hand_item.item_id == "M1"
        assert robot.tube_item is None

    def test_oldest_items_first(self, pool, make_robot):
        robot = make_robot()
        pool.add_to_pool(make_item("M9", 3, arrival=5))
        pool.add_to_pool(make_item("M1", 4, arrival=2))
        pool.add_to_pool(make_item("M5", 6, arrival=3))

        pool.load_items_to_robots()

        assert robot.hand_item.item_id == "M1"
        assert robot.tube_item.item_id == "M5"
        assert pool.pending_count == 1

    def test_robots_served_in_registration_order(self, pool, make_robot):
        first = make_robot(1)
        second = make_robot(2)
        for i in range(3):
            pool.add_to_pool(make_item(f"M{i}", i + 1))

        pool.load_items_to_robots()

        assert first.hand_item.item_id == "M0"
        assert first.tube_item.item_id == "M1"
        assert second.hand_item.item_id == "M2"
        assert second.tube_item is None

    def test_no_robots_keeps_items(self, pool):
        pool.add_to_pool(make_item("M1", 3))
        pool.load_items_to_robots()
        assert pool.pending_count == 1

    def test_overweight_hand_item_rerouted(self, pool, make_robot, event_bus):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 3, weight=2500))
        pool.add_to_pool(make_item("M2", 4))

        pool.load_items_to_robots()

        assert robot.hand_item.item_id == "M2"
        assert [i.item_id for i in pool.rejected_items] == ["M1"]
        assert event_bus.get_history(EventType.ITEM_REJECTED)[0].data['item_id'] == "M1"

    def test_overweight_tube_item_rerouted(self, pool, make_robot):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 3))
        pool.add_to_pool(make_item("M2", 4, weight=3000))
        pool.add_to_pool(make_item("M3", 5))

        pool.load_items_to_robots()

        assert robot.hand_item.item_id == "M1"
        assert robot.tube_item.item_id == "M3"
        assert [i.item_id for i in pool.rejected_items] == ["M2"]

    def test_only_overweight_items_leaves_robot_waiting(self, pool, make_robot):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 3, weight=2500))

        pool.load_items_to_robots()

        assert robot.is_idle()
        assert pool.waiting_count == 1
        robot.tick()
        assert robot.current_state == RobotState.WAITING

    def test_non_idle_waiting_robot_is_contract_breach(self, pool, make_robot):
        robot = make_robot()
        robot.assign_hand_item(make_item("M0", 2))
        pool.add_to_pool(make_item("M1", 3))

        with pytest.raises(DispatchContractError):
            pool.load_items_to_robots()

    def test_return_item_resets_activity(self, pool):
        item = make_item("M1", 3)
        item.record_movement(4)

        pool.return_item(item)

        assert item.distance_travelled == 0
        assert pool.pending_count == 1

    def test_dispatch_event(self, pool, make_robot, event_bus):
        make_robot()
        pool.add_to_pool(make_item("M1", 3))
        pool.load_items_to_robots()

        events = event_bus.get_history(EventType.ROBOT_DISPATCHED)
        assert events[0].data == {'robot_id': 'R1', 'hand': 'M1', 'tube': None, 'time': 0}


class TestPoolRobotCycle:
    """Test a robot going round the full cycle through the pool."""

    def test_robot_reregisters_after_delivery(self, pool, make_robot, clock):
        robot = make_robot()
        pool.add_to_pool(make_item("M1", 2))
        pool.load_items_to_robots()

        for _ in range(5):
            robot.tick()
            clock.tick()

        assert robot.current_state == RobotState.WAITING
        assert pool.waiting_count == 1
        assert robot.sink.is_delivered("M1")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
