"""
Delivery Robot State Machine
============================

Per-robot lifecycle for mailroom delivery robots:

    RETURNING -> WAITING -> DELIVERING -> (DELIVERING ->) RETURNING

A robot carries at most two items: the "hand" item it is currently
delivering and a "tube" item held in reserve for the next leg. Each
state has a handler object, in the same enter/update/exit shape used
for the rest of the robot behaviour code.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, TYPE_CHECKING
from dataclasses import dataclass

from .events import Event, EventBus, EventType, get_event_bus
from .exceptions import DispatchContractError, ExcessiveDeliveryError, OverweightError
from .interfaces import DeliveryRecorder, DeliverySink, DispatchPool, TimeSource

if TYPE_CHECKING:
    from .config import Config
    from ..mail.item import MailItem

logger = logging.getLogger(__name__)

INDIVIDUAL_MAX_WEIGHT = 2000
MAX_DELIVERY_LEGS = 2
MAILROOM_FLOOR = 0


class RobotState(Enum):
    """Robot delivery states."""
    RETURNING = auto()      # Heading back to the mailroom
    WAITING = auto()        # In the mailroom, registered with the pool
    DELIVERING = auto()     # Carrying items to their floors


@dataclass
class RobotContext:
    """Mutable robot data shared between state handlers."""
    current_floor: int
    destination_floor: int
    hand_item: Optional['MailItem'] = None
    tube_item: Optional['MailItem'] = None
    dispatch_requested: bool = False
    delivery_leg_count: int = 0

    def is_empty(self) -> bool:
        return self.hand_item is None and self.tube_item is None

    def carried_items(self) -> List['MailItem']:
        return [item for item in (self.hand_item, self.tube_item) if item is not None]

    def move_towards(self, target: int, record: bool) -> None:
        """Move one floor toward target, billing carried items if record is set."""
        if self.current_floor < target:
            self.current_floor += 1
        else:
            self.current_floor -= 1
        if record:
            for item in self.carried_items():
                item.record_movement(1)


@dataclass
class StateTransition:
    """Represents a state transition."""
    from_state: RobotState
    to_state: RobotState
    condition: str
    time: Optional[int] = None


class StateHandler(ABC):
    """
    Base class for state handlers.

    update() returns the next state, or None to stay put. A handler
    with acts_on_entry set also runs its update() on the tick it is
    entered.
    """

    acts_on_entry = False

    def __init__(self, state: RobotState):
        self.state = state

    def enter(self, robot: 'DeliveryRobot') -> None:
        """Called when entering this state."""

    @abstractmethod
    def update(self, robot: 'DeliveryRobot') -> Optional[RobotState]:
        """Called every tick. Returns the next state or None."""

    def exit(self, robot: 'DeliveryRobot') -> None:
        """Called when exiting this state."""


class ReturningStateHandler(StateHandler):
    """Handler for RETURNING state."""

    def __init__(self):
        super().__init__(RobotState.RETURNING)

    def update(self, robot: 'DeliveryRobot') -> Optional[RobotState]:
        ctx = robot.context
        if ctx.current_floor != robot.mailroom_floor:
            # Empty-handed: return trips are not billed to any item
            ctx.move_towards(robot.mailroom_floor, record=False)
            return None

        if ctx.tube_item is not None:
            robot.release_stray_item()
        robot.pool.register_waiting(robot)
        return RobotState.WAITING


class WaitingStateHandler(StateHandler):
    """Handler for WAITING state."""

    def __init__(self):
        super().__init__(RobotState.WAITING)

    def update(self, robot: 'DeliveryRobot') -> Optional[RobotState]:
        ctx = robot.context
        if not ctx.is_empty() and ctx.dispatch_requested:
            return RobotState.DELIVERING
        return None


class DeliveringStateHandler(StateHandler):
    """Handler for DELIVERING state - one floor per tick, drop off on arrival."""

    acts_on_entry = True

    def __init__(self, max_delivery_legs: int = MAX_DELIVERY_LEGS):
        super().__init__(RobotState.DELIVERING)
        self.max_delivery_legs = max_delivery_legs

    def enter(self, robot: 'DeliveryRobot') -> None:
        ctx = robot.context
        ctx.dispatch_requested = False
        ctx.delivery_leg_count = 0
        ctx.destination_floor = ctx.hand_item.destination_floor
        robot.notify_departure()

    def update(self, robot: 'DeliveryRobot') -> Optional[RobotState]:
        ctx = robot.context
        if ctx.current_floor != ctx.destination_floor:
            ctx.move_towards(ctx.destination_floor, record=True)
        if ctx.current_floor != ctx.destination_floor:
            return None

        robot.hand_over(ctx.hand_item)
        ctx.delivery_leg_count += 1
        # Promote the reserve item first so the slots stay consistent on error
        ctx.hand_item, ctx.tube_item = ctx.tube_item, None
        if ctx.delivery_leg_count > self.max_delivery_legs:
            raise ExcessiveDeliveryError(
                robot.robot_id, ctx.delivery_leg_count, self.max_delivery_legs
            )

        if ctx.hand_item is None:
            return RobotState.RETURNING

        ctx.destination_floor = ctx.hand_item.destination_floor
        robot.notify_departure()
        return None


class DeliveryRobot:
    """
    Mailroom delivery robot.

    Driven by an external clock: tick() is called once per time step.
    Between ticks the mail pool may load items and call dispatch().

    Usage:
        robot = DeliveryRobot(1, pool=pool, recorder=accountant, sink=delivery)

        # Each simulation step:
        pool.load_items_to_robots()
        robot.tick()
    """

    def __init__(
        self,
        number: int,
        pool: DispatchPool,
        recorder: DeliveryRecorder,
        sink: DeliverySink,
        clock: Optional[TimeSource] = None,
        config: Optional['Config'] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.robot_id = f"R{number}"
        self.pool = pool
        self.recorder = recorder
        self.sink = sink
        self.clock = clock
        self.event_bus = event_bus or get_event_bus()

        if config:
            self.mailroom_floor = config.building.mailroom_floor
            self.individual_max_weight = config.robot.individual_max_weight
            self.max_delivery_legs = config.robot.max_delivery_legs
            self.strict_stray_items = config.robot.strict_stray_items
        else:
            self.mailroom_floor = MAILROOM_FLOOR
            self.individual_max_weight = INDIVIDUAL_MAX_WEIGHT
            self.max_delivery_legs = MAX_DELIVERY_LEGS
            self.strict_stray_items = False

        self.context = RobotContext(
            current_floor=self.mailroom_floor,
            destination_floor=self.mailroom_floor,
        )
        self._current_state = RobotState.RETURNING
        self._handlers: Dict[RobotState, StateHandler] = {
            RobotState.RETURNING: ReturningStateHandler(),
            RobotState.WAITING: WaitingStateHandler(),
            RobotState.DELIVERING: DeliveringStateHandler(self.max_delivery_legs),
        }
        self._transition_history: List[StateTransition] = []
        self._callbacks: Dict[str, List[Callable]] = {
            'on_state_change': [],
            'on_delivery': [],
        }

    # -- Pool-facing operations --

    def dispatch(self) -> None:
        """Request departure on the next tick. Repeated calls are harmless."""
        self.context.dispatch_requested = True

    def assign_hand_item(self, item: 'MailItem') -> None:
        """Load the item to deliver next."""
        if self.context.hand_item is not None:
            raise DispatchContractError(
                f"{self.robot_id}: hand slot already holds {self.context.hand_item.item_id}"
            )
        self._check_weight(item)
        self.context.hand_item = item

    def assign_tube_item(self, item: 'MailItem') -> None:
        """Load the reserve item delivered after the hand item."""
        if self.context.tube_item is not None:
            raise DispatchContractError(
                f"{self.robot_id}: tube slot already holds {self.context.tube_item.item_id}"
            )
        if self.context.hand_item is None:
            raise DispatchContractError(
                f"{self.robot_id}: tube loaded before hand"
            )
        self._check_weight(item)
        self.context.tube_item = item

    def is_idle(self) -> bool:
        """True when both slots are empty."""
        return self.context.is_empty()

    def _check_weight(self, item: 'MailItem') -> None:
        if item.weight > self.individual_max_weight:
            raise OverweightError(item, self.individual_max_weight)

    # -- Read-only views --

    @property
    def current_state(self) -> RobotState:
        return self._current_state

    @property
    def state_name(self) -> str:
        return self._current_state.name

    @property
    def current_floor(self) -> int:
        return self.context.current_floor

    @property
    def destination_floor(self) -> int:
        return self.context.destination_floor

    @property
    def hand_item(self) -> Optional['MailItem']:
        return self.context.hand_item

    @property
    def tube_item(self) -> Optional['MailItem']:
        return self.context.tube_item

    @property
    def delivery_leg_count(self) -> int:
        return self.context.delivery_leg_count

    def get_transition_history(self) -> List[StateTransition]:
        """Get state transition history."""
        return self._transition_history.copy()

    # -- Observability --

    def on(self, event: str, callback: Callable) -> None:
        """Register event callback ('on_state_change' or 'on_delivery')."""
        if event in self._callbacks:
            self._callbacks[event].append(callback)

    def _emit(self, event: str, *args) -> None:
        for callback in self._callbacks.get(event, []):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Callback error: {e}")

    def _publish(self, event_type: EventType, **data) -> None:
        data.setdefault('time', self._now())
        self.event_bus.publish(Event(event_type=event_type, data=data, source=self.robot_id))

    def _now(self) -> Optional[int]:
        return self.clock.time if self.clock is not None else None

    def _tag(self) -> str:
        return f"{self.robot_id}({1 if self.context.tube_item else 0})"

    # -- Driver-facing operation --

    def tick(self) -> None:
        """Advance one time step."""
        handler = self._handlers[self._current_state]
        next_state = handler.update(self)
        if next_state is None or next_state == self._current_state:
            return

        self._transition_to(next_state)
        new_handler = self._handlers[next_state]
        if new_handler.acts_on_entry:
            follow = new_handler.update(self)
            if follow is not None and follow != self._current_state:
                self._transition_to(follow)

    def _transition_to(self, new_state: RobotState) -> None:
        if self.context.hand_item is None and self.context.tube_item is not None:
            raise DispatchContractError(
                f"{self.robot_id}: tube holds {self.context.tube_item.item_id} with empty hand"
            )

        old_state = self._current_state
        self._handlers[old_state].exit(self)

        self._transition_history.append(StateTransition(
            from_state=old_state,
            to_state=new_state,
            condition=f"{old_state.name} -> {new_state.name}",
            time=self._now(),
        ))
        if len(self._transition_history) > 100:
            self._transition_history = self._transition_history[-50:]

        self._current_state = new_state
        logger.info(f"T: {self._now()} > {self._tag()} changed from {old_state.name} to {new_state.name}")
        self._handlers[new_state].enter(self)

        self._emit('on_state_change', old_state, new_state)
        self._publish(
            EventType.ROBOT_STATE_CHANGED,
            from_state=old_state.name,
            to_state=new_state.name,
            floor=self.context.current_floor,
        )

    # -- Hooks used by the handlers --

    def hand_over(self, item: 'MailItem') -> None:
        """Pass a delivered item to the recorder, then the sink."""
        self.recorder.record_delivery(item)
        self.sink.deliver(item)
        self._emit('on_delivery', item)
        self._publish(
            EventType.ITEM_DELIVERED,
            item_id=item.item_id,
            floor=self.context.current_floor,
            distance=item.distance_travelled,
        )

    def notify_departure(self) -> None:
        item = self.context.hand_item
        logger.info(f"T: {self._now()} > {self._tag()}-> [{item}]")
        self._publish(
            EventType.ROBOT_DEPARTED,
            item_id=item.item_id,
            destination=self.context.destination_floor,
            reserve=self.context.tube_item.item_id if self.context.tube_item else None,
        )

    def release_stray_item(self) -> None:
        """Give a reserve item found on return back to the pool."""
        item = self.context.tube_item
        self.context.tube_item = None
        self.pool.return_item(item)
        logger.warning(f"T: {self._now()} > {self.robot_id} returned stray reserve item [{item}]")
        self._publish(EventType.STRAY_ITEM_RETURNED, item_id=item.item_id)
        if self.strict_stray_items:
            raise DispatchContractError(
                f"{self.robot_id}: came back to the mailroom still holding {item.item_id}"
            )

    def __repr__(self) -> str:
        return (f"DeliveryRobot({self.robot_id}, {self.state_name}, "
                f"floor={self.context.current_floor})")
