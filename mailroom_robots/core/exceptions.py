"""
Exceptions
==========

Error types raised by robots, the mail pool and the delivery sink.
"""


class MailroomError(Exception):
    """Base class for all mailroom simulation errors."""


class ConfigError(MailroomError):
    """Invalid configuration value."""


class OverweightError(MailroomError):
    """
    Item is heavier than a robot slot can carry.

    Recoverable: the pool must keep the item out of the rejected slot
    and route it elsewhere.
    """

    def __init__(self, item, limit: int):
        self.item = item
        self.limit = limit
        super().__init__(
            f"Item {item.item_id} weighs {item.weight}, limit is {limit}"
        )


class ExcessiveDeliveryError(MailroomError):
    """
    Robot completed more delivery legs than its slots allow in one run.

    Fatal: the pool over-allocated the robot, so the scheduling state
    can no longer be trusted.
    """

    def __init__(self, robot_id: str, legs: int, max_legs: int):
        self.robot_id = robot_id
        self.legs = legs
        self.max_legs = max_legs
        super().__init__(
            f"Robot {robot_id} made {legs} deliveries in one run (max {max_legs})"
        )


class DispatchContractError(MailroomError):
    """Pool and robot disagree about slot ownership."""


class MailAlreadyDeliveredError(MailroomError):
    """The same item reached the delivery sink twice."""

    def __init__(self, item):
        self.item = item
        super().__init__(f"Item {item.item_id} was already delivered")
