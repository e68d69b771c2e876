"""Mail item carried by delivery robots."""

from dataclasses import dataclass, field


@dataclass
class MailItem:
    """
    A single piece of mail.

    Attributes:
        item_id: Unique identifier (e.g. "M17")
        arrival_time: Simulation time the item reached the mailroom
        destination_floor: Floor the item must be delivered to
        weight: Weight in grams
        distance_travelled: Floors moved while carried by a delivering robot
    """
    item_id: str
    arrival_time: int
    destination_floor: int
    weight: int
    distance_travelled: int = field(default=0, compare=False)

    def record_movement(self, floors: int) -> None:
        """Add floors travelled while this item sat in a robot slot."""
        self.distance_travelled += floors

    def reset_activity(self) -> None:
        """Forget movement, e.g. when the item goes back to the pool."""
        self.distance_travelled = 0

    def __hash__(self) -> int:
        return hash(self.item_id)

    def __str__(self) -> str:
        return (f"Mail Item:: ID: {self.item_id:>6} | Arrival: {self.arrival_time:4d} | "
                f"Destination: {self.destination_floor:2d} | Weight: {self.weight:4d}")
