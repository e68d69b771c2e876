"""Building floor topology."""

from dataclasses import dataclass
from typing import List

from ..core.config import BuildingConfig


@dataclass(frozen=True)
class Building:
    """
    Floors served by the robots.

    The mailroom is the lowest floor; mail is only ever addressed to
    the floors above it.
    """
    floors: int
    mailroom_floor: int = 0

    @classmethod
    def from_config(cls, config: BuildingConfig) -> 'Building':
        return cls(floors=config.floors, mailroom_floor=config.mailroom_floor)

    @property
    def lowest_floor(self) -> int:
        return self.mailroom_floor

    @property
    def top_floor(self) -> int:
        return self.mailroom_floor + self.floors - 1

    def contains(self, floor: int) -> bool:
        return self.lowest_floor <= floor <= self.top_floor

    def delivery_floors(self) -> List[int]:
        """Floors mail can be addressed to."""
        return list(range(self.lowest_floor + 1, self.top_floor + 1))
