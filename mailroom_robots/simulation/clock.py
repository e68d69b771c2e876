"""Discrete simulation clock."""


class Clock:
    """Counts simulation time steps, starting at zero."""

    def __init__(self, start: int = 0):
        self._time = start

    @property
    def time(self) -> int:
        return self._time

    def tick(self) -> int:
        self._time += 1
        return self._time

    def __repr__(self) -> str:
        return f"Clock(t={self._time})"
