"""Game loop orchestration for the cube game."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _LoopTask:
    """Internal task representation passed to `update_game`."""

    delay_time: float

    def __post_init__(self) -> None:  # pragma: no cover - trivial setters
        self.done = object()
        self.again = object()


class GameLoop:
    """Drives the controller update cycle until it reports completion."""

    def __init__(self, controller, move_duration: float = 0.0) -> None:
        self._controller = controller
        self._move_duration = move_duration

    def run(self) -> None:
        """Run the game loop until the controller signals completion."""
        while not self._tick(self._move_duration):
            pass

    def _tick(self, delay: float) -> bool:
        task = _LoopTask(delay_time=delay)
        result = self._controller.update_game(task)
        return result == getattr(task, "done", None)
