# symbol_map/interaction.py

"""
================================================================================
DRAG-TO-ROTATE CONTROLLER
================================================================================
A two-state machine (IDLE, DRAGGING) that turns horizontal pointer drag
distance into a projection rotation angle.

Data Contract:
---------------
- Inputs (on initialization):
    - on_rotate (callable): invoked with the new angle (degrees) after every
      move while dragging. The chart rotates its projection and repositions
      its marks from this callback.
- Public Methods:
    - configure(surface_width): sets the drag scale for the current surface.
    - pointer_down(x), pointer_move(x), pointer_up(x).
- Public Properties:
    - mode (DragMode), angle (float), is_dragging (bool).
- Side Effects: Calls on_rotate.
- Invariants: The angle accumulates across drags and is never reset or
  clamped. A full surface width of horizontal travel is half a turn.
================================================================================
"""
from enum import Enum
from typing import Callable, Optional

from . import config as DEFAULTS
from .scales import LinearScale


class DragMode(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragRotateController:
    """Converts pointer drags into accumulated rotation angles."""

    def __init__(self, on_rotate: Optional[Callable[[float], None]] = None,
                 angle_range=DEFAULTS.DRAG_ANGLE_RANGE_DEG):
        self.on_rotate = on_rotate
        self.angle_range = angle_range
        self.mode = DragMode.IDLE
        self._previous_x = 0.0
        self._previous_angle = 0.0
        # Replaced on configure(); a unit width until the first draw.
        self._angle_scale = LinearScale((-1.0, 1.0), angle_range)

    @property
    def angle(self) -> float:
        return self._previous_angle

    @property
    def is_dragging(self) -> bool:
        return self.mode is DragMode.DRAGGING

    def configure(self, surface_width: float):
        """Maps [-width, width] of pointer travel onto the angle range."""
        self._angle_scale = LinearScale((-surface_width, surface_width), self.angle_range)

    def pointer_down(self, x: float):
        self.mode = DragMode.DRAGGING
        self._previous_x = x

    def pointer_move(self, x: float) -> bool:
        """Applies one move. Returns False when no drag is in progress."""
        if self.mode is not DragMode.DRAGGING:
            return False

        angle = self._previous_angle + self._angle_scale(x - self._previous_x)
        self._previous_x = x
        self._previous_angle = angle

        if self.on_rotate is not None:
            self.on_rotate(angle)
        return True

    def pointer_up(self, x: Optional[float] = None):
        self.mode = DragMode.IDLE
