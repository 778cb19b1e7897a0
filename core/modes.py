# core/modes.py
"""
Interaction modes, their per-mode rules, and the mode transition table.
"""

from enum import Enum
from typing import Optional

from constants import FREE_DRAW_MAX_POINTS, LINE_GESTURE_MAX_POINTS
from core.exceptions import InvalidModeError, InvalidTransitionError


class Mode(Enum):
    """Selectable interaction modes."""
    LINE_MEASUREMENT = "LineMeasurement"
    FREE_DRAW = "FreeDraw"


class InteractionState(Enum):
    """States of the interaction controller."""
    IDLE = "Idle"
    LINE_MEASUREMENT = "LineMeasurement"
    FREE_DRAW = "FreeDraw"


class GeometryKind:
    LINESTRING = "LineString"
    POLYGON = "Polygon"


class ModeRule:
    """Behavior attached to a mode."""

    def __init__(self, mode: Mode, label: str, geometry_kind: str,
                 max_points: Optional[int], suppress_duplicates: bool,
                 closed: bool, min_points: int = 2):
        self.mode = mode
        self.label = label
        self.geometry_kind = geometry_kind
        self.max_points = max_points
        self.min_points = min_points  # points needed before finish() completes
        self.suppress_duplicates = suppress_duplicates
        self.closed = closed

    def __repr__(self):
        return f"ModeRule({self.mode.value}, max_points={self.max_points})"


# Mode Definitions
MODE_RULES = {
    Mode.LINE_MEASUREMENT: ModeRule(
        mode=Mode.LINE_MEASUREMENT,
        label="Medir línea",
        geometry_kind=GeometryKind.LINESTRING,
        max_points=LINE_GESTURE_MAX_POINTS,
        suppress_duplicates=True,
        closed=False,
        min_points=2
    ),
    Mode.FREE_DRAW: ModeRule(
        mode=Mode.FREE_DRAW,
        label="Dibujo libre",
        geometry_kind=GeometryKind.POLYGON,
        max_points=FREE_DRAW_MAX_POINTS,
        suppress_duplicates=False,
        closed=True,
        min_points=3
    ),
}

STATE_FOR_MODE = {
    Mode.LINE_MEASUREMENT: InteractionState.LINE_MEASUREMENT,
    Mode.FREE_DRAW: InteractionState.FREE_DRAW,
}

# Re-selecting the active mode is allowed: it is an explicit restart.
TRANSITIONS = {
    InteractionState.IDLE: {
        InteractionState.LINE_MEASUREMENT,
        InteractionState.FREE_DRAW,
    },
    InteractionState.LINE_MEASUREMENT: {
        InteractionState.IDLE,
        InteractionState.LINE_MEASUREMENT,
        InteractionState.FREE_DRAW,
    },
    InteractionState.FREE_DRAW: {
        InteractionState.IDLE,
        InteractionState.LINE_MEASUREMENT,
        InteractionState.FREE_DRAW,
    },
}


def parse_mode(value) -> Mode:
    """
    Resolve a Mode from a Mode, its value string, or its name.

    Raises:
        InvalidModeError: If the value does not name a mode
    """
    if isinstance(value, Mode):
        return value
    for mode in Mode:
        if value in (mode.value, mode.name):
            return mode
    raise InvalidModeError(value)


def get_mode_rule(mode) -> ModeRule:
    return MODE_RULES[parse_mode(mode)]


def check_transition(from_state: InteractionState, to_state: InteractionState) -> None:
    """
    Raises:
        InvalidTransitionError: If the transition table forbids the change
    """
    if to_state not in TRANSITIONS.get(from_state, set()):
        raise InvalidTransitionError(from_state.value, to_state.value)
