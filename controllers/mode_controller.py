# controllers/mode_controller.py
"""
Controller for the interaction mode and its mounted gesture tool.
"""

from typing import Callable, List, Optional, Tuple

from core.gesture import GestureTool
from core.geometry import GeometrySynchronizer
from core.modes import (
    InteractionState,
    Mode,
    ModeRule,
    STATE_FOR_MODE,
    check_transition,
    get_mode_rule,
    parse_mode,
)
from core.point_sequence import PointSequenceStore
from utils.logger import get_logger

logger = get_logger(__name__)

ToolFactory = Callable[[ModeRule], GestureTool]


class InteractionModeController:
    """
    Owns which gesture tool is mounted on the map.

    States: IDLE, LINE_MEASUREMENT, FREE_DRAW. Only set_mode() and
    deactivate() change state. At most one tool is mounted at any time.

    A completed gesture is remembered in sequence_complete; the click
    dispatcher reads it to start a fresh sequence on the next click.
    """

    def __init__(self, store: PointSequenceStore, synchronizer: GeometrySynchronizer,
                 map_surface, tool_factory: Optional[ToolFactory] = None):
        """
        Args:
            store: The point sequence store
            synchronizer: Geometry synchronizer for the same surface
            map_surface: Long-lived map object tools are mounted on
            tool_factory: Builds a gesture tool for a mode rule
        """
        self.store = store
        self.synchronizer = synchronizer
        self.map_surface = map_surface
        self.tool_factory = tool_factory or GestureTool

        self._state = InteractionState.IDLE
        self._mode: Optional[Mode] = None
        self._rule: Optional[ModeRule] = None
        self._tool: Optional[GestureTool] = None
        self._click_handler: Optional[Callable[[Tuple[float, float]], bool]] = None
        self._sequence_complete = False
        self._gesture_in_progress = False
        self._listeners: List[Callable[[Optional[Mode]], None]] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def mode(self) -> Optional[Mode]:
        return self._mode

    @property
    def rule(self) -> Optional[ModeRule]:
        return self._rule

    @property
    def active_tool(self) -> Optional[GestureTool]:
        return self._tool

    @property
    def sequence_complete(self) -> bool:
        return self._sequence_complete

    @property
    def gesture_in_progress(self) -> bool:
        return self._gesture_in_progress

    def bind_click_handler(self, handler: Callable[[Tuple[float, float]], bool]) -> None:
        """Set the handler that receives every click of the mounted tool."""
        self._click_handler = handler

    def subscribe(self, callback: Callable[[Optional[Mode]], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback(self._mode)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_mode(self, mode) -> Mode:
        """
        Enter a mode: unmount the current tool, reset the sequence, clear
        the geometry, then mount a fresh tool for the new mode.

        Raises:
            InvalidModeError: If mode is unknown
            InvalidTransitionError: If the transition table forbids it
        """
        mode = parse_mode(mode)
        new_state = STATE_FOR_MODE[mode]
        check_transition(self._state, new_state)

        previous = self._state
        self._unmount_tool()
        self._reset_sequence()

        rule = get_mode_rule(mode)
        self.synchronizer.set_rule(rule)

        tool = self.tool_factory(rule)
        tool.set_point_handler(self._handle_click)
        tool.on_start(self._on_gesture_start)
        tool.on_complete(self._on_gesture_complete)
        tool.mount(self.map_surface)

        self._tool = tool
        self._rule = rule
        self._mode = mode
        self._state = new_state

        logger.info(f"Interaction mode: {previous.value} -> {new_state.value}")
        self._notify()
        return mode

    def deactivate(self) -> None:
        """Unmount the tool and return to IDLE."""
        if self._state is InteractionState.IDLE:
            return
        check_transition(self._state, InteractionState.IDLE)

        previous = self._state
        self._unmount_tool()
        self._reset_sequence()
        self.synchronizer.set_rule(None)
        self._rule = None
        self._mode = None
        self._state = InteractionState.IDLE

        logger.info(f"Interaction mode: {previous.value} -> {InteractionState.IDLE.value}")
        self._notify()

    def _unmount_tool(self) -> None:
        if self._tool is None:
            return
        self._tool.unmount()
        self._tool.clear_listeners()
        self._tool = None

    def _reset_sequence(self) -> None:
        self._sequence_complete = False
        self._gesture_in_progress = False
        self.store.reset()
        self.synchronizer.clear()

    # ------------------------------------------------------------------
    # Gesture signals
    # ------------------------------------------------------------------

    def _handle_click(self, coordinate) -> bool:
        if self._click_handler is None:
            return False
        return self._click_handler(coordinate)

    def _on_gesture_start(self) -> None:
        self._gesture_in_progress = True
        logger.debug("Gesture started")

    def _on_gesture_complete(self, point_count: int) -> None:
        self._gesture_in_progress = False
        self._sequence_complete = True
        logger.debug(f"Gesture completed with {point_count} point(s)")

    def begin_new_sequence(self) -> None:
        """Called once the store has been reset for the click after completion."""
        self._sequence_complete = False

    def cancel_gesture(self) -> None:
        """Drop the gesture in progress; the next click starts a new one."""
        if self._tool is not None:
            self._tool.cancel()
        self._gesture_in_progress = False
        self._sequence_complete = False

    def finish_gesture(self) -> bool:
        """End the current gesture of the mounted tool (double click)."""
        if self._tool is None:
            return False
        return self._tool.finish()
